"""User aggregate: the local mirror of an identity-provider account.

The identity provider owns credentials and profile data; this record keeps a
copy keyed by the provider's subject id (``external_id``) plus the two lists
the storefront owns itself. The wishlist behaves as a set. Order history is
append-only and never holds the same order twice.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, String, Text

from storefront.domain import storefront
from storefront.shared.identity import object_id

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


def _clean_email(email):
    # Blank emails are stored as None so they never collide on uniqueness
    return (email or "").strip().lower() or None


@storefront.aggregate
class User:
    external_id = String(required=True, max_length=255, unique=True)
    email = String(max_length=254, unique=True)
    name = String(required=True, max_length=255)
    phone = String(max_length=30)
    image_url = String(max_length=1000)
    wishlist = Text()  # JSON array of product ids
    order_history = Text()  # JSON array of order ids
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def mirror(cls, external_id, email=None, name=None, phone=None, image_url=None):
        """Create the local copy of an identity-provider account."""
        now = datetime.now(UTC)
        return cls(
            id=object_id(),
            external_id=external_id,
            email=_clean_email(email),
            name=(name or "").strip() or "User",
            phone=phone,
            image_url=image_url,
            wishlist=json.dumps([]),
            order_history=json.dumps([]),
            created_at=now,
            updated_at=now,
        )

    def refresh(self, email=_UNSET, name=_UNSET, phone=_UNSET, image_url=_UNSET):
        """Overwrite mirrored profile fields with the provider's latest values."""
        if email is not _UNSET:
            self.email = _clean_email(email)
        if name is not _UNSET:
            self.name = (name or "").strip() or "User"
        if phone is not _UNSET:
            self.phone = phone
        if image_url is not _UNSET:
            self.image_url = image_url
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Wishlist
    # -------------------------------------------------------------------
    @property
    def wishlist_ids(self) -> list[str]:
        return json.loads(self.wishlist) if self.wishlist else []

    def add_to_wishlist(self, product_id: str) -> None:
        ids = self.wishlist_ids
        if product_id not in ids:
            ids.append(product_id)
            self.wishlist = json.dumps(ids)
            self.updated_at = datetime.now(UTC)

    def remove_from_wishlist(self, product_id: str) -> None:
        ids = self.wishlist_ids
        if product_id in ids:
            ids.remove(product_id)
            self.wishlist = json.dumps(ids)
            self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Order history
    # -------------------------------------------------------------------
    @property
    def order_ids(self) -> list[str]:
        return json.loads(self.order_history) if self.order_history else []

    def record_order(self, order_id: str) -> None:
        """Append an order to the history unless it is already there."""
        ids = self.order_ids
        if order_id in ids:
            return
        ids.append(order_id)
        self.order_history = json.dumps(ids)
        self.updated_at = datetime.now(UTC)


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_external_id(self, external_id: str) -> User | None:
        return self._dao.query.filter(external_id=external_id).all().first
