"""Category aggregate.

Products point at categories by id and carry a copy of the category name, so
browsing never needs a join. Product counts are computed when categories are
listed, never stored here.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront
from storefront.shared.identity import object_id


class CategoryStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@storefront.aggregate
class Category:
    name = String(required=True, max_length=100, unique=True)
    description = Text(required=True)
    parent_id = Identifier()  # Hierarchy is stored but not browsed yet
    status = String(choices=CategoryStatus, default=CategoryStatus.ACTIVE.value)
    image = String(max_length=1000)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, description, parent_id=None, image=None, status=CategoryStatus.ACTIVE.value):
        now = datetime.now(UTC)
        return cls(
            id=object_id(),
            name=name.strip(),
            description=description,
            parent_id=parent_id,
            image=image,
            status=status,
            created_at=now,
            updated_at=now,
        )
