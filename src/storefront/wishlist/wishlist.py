"""ToggleWishlist: add a product to, or remove it from, a buyer's wishlist.

The wishlist lives on the mirrored User and has set semantics: adding twice
keeps one entry, removing an absent id changes nothing.
"""

from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.identity.user.user import User


class WishlistAction(Enum):
    ADD = "add"
    REMOVE = "remove"


@storefront.command(part_of="User")
class ToggleWishlist:
    external_id = String(required=True, max_length=255)
    product_id = Identifier()
    action = String(max_length=10)


@storefront.command_handler(part_of=User)
class WishlistHandler:
    @handle(ToggleWishlist)
    def toggle(self, command):
        if not command.product_id or not command.action:
            raise ValidationError({"wishlist": ["Product ID and action are required."]})

        try:
            action = WishlistAction(command.action)
        except ValueError:
            raise ValidationError({"action": ["Invalid action."]})

        repo = current_domain.repository_for(User)
        user = repo.find_by_external_id(command.external_id)
        if user is None:
            raise NotFound("User not found.")

        if action == WishlistAction.ADD:
            user.add_to_wishlist(str(command.product_id))
        else:
            user.remove_from_wishlist(str(command.product_id))

        repo.add(user)
        return user.wishlist_ids


def wishlist_products(user: User) -> list[Product]:
    """Resolve wishlist ids to products, skipping any that no longer exist."""
    repo = current_domain.repository_for(Product)
    products = []
    for product_id in user.wishlist_ids:
        try:
            products.append(repo.get(product_id))
        except ObjectNotFoundError:
            continue
    return products
