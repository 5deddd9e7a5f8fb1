"""FastAPI endpoints for the buyer's wishlist."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.responses import ok
from storefront.catalogue.api.schemas import ProductSummaryOut
from storefront.identity.session import Identity, require_identity
from storefront.identity.user.reconciliation import ensure_user
from storefront.wishlist.api.schemas import WishlistRequest
from storefront.wishlist.wishlist import ToggleWishlist, WishlistAction, wishlist_products

router = APIRouter(prefix="/wishlist", tags=["wishlist"])

_MESSAGES = {
    WishlistAction.ADD.value: "Product added to wishlist.",
    WishlistAction.REMOVE.value: "Product removed from wishlist.",
}


@router.get("")
async def get_wishlist(identity: Identity = Depends(require_identity)):
    user = ensure_user(identity)
    return ok([ProductSummaryOut.from_product(p) for p in wishlist_products(user)])


@router.post("")
async def toggle_wishlist(body: WishlistRequest, identity: Identity = Depends(require_identity)):
    ensure_user(identity)
    wishlist = current_domain.process(
        ToggleWishlist(external_id=identity.subject, product_id=body.product_id, action=body.action),
        asynchronous=False,
    )
    return ok(wishlist, message=_MESSAGES[body.action])
