"""Pydantic request schemas for the wishlist API."""

from storefront.api.responses import CamelModel


class WishlistRequest(CamelModel):
    product_id: str | None = None
    action: str | None = None
