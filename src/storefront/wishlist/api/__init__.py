"""Wishlist API package."""

from storefront.wishlist.api.routes import router as wishlist_router

__all__ = ["wishlist_router"]
