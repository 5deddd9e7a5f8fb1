"""Ordering API package."""

from storefront.ordering.api.routes import cart_router, order_router, payment_router

__all__ = ["order_router", "payment_router", "cart_router"]
