"""Catalogue API package."""

from storefront.catalogue.api.routes import category_router, featured_router, product_router, service_router

__all__ = ["product_router", "category_router", "service_router", "featured_router"]
