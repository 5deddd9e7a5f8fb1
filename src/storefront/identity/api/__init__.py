"""Identity API package."""

from storefront.identity.api.routes import router as webhook_router

__all__ = ["webhook_router"]
