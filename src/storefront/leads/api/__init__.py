"""Leads API package."""

from storefront.leads.api.routes import router as lead_router

__all__ = ["lead_router"]
