"""Storefront domain composition root.

A single domain owns every aggregate: checkout finalization touches orders,
products and users inside one unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

# Configure logging for the application
configure_logging()

storefront = Domain(name="storefront")
