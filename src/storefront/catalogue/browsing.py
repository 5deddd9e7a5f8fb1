"""Read-side queries for catalogue pages.

These run straight against the repositories: listings filter, sort and page in
the persistence layer, and derived values such as category product counts are
computed per request. Only the product listing is paged; every other listing
returns all matching records, overriding the repository default limit.
"""

import math
from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category, CategoryStatus
from storefront.catalogue.product.product import Product
from storefront.catalogue.service.service import Service, ServiceStatus
from storefront.errors import NotFound
from storefront.settings import get_settings
from storefront.shared.identity import is_object_id

DEFAULT_PAGE_SIZE = 12

_SORT_ORDERS = {
    "price-low": "price_original",
    "price-high": "-price_original",
    "name": "name",
}
_DEFAULT_SORT = "-created_at"


@dataclass(frozen=True)
class ProductPage:
    products: list
    current_page: int
    total_pages: int
    total_products: int


@dataclass(frozen=True)
class CategoryListing:
    category: Category
    product_count: int
    products: list | None = None


def list_products(
    category: str | None = None,
    sort_by: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    limit: int = DEFAULT_PAGE_SIZE,
    page: int = 1,
) -> ProductPage:
    """Filter, sort and page the product catalogue.

    ``category`` matches the denormalized category name; ``"All"`` disables
    the filter. Price bounds apply to the original (undiscounted) price.
    Unknown sort keys fall back to newest first.
    """
    limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
    page = page if page and page > 0 else 1

    query = current_domain.repository_for(Product)._dao.query
    if category and category != "All":
        query = query.filter(category_name=category)
    if min_price is not None:
        query = query.filter(price_original__gte=min_price)
    if max_price is not None:
        query = query.filter(price_original__lte=max_price)

    results = (
        query.order_by(_SORT_ORDERS.get(sort_by, _DEFAULT_SORT))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return ProductPage(
        products=list(results.items),
        current_page=page,
        total_pages=math.ceil(results.total / limit),
        total_products=results.total,
    )


def get_product(product_id: str) -> Product:
    """Load a product by id, rejecting malformed ids before the lookup."""
    if not is_object_id(product_id):
        raise ValidationError({"id": ["Invalid product ID format."]})

    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound("Product not found.")


def list_categories(with_products: bool = False) -> list[CategoryListing]:
    """Active categories sorted by name, with product counts or product lists."""
    categories = (
        current_domain.repository_for(Category)
        ._dao.query.filter(status=CategoryStatus.ACTIVE.value)
        .order_by("name")
        .limit(None)
        .all()
        .items
    )

    product_dao = current_domain.repository_for(Product)._dao
    listings = []
    for category in categories:
        results = product_dao.query.filter(category_id=category.id).order_by("-created_at").limit(None).all()
        listings.append(
            CategoryListing(
                category=category,
                product_count=results.total,
                products=list(results.items) if with_products else None,
            )
        )
    return listings


def list_services() -> list[Service]:
    """Active services, newest first."""
    return list(
        current_domain.repository_for(Service)
        ._dao.query.filter(status=ServiceStatus.ACTIVE.value)
        .order_by("-created_at")
        .limit(None)
        .all()
        .items
    )


def get_service(service_id: str) -> Service:
    if not is_object_id(service_id):
        raise ValidationError({"id": ["Invalid service ID format."]})

    try:
        return current_domain.repository_for(Service).get(service_id)
    except ObjectNotFoundError:
        raise NotFound("Service not found.")


def featured_products() -> dict[str, Product]:
    """The newest product in each featured category.

    Category names match case-insensitively; results are keyed by the
    configured spelling. Categories without products are left out.
    """
    dao = current_domain.repository_for(Product)._dao
    featured = {}
    for name in get_settings().featured_categories:
        latest = dao.query.filter(category_name__iexact=name).order_by("-created_at").limit(1).all().first
        if latest is not None:
            featured[name] = latest
    return featured
