"""Pydantic request/response schemas for the catalogue API.

Responses are built from aggregates through the ``from_*`` constructors so the
wire format (camelCase, nested price and author blocks) stays independent of
how the aggregates store their fields.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from storefront.api.responses import CamelModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class ReviewRequest(CamelModel):
    rating: int | None = None
    title: str | None = None
    comment: str | None = None
    images: list[str] = Field(default_factory=list)  # base64 data URIs


class DeleteReviewRequest(CamelModel):
    review_id: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PriceOut(CamelModel):
    original: float
    discounted: float | None = None


class DimensionsOut(CamelModel):
    height: float | None = None
    width: float | None = None
    depth: float | None = None
    unit: str = "cm"


class AuthorOut(CamelModel):
    id: str
    name: str
    avatar: str | None = None


class ReviewOut(CamelModel):
    id: str
    author: AuthorOut
    title: str
    body: str
    rating: int
    images: list[str]
    created_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewOut:
        return cls(
            id=str(review.id),
            author=AuthorOut(id=review.author_id, name=review.author_name, avatar=review.author_avatar),
            title=review.title,
            body=review.body,
            rating=review.rating,
            images=review.image_urls,
            created_at=review.created_at,
        )


class ProductSummaryOut(CamelModel):
    id: str
    name: str
    price: PriceOut
    stock: int
    images: list[str]
    status: str

    @classmethod
    def from_product(cls, product) -> ProductSummaryOut:
        return cls(
            id=str(product.id),
            name=product.name,
            price=PriceOut(original=product.price_original, discounted=product.price_discounted),
            stock=product.stock,
            images=product.image_urls,
            status=product.status,
        )


class ProductOut(CamelModel):
    id: str
    name: str
    description: str | None = None
    category_id: str
    category_name: str
    price: PriceOut
    stock: int
    dimensions: DimensionsOut | None = None
    materials: list[str]
    images: list[str]
    status: str
    reviews: list[ReviewOut]
    average_rating: float
    review_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductOut:
        dimensions = product.dimensions
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            category_id=str(product.category_id),
            category_name=product.category_name,
            price=PriceOut(original=product.price_original, discounted=product.price_discounted),
            stock=product.stock,
            dimensions=(
                DimensionsOut(
                    height=dimensions.height,
                    width=dimensions.width,
                    depth=dimensions.depth,
                    unit=dimensions.unit or "cm",
                )
                if dimensions
                else None
            ),
            materials=product.material_list,
            images=product.image_urls,
            status=product.status,
            reviews=[ReviewOut.from_review(r) for r in product.reviews],
            average_rating=product.average_rating,
            review_count=len(product.reviews),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class PaginationOut(CamelModel):
    current_page: int
    total_pages: int
    total_products: int


class CategoryOut(CamelModel):
    id: str
    name: str
    description: str
    parent_id: str | None = None
    status: str
    image: str | None = None
    product_count: int
    products: list[ProductSummaryOut] | None = None

    @classmethod
    def from_listing(cls, listing) -> CategoryOut:
        category = listing.category
        return cls(
            id=str(category.id),
            name=category.name,
            description=category.description,
            parent_id=str(category.parent_id) if category.parent_id else None,
            status=category.status,
            image=category.image,
            product_count=listing.product_count,
            products=(
                [ProductSummaryOut.from_product(p) for p in listing.products] if listing.products is not None else None
            ),
        )


class ServiceOut(CamelModel):
    id: str
    name: str
    category: str
    description: str
    price: str
    whats_included: list[str]
    images: list[str]
    duration: str | None = None
    status: str
    reviews: list[ReviewOut]
    average_rating: float
    review_count: int
    created_at: datetime | None = None

    @classmethod
    def from_service(cls, service) -> ServiceOut:
        return cls(
            id=str(service.id),
            name=service.name,
            category=service.category,
            description=service.description,
            price=service.price,
            whats_included=service.included_items,
            images=service.image_urls,
            duration=service.duration,
            status=service.status,
            reviews=[ReviewOut.from_review(r) for r in service.reviews],
            average_rating=service.average_rating,
            review_count=len(service.reviews),
            created_at=service.created_at,
        )
