"""FastAPI endpoints for catalogue browsing and reviews."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.responses import ok
from storefront.catalogue import browsing
from storefront.catalogue.api.schemas import (
    CategoryOut,
    DeleteReviewRequest,
    PaginationOut,
    ProductOut,
    ReviewOut,
    ReviewRequest,
    ServiceOut,
)
from storefront.identity.session import Identity, require_identity
from storefront.identity.user.reconciliation import ensure_user
from storefront.reviews.product_reviews import DeleteProductReview, PostProductReview
from storefront.reviews.service_reviews import DeleteServiceReview, PostServiceReview

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
service_router = APIRouter(prefix="/services", tags=["services"])
featured_router = APIRouter(prefix="/featured", tags=["products"])


# --- Product endpoints ---


@product_router.get("")
async def list_products(
    category: str | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    min_price: float | None = Query(default=None, alias="minPrice"),
    max_price: float | None = Query(default=None, alias="maxPrice"),
    limit: int = browsing.DEFAULT_PAGE_SIZE,
    page: int = 1,
):
    result = browsing.list_products(
        category=category,
        sort_by=sort_by,
        min_price=min_price,
        max_price=max_price,
        limit=limit,
        page=page,
    )
    return ok(
        [ProductOut.from_product(p) for p in result.products],
        pagination=PaginationOut(
            current_page=result.current_page,
            total_pages=result.total_pages,
            total_products=result.total_products,
        ),
    )


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    return ok(ProductOut.from_product(browsing.get_product(product_id)))


@product_router.post("/{product_id}/review", status_code=201)
async def add_product_review(
    product_id: str,
    body: ReviewRequest,
    identity: Identity = Depends(require_identity),
):
    ensure_user(identity)
    review = current_domain.process(
        PostProductReview(
            product_id=product_id,
            author_id=identity.subject,
            author_name=identity.display_name,
            author_avatar=identity.image_url,
            rating=body.rating,
            title=body.title,
            body=body.comment,
            images=json.dumps(body.images),
        ),
        asynchronous=False,
    )
    return ok(ReviewOut.from_review(review), message="Review added successfully.", status_code=201)


@product_router.delete("/{product_id}/review")
async def delete_product_review(
    product_id: str,
    body: DeleteReviewRequest,
    identity: Identity = Depends(require_identity),
):
    current_domain.process(
        DeleteProductReview(product_id=product_id, review_id=body.review_id, requester_id=identity.subject),
        asynchronous=False,
    )
    return ok(message="Review deleted successfully.")


# --- Featured endpoint ---


@featured_router.get("")
async def featured_products():
    return ok({name: ProductOut.from_product(p) for name, p in browsing.featured_products().items()})


# --- Category endpoints ---


@category_router.get("")
async def list_categories(with_products: bool = Query(default=False, alias="withProducts")):
    return ok([CategoryOut.from_listing(c) for c in browsing.list_categories(with_products=with_products)])


# --- Service endpoints ---


@service_router.get("")
async def list_services():
    return ok([ServiceOut.from_service(s) for s in browsing.list_services()])


@service_router.get("/{service_id}")
async def get_service(service_id: str):
    return ok(ServiceOut.from_service(browsing.get_service(service_id)))


@service_router.post("/{service_id}/review", status_code=201)
async def add_service_review(
    service_id: str,
    body: ReviewRequest,
    identity: Identity = Depends(require_identity),
):
    ensure_user(identity)
    review = current_domain.process(
        PostServiceReview(
            service_id=service_id,
            author_id=identity.subject,
            author_name=identity.display_name,
            author_avatar=identity.image_url,
            rating=body.rating,
            title=body.title,
            body=body.comment,
            images=json.dumps(body.images),
        ),
        asynchronous=False,
    )
    return ok(ReviewOut.from_review(review), message="Review added successfully.", status_code=201)


@service_router.delete("/{service_id}/review")
async def delete_service_review(
    service_id: str,
    body: DeleteReviewRequest,
    identity: Identity = Depends(require_identity),
):
    current_domain.process(
        DeleteServiceReview(service_id=service_id, review_id=body.review_id, requester_id=identity.subject),
        asynchronous=False,
    )
    return ok(message="Review deleted successfully.")
