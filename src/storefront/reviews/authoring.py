"""Review rules shared by every reviewable aggregate.

Products and services both hold their reviews as owned child entities in a
``reviews`` association. The functions here only rely on that association, so
both aggregates get identical behaviour:

- a review needs a rating, a title and a body; the rating is 1 to 5
- photos are uploaded before anything changes, and any failed upload aborts
- the author's name and avatar are copied at submission time
- only the author may delete a review
"""

import json
from datetime import UTC, datetime

import structlog
from protean.exceptions import ValidationError

from storefront.errors import Forbidden, NotFound, UpstreamError
from storefront.media import get_asset_store
from storefront.shared.identity import object_id

logger = structlog.get_logger(__name__)

MAX_IMAGES = 5


def validate_review_content(rating, title, body) -> int:
    """Check the required fields and return the rating as an int."""
    if not rating or not (title or "").strip() or not (body or "").strip():
        raise ValidationError({"review": ["Rating, title, and comment are required."]})

    rating = int(rating)
    if rating < 1 or rating > 5:
        raise ValidationError({"rating": ["Rating must be between 1 and 5"]})
    return rating


def upload_review_images(images: list[str], folder: str) -> list[str]:
    """Upload encoded photos and return their URLs, all or nothing."""
    if len(images) > MAX_IMAGES:
        raise ValidationError({"images": [f"Cannot attach more than {MAX_IMAGES} images to a review"]})

    store = get_asset_store()
    urls = []
    for data in images:
        result = store.upload_image(data, folder=folder)
        if not result.success:
            logger.warning("review_image_upload_failed", folder=folder, reason=result.failure_reason)
            raise UpstreamError(f"Image upload failed: {result.failure_reason}")
        urls.append(result.url)
    return urls


def append_review(target, review_cls, author_id, author_name, author_avatar, rating, title, body, image_urls):
    """Add a new review to ``target`` and return it."""
    review = review_cls(
        id=object_id(),
        author_id=author_id,
        author_name=author_name or "Anonymous User",
        author_avatar=author_avatar or "",
        title=title.strip(),
        body=body.strip(),
        rating=rating,
        images=json.dumps(image_urls),
        created_at=datetime.now(UTC),
    )
    target.add_reviews(review)
    target.updated_at = datetime.now(UTC)
    return review


def delete_review(target, review_id, requester_id) -> None:
    """Remove ``review_id`` from ``target`` if ``requester_id`` wrote it."""
    if not review_id:
        raise ValidationError({"review_id": ["Review ID is required."]})

    review = next((r for r in target.reviews if str(r.id) == str(review_id)), None)
    if review is None:
        raise NotFound("Review not found.")

    if str(review.author_id) != str(requester_id):
        raise Forbidden("You are not authorized to delete this review.")

    target.remove_reviews(review)
    target.updated_at = datetime.now(UTC)
