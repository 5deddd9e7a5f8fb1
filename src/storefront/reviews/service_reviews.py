"""PostServiceReview / DeleteServiceReview: reviews embedded in a service."""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.catalogue.service.service import Service, ServiceReview
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.reviews.authoring import append_review, delete_review, upload_review_images, validate_review_content

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Service")
class PostServiceReview:
    service_id = Identifier(required=True)
    author_id = String(required=True, max_length=255)
    author_name = String(max_length=255)
    author_avatar = String(max_length=1000)
    rating = Integer()
    title = String(max_length=200)
    body = Text()
    images = Text()  # JSON array of base64 data URIs


@storefront.command(part_of="Service")
class DeleteServiceReview:
    service_id = Identifier(required=True)
    review_id = Identifier()
    requester_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=Service)
class ServiceReviewHandler:
    def _load(self, service_id) -> Service:
        try:
            return current_domain.repository_for(Service).get(service_id)
        except ObjectNotFoundError:
            raise NotFound("Service not found.")

    @handle(PostServiceReview)
    def post_review(self, command):
        rating = validate_review_content(command.rating, command.title, command.body)
        service = self._load(command.service_id)

        images = json.loads(command.images) if command.images else []
        image_urls = upload_review_images(images, folder=f"service-reviews/{service.id}")

        review = append_review(
            service,
            ServiceReview,
            author_id=command.author_id,
            author_name=command.author_name,
            author_avatar=command.author_avatar,
            rating=rating,
            title=command.title,
            body=command.body,
            image_urls=image_urls,
        )
        current_domain.repository_for(Service).add(service)

        logger.info("service_review_posted", service_id=str(service.id), review_id=str(review.id))
        return review

    @handle(DeleteServiceReview)
    def remove_review(self, command):
        service = self._load(command.service_id)
        delete_review(service, command.review_id, command.requester_id)
        current_domain.repository_for(Service).add(service)

        logger.info("service_review_deleted", service_id=str(service.id), review_id=str(command.review_id))
