"""PostProductReview / DeleteProductReview: reviews embedded in a product."""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.catalogue.product.product import Product, ProductReview
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.reviews.authoring import append_review, delete_review, upload_review_images, validate_review_content

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class PostProductReview:
    product_id = Identifier(required=True)
    author_id = String(required=True, max_length=255)
    author_name = String(max_length=255)
    author_avatar = String(max_length=1000)
    rating = Integer()
    title = String(max_length=200)
    body = Text()
    images = Text()  # JSON array of base64 data URIs


@storefront.command(part_of="Product")
class DeleteProductReview:
    product_id = Identifier(required=True)
    review_id = Identifier()
    requester_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=Product)
class ProductReviewHandler:
    def _load(self, product_id) -> Product:
        try:
            return current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found.")

    @handle(PostProductReview)
    def post_review(self, command):
        rating = validate_review_content(command.rating, command.title, command.body)
        product = self._load(command.product_id)

        images = json.loads(command.images) if command.images else []
        image_urls = upload_review_images(images, folder=f"reviews/{product.id}")

        review = append_review(
            product,
            ProductReview,
            author_id=command.author_id,
            author_name=command.author_name,
            author_avatar=command.author_avatar,
            rating=rating,
            title=command.title,
            body=command.body,
            image_urls=image_urls,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("product_review_posted", product_id=str(product.id), review_id=str(review.id))
        return review

    @handle(DeleteProductReview)
    def remove_review(self, command):
        product = self._load(command.product_id)
        delete_review(product, command.review_id, command.requester_id)
        current_domain.repository_for(Product).add(product)

        logger.info("product_review_deleted", product_id=str(product.id), review_id=str(command.review_id))
