"""Product aggregate with Dimensions value object and embedded ProductReview entities.

Prices are kept as two flat columns so listings can filter and sort on them in
the repository. Stock only ever moves down, when a paid order is finalized.
Reviews are append-only children of the product; the average rating is derived
from them on every read and never stored.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.shared.identity import object_id


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@storefront.value_object(part_of="Product")
class Dimensions:
    """Physical size of a product. The unit defaults to centimetres."""

    height = Float(min_value=0.0)
    width = Float(min_value=0.0)
    depth = Float(min_value=0.0)
    unit = String(max_length=10, default="cm")


@storefront.entity(part_of="Product")
class ProductReview:
    """A buyer's review of a product, with the author captured at submission time."""

    author_id = String(required=True, max_length=255)
    author_name = String(required=True, max_length=255)
    author_avatar = String(max_length=1000)
    title = String(required=True, max_length=200)
    body = Text(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    images = Text()  # JSON array of image URLs
    created_at = DateTime()

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    category_id = Identifier(required=True)
    category_name = String(required=True, max_length=100)
    price_original = Float(required=True, min_value=0.0)
    price_discounted = Float(min_value=0.0)
    stock = Integer(default=0)
    dimensions = ValueObject(Dimensions)
    materials = Text()  # JSON array of strings
    images = Text()  # JSON array of image URLs
    status = String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    reviews = HasMany(ProductReview)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def discounted_price_cannot_exceed_original(self):
        if self.price_discounted is not None and self.price_original is not None:
            if self.price_discounted > self.price_original:
                raise ValidationError({"price": ["Discounted price cannot exceed the original price"]})

    @classmethod
    def create(
        cls,
        name,
        description,
        category_id,
        category_name,
        price_original,
        price_discounted=None,
        stock=0,
        dimensions=None,
        materials=None,
        images=None,
        status=ProductStatus.ACTIVE.value,
    ):
        now = datetime.now(UTC)
        return cls(
            id=object_id(),
            name=name,
            description=description,
            category_id=category_id,
            category_name=category_name,
            price_original=price_original,
            price_discounted=price_discounted,
            stock=stock,
            dimensions=Dimensions(**dimensions) if dimensions else None,
            materials=json.dumps(materials or []),
            images=json.dumps(images or []),
            status=status,
            created_at=now,
            updated_at=now,
        )

    @property
    def material_list(self) -> list[str]:
        return json.loads(self.materials) if self.materials else []

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def primary_image(self) -> str | None:
        urls = self.image_urls
        return urls[0] if urls else None

    @property
    def average_rating(self) -> float:
        if not self.reviews:
            return 0.0
        return round(sum(r.rating for r in self.reviews) / len(self.reviews), 1)

    def decrement_stock(self, quantity: int) -> None:
        """Take purchased units out of stock. No floor is enforced here."""
        self.stock = (self.stock or 0) - quantity
        self.updated_at = datetime.now(UTC)
