"""Service aggregate: consultations and design work sold alongside products.

Services share the review behaviour of products. The price is a free-text
label ("Starting at Rs 4,999") rather than a number because most services are
quoted after a visit.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, HasMany, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.identity import object_id


class ServiceCategory(Enum):
    CONSULTATION = "Consultation"
    INTERIOR_DESIGN = "Interior Design"
    RENOVATION = "Renovation"


class ServiceStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@storefront.entity(part_of="Service")
class ServiceReview:
    """A client's review of a service, with the author captured at submission time."""

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
class Service:
    name = String(required=True, max_length=255)
    category = String(required=True, choices=ServiceCategory)
    description = Text(required=True)
    price = String(required=True, max_length=100)
    whats_included = Text()  # JSON array of strings
    images = Text()  # JSON array of image URLs
    duration = String(max_length=100)
    status = String(choices=ServiceStatus, default=ServiceStatus.ACTIVE.value)
    reviews = HasMany(ServiceReview)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        name,
        category,
        description,
        price,
        whats_included=None,
        images=None,
        duration=None,
        status=ServiceStatus.ACTIVE.value,
    ):
        now = datetime.now(UTC)
        return cls(
            id=object_id(),
            name=name,
            category=category,
            description=description,
            price=price,
            whats_included=json.dumps(whats_included or []),
            images=json.dumps(images or []),
            duration=duration,
            status=status,
            created_at=now,
            updated_at=now,
        )

    @property
    def included_items(self) -> list[str]:
        return json.loads(self.whats_included) if self.whats_included else []

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def average_rating(self) -> float:
        if not self.reviews:
            return 0.0
        return round(sum(r.rating for r in self.reviews) / len(self.reviews), 1)
