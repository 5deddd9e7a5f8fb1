"""Integration settings read from the process environment.

Persistence and messaging live in ``domain.toml``; everything here is a
credential or a switch for an external collaborator. Values are read on every
call so tests can patch the environment without reloading modules.
"""

import os
from dataclasses import dataclass, field

DEFAULT_FEATURED_CATEGORIES = ("Drawing Room", "Bedroom", "Kitchen")


def _csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    identity_jwt_secret: str = ""
    identity_jwt_algorithms: tuple[str, ...] = ("HS256",)
    identity_webhook_secret: str = ""
    payment_gateway: str = "fake"
    payment_key_id: str = ""
    payment_secret: str = ""
    payment_currency: str = "INR"
    asset_store: str = "fake"
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    featured_categories: tuple[str, ...] = field(default=DEFAULT_FEATURED_CATEGORIES)

    @classmethod
    def from_env(cls) -> "Settings":
        featured = os.environ.get("FEATURED_CATEGORIES")
        return cls(
            identity_jwt_secret=os.environ.get("IDENTITY_JWT_SECRET", ""),
            identity_jwt_algorithms=_csv(os.environ.get("IDENTITY_JWT_ALGORITHMS", "HS256")),
            identity_webhook_secret=os.environ.get("IDENTITY_WEBHOOK_SECRET", ""),
            payment_gateway=os.environ.get("PAYMENT_GATEWAY", "fake").lower(),
            payment_key_id=os.environ.get("RAZORPAY_KEY_ID", ""),
            payment_secret=os.environ.get("RAZORPAY_SECRET", ""),
            payment_currency=os.environ.get("PAYMENT_CURRENCY", "INR"),
            asset_store=os.environ.get("ASSET_STORE", "fake").lower(),
            cloudinary_cloud_name=os.environ.get("CLOUDINARY_CLOUD_NAME", ""),
            cloudinary_api_key=os.environ.get("CLOUDINARY_API_KEY", ""),
            cloudinary_api_secret=os.environ.get("CLOUDINARY_API_SECRET", ""),
            featured_categories=_csv(featured) if featured else DEFAULT_FEATURED_CATEGORIES,
        )


def get_settings() -> Settings:
    return Settings.from_env()
