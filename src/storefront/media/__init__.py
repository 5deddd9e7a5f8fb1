"""Asset store factory.

Provides get_asset_store() / set_asset_store() to swap implementations:
- FakeAssetStore for development and testing
- CloudinaryAssetStore when ASSET_STORE=cloudinary
"""

from storefront.media.cloudinary_adapter import CloudinaryAssetStore
from storefront.media.fake_adapter import FakeAssetStore
from storefront.media.port import AssetStore
from storefront.settings import get_settings

_current_store: AssetStore | None = None


def _build_default() -> AssetStore:
    settings = get_settings()
    if settings.asset_store == "cloudinary":
        return CloudinaryAssetStore(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    return FakeAssetStore()


def get_asset_store() -> AssetStore:
    """Return the current asset store, creating the configured one on first use."""
    global _current_store
    if _current_store is None:
        _current_store = _build_default()
    return _current_store


def set_asset_store(store: AssetStore) -> None:
    """Override the active asset store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_asset_store() -> None:
    global _current_store
    _current_store = None
