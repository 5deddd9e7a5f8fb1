"""Asset store port (abstract interface).

Review photos arrive from the browser as base64 data URIs and are handed to an
asset host that returns a public URL. Adapters never raise for a failed
upload; they report it in the result so callers decide how to abort.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UploadResult:
    """Result of an asset upload attempt."""

    success: bool
    url: str | None = None
    public_id: str | None = None
    failure_reason: str | None = None


class AssetStore(ABC):
    """Abstract asset store interface."""

    @abstractmethod
    def upload_image(self, data: str, folder: str) -> UploadResult:
        """Upload one encoded image into ``folder`` and return its public URL."""
        ...
