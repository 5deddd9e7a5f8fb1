"""In-memory asset store for development and testing.

Uploads succeed with deterministic-looking URLs unless the store is configured
to fail, in which case every upload reports the configured reason.
"""

from uuid import uuid4

from storefront.media.port import AssetStore, UploadResult


class FakeAssetStore(AssetStore):
    """Configurable fake asset store."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Upload rejected"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Upload rejected") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def upload_image(self, data: str, folder: str) -> UploadResult:
        self.calls.append({"method": "upload_image", "folder": folder, "size": len(data)})

        if not self.should_succeed:
            return UploadResult(success=False, failure_reason=self.failure_reason)

        public_id = f"{folder}/{uuid4().hex[:12]}"
        return UploadResult(
            success=True,
            url=f"https://assets.example.test/{public_id}.jpg",
            public_id=public_id,
        )
