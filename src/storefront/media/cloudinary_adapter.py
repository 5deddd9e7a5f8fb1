"""Cloudinary asset store adapter.

Uploads go through the cloudinary SDK with this store's credentials passed per
call, so several stores can coexist in one process.
"""

import cloudinary.uploader
import structlog
from cloudinary.exceptions import Error as CloudinaryError

from storefront.media.port import AssetStore, UploadResult

logger = structlog.get_logger(__name__)


class CloudinaryAssetStore(AssetStore):
    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: float = 30.0) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    def upload_image(self, data: str, folder: str) -> UploadResult:
        try:
            body = cloudinary.uploader.upload(
                data,
                folder=folder,
                resource_type="image",
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                timeout=self.timeout,
            )
        except CloudinaryError as exc:
            logger.error("asset_upload_failed", folder=folder, error=str(exc))
            return UploadResult(success=False, failure_reason=str(exc))

        return UploadResult(success=True, url=body.get("secure_url"), public_id=body.get("public_id"))
