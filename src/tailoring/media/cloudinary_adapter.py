"""Cloudinary image CDN adapter.

Uses the unsigned upload endpoint: the request carries the file, an upload
preset (the "upload profile") and a destination folder, and no API secret.
"""

import httpx
import structlog

from tailoring.media.port import DEFAULT_UPLOAD_PROFILE, ImageCDN, ImageFile, ImageUploadError, UploadResult

logger = structlog.get_logger(__name__)

UPLOAD_URL_TEMPLATE = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


class CloudinaryCDN(ImageCDN):
    def __init__(self, cloud_name: str, client: httpx.Client | None = None) -> None:
        if not cloud_name:
            raise ValueError("Cloudinary cloud name is required")
        self.cloud_name = cloud_name
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=30.0)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "CloudinaryCDN":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def upload_url(self) -> str:
        return UPLOAD_URL_TEMPLATE.format(cloud_name=self.cloud_name)

    def upload(self, image: ImageFile, folder: str, upload_profile: str = DEFAULT_UPLOAD_PROFILE) -> UploadResult:
        try:
            response = self.client.post(
                self.upload_url,
                data={"upload_preset": upload_profile, "folder": folder},
                files={"file": (image.filename, image.content, image.content_type)},
            )
        except httpx.HTTPError as exc:
            logger.error("Image upload failed", folder=folder, filename=image.filename, error=str(exc))
            raise ImageUploadError(f"Image upload failed: {exc}") from exc

        if response.status_code >= 400:
            reason = _error_message(response)
            logger.warning(
                "Image upload rejected",
                folder=folder,
                filename=image.filename,
                status_code=response.status_code,
                reason=reason,
            )
            raise ImageUploadError(reason)

        payload = response.json()
        return UploadResult(
            url=payload["secure_url"],
            public_id=payload.get("public_id"),
            bytes_stored=payload.get("bytes"),
        )


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"Image upload failed with status {response.status_code}"
