"""Image CDN port (abstract interface).

Catalogue images live on a hosted CDN. The domain only stores the public URL
the CDN hands back; everything about the upload itself sits behind this port
so the Cloudinary adapter and the in-memory fake are interchangeable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from protean.exceptions import ValidationError

MAX_IMAGE_BYTES = 5 * 1024 * 1024

DESIGN_FOLDER = "tailor_designs"
FABRIC_FOLDER = "tailor_fabrics"
DEFAULT_UPLOAD_PROFILE = "ml_default"


class ImageUploadError(Exception):
    """The CDN rejected or failed an upload."""


@dataclass(frozen=True)
class ImageFile:
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class UploadResult:
    """Where the CDN stored an image."""

    url: str
    public_id: str | None = None
    bytes_stored: int | None = None


def validate_image(image: ImageFile, max_bytes: int = MAX_IMAGE_BYTES) -> None:
    """Reject files that are too large or not images before any upload is attempted."""
    if not image.content_type or not image.content_type.startswith("image/"):
        raise ValidationError({"file": ["Please upload an image file"]})
    if image.size > max_bytes:
        raise ValidationError({"file": [f"Image size should be less than {max_bytes // (1024 * 1024)}MB"]})
    if image.size == 0:
        raise ValidationError({"file": ["Image file is empty"]})


class ImageCDN(ABC):
    """Contract every image CDN adapter implements."""

    @abstractmethod
    def upload(self, image: ImageFile, folder: str, upload_profile: str = DEFAULT_UPLOAD_PROFILE) -> UploadResult:
        """Store ``image`` under ``folder`` and return its public URL."""

    def close(self) -> None:
        """Release any connections the adapter holds."""
