"""Image CDN factory.

Provides get_cdn() / set_cdn() to swap implementations:
- FakeImageCDN for development and testing (default)
- CloudinaryCDN when IMAGE_CDN=cloudinary
"""

import os

from tailoring.media.fake_adapter import FakeImageCDN
from tailoring.media.port import DEFAULT_UPLOAD_PROFILE, ImageCDN

_current_cdn: ImageCDN | None = None


def _build_from_environment() -> ImageCDN:
    if os.getenv("IMAGE_CDN", "fake").lower() == "cloudinary":
        from tailoring.media.cloudinary_adapter import CloudinaryCDN

        return CloudinaryCDN(cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""))
    return FakeImageCDN()


def get_cdn() -> ImageCDN:
    """Return the active image CDN, building it from the environment on first use."""
    global _current_cdn
    if _current_cdn is None:
        _current_cdn = _build_from_environment()
    return _current_cdn


def set_cdn(cdn: ImageCDN) -> None:
    global _current_cdn
    _current_cdn = cdn


def reset_cdn() -> None:
    global _current_cdn
    if _current_cdn is not None:
        _current_cdn.close()
    _current_cdn = None


def upload_profile() -> str:
    return os.getenv("CLOUDINARY_UPLOAD_PRESET", DEFAULT_UPLOAD_PROFILE)
