"""In-memory image CDN for development and tests.

Returns deterministic URLs and remembers every call, so tests can assert on
what would have been sent to the real CDN. Can be switched to fail.
"""

from uuid import uuid4

from tailoring.media.port import DEFAULT_UPLOAD_PROFILE, ImageCDN, ImageFile, ImageUploadError, UploadResult

FAKE_CDN_BASE_URL = "https://cdn.example.test"


class FakeImageCDN(ImageCDN):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Upload rejected"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Upload rejected") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def upload(self, image: ImageFile, folder: str, upload_profile: str = DEFAULT_UPLOAD_PROFILE) -> UploadResult:
        self.calls.append(
            {
                "filename": image.filename,
                "content_type": image.content_type,
                "size": image.size,
                "folder": folder,
                "upload_profile": upload_profile,
            }
        )
        if not self.should_succeed:
            raise ImageUploadError(self.failure_reason)

        public_id = f"{folder}/{uuid4().hex}"
        return UploadResult(
            url=f"{FAKE_CDN_BASE_URL}/{public_id}/{image.filename}",
            public_id=public_id,
            bytes_stored=image.size,
        )
