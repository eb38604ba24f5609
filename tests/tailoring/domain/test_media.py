"""Tests for image validation and the CDN adapters."""

import httpx
import pytest
from protean.exceptions import ValidationError

from tailoring.media import get_cdn, reset_cdn, set_cdn
from tailoring.media.cloudinary_adapter import CloudinaryCDN
from tailoring.media.fake_adapter import FakeImageCDN
from tailoring.media.port import (
    DESIGN_FOLDER,
    FABRIC_FOLDER,
    MAX_IMAGE_BYTES,
    ImageFile,
    ImageUploadError,
    validate_image,
)


def _png(size=1024):
    return ImageFile(filename="panjabi.png", content_type="image/png", content=b"\x89" * size)


class TestValidateImage:
    def test_accepts_small_image(self):
        validate_image(_png())

    def test_accepts_exactly_five_megabytes(self):
        validate_image(_png(MAX_IMAGE_BYTES))

    def test_rejects_larger_than_five_megabytes(self):
        with pytest.raises(ValidationError) as exc:
            validate_image(_png(MAX_IMAGE_BYTES + 1))
        assert "5MB" in exc.value.messages["file"][0]

    def test_rejects_non_image(self):
        with pytest.raises(ValidationError):
            validate_image(ImageFile(filename="notes.pdf", content_type="application/pdf", content=b"%PDF"))


class TestFakeImageCDN:
    def test_upload_records_call_and_returns_url(self):
        cdn = FakeImageCDN()
        result = cdn.upload(_png(), folder=DESIGN_FOLDER)
        assert result.url.startswith("https://cdn.example.test/tailor_designs/")
        assert cdn.calls[0]["folder"] == DESIGN_FOLDER
        assert cdn.calls[0]["upload_profile"] == "ml_default"

    def test_configured_failure(self):
        cdn = FakeImageCDN()
        cdn.configure(should_succeed=False, failure_reason="Quota exceeded")
        with pytest.raises(ImageUploadError, match="Quota exceeded"):
            cdn.upload(_png(), folder=FABRIC_FOLDER)


class TestCdnFactory:
    def test_defaults_to_fake(self, monkeypatch):
        monkeypatch.delenv("IMAGE_CDN", raising=False)
        reset_cdn()
        assert isinstance(get_cdn(), FakeImageCDN)

    def test_cloudinary_selected_by_environment(self, monkeypatch):
        monkeypatch.setenv("IMAGE_CDN", "cloudinary")
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "tailorhub")
        reset_cdn()
        assert isinstance(get_cdn(), CloudinaryCDN)
        reset_cdn()

    def test_set_cdn_overrides(self):
        cdn = FakeImageCDN()
        set_cdn(cdn)
        assert get_cdn() is cdn


class TestCloudinaryCDN:
    def _cdn(self, handler):
        return CloudinaryCDN(cloud_name="tailorhub", client=httpx.Client(transport=httpx.MockTransport(handler)))

    def test_posts_unsigned_upload(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = request.content
            return httpx.Response(
                200,
                json={
                    "secure_url": "https://res.cloudinary.com/tailorhub/image/upload/tailor_designs/p.png",
                    "public_id": "tailor_designs/p",
                    "bytes": 1024,
                },
            )

        result = self._cdn(handler).upload(_png(), folder=DESIGN_FOLDER)

        assert seen["url"] == "https://api.cloudinary.com/v1_1/tailorhub/image/upload"
        assert b"ml_default" in seen["body"]
        assert b"tailor_designs" in seen["body"]
        assert result.url.endswith("tailor_designs/p.png")
        assert result.public_id == "tailor_designs/p"

    def test_error_response_raises_with_reason(self):
        def handler(request):
            return httpx.Response(400, json={"error": {"message": "Upload preset not found"}})

        with pytest.raises(ImageUploadError, match="Upload preset not found"):
            self._cdn(handler).upload(_png(), folder=DESIGN_FOLDER)

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ImageUploadError):
            self._cdn(handler).upload(_png(), folder=DESIGN_FOLDER)

    def test_cloud_name_required(self):
        with pytest.raises(ValueError):
            CloudinaryCDN(cloud_name="")

    def test_closes_the_client_it_created(self):
        cdn = CloudinaryCDN(cloud_name="tailorhub")
        with cdn:
            assert not cdn.client.is_closed
        assert cdn.client.is_closed

    def test_leaves_a_supplied_client_open(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        CloudinaryCDN(cloud_name="tailorhub", client=client).close()
        assert not client.is_closed

    def test_reset_closes_the_active_cdn(self, monkeypatch):
        monkeypatch.setenv("IMAGE_CDN", "cloudinary")
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "tailorhub")
        reset_cdn()
        cdn = get_cdn()

        reset_cdn()

        assert cdn.client.is_closed
