"""Unit tests for CloudinaryAudioStore with a mocked Cloudinary uploader."""

from unittest.mock import patch

import cloudinary.exceptions
import pytest

from relay_service.audio import AudioPayload
from relay_service.errors import StorageError
from relay_service.models.error import ErrorCode
from relay_service.storage.cloudinary_store import CloudinaryAudioStore

AUDIO = AudioPayload(data=b"RIFFdata", mime_type="audio/wav")


@pytest.fixture
def store() -> CloudinaryAudioStore:
    return CloudinaryAudioStore(cloud_name="demo", api_key="123", api_secret="shh", folder="voice")


@pytest.fixture
def mock_upload():
    with patch("cloudinary.uploader.upload") as upload:
        yield upload


class TestCloudinaryAudioStore:
    def test_requires_credentials(self):
        with pytest.raises(ValueError):
            CloudinaryAudioStore(cloud_name="demo", api_key="", api_secret="x")

    def test_configures_sdk_once(self):
        with patch("cloudinary.config") as config:
            CloudinaryAudioStore(cloud_name="demo", api_key="123", api_secret="shh")

        config.assert_called_once_with(
            cloud_name="demo", api_key="123", api_secret="shh", secure=True
        )

    def test_upload_returns_secure_url(self, store, mock_upload):
        mock_upload.return_value = {
            "secure_url": "https://res.cloudinary.com/demo/raw/upload/x.wav",
            "url": "http://res.cloudinary.com/demo/raw/upload/x.wav",
        }

        url = store.upload(AUDIO, "original_trace1")

        assert url == "https://res.cloudinary.com/demo/raw/upload/x.wav"
        args, kwargs = mock_upload.call_args
        assert args == (AUDIO.to_data_uri(),)
        assert kwargs["folder"] == "voice"
        assert kwargs["resource_type"] == "raw"
        assert kwargs["public_id"].startswith("original_trace1_")
        assert kwargs["public_id"].endswith(".wav")

    def test_plain_url_fallback(self, store, mock_upload):
        mock_upload.return_value = {"url": "http://x/y.wav"}

        assert store.upload(AUDIO, "k") == "http://x/y.wav"

    def test_missing_url(self, store, mock_upload):
        mock_upload.return_value = {"public_id": "x"}

        with pytest.raises(StorageError) as exc_info:
            store.upload(AUDIO, "k")

        assert exc_info.value.code == ErrorCode.STORAGE_FAILED

    def test_rejected_credentials(self, store, mock_upload):
        mock_upload.side_effect = cloudinary.exceptions.AuthorizationRequired("Invalid Signature")

        with pytest.raises(StorageError) as exc_info:
            store.upload(AUDIO, "k")

        assert exc_info.value.code == ErrorCode.STORAGE_FAILED
        assert exc_info.value.retryable is False
        assert exc_info.value.details["exception_type"] == "AuthorizationRequired"

    def test_rate_limited(self, store, mock_upload):
        mock_upload.side_effect = cloudinary.exceptions.RateLimited("slow down")

        with pytest.raises(StorageError) as exc_info:
            store.upload(AUDIO, "k")

        assert exc_info.value.code == ErrorCode.PROVIDER_RATE_LIMITED
        assert exc_info.value.retryable is True

    def test_transport_failure(self, store, mock_upload):
        mock_upload.side_effect = cloudinary.exceptions.GeneralError("Unexpected error")

        with pytest.raises(StorageError) as exc_info:
            store.upload(AUDIO, "k")

        assert exc_info.value.code == ErrorCode.PROVIDER_ERROR
