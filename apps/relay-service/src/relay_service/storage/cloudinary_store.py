"""
Cloudinary audio store.

Uploads audio as a ``raw`` resource through the Cloudinary SDK. The SDK
is configured once per store; the payload is sent as a data URI so the
MIME type travels with the bytes.
"""

import logging
import time

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from relay_service.audio import AudioPayload
from relay_service.errors import StorageError
from relay_service.models.error import ErrorCode

from .interface import BaseAudioStore

logger = logging.getLogger(__name__)

DEFAULT_FOLDER = "onevoice/audio"


def classify_cloudinary_error(exception: Exception) -> StorageError:
    """Convert a Cloudinary SDK exception into a StorageError.

    Rate limiting and general transport failures are transient; rejected
    credentials and bad requests are permanent.
    """
    details = {"provider": "cloudinary", "exception_type": type(exception).__name__}
    message = f"cloudinary failed: {exception}"
    if isinstance(exception, cloudinary.exceptions.RateLimited):
        return StorageError(message, code=ErrorCode.PROVIDER_RATE_LIMITED, details=details)
    if isinstance(exception, cloudinary.exceptions.GeneralError):
        return StorageError(message, code=ErrorCode.PROVIDER_ERROR, details=details)
    return StorageError(message, retryable=False, details=details)


class CloudinaryAudioStore(BaseAudioStore):
    """Audio store backed by Cloudinary raw uploads."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = DEFAULT_FOLDER,
        timeout_s: float = 30.0,
    ):
        if not (cloud_name and api_key and api_secret):
            raise ValueError("Cloudinary cloud name, API key and API secret are required")
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )
        self._folder = folder
        self._timeout_s = timeout_s

    @property
    def provider_name(self) -> str:
        return "cloudinary"

    @property
    def is_ready(self) -> bool:
        return True

    def upload(self, audio: AudioPayload, key_hint: str) -> str:
        public_id = f"{key_hint}_{int(time.time() * 1000)}.{audio.extension}"
        try:
            result = cloudinary.uploader.upload(
                audio.to_data_uri(),
                folder=self._folder,
                resource_type="raw",
                public_id=public_id,
                timeout=self._timeout_s,
            )
        except cloudinary.exceptions.Error as e:
            error = classify_cloudinary_error(e)
            logger.warning(f"Cloudinary upload failed: code={error.code.value}, error={e}")
            raise error from e

        url = result.get("secure_url") or result.get("url")
        if not url:
            raise StorageError(
                "Cloudinary response has no URL",
                details={"provider": "cloudinary", "keys": sorted(result)},
            )
        return url
