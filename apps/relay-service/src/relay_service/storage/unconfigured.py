"""Audio store used when no credential is configured."""

from relay_service.audio import AudioPayload
from relay_service.errors import StorageError
from relay_service.models.error import ErrorCode

from .interface import BaseAudioStore


class UnconfiguredAudioStore(BaseAudioStore):
    """Fails deterministically on every upload with PROVIDER_UNCONFIGURED."""

    def __init__(self, reason: str):
        self._reason = reason

    @property
    def provider_name(self) -> str:
        return "unconfigured"

    @property
    def is_ready(self) -> bool:
        return False

    def upload(self, audio: AudioPayload, key_hint: str) -> str:
        raise StorageError(
            f"Audio store is not configured: {self._reason}",
            code=ErrorCode.PROVIDER_UNCONFIGURED,
            details={"reason": self._reason},
        )
