"""STT provider used when no credential is configured."""

from relay_service.audio import AudioPayload
from relay_service.errors import SttError
from relay_service.models.error import ErrorCode

from .interface import BaseSpeechToTextProvider, TranscriptionResult


class UnconfiguredSpeechToText(BaseSpeechToTextProvider):
    """Fails deterministically on every call with PROVIDER_UNCONFIGURED."""

    def __init__(self, reason: str):
        self._reason = reason

    @property
    def provider_name(self) -> str:
        return "unconfigured"

    @property
    def is_ready(self) -> bool:
        return False

    def transcribe(self, audio: AudioPayload, language_hint: str | None) -> TranscriptionResult:
        raise SttError(
            f"Speech-to-text provider is not configured: {self._reason}",
            code=ErrorCode.PROVIDER_UNCONFIGURED,
            details={"reason": self._reason},
        )
