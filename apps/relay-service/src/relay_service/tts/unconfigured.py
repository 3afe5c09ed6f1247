"""TTS provider used when no credential is configured."""

from relay_service.audio import AudioPayload
from relay_service.errors import TtsError
from relay_service.models.error import ErrorCode

from .interface import BaseTextToSpeechProvider


class UnconfiguredTextToSpeech(BaseTextToSpeechProvider):
    """Fails deterministically with PROVIDER_UNCONFIGURED.

    Empty text still yields None, as for every TTS provider.
    """

    def __init__(self, reason: str):
        self._reason = reason

    @property
    def provider_name(self) -> str:
        return "unconfigured"

    @property
    def is_ready(self) -> bool:
        return False

    def synthesize(self, text: str, target_language: str) -> AudioPayload | None:
        if not text or not text.strip():
            return None
        raise TtsError(
            f"Text-to-speech provider is not configured: {self._reason}",
            code=ErrorCode.PROVIDER_UNCONFIGURED,
            details={"reason": self._reason},
        )
