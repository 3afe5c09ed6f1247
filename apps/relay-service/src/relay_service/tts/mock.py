"""
Mock TTS provider for testing and local development.

Produces a small deterministic byte payload per (text, language) and can
be told to fail on a given call or language.
"""

import threading
from dataclasses import dataclass, field

from relay_service.audio import AudioPayload
from relay_service.errors import TtsError
from relay_service.models.error import ErrorCode

from .interface import BaseTextToSpeechProvider


@dataclass
class MockTextToSpeechConfig:
    """Failure injection for the mock.

    Attributes:
        fail_on_call: 1-based call number that raises TtsError
        fail_on_languages: Target languages that raise TtsError
    """

    fail_on_call: int | None = None
    fail_on_languages: set[str] = field(default_factory=set)


class MockTextToSpeech(BaseTextToSpeechProvider):
    """Deterministic TTS mock. Calls are recorded as (text, target_language)."""

    def __init__(self, config: MockTextToSpeechConfig | None = None):
        self._config = config or MockTextToSpeechConfig()
        self._lock = threading.Lock()
        self.calls: list[tuple[str, str]] = []

    @property
    def provider_name(self) -> str:
        return "mock-tts-v1"

    @property
    def is_ready(self) -> bool:
        return True

    def synthesize(self, text: str, target_language: str) -> AudioPayload | None:
        with self._lock:
            self.calls.append((text, target_language))
            call_number = len(self.calls)

        if (
            call_number == self._config.fail_on_call
            or target_language in self._config.fail_on_languages
        ):
            raise TtsError(
                f"Mock TTS failure for {target_language}",
                code=ErrorCode.PROVIDER_ERROR,
                details={"provider": self.provider_name, "call": call_number},
            )

        if not text or not text.strip():
            return None
        return AudioPayload(data=f"{target_language}:{text}".encode(), mime_type="audio/wav")
