"""
Mock STT provider for testing and local development.

Returns a fixed transcript and language, records every call and can be
told to fail.
"""

import threading

from relay_service.audio import AudioPayload
from relay_service.errors import SttError
from relay_service.models.error import ErrorCode

from .interface import BaseSpeechToTextProvider, TranscriptionResult


class MockSpeechToText(BaseSpeechToTextProvider):
    """Deterministic STT mock.

    Args:
        transcript: Transcript returned for every call
        language: Detected language returned (None simulates "not reported")
        fail: Raise SttError instead of returning
    """

    def __init__(
        self,
        transcript: str = "mock transcript",
        language: str | None = "en",
        fail: bool = False,
    ):
        self._transcript = transcript
        self._language = language
        self._fail = fail
        self._lock = threading.Lock()
        self.calls: list[tuple[AudioPayload, str | None]] = []

    @property
    def provider_name(self) -> str:
        return "mock-stt-v1"

    @property
    def is_ready(self) -> bool:
        return True

    def transcribe(self, audio: AudioPayload, language_hint: str | None) -> TranscriptionResult:
        with self._lock:
            self.calls.append((audio, language_hint))

        if self._fail:
            raise SttError(
                "Mock STT failure",
                code=ErrorCode.PROVIDER_ERROR,
                details={"provider": self.provider_name},
            )
        return TranscriptionResult(transcript=self._transcript, language=self._language)
