"""
Speech-to-Text Provider Interface Contract.

This module defines the interface that all STT providers must follow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from relay_service.audio import AudioPayload


@dataclass(frozen=True)
class TranscriptionResult:
    """Transcript of one voice message.

    language is the provider's own detection in canonical form, or None
    when the provider did not report one.
    """

    transcript: str
    language: str | None = None


@runtime_checkable
class SpeechToTextProvider(Protocol):
    """Protocol defining the speech-to-text capability."""

    @property
    def component_name(self) -> str:
        """Return the component name (always 'stt')."""
        ...

    @property
    def provider_name(self) -> str:
        """Return the provider identifier (e.g., 'sarvam-saarika:v2.5')."""
        ...

    @property
    def is_ready(self) -> bool:
        ...

    def transcribe(self, audio: AudioPayload, language_hint: str | None) -> TranscriptionResult:
        """Transcribe audio.

        Args:
            audio: Decoded audio with MIME type
            language_hint: Canonical language code, "auto" or None for no hint

        Returns:
            TranscriptionResult with transcript and detected language

        Raises:
            SttError: On provider/network failure or missing credentials
        """
        ...

    def shutdown(self) -> None:
        ...


class BaseSpeechToTextProvider(ABC):
    """Abstract base class for STT providers."""

    _component_name: str = "stt"

    @property
    def component_name(self) -> str:
        """Return the component name (always 'stt')."""
        return self._component_name

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        pass

    @abstractmethod
    def transcribe(self, audio: AudioPayload, language_hint: str | None) -> TranscriptionResult:
        pass

    def shutdown(self) -> None:
        """Default implementation does nothing. Override if cleanup needed."""
        return  # noqa: B027 - intentionally empty default implementation
