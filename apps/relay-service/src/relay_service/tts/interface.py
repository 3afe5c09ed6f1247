"""
Text-to-Speech Provider Interface Contract.

This module defines the interface that all TTS providers must follow.
Synthesis of empty text is not an error: providers return None.
"""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from relay_service.audio import AudioPayload


@runtime_checkable
class TextToSpeechProvider(Protocol):
    """Protocol defining the text-to-speech capability."""

    @property
    def component_name(self) -> str:
        """Return the component name (always 'tts')."""
        ...

    @property
    def provider_name(self) -> str:
        ...

    @property
    def is_ready(self) -> bool:
        ...

    def synthesize(self, text: str, target_language: str) -> AudioPayload | None:
        """Synthesize speech for text in the target language.

        Args:
            text: Text to speak
            target_language: Canonical language code

        Returns:
            AudioPayload, or None when text is empty

        Raises:
            TtsError: On provider/network failure, missing credentials or
                an unsupported language
        """
        ...

    def shutdown(self) -> None:
        ...


class BaseTextToSpeechProvider(ABC):
    """Abstract base class for TTS providers."""

    _component_name: str = "tts"

    @property
    def component_name(self) -> str:
        """Return the component name (always 'tts')."""
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
    def synthesize(self, text: str, target_language: str) -> AudioPayload | None:
        pass

    def shutdown(self) -> None:
        """Default implementation does nothing. Override if cleanup needed."""
        return  # noqa: B027 - intentionally empty default implementation
