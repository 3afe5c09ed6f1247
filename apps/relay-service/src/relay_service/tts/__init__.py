"""
Text-to-speech capability for the relay service.

Exports:
    - create_tts_provider: Factory function for provider creation
    - TextToSpeechProvider: Protocol interface
    - BaseTextToSpeechProvider: Abstract base class
    - MockTextToSpeech / MockTextToSpeechConfig: Deterministic test provider
    - UnconfiguredTextToSpeech: Provider used when no credential is set
"""

from .factory import create_tts_provider
from .interface import BaseTextToSpeechProvider, TextToSpeechProvider
from .mock import MockTextToSpeech, MockTextToSpeechConfig
from .unconfigured import UnconfiguredTextToSpeech

__all__ = [
    "create_tts_provider",
    "TextToSpeechProvider",
    "BaseTextToSpeechProvider",
    "MockTextToSpeech",
    "MockTextToSpeechConfig",
    "UnconfiguredTextToSpeech",
]
