"""
Speech-to-text capability for the relay service.

Exports:
    - create_stt_provider: Factory function for provider creation
    - SpeechToTextProvider: Protocol interface
    - BaseSpeechToTextProvider: Abstract base class
    - TranscriptionResult: Transcript + detected language
    - MockSpeechToText / UnconfiguredSpeechToText
"""

from .factory import create_stt_provider
from .interface import BaseSpeechToTextProvider, SpeechToTextProvider, TranscriptionResult
from .mock import MockSpeechToText
from .unconfigured import UnconfiguredSpeechToText

__all__ = [
    "create_stt_provider",
    "SpeechToTextProvider",
    "BaseSpeechToTextProvider",
    "TranscriptionResult",
    "MockSpeechToText",
    "UnconfiguredSpeechToText",
]
