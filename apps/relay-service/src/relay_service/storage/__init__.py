"""
Audio storage capability for the relay service.

Exports:
    - create_audio_store: Factory function for store creation
    - AudioStore: Protocol interface
    - BaseAudioStore: Abstract base class
    - MockAudioStore / MockAudioStoreConfig: In-memory store
    - UnconfiguredAudioStore: Store used when no credential is set
"""

from .factory import create_audio_store
from .interface import AudioStore, BaseAudioStore
from .mock import MockAudioStore, MockAudioStoreConfig
from .unconfigured import UnconfiguredAudioStore

__all__ = [
    "create_audio_store",
    "AudioStore",
    "BaseAudioStore",
    "MockAudioStore",
    "MockAudioStoreConfig",
    "UnconfiguredAudioStore",
]
