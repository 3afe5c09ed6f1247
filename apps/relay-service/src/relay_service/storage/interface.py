"""
Audio Store Interface Contract.

An audio store turns an opaque audio payload into a durable, retrievable
URL. key_hint namespaces the object; stores add their own uniqueness
suffix so two uploads with the same hint never collide.
"""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from relay_service.audio import AudioPayload


@runtime_checkable
class AudioStore(Protocol):
    """Protocol defining the audio storage capability."""

    @property
    def component_name(self) -> str:
        """Return the component name (always 'storage')."""
        ...

    @property
    def provider_name(self) -> str:
        ...

    @property
    def is_ready(self) -> bool:
        ...

    def upload(self, audio: AudioPayload, key_hint: str) -> str:
        """Store audio and return its public URL.

        Raises:
            StorageError: On storage/network failure or missing credentials
        """
        ...


class BaseAudioStore(ABC):
    """Abstract base class for audio stores."""

    _component_name: str = "storage"

    @property
    def component_name(self) -> str:
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
    def upload(self, audio: AudioPayload, key_hint: str) -> str:
        pass

    def shutdown(self) -> None:
        """Default implementation does nothing. Override if cleanup needed."""
        return  # noqa: B027 - intentionally empty default implementation
