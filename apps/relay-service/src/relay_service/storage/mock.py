"""
In-memory audio store.

Used for tests and for AUDIO_STORE=memory. Uploads are kept in a dict
keyed by URL and recorded in order; failures can be injected by call
number or key prefix.
"""

import threading
from dataclasses import dataclass, field

from relay_service.audio import AudioPayload
from relay_service.errors import StorageError
from relay_service.models.error import ErrorCode

from .interface import BaseAudioStore


@dataclass
class MockAudioStoreConfig:
    """Failure injection for the in-memory store.

    Attributes:
        fail_on_call: 1-based upload number that raises StorageError
        fail_on_prefixes: key_hint prefixes that raise StorageError
    """

    fail_on_call: int | None = None
    fail_on_prefixes: tuple[str, ...] = field(default_factory=tuple)


class MockAudioStore(BaseAudioStore):
    """Keeps uploaded audio in memory and returns memory:// URLs."""

    def __init__(self, config: MockAudioStoreConfig | None = None):
        self._config = config or MockAudioStoreConfig()
        self._lock = threading.Lock()
        self.objects: dict[str, AudioPayload] = {}
        self.uploads: list[str] = []

    @property
    def provider_name(self) -> str:
        return "memory"

    @property
    def is_ready(self) -> bool:
        return True

    def upload(self, audio: AudioPayload, key_hint: str) -> str:
        with self._lock:
            self.uploads.append(key_hint)
            call_number = len(self.uploads)
            prefixes = self._config.fail_on_prefixes
            if call_number == self._config.fail_on_call or (
                prefixes and key_hint.startswith(prefixes)
            ):
                raise StorageError(
                    f"Mock storage failure for {key_hint}",
                    code=ErrorCode.STORAGE_FAILED,
                    details={"provider": self.provider_name, "call": call_number},
                )

            url = f"memory://audio/{key_hint}_{call_number}.{audio.extension}"
            self.objects[url] = audio
        return url
