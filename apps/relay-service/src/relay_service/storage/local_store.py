"""Filesystem audio store for local development."""

import logging
import time
import uuid
from pathlib import Path

from relay_service.audio import AudioPayload
from relay_service.errors import StorageError

from .interface import BaseAudioStore

logger = logging.getLogger(__name__)


class LocalAudioStore(BaseAudioStore):
    """Writes audio under a directory and returns base_url/<file>."""

    def __init__(self, root: str | Path, base_url: str):
        self._root = Path(root)
        self._base_url = base_url.rstrip("/")

    @property
    def provider_name(self) -> str:
        return "local"

    @property
    def is_ready(self) -> bool:
        return True

    @property
    def root(self) -> Path:
        return self._root

    def upload(self, audio: AudioPayload, key_hint: str) -> str:
        safe_hint = "".join(c if c.isalnum() or c in "-_" else "_" for c in key_hint)
        filename = f"{safe_hint}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}.{audio.extension}"
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            (self._root / filename).write_bytes(audio.data)
        except OSError as e:
            logger.warning(f"Local audio write failed: path={self._root}, error={e}")
            raise StorageError(
                f"Failed to write audio file: {e}",
                details={"provider": "local", "exception_type": type(e).__name__},
            ) from e
        return f"{self._base_url}/{filename}"
