"""
Mock Translation Provider for testing and local development.

Provides deterministic behavior without a real translation service.
"""

import threading
import time
from dataclasses import dataclass, field

from relay_service.errors import TranslationError
from relay_service.models.error import ErrorCode

from .interface import BaseTranslationProvider


@dataclass
class MockTranslatorConfig:
    """Configuration for mock translator behavior.

    Attributes:
        simulate_latency_ms: Sleep before answering
        fail_on_targets: Target languages that raise TranslationError
        fail_on_call: 1-based call number that raises TranslationError
        fixed_translations: (text, target) -> exact output overrides
    """

    simulate_latency_ms: int = 0
    fail_on_targets: set[str] = field(default_factory=set)
    fail_on_call: int | None = None
    fixed_translations: dict[tuple[str, str], str] = field(default_factory=dict)


class MockTranslator(BaseTranslationProvider):
    """Deterministic mock translator.

    Returns "[<target>] <text>" unless a fixed translation is configured.
    Every call is recorded in `calls` as (text, target, source).
    """

    def __init__(self, config: MockTranslatorConfig | None = None):
        self._config = config or MockTranslatorConfig()
        self._lock = threading.Lock()
        self.calls: list[tuple[str, str, str | None]] = []

    @property
    def provider_name(self) -> str:
        """Return mock instance identifier."""
        return "mock-translate-v1"

    @property
    def is_ready(self) -> bool:
        """Mock is always ready."""
        return True

    def translate(self, text: str, target_language: str, source_language: str | None) -> str:
        with self._lock:
            self.calls.append((text, target_language, source_language))
            call_number = len(self.calls)

        if self._config.simulate_latency_ms > 0:
            time.sleep(self._config.simulate_latency_ms / 1000.0)

        if target_language in self._config.fail_on_targets or call_number == self._config.fail_on_call:
            raise TranslationError(
                f"Mock translation failure for target {target_language}",
                code=ErrorCode.PROVIDER_ERROR,
                details={"provider": self.provider_name, "call": call_number},
            )

        if not text or not text.strip():
            return ""

        fixed = self._config.fixed_translations.get((text, target_language))
        if fixed is not None:
            return fixed
        return f"[{target_language}] {text}"
