"""Translation provider used when no credential is configured."""

from relay_service.errors import TranslationError
from relay_service.models.error import ErrorCode

from .interface import BaseTranslationProvider


class UnconfiguredTranslator(BaseTranslationProvider):
    """Fails deterministically on every call with PROVIDER_UNCONFIGURED."""

    def __init__(self, reason: str):
        self._reason = reason

    @property
    def provider_name(self) -> str:
        return "unconfigured"

    @property
    def is_ready(self) -> bool:
        return False

    def translate(self, text: str, target_language: str, source_language: str | None) -> str:
        raise TranslationError(
            f"Translation provider is not configured: {self._reason}",
            code=ErrorCode.PROVIDER_UNCONFIGURED,
            details={"reason": self._reason},
        )
