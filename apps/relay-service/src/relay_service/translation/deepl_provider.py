"""
DeepL Translation Provider implementation.

Provides translation using the DeepL API.
"""

import logging
from typing import Any

import deepl

from relay_service.errors import TranslationError
from relay_service.models.error import ErrorCode

from .errors import classify_translation_error
from .interface import BaseTranslationProvider

logger = logging.getLogger(__name__)

# DeepL rejects bare "EN"/"PT" as target languages
_TARGET_VARIANTS: dict[str, str] = {
    "en": "EN-US",
    "pt": "PT-BR",
}


def to_deepl_target(language: str) -> str:
    return _TARGET_VARIANTS.get(language.lower(), language.upper())


def to_deepl_source(language: str | None) -> str | None:
    if not language or language.lower() == "auto":
        return None
    return language.split("-")[0].upper()


class DeepLTranslator(BaseTranslationProvider):
    """Translation provider using the DeepL API.

    Requires a valid DeepL auth key.
    """

    def __init__(self, auth_key: str, client: Any = None):
        """Initialize DeepL translator.

        Args:
            auth_key: DeepL API auth key
            client: Optional pre-built deepl.Translator (tests)

        Raises:
            ValueError: If auth_key is empty
        """
        if not auth_key:
            raise ValueError("DeepL auth key is required")
        self._translator: Any = client if client is not None else deepl.Translator(auth_key)
        self._ready = True

    @property
    def provider_name(self) -> str:
        """Return provider identifier."""
        return "deepl-v1"

    @property
    def is_ready(self) -> bool:
        """Check if DeepL client is ready."""
        return self._ready

    def translate(self, text: str, target_language: str, source_language: str | None) -> str:
        """Translate text using the DeepL API.

        Raises:
            TranslationError: If the client was shut down or the API call fails
        """
        if not text or not text.strip():
            return ""
        if not self._ready:
            raise TranslationError(
                "DeepL translator has been shut down", code=ErrorCode.PROVIDER_UNCONFIGURED
            )

        try:
            result = self._translator.translate_text(
                text,
                source_lang=to_deepl_source(source_language),
                target_lang=to_deepl_target(target_language),
            )
        except Exception as e:
            error = classify_translation_error(e, "deepl")
            logger.warning(f"DeepL translation failed: code={error.code.value}, error={e}")
            raise error from e

        return result.text

    def shutdown(self) -> None:
        """Release DeepL client resources."""
        self._translator = None
        self._ready = False
