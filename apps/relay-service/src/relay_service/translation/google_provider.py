"""
Google Cloud Translation (v2 REST) provider.

Uses an API key and the public v2 endpoint; no SDK required.
"""

import logging

import httpx

from relay_service.provider_http import create_http_client

from .errors import classify_translation_error
from .interface import BaseTranslationProvider

logger = logging.getLogger(__name__)

GOOGLE_TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"


class GoogleTranslator(BaseTranslationProvider):
    """Translation provider backed by Google Cloud Translation v2."""

    def __init__(
        self,
        api_key: str,
        timeout_s: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key:
            raise ValueError("Google Translate API key is required")
        self._api_key = api_key
        self._client = create_http_client(timeout_s, transport=transport)

    @property
    def provider_name(self) -> str:
        return "google-translate-v2"

    @property
    def is_ready(self) -> bool:
        return not self._client.is_closed

    def translate(self, text: str, target_language: str, source_language: str | None) -> str:
        if not text or not text.strip():
            return ""

        body = {"q": text, "target": target_language, "format": "text"}
        if source_language and source_language != "auto":
            body["source"] = source_language

        try:
            response = self._client.post(
                GOOGLE_TRANSLATE_URL,
                params={"key": self._api_key},
                json=body,
            )
            response.raise_for_status()
            data = response.json()
            return data["data"]["translations"][0]["translatedText"]
        except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
            error = classify_translation_error(e, "google-translate")
            logger.warning(f"Google translation failed: code={error.code.value}, error={e}")
            raise error from e

    def shutdown(self) -> None:
        self._client.close()
