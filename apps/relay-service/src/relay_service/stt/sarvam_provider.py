"""
Sarvam Speech-to-Text provider.

Uploads the voice message as multipart form data to Sarvam's REST API.
Sarvam expects BCP-47 regional codes ("hi-IN") and canonical MIME types.
"""

import logging

import httpx

from relay_service.audio import AudioPayload
from relay_service.errors import SttError
from relay_service.language.codes import from_bcp47, to_sarvam_code
from relay_service.provider_http import classify_http_error, create_http_client

from .interface import BaseSpeechToTextProvider, TranscriptionResult

logger = logging.getLogger(__name__)

SARVAM_STT_URL = "https://api.sarvam.ai/speech-to-text"
DEFAULT_STT_MODEL = "saarika:v2.5"


class SarvamSpeechToText(BaseSpeechToTextProvider):
    """STT provider backed by Sarvam's speech-to-text endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_STT_MODEL,
        timeout_s: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key:
            raise ValueError("Sarvam API key is required")
        self._api_key = api_key
        self._model = model
        self._client = create_http_client(timeout_s, transport=transport)

    @property
    def provider_name(self) -> str:
        return f"sarvam-{self._model}"

    @property
    def is_ready(self) -> bool:
        return not self._client.is_closed

    def transcribe(self, audio: AudioPayload, language_hint: str | None) -> TranscriptionResult:
        form = {"model": self._model}
        hint_code = to_sarvam_code(language_hint)
        if hint_code:
            form["language_code"] = hint_code

        try:
            response = self._client.post(
                SARVAM_STT_URL,
                headers={"api-subscription-key": self._api_key},
                data=form,
                files={"file": (f"voice.{audio.extension}", audio.data, audio.mime_type)},
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            error = classify_http_error(e, SttError, "sarvam-stt")
            logger.warning(f"Sarvam STT failed: code={error.code.value}, error={e}")
            raise error from e

        return TranscriptionResult(
            transcript=str(data.get("transcript") or ""),
            language=from_bcp47(data.get("language_code")),
        )

    def shutdown(self) -> None:
        self._client.close()
