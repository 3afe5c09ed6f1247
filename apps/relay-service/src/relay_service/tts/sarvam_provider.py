"""
Sarvam Text-to-Speech provider.

Posts JSON to Sarvam's REST API and decodes the first base64 WAV clip of
the response. Only the Indian languages Sarvam voices are supported.
"""

import base64
import binascii
import logging

import httpx

from relay_service.audio import AudioPayload
from relay_service.errors import TtsError
from relay_service.language.codes import to_sarvam_code
from relay_service.models.error import ErrorCode
from relay_service.provider_http import create_http_client

from .errors import classify_tts_error
from .interface import BaseTextToSpeechProvider

logger = logging.getLogger(__name__)

SARVAM_TTS_URL = "https://api.sarvam.ai/text-to-speech"
DEFAULT_TTS_MODEL = "bulbul:v2"
DEFAULT_SPEAKER = "anushka"


class SarvamTextToSpeech(BaseTextToSpeechProvider):
    """TTS provider backed by Sarvam's text-to-speech endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_TTS_MODEL,
        speaker: str = DEFAULT_SPEAKER,
        timeout_s: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key:
            raise ValueError("Sarvam API key is required")
        self._api_key = api_key
        self._model = model
        self._speaker = speaker
        self._client = create_http_client(timeout_s, transport=transport)

    @property
    def provider_name(self) -> str:
        return f"sarvam-{self._model}"

    @property
    def is_ready(self) -> bool:
        return not self._client.is_closed

    def synthesize(self, text: str, target_language: str) -> AudioPayload | None:
        if not text or not text.strip():
            return None

        language_code = to_sarvam_code(target_language)
        if not language_code:
            raise TtsError(
                f"Sarvam TTS does not support language {target_language!r}",
                code=ErrorCode.UNSUPPORTED_LANGUAGE,
                details={"provider": "sarvam-tts", "language": target_language},
            )

        payload = {
            "inputs": [text],
            "target_language_code": language_code,
            "speaker": self._speaker,
            "model": self._model,
            "enable_preprocessing": True,
        }

        try:
            response = self._client.post(
                SARVAM_TTS_URL,
                headers={"api-subscription-key": self._api_key},
                json=payload,
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            error = classify_tts_error(e, "sarvam-tts")
            logger.warning(f"Sarvam TTS failed: code={error.code.value}, error={e}")
            raise error from e

        audios = data.get("audios") or []
        encoded = audios[0] if audios else data.get("audio")
        if not encoded:
            raise TtsError(
                "Sarvam TTS returned no audio",
                details={"provider": "sarvam-tts", "keys": sorted(data)},
            )

        try:
            audio = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise TtsError(
                f"Sarvam TTS returned invalid base64: {e}",
                details={"provider": "sarvam-tts"},
            ) from e

        return AudioPayload(data=audio, mime_type="audio/wav")

    def shutdown(self) -> None:
        self._client.close()
