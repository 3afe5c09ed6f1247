"""
ElevenLabs TTS provider.

Cloud synthesis through the ElevenLabs SDK with a language-specific
default voice. Flash v2.5 covers the relay's non-Indian languages as
well as Hindi and Tamil.
"""

import logging
from typing import Any

from elevenlabs.client import ElevenLabs

from relay_service.audio import AudioPayload

from .errors import classify_tts_error
from .interface import BaseTextToSpeechProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL_ID = "eleven_flash_v2_5"
OUTPUT_FORMAT = "mp3_44100_128"

# Voice IDs from the ElevenLabs voice library
DEFAULT_VOICES: dict[str, str] = {
    "en": "21m00Tcm4TlvDq8ikWAM",  # Rachel
    "es": "ThT5KcBeYPX3keUQqHPh",
    "fr": "N2lVS1w4EtoT3dr4eOWO",
    "de": "pFZP5JQG7iQjIQuC4Bku",
    "it": "onwK4e9ZLuTAKqWW03F9",
    "pt": "cjVigY5qzO86Huf0OWal",
}

FALLBACK_VOICE = "21m00Tcm4TlvDq8ikWAM"


class ElevenLabsTextToSpeech(BaseTextToSpeechProvider):
    """TTS provider using the ElevenLabs API."""

    def __init__(self, api_key: str, model_id: str | None = None, client: Any = None):
        """Initialize the provider.

        Args:
            api_key: ElevenLabs API key
            model_id: Optional model ID (defaults to eleven_flash_v2_5)
            client: Optional pre-built ElevenLabs client (tests)
        """
        if not api_key:
            raise ValueError("ElevenLabs API key is required")
        self._model_id = model_id or DEFAULT_MODEL_ID
        self._client: Any = client if client is not None else ElevenLabs(api_key=api_key)

    @property
    def provider_name(self) -> str:
        return f"elevenlabs-{self._model_id}"

    @property
    def is_ready(self) -> bool:
        return self._client is not None

    def voice_for(self, language: str) -> str:
        return DEFAULT_VOICES.get(language.lower(), FALLBACK_VOICE)

    def synthesize(self, text: str, target_language: str) -> AudioPayload | None:
        if not text or not text.strip():
            return None

        try:
            chunks = self._client.text_to_speech.convert(
                text=text,
                voice_id=self.voice_for(target_language),
                model_id=self._model_id,
                output_format=OUTPUT_FORMAT,
            )
            audio = b"".join(chunks)
        except Exception as e:
            error = classify_tts_error(e, "elevenlabs")
            logger.warning(f"ElevenLabs synthesis failed: code={error.code.value}, error={e}")
            raise error from e

        return AudioPayload(data=audio, mime_type="audio/mpeg")

    def shutdown(self) -> None:
        self._client = None
