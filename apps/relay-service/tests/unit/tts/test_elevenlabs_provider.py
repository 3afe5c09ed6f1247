"""Unit tests for ElevenLabsTextToSpeech with a stubbed SDK client."""

from unittest.mock import MagicMock

import pytest

from relay_service.errors import TtsError
from relay_service.models.error import ErrorCode
from relay_service.tts.elevenlabs_provider import (
    DEFAULT_MODEL_ID,
    DEFAULT_VOICES,
    FALLBACK_VOICE,
    OUTPUT_FORMAT,
    ElevenLabsTextToSpeech,
)


class StatusError(Exception):
    """Stands in for the SDK's ApiError, which carries status_code."""

    def __init__(self, status_code: int):
        super().__init__(f"status {status_code}")
        self.status_code = status_code
        self.body = "error body"


@pytest.fixture
def client():
    client = MagicMock()
    client.text_to_speech.convert.return_value = iter([b"ID3", b"\x00\x01"])
    return client


class TestElevenLabsTextToSpeech:
    def test_requires_key(self):
        with pytest.raises(ValueError):
            ElevenLabsTextToSpeech(api_key="")

    def test_synthesize_joins_chunks(self, client):
        provider = ElevenLabsTextToSpeech(api_key="k", client=client)
        audio = provider.synthesize("I want coffee", "en")

        assert audio.data == b"ID3\x00\x01"
        assert audio.mime_type == "audio/mpeg"
        assert audio.extension == "mp3"
        client.text_to_speech.convert.assert_called_once_with(
            text="I want coffee",
            voice_id=DEFAULT_VOICES["en"],
            model_id=DEFAULT_MODEL_ID,
            output_format=OUTPUT_FORMAT,
        )

    def test_unknown_language_uses_fallback_voice(self, client):
        provider = ElevenLabsTextToSpeech(api_key="k", client=client)
        assert provider.voice_for("hi") == FALLBACK_VOICE
        assert provider.voice_for("ES") == DEFAULT_VOICES["es"]

    def test_empty_text_returns_none(self, client):
        provider = ElevenLabsTextToSpeech(api_key="k", client=client)
        assert provider.synthesize("  ", "en") is None
        client.text_to_speech.convert.assert_not_called()

    @pytest.mark.parametrize(
        "status,code,retryable",
        [
            (429, ErrorCode.PROVIDER_RATE_LIMITED, True),
            (503, ErrorCode.PROVIDER_ERROR, True),
            (401, ErrorCode.TTS_FAILED, False),
        ],
    )
    def test_sdk_status_errors(self, client, status, code, retryable):
        client.text_to_speech.convert.side_effect = StatusError(status)
        provider = ElevenLabsTextToSpeech(api_key="k", client=client)
        with pytest.raises(TtsError) as exc_info:
            provider.synthesize("hello", "en")
        assert exc_info.value.code == code
        assert exc_info.value.retryable is retryable
        assert exc_info.value.details["status_code"] == status

    def test_timeout(self, client):
        client.text_to_speech.convert.side_effect = TimeoutError("slow")
        provider = ElevenLabsTextToSpeech(api_key="k", client=client)
        with pytest.raises(TtsError) as exc_info:
            provider.synthesize("hello", "en")
        assert exc_info.value.code == ErrorCode.PROVIDER_TIMEOUT

    def test_shutdown(self, client):
        provider = ElevenLabsTextToSpeech(api_key="k", client=client)
        provider.shutdown()
        assert provider.is_ready is False
