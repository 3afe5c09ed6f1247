"""Unit tests for the mock and unconfigured STT providers and the factory."""

import pytest

from relay_service.audio import AudioPayload
from relay_service.config import ProviderConfig
from relay_service.errors import SttError
from relay_service.models.error import ErrorCode
from relay_service.stt import (
    MockSpeechToText,
    SpeechToTextProvider,
    UnconfiguredSpeechToText,
    create_stt_provider,
)
from relay_service.stt.sarvam_provider import SarvamSpeechToText

AUDIO = AudioPayload(data=b"\x00\x01", mime_type="audio/wav")


class TestMockSpeechToText:
    def test_returns_configured_result(self):
        stt = MockSpeechToText(transcript="hola", language="es")
        result = stt.transcribe(AUDIO, None)
        assert (result.transcript, result.language) == ("hola", "es")
        assert stt.calls == [(AUDIO, None)]
        assert isinstance(stt, SpeechToTextProvider)

    def test_unreported_language(self):
        assert MockSpeechToText(language=None).transcribe(AUDIO, "hi").language is None

    def test_failure(self):
        with pytest.raises(SttError) as exc_info:
            MockSpeechToText(fail=True).transcribe(AUDIO, None)
        assert exc_info.value.retryable is True


class TestUnconfiguredSpeechToText:
    def test_fails_with_unconfigured(self):
        stt = UnconfiguredSpeechToText("SARVAM_API_KEY is not set")
        assert stt.is_ready is False
        with pytest.raises(SttError) as exc_info:
            stt.transcribe(AUDIO, None)
        assert exc_info.value.code == ErrorCode.PROVIDER_UNCONFIGURED


class TestCreateSttProvider:
    def test_mock(self):
        assert isinstance(create_stt_provider(ProviderConfig(stt_provider="mock")), MockSpeechToText)

    def test_sarvam_without_key(self):
        provider = create_stt_provider(ProviderConfig(stt_provider="sarvam", sarvam_api_key=None))
        assert isinstance(provider, UnconfiguredSpeechToText)

    def test_sarvam_with_key(self):
        provider = create_stt_provider(
            ProviderConfig(stt_provider="sarvam", sarvam_api_key="k", sarvam_stt_model="saarika:v2.5")
        )
        assert isinstance(provider, SarvamSpeechToText)
        provider.shutdown()

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_stt_provider(ProviderConfig(stt_provider="whisper"))
