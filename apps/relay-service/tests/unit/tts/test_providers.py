"""Unit tests for the mock and unconfigured TTS providers and the factory."""

import pytest

from relay_service.config import ProviderConfig
from relay_service.errors import TtsError
from relay_service.models.error import ErrorCode
from relay_service.tts import (
    MockTextToSpeech,
    MockTextToSpeechConfig,
    TextToSpeechProvider,
    UnconfiguredTextToSpeech,
    create_tts_provider,
)
from relay_service.tts.elevenlabs_provider import ElevenLabsTextToSpeech
from relay_service.tts.sarvam_provider import SarvamTextToSpeech


class TestMockTextToSpeech:
    def test_payload_is_deterministic(self):
        tts = MockTextToSpeech()
        audio = tts.synthesize("hello", "en")
        assert audio.data == b"en:hello"
        assert tts.calls == [("hello", "en")]
        assert isinstance(tts, TextToSpeechProvider)

    def test_empty_text(self):
        assert MockTextToSpeech().synthesize("", "en") is None

    def test_fail_on_language(self):
        tts = MockTextToSpeech(MockTextToSpeechConfig(fail_on_languages={"ta"}))
        assert tts.synthesize("hi", "en") is not None
        with pytest.raises(TtsError):
            tts.synthesize("hi", "ta")


class TestUnconfiguredTextToSpeech:
    def test_empty_text_is_not_an_error(self):
        assert UnconfiguredTextToSpeech("no key").synthesize("", "en") is None

    def test_fails_with_unconfigured(self):
        with pytest.raises(TtsError) as exc_info:
            UnconfiguredTextToSpeech("no key").synthesize("hello", "en")
        assert exc_info.value.code == ErrorCode.PROVIDER_UNCONFIGURED


class TestCreateTtsProvider:
    def test_mock(self):
        assert isinstance(create_tts_provider(ProviderConfig(tts_provider="mock")), MockTextToSpeech)

    @pytest.mark.parametrize("name", ["sarvam", "elevenlabs"])
    def test_missing_key_is_unconfigured(self, name):
        provider = create_tts_provider(
            ProviderConfig(tts_provider=name, sarvam_api_key=None, elevenlabs_api_key=None)
        )
        assert isinstance(provider, UnconfiguredTextToSpeech)

    def test_sarvam(self):
        provider = create_tts_provider(ProviderConfig(tts_provider="sarvam", sarvam_api_key="k"))
        assert isinstance(provider, SarvamTextToSpeech)
        provider.shutdown()

    def test_elevenlabs(self):
        provider = create_tts_provider(
            ProviderConfig(tts_provider="elevenlabs", elevenlabs_api_key="k")
        )
        assert isinstance(provider, ElevenLabsTextToSpeech)

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_tts_provider(ProviderConfig(tts_provider="espeak"))
