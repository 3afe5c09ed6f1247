"""Unit tests for environment-based configuration."""

import pytest

from relay_service.config import (
    PipelineConfig,
    ProviderConfig,
    RelayConfig,
    ServerConfig,
    get_config,
    reset_config,
    set_config,
)


@pytest.fixture(autouse=True)
def _reset_global_config():
    reset_config()
    yield
    reset_config()


class TestFromEnv:
    def test_defaults(self, monkeypatch):
        for name in ("PORT", "TRANSLATION_PROVIDER", "STT_PROVIDER", "TTS_PROVIDER", "AUDIO_STORE"):
            monkeypatch.delenv(name, raising=False)

        config = RelayConfig.from_env()

        assert config.server.port == 4000
        assert config.providers.translation_provider == "deepl"
        assert config.providers.stt_provider == "sarvam"
        assert config.providers.tts_provider == "sarvam"
        assert config.providers.audio_store == "cloudinary"
        assert config.pipeline.parallel_recipients is True

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "5050")
        monkeypatch.setenv("TRANSLATION_PROVIDER", "Google")
        monkeypatch.setenv("PARALLEL_RECIPIENTS", "false")
        monkeypatch.setenv("DEFAULT_LANGUAGE", "HI")

        config = RelayConfig.from_env()

        assert config.server.port == 5050
        assert config.providers.translation_provider == "google"
        assert config.pipeline.parallel_recipients is False
        assert config.pipeline.default_language == "hi"

    def test_unknown_provider_fails_at_startup(self, monkeypatch):
        monkeypatch.setenv("TTS_PROVIDER", "espeak")
        with pytest.raises(ValueError, match="TTS_PROVIDER"):
            RelayConfig.from_env()


class TestProviderConfig:
    def test_cloudinary_configured_needs_all_three(self):
        partial = ProviderConfig(
            cloudinary_cloud_name="demo", cloudinary_api_key="k", cloudinary_api_secret=None
        )
        full = ProviderConfig(
            cloudinary_cloud_name="demo", cloudinary_api_key="k", cloudinary_api_secret="s"
        )
        assert partial.cloudinary_configured is False
        assert full.cloudinary_configured is True

    def test_timeout_must_be_positive(self):
        config = ProviderConfig(
            translation_provider="mock",
            stt_provider="mock",
            tts_provider="mock",
            audio_store="memory",
            timeout_s=0,
        )
        with pytest.raises(ValueError, match="PROVIDER_TIMEOUT_S"):
            config.validate()


class TestGlobalConfig:
    def test_set_and_get(self, relay_config):
        set_config(relay_config)
        assert get_config() is relay_config

    def test_loaded_once(self, monkeypatch):
        monkeypatch.setenv("TRANSLATION_PROVIDER", "mock")
        first = get_config()
        monkeypatch.setenv("TRANSLATION_PROVIDER", "deepl")
        assert get_config() is first

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ServerConfig().port = 1  # type: ignore[misc]
        with pytest.raises(AttributeError):
            PipelineConfig().default_language = "fr"  # type: ignore[misc]
