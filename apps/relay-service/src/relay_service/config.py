"""Environment-based configuration for the relay service.

All configuration is loaded from environment variables with sensible
defaults, once, at startup. Provider credentials are optional: a missing
credential yields an unconfigured provider rather than a startup failure.
"""

import os
from dataclasses import dataclass, field

TRANSLATION_PROVIDERS = ("deepl", "google", "mock")
STT_PROVIDERS = ("sarvam", "mock")
TTS_PROVIDERS = ("sarvam", "elevenlabs", "mock")
AUDIO_STORES = ("cloudinary", "local", "memory")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class ServerConfig:
    """HTTP and Socket.IO server configuration."""

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "4000")))
    client_origin: str = field(default_factory=lambda: os.getenv("CLIENT_ORIGIN", "*"))

    # Voice payloads travel base64 inside the event, 20MB default
    max_buffer_size: int = field(
        default_factory=lambda: int(os.getenv("WS_MAX_BUFFER_SIZE", str(20 * 1024 * 1024)))
    )
    ping_interval: int = field(default_factory=lambda: int(os.getenv("WS_PING_INTERVAL", "25")))
    ping_timeout: int = field(default_factory=lambda: int(os.getenv("WS_PING_TIMEOUT", "60")))


@dataclass(frozen=True)
class ProviderConfig:
    """Capability provider selection and credentials."""

    translation_provider: str = field(
        default_factory=lambda: os.getenv("TRANSLATION_PROVIDER", "deepl").lower()
    )
    deepl_auth_key: str | None = field(default_factory=lambda: os.getenv("DEEPL_AUTH_KEY"))
    google_translate_api_key: str | None = field(
        default_factory=lambda: os.getenv("GOOGLE_TRANSLATE_API_KEY")
    )

    stt_provider: str = field(default_factory=lambda: os.getenv("STT_PROVIDER", "sarvam").lower())
    tts_provider: str = field(default_factory=lambda: os.getenv("TTS_PROVIDER", "sarvam").lower())
    sarvam_api_key: str | None = field(default_factory=lambda: os.getenv("SARVAM_API_KEY"))
    sarvam_stt_model: str = field(
        default_factory=lambda: os.getenv("SARVAM_STT_MODEL", "saarika:v2.5")
    )
    sarvam_tts_model: str = field(default_factory=lambda: os.getenv("SARVAM_TTS_MODEL", "bulbul:v2"))
    sarvam_tts_speaker: str = field(
        default_factory=lambda: os.getenv("SARVAM_TTS_SPEAKER", "anushka")
    )
    elevenlabs_api_key: str | None = field(default_factory=lambda: os.getenv("ELEVENLABS_API_KEY"))

    audio_store: str = field(default_factory=lambda: os.getenv("AUDIO_STORE", "cloudinary").lower())
    cloudinary_cloud_name: str | None = field(
        default_factory=lambda: os.getenv("CLOUDINARY_CLOUD_NAME")
    )
    cloudinary_api_key: str | None = field(default_factory=lambda: os.getenv("CLOUDINARY_API_KEY"))
    cloudinary_api_secret: str | None = field(
        default_factory=lambda: os.getenv("CLOUDINARY_API_SECRET")
    )
    cloudinary_folder: str = field(
        default_factory=lambda: os.getenv("CLOUDINARY_FOLDER", "onevoice/audio")
    )
    local_audio_path: str = field(
        default_factory=lambda: os.getenv("LOCAL_AUDIO_PATH", "/tmp/relay-audio")
    )
    local_audio_base_url: str = field(
        default_factory=lambda: os.getenv("LOCAL_AUDIO_BASE_URL", "http://localhost:4000/audio")
    )

    # No retries: this only bounds a single provider call
    timeout_s: float = field(default_factory=lambda: float(os.getenv("PROVIDER_TIMEOUT_S", "30")))

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret
        )

    def validate(self) -> None:
        """Validate provider selection.

        Raises:
            ValueError: If a provider name is unknown or the timeout is not positive.
        """
        choices = (
            ("TRANSLATION_PROVIDER", self.translation_provider, TRANSLATION_PROVIDERS),
            ("STT_PROVIDER", self.stt_provider, STT_PROVIDERS),
            ("TTS_PROVIDER", self.tts_provider, TTS_PROVIDERS),
            ("AUDIO_STORE", self.audio_store, AUDIO_STORES),
        )
        for name, value, supported in choices:
            if value not in supported:
                raise ValueError(f"{name} must be one of {', '.join(supported)}, got {value!r}")

        if self.timeout_s <= 0:
            raise ValueError(f"PROVIDER_TIMEOUT_S must be positive, got {self.timeout_s}")


@dataclass(frozen=True)
class PipelineConfig:
    """Delivery pipeline behaviour."""

    detection_min_chars: int = field(
        default_factory=lambda: int(os.getenv("DETECTION_MIN_CHARS", "3"))
    )
    default_language: str = field(
        default_factory=lambda: os.getenv("DEFAULT_LANGUAGE", "en").lower()
    )
    parallel_recipients: bool = field(
        default_factory=lambda: _env_bool("PARALLEL_RECIPIENTS", "true")
    )


@dataclass(frozen=True)
class ObservabilityConfig:
    """Logging configuration."""

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "json").lower())


@dataclass(frozen=True)
class RelayConfig:
    """Complete configuration for the relay service."""

    server: ServerConfig
    providers: ProviderConfig
    pipeline: PipelineConfig
    observability: ObservabilityConfig

    @classmethod
    def from_env(cls) -> "RelayConfig":
        """Create configuration from environment variables.

        Raises:
            ValueError: If configuration is invalid.
        """
        config = cls(
            server=ServerConfig(),
            providers=ProviderConfig(),
            pipeline=PipelineConfig(),
            observability=ObservabilityConfig(),
        )
        config.providers.validate()
        return config


_config: RelayConfig | None = None


def get_config() -> RelayConfig:
    """Get the global configuration instance, loading it on first use."""
    global _config
    if _config is None:
        _config = RelayConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


def set_config(config: RelayConfig) -> None:
    """Set the global configuration (for testing)."""
    global _config
    _config = config
