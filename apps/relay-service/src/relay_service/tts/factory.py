"""Factory function for creating TTS providers."""

import logging

from relay_service.config import ProviderConfig

from .interface import TextToSpeechProvider
from .mock import MockTextToSpeech
from .unconfigured import UnconfiguredTextToSpeech

logger = logging.getLogger(__name__)


def create_tts_provider(config: ProviderConfig) -> TextToSpeechProvider:
    """Create a TTS provider instance.

    Raises:
        ValueError: If the provider name is unknown
    """
    provider = config.tts_provider

    if provider == "mock":
        return MockTextToSpeech()

    if provider == "sarvam":
        if not config.sarvam_api_key:
            logger.warning("SARVAM_API_KEY not set, text-to-speech is unavailable")
            return UnconfiguredTextToSpeech("SARVAM_API_KEY is not set")

        from .sarvam_provider import SarvamTextToSpeech

        return SarvamTextToSpeech(
            api_key=config.sarvam_api_key,
            model=config.sarvam_tts_model,
            speaker=config.sarvam_tts_speaker,
            timeout_s=config.timeout_s,
        )

    if provider == "elevenlabs":
        if not config.elevenlabs_api_key:
            logger.warning("ELEVENLABS_API_KEY not set, text-to-speech is unavailable")
            return UnconfiguredTextToSpeech("ELEVENLABS_API_KEY is not set")

        # Import here to avoid loading the SDK when not needed
        from .elevenlabs_provider import ElevenLabsTextToSpeech

        return ElevenLabsTextToSpeech(api_key=config.elevenlabs_api_key)

    raise ValueError(f"Unknown TTS provider: {provider}. Supported: sarvam, elevenlabs, mock")
