"""Factory function for creating STT providers."""

import logging

from relay_service.config import ProviderConfig

from .interface import SpeechToTextProvider
from .mock import MockSpeechToText
from .unconfigured import UnconfiguredSpeechToText

logger = logging.getLogger(__name__)


def create_stt_provider(config: ProviderConfig) -> SpeechToTextProvider:
    """Create an STT provider instance.

    Raises:
        ValueError: If the provider name is unknown
    """
    provider = config.stt_provider

    if provider == "mock":
        return MockSpeechToText()

    if provider == "sarvam":
        if not config.sarvam_api_key:
            logger.warning("SARVAM_API_KEY not set, speech-to-text is unavailable")
            return UnconfiguredSpeechToText("SARVAM_API_KEY is not set")

        from .sarvam_provider import SarvamSpeechToText

        return SarvamSpeechToText(
            api_key=config.sarvam_api_key,
            model=config.sarvam_stt_model,
            timeout_s=config.timeout_s,
        )

    raise ValueError(f"Unknown STT provider: {provider}. Supported: sarvam, mock")
