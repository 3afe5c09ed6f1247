"""
Factory function for creating translation providers.

Provides a unified interface for creating translation provider instances
from ProviderConfig. A missing credential yields UnconfiguredTranslator.
"""

import logging

from relay_service.config import ProviderConfig

from .interface import TranslationProvider
from .mock import MockTranslator
from .unconfigured import UnconfiguredTranslator

logger = logging.getLogger(__name__)


def create_translation_provider(config: ProviderConfig) -> TranslationProvider:
    """Create a translation provider instance.

    Args:
        config: Provider configuration (translation_provider selects the backend)

    Returns:
        TranslationProvider instance

    Raises:
        ValueError: If the provider name is unknown
    """
    provider = config.translation_provider

    if provider == "mock":
        return MockTranslator()

    if provider == "deepl":
        if not config.deepl_auth_key:
            logger.warning("DEEPL_AUTH_KEY not set, translation is unavailable")
            return UnconfiguredTranslator("DEEPL_AUTH_KEY is not set")

        # Import here to avoid loading deepl when not needed
        from .deepl_provider import DeepLTranslator

        return DeepLTranslator(auth_key=config.deepl_auth_key)

    if provider == "google":
        if not config.google_translate_api_key:
            logger.warning("GOOGLE_TRANSLATE_API_KEY not set, translation is unavailable")
            return UnconfiguredTranslator("GOOGLE_TRANSLATE_API_KEY is not set")

        from .google_provider import GoogleTranslator

        return GoogleTranslator(api_key=config.google_translate_api_key, timeout_s=config.timeout_s)

    raise ValueError(f"Unknown translation provider: {provider}. Supported: deepl, google, mock")
