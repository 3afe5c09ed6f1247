"""
Translation capability for the relay service.

Exports:
    - create_translation_provider: Factory function for provider creation
    - TranslationProvider: Protocol interface
    - BaseTranslationProvider: Abstract base class
    - MockTranslator / MockTranslatorConfig: Deterministic test provider
    - UnconfiguredTranslator: Provider used when no credential is set
"""

from .factory import create_translation_provider
from .interface import BaseTranslationProvider, TranslationProvider
from .mock import MockTranslator, MockTranslatorConfig
from .unconfigured import UnconfiguredTranslator

__all__ = [
    # Factory
    "create_translation_provider",
    # Interface
    "TranslationProvider",
    "BaseTranslationProvider",
    # Providers
    "MockTranslator",
    "MockTranslatorConfig",
    "UnconfiguredTranslator",
]
