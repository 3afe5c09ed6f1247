"""
Translation Provider Interface Contract.

This module defines the interface that all translation providers must follow.
Real providers (DeepL, Google), the mock and the unconfigured variant all
conform to this contract.
"""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class TranslationProvider(Protocol):
    """Protocol defining the translation capability.

    The same-language short-circuit belongs to the caller: providers are
    only invoked when source and target differ.
    """

    @property
    def component_name(self) -> str:
        """Return the component name (always 'translate')."""
        ...

    @property
    def provider_name(self) -> str:
        """Return the provider identifier (e.g., 'deepl-v1')."""
        ...

    @property
    def is_ready(self) -> bool:
        """Check if the provider has what it needs to serve requests."""
        ...

    def translate(self, text: str, target_language: str, source_language: str | None) -> str:
        """Translate text into target_language.

        Args:
            text: Text to translate
            target_language: Canonical target code (e.g., "en")
            source_language: Canonical source code, or None to let the provider detect

        Returns:
            Translated text ("" for blank input)

        Raises:
            TranslationError: On provider/network failure or missing credentials
        """
        ...

    def shutdown(self) -> None:
        """Release resources (HTTP connections, etc.)."""
        ...


class BaseTranslationProvider(ABC):
    """Abstract base class for translation providers."""

    _component_name: str = "translate"

    @property
    def component_name(self) -> str:
        """Return the component name (always 'translate')."""
        return self._component_name

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Subclasses must provide their provider identifier."""
        pass

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """Subclasses must indicate readiness."""
        pass

    @abstractmethod
    def translate(self, text: str, target_language: str, source_language: str | None) -> str:
        """Subclasses must implement translation logic."""
        pass

    def shutdown(self) -> None:
        """Default implementation does nothing. Override if cleanup needed."""
        return  # noqa: B027 - intentionally empty default implementation
