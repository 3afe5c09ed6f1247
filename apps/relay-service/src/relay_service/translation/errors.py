"""
Error classification for translation providers.

Maps DeepL and httpx exceptions to TranslationError with a retryable
classification:
- authorization, quota and other DeepL failures are permanent
- rate limiting, connection failures and timeouts are transient
"""

import deepl

from relay_service.errors import TranslationError
from relay_service.models.error import ErrorCode
from relay_service.provider_http import classify_http_error

__all__ = ["classify_translation_error"]


def classify_translation_error(exception: Exception, provider: str) -> TranslationError:
    """Convert a provider exception into a TranslationError.

    Args:
        exception: The exception raised by the provider client
        provider: Provider name for messages and details

    Returns:
        TranslationError with appropriate code and retryable flag
    """
    if isinstance(exception, TranslationError):
        return exception

    if isinstance(exception, deepl.DeepLException):
        details = {"provider": provider, "exception_type": type(exception).__name__}
        message = f"{provider} failed: {exception}"
        if isinstance(exception, deepl.TooManyRequestsException):
            return TranslationError(message, code=ErrorCode.PROVIDER_RATE_LIMITED, details=details)
        if isinstance(exception, deepl.ConnectionException):
            return TranslationError(message, code=ErrorCode.PROVIDER_ERROR, details=details)
        return TranslationError(message, details=details)

    if isinstance(exception, TimeoutError):
        return TranslationError(
            f"{provider} timed out",
            code=ErrorCode.PROVIDER_TIMEOUT,
            details={"provider": provider},
        )

    return classify_http_error(exception, TranslationError, provider)
