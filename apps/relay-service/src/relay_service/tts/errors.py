"""
Error classification for TTS providers.

The ElevenLabs SDK raises ApiError carrying an HTTP status code; REST
providers raise httpx exceptions. Both map onto TtsError:
- 429 and 5xx are transient (retryable)
- authentication and bad requests are permanent
- timeouts and connection failures are transient
"""

from relay_service.errors import TtsError
from relay_service.models.error import ErrorCode
from relay_service.provider_http import classify_http_error

__all__ = ["classify_tts_error"]


def classify_tts_error(exception: Exception, provider: str) -> TtsError:
    """Convert a provider exception into a TtsError."""
    if isinstance(exception, TtsError):
        return exception

    details = {"provider": provider, "exception_type": type(exception).__name__}

    status = getattr(exception, "status_code", None)
    if isinstance(status, int):
        details["status_code"] = status
        message = f"{provider} failed: {status} {getattr(exception, 'body', '')}".strip()
        if status == 429:
            return TtsError(message, code=ErrorCode.PROVIDER_RATE_LIMITED, details=details)
        if status >= 500:
            return TtsError(message, code=ErrorCode.PROVIDER_ERROR, details=details)
        return TtsError(message, details=details)

    if isinstance(exception, (TimeoutError, ConnectionError)):
        return TtsError(
            f"{provider} timeout: {exception}",
            code=ErrorCode.PROVIDER_TIMEOUT,
            details=details,
        )

    return classify_http_error(exception, TtsError, provider)
