"""
Shared HTTP plumbing for REST-backed providers (Sarvam, Google).

Maps httpx exceptions to the relay error taxonomy with retryable
classification:
- timeouts and connection failures: PROVIDER_TIMEOUT / PROVIDER_ERROR (retryable)
- HTTP 429: PROVIDER_RATE_LIMITED (retryable)
- HTTP 5xx: PROVIDER_ERROR (retryable)
- other HTTP 4xx: the capability's own failure code (not retryable)
"""

from typing import Any

import httpx

from relay_service.errors import ProviderError
from relay_service.models.error import ErrorCode

__all__ = ["create_http_client", "classify_http_error"]


def create_http_client(timeout_s: float, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """Create a synchronous client with a single overall timeout.

    Args:
        timeout_s: Timeout applied to connect, read, write and pool
        transport: Optional transport override (httpx.MockTransport in tests)
    """
    return httpx.Client(timeout=httpx.Timeout(timeout_s), transport=transport)


def _response_snippet(response: httpx.Response) -> str:
    try:
        text = response.text
    except httpx.ResponseNotRead:
        return ""
    return text[:500]


def classify_http_error(
    exception: Exception,
    error_cls: type[ProviderError],
    provider: str,
) -> ProviderError:
    """Convert an httpx exception into the capability's ProviderError subclass.

    Args:
        exception: The exception raised by httpx
        error_cls: TranslationError, SttError, TtsError or StorageError
        provider: Provider name for messages and details

    Returns:
        An error_cls instance with code and retryable flag set
    """
    details: dict[str, Any] = {
        "provider": provider,
        "exception_type": type(exception).__name__,
    }

    if isinstance(exception, httpx.TimeoutException):
        return error_cls(
            f"{provider} request timed out",
            code=ErrorCode.PROVIDER_TIMEOUT,
            details=details,
        )

    if isinstance(exception, httpx.HTTPStatusError):
        status = exception.response.status_code
        details["status_code"] = status
        details["body"] = _response_snippet(exception.response)
        message = f"{provider} failed: {status} {details['body']}".strip()
        if status == 429:
            return error_cls(message, code=ErrorCode.PROVIDER_RATE_LIMITED, details=details)
        if status >= 500:
            return error_cls(message, code=ErrorCode.PROVIDER_ERROR, details=details)
        return error_cls(message, details=details)

    if isinstance(exception, httpx.TransportError):
        return error_cls(
            f"{provider} unreachable: {exception}",
            code=ErrorCode.PROVIDER_ERROR,
            details=details,
        )

    message = str(exception) or type(exception).__name__
    return error_cls(f"{provider} failed: {message}", details=details)
