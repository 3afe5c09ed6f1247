"""Error models for the relay service.

Defines typed models shared by the pipeline, the realtime gateway and
the HTTP layer:
- ErrorStage for the pipeline stage tag attached to every failure
- ErrorCode enum for standardized error codes
- ErrorResponse for error payloads sent to clients
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorStage(str, Enum):
    """Pipeline stage where an error occurred."""

    VALIDATION = "validation"
    MEMBERSHIP = "membership"
    STT = "stt"
    TRANSLATION = "translation"
    TTS = "tts"
    STORAGE_ORIGINAL = "storage:original"
    STORAGE_TRANSLATED = "storage:translated"
    PERSISTENCE = "persistence"
    EMIT = "emit"


class ErrorCode(str, Enum):
    """Standardized error codes.

    Errors are categorized by type and retryability:
    - Request errors: invalid input or authorization (not retryable)
    - Provider errors: external dependency failures (varies)
    - Internal errors: persistence and unexpected failures
    """

    # Request errors (not retryable)
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    NOT_A_MEMBER = "NOT_A_MEMBER"
    NOT_AN_ADMIN = "NOT_AN_ADMIN"
    LAST_ADMIN = "LAST_ADMIN"
    NOT_FOUND = "NOT_FOUND"
    UNSUPPORTED_LANGUAGE = "UNSUPPORTED_LANGUAGE"

    # Provider errors
    PROVIDER_UNCONFIGURED = "PROVIDER_UNCONFIGURED"
    PROVIDER_TIMEOUT = "PROVIDER_TIMEOUT"
    PROVIDER_RATE_LIMITED = "PROVIDER_RATE_LIMITED"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    TRANSLATION_FAILED = "TRANSLATION_FAILED"
    STT_FAILED = "STT_FAILED"
    TTS_FAILED = "TTS_FAILED"
    STORAGE_FAILED = "STORAGE_FAILED"

    # Internal errors
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def is_retryable(self) -> bool:
        """Check if this error code is retryable."""
        return self in RETRYABLE_ERRORS

    @property
    def default_message(self) -> str:
        """Get default human-readable message for this error code."""
        return ERROR_MESSAGES.get(self, f"Error: {self.value}")


RETRYABLE_ERRORS: set[ErrorCode] = {
    ErrorCode.PROVIDER_TIMEOUT,
    ErrorCode.PROVIDER_RATE_LIMITED,
    ErrorCode.PROVIDER_ERROR,
    ErrorCode.STORAGE_FAILED,
    ErrorCode.PERSISTENCE_FAILED,
}

ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_PAYLOAD: "Invalid or missing request fields",
    ErrorCode.NOT_A_MEMBER: "User is not a member of this conversation",
    ErrorCode.NOT_AN_ADMIN: "Only group admins can do this",
    ErrorCode.LAST_ADMIN: "A group must keep at least one admin",
    ErrorCode.NOT_FOUND: "Requested resource not found",
    ErrorCode.UNSUPPORTED_LANGUAGE: "Language not supported by provider",
    ErrorCode.PROVIDER_UNCONFIGURED: "Provider is not configured",
    ErrorCode.PROVIDER_TIMEOUT: "Provider request timed out",
    ErrorCode.PROVIDER_RATE_LIMITED: "Provider rate limit exceeded",
    ErrorCode.PROVIDER_ERROR: "Provider returned an error",
    ErrorCode.TRANSLATION_FAILED: "Translation failed",
    ErrorCode.STT_FAILED: "Speech-to-text failed",
    ErrorCode.TTS_FAILED: "Speech synthesis failed",
    ErrorCode.STORAGE_FAILED: "Audio upload failed",
    ErrorCode.PERSISTENCE_FAILED: "Failed to persist message",
    ErrorCode.INTERNAL_ERROR: "Internal error",
}


class ErrorResponse(BaseModel):
    """Error response payload.

    Used for HTTP error bodies and realtime error acknowledgements.
    """

    code: str = Field(description="Error code identifier")
    message: str = Field(min_length=1, description="Human-readable error description")
    retryable: bool = Field(description="Whether the error is transient and retryable")
    stage: ErrorStage | None = Field(
        default=None,
        description="Pipeline stage where error occurred (optional)",
    )
    trace_id: str | None = Field(
        default=None,
        serialization_alias="traceId",
        description="Per-send correlation token",
    )
    details: dict[str, Any] | None = Field(default=None, description="Additional error details")

    @classmethod
    def from_error_code(
        cls,
        code: ErrorCode,
        message: str | None = None,
        stage: ErrorStage | None = None,
        trace_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> "ErrorResponse":
        """Create error response from standardized error code."""
        return cls(
            code=code.value,
            message=message or code.default_message,
            retryable=code.is_retryable,
            stage=stage,
            trace_id=trace_id,
            details=details,
        )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "code": "NOT_A_MEMBER",
                "message": "User is not a member of this conversation",
                "retryable": False,
                "stage": "membership",
            }
        },
    )
