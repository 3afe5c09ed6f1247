"""Exception hierarchy for the relay service.

Every failure the pipeline can surface is a RelayError carrying an
ErrorCode, the ErrorStage it happened in and a retryable flag, so the
caller can build an acknowledgement without inspecting exception types.
"""

from typing import Any

from relay_service.models.error import ErrorCode, ErrorResponse, ErrorStage


class RelayError(Exception):
    """Base class for all relay service errors.

    Attributes:
        message: Human-readable error message.
        code: Standardized error code.
        stage: Pipeline stage that produced the error.
        retryable: Whether a retry may succeed.
        details: Optional debug context (provider status, exception type).
    """

    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_stage: ErrorStage | None = None

    def __init__(
        self,
        message: str | None = None,
        code: ErrorCode | None = None,
        stage: ErrorStage | None = None,
        retryable: bool | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code or self.default_code
        self.message = message or self.code.default_message
        self.stage = stage or self.default_stage
        self.retryable = self.code.is_retryable if retryable is None else retryable
        self.details = details
        super().__init__(self.message)

    def to_response(self, trace_id: str | None = None) -> ErrorResponse:
        """Convert to an ErrorResponse payload."""
        return ErrorResponse(
            code=self.code.value,
            message=self.message,
            retryable=self.retryable,
            stage=self.stage,
            trace_id=trace_id,
            details=self.details,
        )


class ValidationError(RelayError):
    """Empty input or missing required field. Raised before any external call."""

    default_code = ErrorCode.INVALID_PAYLOAD
    default_stage = ErrorStage.VALIDATION


class NotMemberError(RelayError):
    """The acting user is not a member of the conversation."""

    default_code = ErrorCode.NOT_A_MEMBER
    default_stage = ErrorStage.MEMBERSHIP


class NotAdminError(NotMemberError):
    """The acting user is a member but not an admin of the group."""

    default_code = ErrorCode.NOT_AN_ADMIN


class InvariantViolation(RelayError):
    """A membership invariant would be broken (e.g. removing the last admin)."""

    default_code = ErrorCode.LAST_ADMIN
    default_stage = ErrorStage.MEMBERSHIP


class NotFoundError(RelayError):
    """Unknown user, conversation or membership."""

    default_code = ErrorCode.NOT_FOUND


class ProviderError(RelayError):
    """Failure reported by an external capability provider."""

    default_code = ErrorCode.PROVIDER_ERROR


class TranslationError(ProviderError):
    """Translation provider failure."""

    default_code = ErrorCode.TRANSLATION_FAILED
    default_stage = ErrorStage.TRANSLATION


class SttError(ProviderError):
    """Speech-to-text provider failure."""

    default_code = ErrorCode.STT_FAILED
    default_stage = ErrorStage.STT


class TtsError(ProviderError):
    """Text-to-speech provider failure."""

    default_code = ErrorCode.TTS_FAILED
    default_stage = ErrorStage.TTS


class StorageError(ProviderError):
    """Audio store failure. The pipeline re-tags it storage:original or storage:translated."""

    default_code = ErrorCode.STORAGE_FAILED


class PersistenceError(RelayError):
    """Record store failure while writing message rows."""

    default_code = ErrorCode.PERSISTENCE_FAILED
    default_stage = ErrorStage.PERSISTENCE
