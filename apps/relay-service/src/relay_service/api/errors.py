"""Maps relay errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from relay_service.errors import RelayError
from relay_service.models.error import ErrorCode

logger = logging.getLogger(__name__)

_STATUS_BY_CODE: dict[str, int] = {
    ErrorCode.INVALID_PAYLOAD.value: 400,
    ErrorCode.UNSUPPORTED_LANGUAGE.value: 400,
    ErrorCode.NOT_A_MEMBER.value: 403,
    ErrorCode.NOT_AN_ADMIN.value: 403,
    ErrorCode.NOT_FOUND.value: 404,
    ErrorCode.LAST_ADMIN.value: 409,
    ErrorCode.PERSISTENCE_FAILED.value: 500,
    ErrorCode.INTERNAL_ERROR.value: 500,
}


def status_for_code(code: str | None) -> int:
    """HTTP status for an error code; provider failures are 502."""
    return _STATUS_BY_CODE.get(code or "", 502)


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    status = status_for_code(exc.code.value)
    if status >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: code={exc.code.value}, error={exc.message}"
        )
    body = exc.to_response().model_dump(mode="json", by_alias=True, exclude_none=True)
    return JSONResponse(status_code=status, content=body)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, relay_error_handler)
