"""
Structured logging configuration for the relay service.

Uses structlog for JSON-formatted logs with consistent context binding for
trace_id, conversation_id and sender_id throughout one send.
"""

import logging
import sys

import structlog


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """
    Configure structlog for production (JSON) or local (console) logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO
        fmt: "json" or "console"
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if fmt == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)


def bind_send_context(
    logger: structlog.BoundLogger,
    trace_id: str,
    conversation_id: str | None = None,
    sender_id: str | None = None,
    kind: str | None = None,
) -> structlog.BoundLogger:
    """
    Bind per-send context to logger.

    Every subsequent entry carries the trace id, so an operator can go from
    a client-visible error straight to the failing stage.

    Example:
        >>> logger = bind_send_context(get_logger(__name__), trace_id="t-1", kind="voice")
        >>> logger.info("stt_started")  # Includes trace_id and kind
    """
    context = {"trace_id": trace_id}
    if conversation_id:
        context["conversation_id"] = conversation_id
    if sender_id:
        context["sender_id"] = sender_id
    if kind:
        context["kind"] = kind

    return logger.bind(**context)
