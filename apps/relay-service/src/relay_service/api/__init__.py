"""HTTP API for the relay service."""

from .errors import register_error_handlers, status_for_code
from .routes import router

__all__ = ["router", "register_error_handlers", "status_for_code"]
