"""Realtime gateway: Socket.IO sessions, rooms and fan-out emission."""

from .emitter import GatewayEmitter
from .handlers import register_gateway_handlers
from .session import ClientSession, ClientSessionStore

__all__ = [
    "GatewayEmitter",
    "register_gateway_handlers",
    "ClientSession",
    "ClientSessionStore",
]
