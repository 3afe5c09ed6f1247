"""Realtime client sessions.

Room membership lives only in these sessions: it is not persisted, and a
client must re-join its conversations after every reconnect.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime

from relay_service.models.user import utcnow


@dataclass
class ClientSession:
    """Per-connection state. Each Socket.IO connection has exactly one."""

    sid: str
    user_id: str | None = None
    rooms: set[str] = field(default_factory=set)
    connected_at: datetime = field(default_factory=utcnow)


class ClientSessionStore:
    """In-memory session store indexed by Socket.IO sid."""

    def __init__(self) -> None:
        self._sessions: dict[str, ClientSession] = {}
        self._lock = asyncio.Lock()

    async def create(self, sid: str, user_id: str | None = None) -> ClientSession:
        async with self._lock:
            session = ClientSession(sid=sid, user_id=user_id)
            self._sessions[sid] = session
            return session

    async def get(self, sid: str) -> ClientSession | None:
        return self._sessions.get(sid)

    async def get_or_create(self, sid: str) -> ClientSession:
        session = self._sessions.get(sid)
        if session is None:
            session = await self.create(sid)
        return session

    async def delete(self, sid: str) -> ClientSession | None:
        async with self._lock:
            return self._sessions.pop(sid, None)

    def count(self) -> int:
        return len(self._sessions)
