"""In-memory message rows.

Rows are append-only and immutable. Insertion order is the only ordering
the store guarantees; concurrent sends may interleave.
"""

import asyncio

from relay_service.models.message import Message


class MessageStore:
    """Append-only store of per-recipient message rows."""

    def __init__(self) -> None:
        self._rows: list[Message] = []
        self._by_id: dict[str, Message] = {}
        self._lock = asyncio.Lock()

    async def insert(self, message: Message) -> Message:
        """Append one row."""
        async with self._lock:
            self._rows.append(message)
            self._by_id[message.id] = message
            return message

    async def get(self, message_id: str) -> Message | None:
        return self._by_id.get(message_id)

    async def list_for_conversation(
        self,
        conversation_id: str,
        target_language: str | None = None,
    ) -> list[Message]:
        """Rows of a conversation in creation order, optionally for one target language."""
        return [
            row
            for row in self._rows
            if row.conversation_id == conversation_id
            and (target_language is None or row.target_language == target_language)
        ]

    async def list_for_trace(self, trace_id: str) -> list[Message]:
        return [row for row in self._rows if row.trace_id == trace_id]

    async def count(self) -> int:
        return len(self._rows)
