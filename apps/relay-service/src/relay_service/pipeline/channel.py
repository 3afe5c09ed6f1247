"""Fan-out channel between the delivery pipeline and the realtime gateway.

The pipeline publishes OutboundEvents and returns without waiting for any
client; the gateway emitter consumes them. Tests read the channel
directly instead of running a socket server.
"""

import asyncio

from relay_service.models.message import OutboundEvent


class FanOutChannel:
    """Unbounded asyncio queue of OutboundEvents."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[OutboundEvent] = asyncio.Queue()
        self.published_count = 0

    async def publish(self, event: OutboundEvent) -> None:
        await self._queue.put(event)
        self.published_count += 1

    async def get(self) -> OutboundEvent:
        """Wait for the next event."""
        return await self._queue.get()

    def task_done(self) -> None:
        self._queue.task_done()

    async def join(self) -> None:
        """Wait until every published event has been handled."""
        await self._queue.join()

    def qsize(self) -> int:
        return self._queue.qsize()

    def drain(self) -> list[OutboundEvent]:
        """Remove and return every queued event without waiting."""
        events = []
        while not self._queue.empty():
            events.append(self._queue.get_nowait())
            self._queue.task_done()
        return events
