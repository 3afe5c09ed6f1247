"""Fan-out emitter.

Consumes the pipeline's FanOutChannel and pushes each event to its room.
Emission is fire-and-forget: a failed emit is logged and the loop moves
on; there is no store-and-forward for disconnected clients.
"""

import asyncio
import contextlib
import logging
from typing import Any

from relay_service.pipeline.channel import FanOutChannel

logger = logging.getLogger(__name__)


class GatewayEmitter:
    """Background task draining the fan-out channel into Socket.IO rooms."""

    def __init__(self, sio: Any, channel: FanOutChannel):
        self._sio = sio
        self._channel = channel
        self._task: asyncio.Task | None = None
        self.emitted_count = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self.run())
        logger.info("Gateway emitter started")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info(f"Gateway emitter stopped: emitted={self.emitted_count}")

    async def run(self) -> None:
        while True:
            event = await self._channel.get()
            try:
                await self._sio.emit(event.event, event.payload, room=event.room)
                self.emitted_count += 1
            except Exception as e:
                logger.error(
                    f"Emit failed: event={event.event}, room={event.room}, "
                    f"trace_id={event.trace_id}, error={e}"
                )
            finally:
                self._channel.task_done()
