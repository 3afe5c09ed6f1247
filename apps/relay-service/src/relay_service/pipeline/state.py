"""Per-send state tracking.

One SendTrace follows one inbound message through the pipeline:

    RECEIVED -> VALIDATED -> {MEMBERS_RESOLVED, SOURCE_READY} -> STAGED
             -> PERSISTED -> EMITTED -> ACKNOWLEDGED

Text sends resolve members before detecting the source language; voice
sends transcribe first. Any non-terminal state may move to FAILED.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum

from relay_service.models.error import ErrorStage
from relay_service.models.message import MessageKind


class SendState(str, Enum):
    """Lifecycle states of one send."""

    RECEIVED = "received"
    VALIDATED = "validated"
    MEMBERS_RESOLVED = "members_resolved"
    SOURCE_READY = "source_ready"
    STAGED = "staged"
    PERSISTED = "persisted"
    EMITTED = "emitted"
    ACKNOWLEDGED = "acknowledged"
    FAILED = "failed"


_VALID_TRANSITIONS: dict[SendState, set[SendState]] = {
    SendState.RECEIVED: {SendState.VALIDATED},
    SendState.VALIDATED: {SendState.MEMBERS_RESOLVED, SendState.SOURCE_READY},
    SendState.MEMBERS_RESOLVED: {SendState.SOURCE_READY, SendState.STAGED},
    SendState.SOURCE_READY: {SendState.MEMBERS_RESOLVED, SendState.STAGED},
    SendState.STAGED: {SendState.PERSISTED},
    SendState.PERSISTED: {SendState.EMITTED},
    SendState.EMITTED: {SendState.ACKNOWLEDGED},
    SendState.ACKNOWLEDGED: set(),  # Terminal state
    SendState.FAILED: set(),  # Terminal state
}

TERMINAL_STATES = {SendState.ACKNOWLEDGED, SendState.FAILED}


@dataclass
class SendTrace:
    """State, stage timings and failure tag for one send."""

    kind: MessageKind
    conversation_id: str | None = None
    sender_id: str | None = None
    trace_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: SendState = SendState.RECEIVED
    failed_stage: ErrorStage | None = None
    stage_timings_ms: dict[str, int] = field(default_factory=dict)
    _started: float = field(default_factory=time.perf_counter, repr=False)

    def transition_to(self, new_state: SendState) -> bool:
        """Move to new_state if the transition is valid.

        FAILED is reachable from every non-terminal state.

        Returns:
            True if the transition was applied, False otherwise.
        """
        if new_state == SendState.FAILED:
            if self.state in TERMINAL_STATES:
                return False
            self.state = new_state
            return True

        if new_state in _VALID_TRANSITIONS.get(self.state, set()):
            self.state = new_state
            return True
        return False

    def fail(self, stage: ErrorStage | None) -> None:
        if self.transition_to(SendState.FAILED):
            self.failed_stage = stage

    def add_timing(self, stage: str, duration_ms: int) -> None:
        """Accumulate time spent in a stage (per-recipient calls add up)."""
        self.stage_timings_ms[stage] = self.stage_timings_ms.get(stage, 0) + duration_ms

    @property
    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self._started) * 1000)
