"""Message models.

A Message is one persisted row per (source message, recipient). Each row
carries the same original content but its own target language and
translated payload, so a client reads its thread by filtering on
target_language == its preferred language.

MessageEvent is the fan-out payload pushed to the conversation room, and
SendAck is what the sender gets back for one send.
"""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from relay_service.models.error import ErrorStage
from relay_service.models.user import utcnow


class MessageKind(str, Enum):
    """Message kinds."""

    TEXT = "TEXT"
    VOICE = "VOICE"

    @property
    def event_kind(self) -> str:
        """Lowercase kind used in fan-out events."""
        return self.value.lower()

    @property
    def event_name(self) -> str:
        """Realtime event name for this kind."""
        return "receiveVoiceMessage" if self is MessageKind.VOICE else "receiveMessage"


class Message(BaseModel):
    """Persisted per-recipient message row. Immutable once written."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    conversation_id: str
    sender_id: str
    recipient_id: str
    kind: MessageKind
    original_text: str
    translated_text: str
    source_language: str
    target_language: str
    original_audio_url: str | None = None
    translated_audio_url: str | None = None
    trace_id: str | None = None
    created_at: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class MessageEvent(BaseModel):
    """Fan-out event for one persisted row.

    Voice-only fields stay None for text events and are dropped from the
    wire payload.
    """

    id: str
    conversation_id: str
    sender_id: str
    original: str
    translated: str
    source_language: str
    target_language: str
    created_at: datetime
    kind: str
    original_audio_url: str | None = None
    translated_audio_url: str | None = None
    audio_base64: str | None = None

    @classmethod
    def from_message(cls, message: Message, audio_base64: str | None = None) -> "MessageEvent":
        """Build the event for a persisted row."""
        return cls(
            id=message.id,
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            original=message.original_text,
            translated=message.translated_text,
            source_language=message.source_language,
            target_language=message.target_language,
            created_at=message.created_at,
            kind=message.kind.event_kind,
            original_audio_url=message.original_audio_url,
            translated_audio_url=message.translated_audio_url,
            audio_base64=audio_base64,
        )

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, omitting voice fields on text events."""
        exclude = None
        if self.kind == MessageKind.TEXT.event_kind:
            exclude = {"original_audio_url", "translated_audio_url", "audio_base64"}
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OutboundEvent(BaseModel):
    """One item on the fan-out channel: an event addressed to a room."""

    room: str
    event: str
    payload: dict
    trace_id: str | None = None


class SendAck(BaseModel):
    """Acknowledgement returned to the sender for one send."""

    ok: bool
    trace_id: str
    message_ids: list[str] = Field(default_factory=list)
    error: str | None = None
    code: str | None = None
    stage: ErrorStage | None = None
    retryable: bool | None = None

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, dropping unset error fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
