"""Inbound payload models for realtime events and HTTP requests.

Field names arrive camelCase on the wire; the models accept either form.
Content checks (blank text, empty audio) are left to the pipeline so they
surface as the same ValidationError regardless of transport.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from relay_service.models.conversation import MemberRole

_WIRE = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JoinConversationPayload(BaseModel):
    """joinConversation / leaveConversation event payload."""

    conversation_id: str = Field(min_length=1)
    user_id: str | None = None

    model_config = _WIRE


class SendMessagePayload(BaseModel):
    """sendMessage event payload."""

    conversation_id: str = Field(min_length=1)
    sender_id: str | None = None
    text: str | None = None

    model_config = _WIRE


class SendVoiceMessagePayload(BaseModel):
    """sendVoiceMessage event payload. audio_base64 may be a data URI."""

    conversation_id: str = Field(min_length=1)
    sender_id: str | None = None
    audio_base64: str | None = None

    model_config = _WIRE


class CreateUserRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str | None = None
    preferred_language: str = Field(min_length=2, max_length=10)

    model_config = _WIRE


class UpdateUserRequest(BaseModel):
    name: str | None = None
    preferred_language: str | None = Field(default=None, min_length=2, max_length=10)

    model_config = _WIRE


class CreateDirectConversationRequest(BaseModel):
    contact_user_id: str = Field(min_length=1)

    model_config = _WIRE


class CreateGroupConversationRequest(BaseModel):
    name: str = Field(min_length=1)
    member_ids: list[str] = Field(default_factory=list)

    model_config = _WIRE


class AddMemberRequest(BaseModel):
    user_id: str = Field(min_length=1)
    role: MemberRole = MemberRole.MEMBER

    model_config = _WIRE


class SendTextRequest(BaseModel):
    """HTTP text send; the conversation comes from the path."""

    text: str | None = None

    model_config = _WIRE


class SendVoiceRequest(BaseModel):
    audio_base64: str | None = None

    model_config = _WIRE
