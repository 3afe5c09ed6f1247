"""Conversation and membership models."""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from relay_service.models.user import utcnow


class ConversationKind(str, Enum):
    """Conversation kinds."""

    DIRECT = "DIRECT"
    GROUP = "GROUP"


class MemberRole(str, Enum):
    """Role of a user inside a conversation."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class Conversation(BaseModel):
    """A DIRECT (exactly two members) or GROUP conversation.

    name and created_by are only meaningful for GROUP conversations.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    kind: ConversationKind
    name: str | None = None
    created_by: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Membership(BaseModel):
    """One (conversation, user) pair with a role. Unique per pair."""

    conversation_id: str
    user_id: str
    role: MemberRole = MemberRole.MEMBER
    joined_at: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Member(BaseModel):
    """Fan-out target resolved at send time: a member and their current language."""

    user_id: str
    preferred_language: str
    role: MemberRole = MemberRole.MEMBER

    model_config = ConfigDict(frozen=True)
