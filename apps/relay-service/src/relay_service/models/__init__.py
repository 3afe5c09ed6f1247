"""Relay service data models."""

from .conversation import Conversation, ConversationKind, Member, MemberRole, Membership
from .error import ErrorCode, ErrorResponse, ErrorStage
from .message import Message, MessageEvent, MessageKind, OutboundEvent, SendAck
from .payloads import (
    AddMemberRequest,
    CreateDirectConversationRequest,
    CreateGroupConversationRequest,
    CreateUserRequest,
    JoinConversationPayload,
    SendMessagePayload,
    SendTextRequest,
    SendVoiceMessagePayload,
    SendVoiceRequest,
    UpdateUserRequest,
)
from .user import User

__all__ = [
    # Users and conversations
    "User",
    "Conversation",
    "ConversationKind",
    "Member",
    "MemberRole",
    "Membership",
    # Messages
    "Message",
    "MessageEvent",
    "MessageKind",
    "OutboundEvent",
    "SendAck",
    # Errors
    "ErrorCode",
    "ErrorResponse",
    "ErrorStage",
    # Payloads
    "JoinConversationPayload",
    "SendMessagePayload",
    "SendVoiceMessagePayload",
    "CreateUserRequest",
    "UpdateUserRequest",
    "CreateDirectConversationRequest",
    "CreateGroupConversationRequest",
    "AddMemberRequest",
    "SendTextRequest",
    "SendVoiceRequest",
]
