"""HTTP routes: users, conversations, membership administration and message history.

The acting user arrives in the X-User-Id header; authentication itself
is handled upstream.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Query, Request, Response, status
from fastapi.responses import JSONResponse

from relay_service.errors import ValidationError
from relay_service.models.conversation import Conversation, Member, Membership
from relay_service.models.message import Message, SendAck
from relay_service.models.payloads import (
    AddMemberRequest,
    CreateDirectConversationRequest,
    CreateGroupConversationRequest,
    CreateUserRequest,
    SendTextRequest,
    SendVoiceRequest,
    UpdateUserRequest,
)
from relay_service.models.user import User
from relay_service.services import RelayServices

from .errors import status_for_code

router = APIRouter()


def get_services(request: Request) -> RelayServices:
    return request.app.state.services


def acting_user(x_user_id: Annotated[str | None, Header()] = None) -> str:
    if not x_user_id:
        raise ValidationError("X-User-Id header is required")
    return x_user_id


Services = Annotated[RelayServices, Depends(get_services)]
ActingUser = Annotated[str, Depends(acting_user)]


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=User)
async def create_user(body: CreateUserRequest, services: Services) -> User:
    return await services.users.create(
        name=body.name,
        preferred_language=body.preferred_language,
        email=body.email,
    )


@router.get("/users/{user_id}", response_model=User)
async def get_user(user_id: str, services: Services) -> User:
    return await services.users.require(user_id)


@router.patch("/users/{user_id}", response_model=User)
async def update_user(user_id: str, body: UpdateUserRequest, services: Services) -> User:
    """Update a user; a new preferred language applies from the next send."""
    return await services.users.update(
        user_id,
        name=body.name,
        preferred_language=body.preferred_language,
    )


# -----------------------------------------------------------------------------
# Conversations
# -----------------------------------------------------------------------------


@router.get("/conversations", response_model=list[Conversation])
async def list_conversations(services: Services, user_id: ActingUser) -> list[Conversation]:
    return await services.membership.conversations_for(user_id)


@router.post("/conversations/direct", response_model=Conversation)
async def create_direct_conversation(
    body: CreateDirectConversationRequest,
    response: Response,
    services: Services,
    user_id: ActingUser,
) -> Conversation:
    """Open (or reuse) the direct conversation with a contact.

    Returns 201 when created, 200 when the pair already had one.
    """
    conversation, created = await services.membership.get_or_create_direct(
        user_id, body.contact_user_id
    )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return conversation


@router.post("/conversations/group", status_code=status.HTTP_201_CREATED, response_model=Conversation)
async def create_group_conversation(
    body: CreateGroupConversationRequest,
    services: Services,
    user_id: ActingUser,
) -> Conversation:
    return await services.membership.create_group(user_id, body.name, body.member_ids)


@router.get("/conversations/{conversation_id}", response_model=Conversation)
async def get_conversation(conversation_id: str, services: Services, user_id: ActingUser) -> Conversation:
    conversation = await services.membership.get_conversation(conversation_id)
    await services.membership.require_member(conversation_id, user_id)
    return conversation


@router.get("/conversations/{conversation_id}/members", response_model=list[Member])
async def list_members(conversation_id: str, services: Services, user_id: ActingUser) -> list[Member]:
    await services.membership.require_member(conversation_id, user_id)
    return await services.membership.members_of(conversation_id)


@router.post(
    "/conversations/{conversation_id}/members",
    status_code=status.HTTP_201_CREATED,
    response_model=Membership,
)
async def add_member(
    conversation_id: str,
    body: AddMemberRequest,
    services: Services,
    user_id: ActingUser,
) -> Membership:
    return await services.membership.add_member(
        conversation_id, body.user_id, role=body.role, actor_id=user_id
    )


@router.post("/conversations/{conversation_id}/members/{member_id}/promote", response_model=Membership)
async def promote_member(
    conversation_id: str,
    member_id: str,
    services: Services,
    user_id: ActingUser,
) -> Membership:
    return await services.membership.promote(conversation_id, member_id, actor_id=user_id)


@router.delete(
    "/conversations/{conversation_id}/members/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_member(
    conversation_id: str,
    member_id: str,
    services: Services,
    user_id: ActingUser,
) -> Response:
    """Remove a member (admins) or leave the group (member_id == acting user)."""
    await services.membership.remove_member(conversation_id, member_id, actor_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -----------------------------------------------------------------------------
# Messages
# -----------------------------------------------------------------------------


@router.get("/conversations/{conversation_id}/messages", response_model=list[Message])
async def list_messages(
    conversation_id: str,
    services: Services,
    user_id: ActingUser,
    language: Annotated[str | None, Query()] = None,
    mine: Annotated[bool, Query()] = False,
) -> list[Message]:
    """Message rows in creation order.

    language filters on the row's target language; mine=true filters on
    the caller's current preferred language.
    """
    await services.membership.require_member(conversation_id, user_id)
    target = language.strip().lower() if language else None
    if mine and target is None:
        target = await services.membership.preferred_language_of(user_id)
    return await services.messages.list_for_conversation(conversation_id, target_language=target)


def _ack_response(ack: SendAck) -> JSONResponse:
    status_code = status.HTTP_200_OK
    if not ack.ok:
        status_code = status_for_code(ack.code)
    return JSONResponse(status_code=status_code, content=ack.to_wire())


@router.post("/conversations/{conversation_id}/messages")
async def send_message(
    conversation_id: str,
    body: SendTextRequest,
    services: Services,
    user_id: ActingUser,
) -> JSONResponse:
    ack = await services.pipeline.send_text(conversation_id, user_id, body.text)
    return _ack_response(ack)


@router.post("/conversations/{conversation_id}/voice-messages")
async def send_voice_message(
    conversation_id: str,
    body: SendVoiceRequest,
    services: Services,
    user_id: ActingUser,
) -> JSONResponse:
    ack = await services.pipeline.send_voice(conversation_id, user_id, body.audio_base64)
    return _ack_response(ack)
