"""Socket.IO event handlers for the realtime gateway.

Events:
- connect / disconnect: session bookkeeping
- joinConversation / leaveConversation: room membership, gated by
  conversation membership; ack {ok, error?, code?}
- sendMessage / sendVoiceMessage: run the delivery pipeline; ack is the
  SendAck wire form

Handler return values are sent back as the Socket.IO acknowledgement.
"""

import logging
import uuid
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PayloadValidationError

from relay_service.errors import RelayError, ValidationError
from relay_service.membership import ConversationMembership
from relay_service.models.error import ErrorCode, ErrorStage
from relay_service.models.payloads import (
    JoinConversationPayload,
    SendMessagePayload,
    SendVoiceMessagePayload,
)
from relay_service.models.message import SendAck
from relay_service.observability.metrics import (
    decrement_active_sessions,
    increment_active_sessions,
)
from relay_service.pipeline.coordinator import DeliveryPipeline

from .session import ClientSession, ClientSessionStore

logger = logging.getLogger(__name__)


def _parse(model: type[BaseModel], data: Any) -> Any:
    """Validate an event payload.

    Raises:
        ValidationError: If data is not an object or misses required fields
    """
    if not isinstance(data, dict):
        raise ValidationError("Event payload must be an object")
    try:
        return model.model_validate(data)
    except PayloadValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ValidationError(f"Invalid payload: {fields}") from e


def _acting_user(session: ClientSession, claimed: str | None) -> str:
    """Resolve the acting user from the payload and the session binding.

    Raises:
        ValidationError: If no user is known or the payload contradicts the session
    """
    if session.user_id and claimed and claimed != session.user_id:
        raise ValidationError("User id does not match the connected session")
    user_id = claimed or session.user_id
    if not user_id:
        raise ValidationError("userId is required")
    return user_id


def _error_ack(error: RelayError) -> dict[str, Any]:
    ack: dict[str, Any] = {"ok": False, "error": error.message, "code": error.code.value}
    if error.stage:
        ack["stage"] = error.stage.value
    return ack


def _rejected_send(error: RelayError) -> dict[str, Any]:
    """SendAck for a send refused before it reached the pipeline."""
    return SendAck(
        ok=False,
        trace_id=str(uuid.uuid4()),
        error=error.message,
        code=error.code.value,
        stage=error.stage or ErrorStage.VALIDATION,
        retryable=False,
    ).to_wire()


async def handle_connect(
    sid: str,
    environ: dict[str, Any],
    auth: Any,
    sessions: ClientSessionStore,
) -> None:
    """Create the session, binding a user from auth {userId} or X-User-Id if given."""
    user_id = None
    if isinstance(auth, dict):
        user_id = auth.get("userId") or auth.get("user_id")
    if not user_id:
        user_id = environ.get("HTTP_X_USER_ID")

    await sessions.create(sid, user_id=user_id)
    increment_active_sessions()
    logger.info(f"Client connected: sid={sid}, user_id={user_id}")


async def handle_disconnect(sid: str, sessions: ClientSessionStore) -> None:
    session = await sessions.delete(sid)
    if session is None:
        logger.debug(f"Disconnect from unknown session: sid={sid}")
        return

    decrement_active_sessions()
    logger.info(
        f"Client disconnected: sid={sid}, user_id={session.user_id}, "
        f"rooms={len(session.rooms)}"
    )


async def handle_join_conversation(
    sio: Any,
    sid: str,
    data: Any,
    sessions: ClientSessionStore,
    membership: ConversationMembership,
) -> dict[str, Any]:
    """Join the conversation room after verifying membership."""
    try:
        payload = _parse(JoinConversationPayload, data)
        session = await sessions.get_or_create(sid)
        user_id = _acting_user(session, payload.user_id)
        await membership.require_member(payload.conversation_id, user_id)
    except RelayError as e:
        logger.info(f"joinConversation rejected: sid={sid}, code={e.code.value}")
        return _error_ack(e)

    await sio.enter_room(sid, payload.conversation_id)
    session.user_id = user_id
    session.rooms.add(payload.conversation_id)
    logger.info(f"Joined conversation: sid={sid}, user_id={user_id}, room={payload.conversation_id}")
    return {"ok": True}


async def handle_leave_conversation(
    sio: Any,
    sid: str,
    data: Any,
    sessions: ClientSessionStore,
) -> dict[str, Any]:
    try:
        payload = _parse(JoinConversationPayload, data)
    except RelayError as e:
        return _error_ack(e)

    session = await sessions.get_or_create(sid)
    await sio.leave_room(sid, payload.conversation_id)
    session.rooms.discard(payload.conversation_id)
    logger.info(f"Left conversation: sid={sid}, room={payload.conversation_id}")
    return {"ok": True}


async def handle_send_message(
    sid: str,
    data: Any,
    sessions: ClientSessionStore,
    pipeline: DeliveryPipeline,
) -> dict[str, Any]:
    try:
        payload = _parse(SendMessagePayload, data)
        session = await sessions.get_or_create(sid)
        sender_id = _acting_user(session, payload.sender_id)
    except RelayError as e:
        return _rejected_send(e)

    ack = await pipeline.send_text(payload.conversation_id, sender_id, payload.text)
    return ack.to_wire()


async def handle_send_voice_message(
    sid: str,
    data: Any,
    sessions: ClientSessionStore,
    pipeline: DeliveryPipeline,
) -> dict[str, Any]:
    try:
        payload = _parse(SendVoiceMessagePayload, data)
        session = await sessions.get_or_create(sid)
        sender_id = _acting_user(session, payload.sender_id)
    except RelayError as e:
        return _rejected_send(e)

    ack = await pipeline.send_voice(payload.conversation_id, sender_id, payload.audio_base64)
    return ack.to_wire()


def register_gateway_handlers(
    sio: Any,
    sessions: ClientSessionStore,
    membership: ConversationMembership,
    pipeline: DeliveryPipeline,
) -> None:
    """Register all realtime event handlers on the Socket.IO server."""

    @sio.on("connect")
    async def on_connect(sid: str, environ: dict[str, Any], auth: Any = None) -> None:
        await handle_connect(sid, environ, auth, sessions)

    @sio.on("disconnect")
    async def on_disconnect(sid: str, *args: Any) -> None:
        await handle_disconnect(sid, sessions)

    @sio.on("joinConversation")
    async def on_join_conversation(sid: str, data: Any = None) -> dict[str, Any]:
        return await handle_join_conversation(sio, sid, data, sessions, membership)

    @sio.on("leaveConversation")
    async def on_leave_conversation(sid: str, data: Any = None) -> dict[str, Any]:
        return await handle_leave_conversation(sio, sid, data, sessions)

    @sio.on("sendMessage")
    async def on_send_message(sid: str, data: Any = None) -> dict[str, Any]:
        return await handle_send_message(sid, data, sessions, pipeline)

    @sio.on("sendVoiceMessage")
    async def on_send_voice_message(sid: str, data: Any = None) -> dict[str, Any]:
        return await handle_send_voice_message(sid, data, sessions, pipeline)
