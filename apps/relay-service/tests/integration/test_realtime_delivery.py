"""Integration tests: realtime handlers, delivery pipeline and emitter together."""

import asyncio
from unittest.mock import AsyncMock

import pytest
import socketio
from fastapi.testclient import TestClient

from relay_service.gateway import GatewayEmitter
from relay_service.gateway.handlers import (
    handle_connect,
    handle_join_conversation,
    handle_send_message,
    handle_send_voice_message,
)
from relay_service.server import create_app
from relay_service.services import build_services

pytestmark = pytest.mark.integration


@pytest.fixture
def services(relay_config):
    return build_services(relay_config)


@pytest.fixture
async def room(services):
    """Two users in a direct conversation, each connected and joined."""
    sio = AsyncMock()
    asha = await services.users.create(name="Asha", preferred_language="hi", user_id="asha")
    ben = await services.users.create(name="Ben", preferred_language="en", user_id="ben")
    conversation, _ = await services.membership.get_or_create_direct(asha.id, ben.id)

    for sid, user in (("sid-asha", asha), ("sid-ben", ben)):
        await handle_connect(sid, {}, {"userId": user.id}, services.sessions)
        ack = await handle_join_conversation(
            sio, sid, {"conversationId": conversation.id}, services.sessions, services.membership
        )
        assert ack == {"ok": True}

    return sio, conversation


class TestRealtimeDelivery:
    @pytest.mark.asyncio
    async def test_text_send_reaches_the_room(self, services, room):
        sio, conversation = room
        emitter = GatewayEmitter(sio, services.channel)
        emitter.start()

        ack = await handle_send_message(
            "sid-asha",
            {"conversationId": conversation.id, "text": "Mujhe coffee chahiye"},
            services.sessions,
            services.pipeline,
        )
        await asyncio.wait_for(services.channel.join(), timeout=2)
        await emitter.stop()

        assert ack["ok"] is True
        assert sio.emit.await_count == 2
        emitted = [c.args for c in sio.emit.await_args_list]
        assert {name for name, _ in emitted} == {"receiveMessage"}
        assert {c.kwargs["room"] for c in sio.emit.await_args_list} == {conversation.id}
        payloads = {p["targetLanguage"]: p for _, p in emitted}
        assert payloads["hi"]["translated"] == "Mujhe coffee chahiye"
        assert payloads["en"]["translated"] == "[en] Mujhe coffee chahiye"
        assert set(ack["messageIds"]) == {p["id"] for p in payloads.values()}

    @pytest.mark.asyncio
    async def test_voice_send_carries_audio(self, services, room, sample_audio_base64):
        sio, conversation = room
        emitter = GatewayEmitter(sio, services.channel)
        emitter.start()

        ack = await handle_send_voice_message(
            "sid-ben",
            {"conversationId": conversation.id, "audioBase64": sample_audio_base64},
            services.sessions,
            services.pipeline,
        )
        await asyncio.wait_for(services.channel.join(), timeout=2)
        await emitter.stop()

        assert ack["ok"] is True
        payloads = [c.args[1] for c in sio.emit.await_args_list]
        assert {c.args[0] for c in sio.emit.await_args_list} == {"receiveVoiceMessage"}
        assert all(p["audioBase64"] for p in payloads)
        assert len({p["originalAudioUrl"] for p in payloads}) == 1

    @pytest.mark.asyncio
    async def test_failed_send_emits_nothing(self, services, room):
        sio, conversation = room
        ack = await handle_send_message(
            "sid-asha",
            {"conversationId": conversation.id, "text": ""},
            services.sessions,
            services.pipeline,
        )
        assert ack["ok"] is False
        assert services.channel.qsize() == 0


class TestCombinedApp:
    def test_asgi_app_serves_http_and_runs_emitter(self, relay_config, services):
        app = create_app(relay_config, services=services)
        assert isinstance(app, socketio.ASGIApp)

        with TestClient(app) as client:
            assert client.get("/health").json()["status"] == "healthy"
            asha = client.post("/users", json={"name": "Asha", "preferredLanguage": "hi"}).json()
            assert asha["preferredLanguage"] == "hi"
