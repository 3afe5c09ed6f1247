"""Integration tests for the HTTP API over the in-memory service container."""

import pytest
from fastapi.testclient import TestClient

from relay_service.server import create_fastapi_app
from relay_service.services import build_services
from relay_service.translation import MockTranslator, MockTranslatorConfig

pytestmark = pytest.mark.integration

HINGLISH = "Mujhe coffee chahiye"


@pytest.fixture
def services(relay_config):
    translator = MockTranslator(
        MockTranslatorConfig(fixed_translations={(HINGLISH, "en"): "I want coffee"})
    )
    return build_services(relay_config, translator=translator)


@pytest.fixture
def client(services):
    with TestClient(create_fastapi_app(services)) as test_client:
        yield test_client


def _as(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


def _create_user(client: TestClient, name: str, language: str) -> str:
    response = client.post("/users", json={"name": name, "preferredLanguage": language})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def pair(client):
    """Asha (hi) and Ben (en) with a direct conversation. Returns (asha, ben, conversation_id)."""
    asha = _create_user(client, "Asha", "hi")
    ben = _create_user(client, "Ben", "en")
    response = client.post("/conversations/direct", json={"contactUserId": ben}, headers=_as(asha))
    assert response.status_code == 201
    return asha, ben, response.json()["id"]


class TestHealth:
    def test_health_reports_providers(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["providers"] == {
            "translation": True,
            "stt": True,
            "tts": True,
            "storage": True,
        }

    def test_metrics(self, client):
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]


class TestUsers:
    def test_create_get_update(self, client):
        user_id = _create_user(client, "Asha", "HI")

        user = client.get(f"/users/{user_id}").json()
        assert user["preferredLanguage"] == "hi"

        updated = client.patch(f"/users/{user_id}", json={"preferredLanguage": "ta"}).json()
        assert updated["preferredLanguage"] == "ta"
        assert updated["name"] == "Asha"

    def test_unknown_user(self, client):
        response = client.get("/users/ghost")
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"


class TestConversations:
    def test_direct_is_reused_in_either_order(self, client, pair):
        asha, ben, conversation_id = pair
        again = client.post("/conversations/direct", json={"contactUserId": asha}, headers=_as(ben))
        assert again.status_code == 200
        assert again.json()["id"] == conversation_id

        listed = client.get("/conversations", headers=_as(asha)).json()
        assert [c["id"] for c in listed] == [conversation_id]

    def test_direct_with_self(self, client):
        asha = _create_user(client, "Asha", "hi")
        response = client.post("/conversations/direct", json={"contactUserId": asha}, headers=_as(asha))
        assert response.status_code == 400

    def test_missing_acting_user(self, client):
        response = client.get("/conversations")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PAYLOAD"

    def test_outsider_cannot_read(self, client, pair):
        _, _, conversation_id = pair
        outsider = _create_user(client, "Mallory", "en")
        response = client.get(f"/conversations/{conversation_id}", headers=_as(outsider))
        assert response.status_code == 403
        assert response.json()["code"] == "NOT_A_MEMBER"


class TestGroupAdministration:
    @pytest.fixture
    def group(self, client):
        admin = _create_user(client, "Admin", "en")
        member = _create_user(client, "Member", "hi")
        extra = _create_user(client, "Extra", "ta")
        response = client.post(
            "/conversations/group",
            json={"name": "Team", "memberIds": [member]},
            headers=_as(admin),
        )
        assert response.status_code == 201
        return response.json()["id"], admin, member, extra

    def test_members_listing(self, client, group):
        conversation_id, admin, member, _ = group
        members = client.get(f"/conversations/{conversation_id}/members", headers=_as(member)).json()
        assert [(m["user_id"], m["role"]) for m in members] == [(admin, "ADMIN"), (member, "MEMBER")]

    def test_only_admin_adds(self, client, group):
        conversation_id, admin, member, extra = group
        refused = client.post(
            f"/conversations/{conversation_id}/members",
            json={"userId": extra},
            headers=_as(member),
        )
        assert refused.status_code == 403
        assert refused.json()["code"] == "NOT_AN_ADMIN"

        added = client.post(
            f"/conversations/{conversation_id}/members",
            json={"userId": extra},
            headers=_as(admin),
        )
        assert added.status_code == 201

    def test_last_admin_cannot_leave(self, client, group):
        conversation_id, admin, member, _ = group
        response = client.delete(
            f"/conversations/{conversation_id}/members/{admin}", headers=_as(admin)
        )
        assert response.status_code == 409
        assert response.json()["code"] == "LAST_ADMIN"

        promoted = client.post(
            f"/conversations/{conversation_id}/members/{member}/promote", headers=_as(admin)
        )
        assert promoted.json()["role"] == "ADMIN"

        left = client.delete(f"/conversations/{conversation_id}/members/{admin}", headers=_as(admin))
        assert left.status_code == 204


class TestMessages:
    def test_send_and_read_thread(self, client, pair, services):
        asha, ben, conversation_id = pair

        response = client.post(
            f"/conversations/{conversation_id}/messages",
            json={"text": HINGLISH},
            headers=_as(asha),
        )
        assert response.status_code == 200
        ack = response.json()
        assert ack["ok"] is True
        assert len(ack["messageIds"]) == 2

        thread = client.get(
            f"/conversations/{conversation_id}/messages?mine=true", headers=_as(ben)
        ).json()
        assert [m["translatedText"] for m in thread] == ["I want coffee"]
        assert thread[0]["sourceLanguage"] == "hi"

        hindi = client.get(
            f"/conversations/{conversation_id}/messages?language=hi", headers=_as(ben)
        ).json()
        assert [m["translatedText"] for m in hindi] == [HINGLISH]

        assert len(services.channel.drain()) == 2

    def test_blank_text_is_400(self, client, pair, services):
        asha, _, conversation_id = pair
        response = client.post(
            f"/conversations/{conversation_id}/messages", json={"text": " "}, headers=_as(asha)
        )
        assert response.status_code == 400
        assert response.json()["stage"] == "validation"
        assert services.channel.drain() == []

    def test_non_member_send_is_403(self, client, pair):
        _, _, conversation_id = pair
        outsider = _create_user(client, "Mallory", "en")
        response = client.post(
            f"/conversations/{conversation_id}/messages", json={"text": "hi"}, headers=_as(outsider)
        )
        assert response.status_code == 403
        assert response.json()["traceId"]

    def test_voice_message(self, client, pair, services, sample_audio_data_uri):
        asha, ben, conversation_id = pair
        response = client.post(
            f"/conversations/{conversation_id}/voice-messages",
            json={"audioBase64": sample_audio_data_uri},
            headers=_as(asha),
        )
        assert response.status_code == 200
        assert response.json()["ok"] is True

        thread = client.get(
            f"/conversations/{conversation_id}/messages?mine=true", headers=_as(ben)
        ).json()
        assert thread[0]["kind"] == "VOICE"
        assert thread[0]["originalAudioUrl"].startswith("memory://audio/original_")
        assert thread[0]["translatedAudioUrl"].startswith("memory://audio/translated_")
