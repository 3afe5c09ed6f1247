"""Unit tests for ClientSessionStore."""

import pytest

from relay_service.gateway.session import ClientSessionStore


class TestClientSessionStore:
    @pytest.mark.asyncio
    async def test_lifecycle(self):
        store = ClientSessionStore()
        session = await store.create("sid1", user_id="u1")
        session.rooms.add("c1")
        other = await store.get_or_create("sid2")

        assert store.count() == 2
        assert other.user_id is None
        assert await store.get_or_create("sid1") is session

        assert await store.delete("sid1") is session
        assert await store.get("sid1") is None
        assert store.count() == 1
