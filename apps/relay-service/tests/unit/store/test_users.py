"""Unit tests for UserStore."""

import pytest

from relay_service.errors import NotFoundError, ValidationError


class TestUserStore:
    @pytest.mark.asyncio
    async def test_create_and_get(self, users):
        user = await users.create(name="Asha", preferred_language="HI", email="asha@example.com")
        assert user.preferred_language == "hi"
        assert await users.get(user.id) == user

    @pytest.mark.asyncio
    async def test_explicit_id_must_be_unique(self, users):
        await users.create(name="A", user_id="u1")
        with pytest.raises(ValidationError):
            await users.create(name="B", user_id="u1")

    @pytest.mark.asyncio
    async def test_require_unknown(self, users):
        with pytest.raises(NotFoundError) as exc_info:
            await users.require("ghost")
        assert exc_info.value.details == {"user_id": "ghost"}

    @pytest.mark.asyncio
    async def test_get_many_omits_unknown(self, users):
        await users.create(name="A", user_id="a")
        found = await users.get_many(["a", "ghost"])
        assert list(found) == ["a"]

    @pytest.mark.asyncio
    async def test_update_language(self, users):
        user = await users.create(name="A", preferred_language="en", user_id="a")
        updated = await users.update("a", preferred_language=" TA ")
        assert updated.preferred_language == "ta"
        assert updated.name == "A"
        assert updated.updated_at >= user.updated_at
        assert (await users.get("a")).preferred_language == "ta"

    @pytest.mark.asyncio
    async def test_update_rejects_blank_language(self, users):
        await users.create(name="A", user_id="a")
        with pytest.raises(ValidationError):
            await users.update("a", preferred_language=" ")

    @pytest.mark.asyncio
    async def test_all(self, users):
        await users.create(name="A", user_id="a")
        await users.create(name="B", user_id="b")
        assert [u.id for u in await users.all()] == ["a", "b"]
