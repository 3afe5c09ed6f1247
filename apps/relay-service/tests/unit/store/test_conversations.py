"""Unit tests for ConversationStore."""

import asyncio

import pytest

from relay_service.models.conversation import ConversationKind, MemberRole, Membership


class TestDirectConversations:
    @pytest.mark.asyncio
    async def test_pair_is_unordered(self, conversations):
        first, created = await conversations.get_or_create_direct("a", "b")
        second, created_again = await conversations.get_or_create_direct("b", "a")
        assert created is True
        assert created_again is False
        assert first.id == second.id
        assert first.kind == ConversationKind.DIRECT

    @pytest.mark.asyncio
    async def test_concurrent_creation_yields_one_conversation(self, conversations):
        results = await asyncio.gather(
            *(conversations.get_or_create_direct("a", "b") for _ in range(5)),
            *(conversations.get_or_create_direct("b", "a") for _ in range(5)),
        )
        assert len({conv.id for conv, _ in results}) == 1
        assert sum(created for _, created in results) == 1

    @pytest.mark.asyncio
    async def test_both_users_are_members(self, conversations):
        conversation, _ = await conversations.get_or_create_direct("a", "b")
        members = await conversations.list_memberships(conversation.id)
        assert [m.user_id for m in members] == ["a", "b"]
        assert all(m.role == MemberRole.MEMBER for m in members)


class TestGroupConversations:
    @pytest.mark.asyncio
    async def test_creator_is_admin_and_duplicates_collapse(self, conversations):
        conversation = await conversations.create_group("Team", "a", ["b", "a", "c", "b"])
        members = await conversations.list_memberships(conversation.id)
        assert [(m.user_id, m.role) for m in members] == [
            ("a", MemberRole.ADMIN),
            ("b", MemberRole.MEMBER),
            ("c", MemberRole.MEMBER),
        ]

    @pytest.mark.asyncio
    async def test_add_existing_membership_is_unchanged(self, conversations):
        conversation = await conversations.create_group("Team", "a", ["b"])
        existing = await conversations.add_membership(
            Membership(conversation_id=conversation.id, user_id="a", role=MemberRole.MEMBER)
        )
        assert existing.role == MemberRole.ADMIN
        assert len(await conversations.list_memberships(conversation.id)) == 2

    @pytest.mark.asyncio
    async def test_set_role_and_delete(self, conversations):
        conversation = await conversations.create_group("Team", "a", ["b"])
        updated = await conversations.set_role(conversation.id, "b", MemberRole.ADMIN)
        assert updated.role == MemberRole.ADMIN
        assert await conversations.set_role(conversation.id, "ghost", MemberRole.ADMIN) is None

        removed = await conversations.delete_membership(conversation.id, "b")
        assert removed.user_id == "b"
        assert await conversations.get_membership(conversation.id, "b") is None
        assert await conversations.delete_membership(conversation.id, "b") is None

    @pytest.mark.asyncio
    async def test_list_for_user(self, conversations):
        group = await conversations.create_group("Team", "a", ["b"])
        direct, _ = await conversations.get_or_create_direct("a", "c")
        ids = {c.id for c in await conversations.list_for_user("a")}
        assert ids == {group.id, direct.id}
        assert [c.id for c in await conversations.list_for_user("c")] == [direct.id]
