"""In-memory conversation and membership records."""

import asyncio

from relay_service.models.conversation import (
    Conversation,
    ConversationKind,
    MemberRole,
    Membership,
)
from relay_service.models.user import utcnow


def _pair_key(user_a: str, user_b: str) -> frozenset[str]:
    return frozenset((user_a, user_b))


class ConversationStore:
    """Keyed conversation store with a membership table.

    Memberships are kept per conversation in join order, keyed by user id,
    so there is at most one membership per (conversation, user). DIRECT
    conversations are additionally indexed by their unordered user pair.
    """

    def __init__(self) -> None:
        self._conversations: dict[str, Conversation] = {}
        self._memberships: dict[str, dict[str, Membership]] = {}
        self._direct_index: dict[frozenset[str], str] = {}
        self._lock = asyncio.Lock()

    async def get(self, conversation_id: str) -> Conversation | None:
        return self._conversations.get(conversation_id)

    async def get_or_create_direct(self, user_a: str, user_b: str) -> tuple[Conversation, bool]:
        """Return the DIRECT conversation for a user pair, creating it if absent.

        Returns:
            (conversation, created)
        """
        key = _pair_key(user_a, user_b)
        async with self._lock:
            existing_id = self._direct_index.get(key)
            if existing_id is not None:
                return self._conversations[existing_id], False

            conversation = Conversation(kind=ConversationKind.DIRECT, created_by=user_a)
            self._conversations[conversation.id] = conversation
            self._memberships[conversation.id] = {
                user_id: Membership(conversation_id=conversation.id, user_id=user_id)
                for user_id in (user_a, user_b)
            }
            self._direct_index[key] = conversation.id
            return conversation, True

    async def create_group(
        self,
        name: str,
        created_by: str,
        member_ids: list[str],
    ) -> Conversation:
        """Create a GROUP conversation; the creator is the first ADMIN."""
        async with self._lock:
            conversation = Conversation(kind=ConversationKind.GROUP, name=name, created_by=created_by)
            members = {
                created_by: Membership(
                    conversation_id=conversation.id, user_id=created_by, role=MemberRole.ADMIN
                )
            }
            for user_id in member_ids:
                if user_id not in members:
                    members[user_id] = Membership(conversation_id=conversation.id, user_id=user_id)
            self._conversations[conversation.id] = conversation
            self._memberships[conversation.id] = members
            return conversation

    async def get_membership(self, conversation_id: str, user_id: str) -> Membership | None:
        return self._memberships.get(conversation_id, {}).get(user_id)

    async def list_memberships(self, conversation_id: str) -> list[Membership]:
        """Memberships in join order."""
        return list(self._memberships.get(conversation_id, {}).values())

    async def list_for_user(self, user_id: str) -> list[Conversation]:
        return [
            self._conversations[conversation_id]
            for conversation_id, members in self._memberships.items()
            if user_id in members
        ]

    async def add_membership(self, membership: Membership) -> Membership:
        """Insert a membership; an existing one for the same pair is returned unchanged."""
        async with self._lock:
            members = self._memberships.setdefault(membership.conversation_id, {})
            existing = members.get(membership.user_id)
            if existing is not None:
                return existing
            members[membership.user_id] = membership
            self._touch(membership.conversation_id)
            return membership

    async def set_role(self, conversation_id: str, user_id: str, role: MemberRole) -> Membership | None:
        async with self._lock:
            members = self._memberships.get(conversation_id, {})
            current = members.get(user_id)
            if current is None:
                return None
            updated = current.model_copy(update={"role": role})
            members[user_id] = updated
            self._touch(conversation_id)
            return updated

    async def delete_membership(self, conversation_id: str, user_id: str) -> Membership | None:
        async with self._lock:
            removed = self._memberships.get(conversation_id, {}).pop(user_id, None)
            if removed is not None:
                self._touch(conversation_id)
            return removed

    def _touch(self, conversation_id: str) -> None:
        conversation = self._conversations.get(conversation_id)
        if conversation is not None:
            self._conversations[conversation_id] = conversation.model_copy(
                update={"updated_at": utcnow()}
            )
