"""
Conversation membership.

Resolves a conversation to its members and their current preferred
language, gates access by membership and enforces the group invariants:
- exactly one membership per (conversation, user)
- DIRECT conversations are unique per unordered user pair
- a GROUP always keeps at least one ADMIN
"""

import asyncio
import logging

from relay_service.errors import (
    InvariantViolation,
    NotAdminError,
    NotFoundError,
    NotMemberError,
    ValidationError,
)
from relay_service.models.conversation import (
    Conversation,
    ConversationKind,
    Member,
    MemberRole,
    Membership,
)
from relay_service.store.conversations import ConversationStore
from relay_service.store.users import UserStore

logger = logging.getLogger(__name__)


class ConversationMembership:
    """Membership queries and group administration.

    Role changes and removals serialize on one lock so the last-admin check
    and the write that depends on it cannot interleave.
    """

    def __init__(self, conversations: ConversationStore, users: UserStore) -> None:
        self._conversations = conversations
        self._users = users
        self._admin_lock = asyncio.Lock()

    async def is_member(self, conversation_id: str, user_id: str) -> bool:
        return await self._conversations.get_membership(conversation_id, user_id) is not None

    async def require_member(self, conversation_id: str, user_id: str) -> Membership:
        """Return the caller's membership.

        Raises:
            NotMemberError: If the user is not a member (or the conversation is unknown)
        """
        membership = await self._conversations.get_membership(conversation_id, user_id)
        if membership is None:
            raise NotMemberError(
                f"User {user_id} is not a member of conversation {conversation_id}",
                details={"conversation_id": conversation_id, "user_id": user_id},
            )
        return membership

    async def members_of(self, conversation_id: str) -> list[Member]:
        """Members in join order with their preferred language as of now."""
        memberships = await self._conversations.list_memberships(conversation_id)
        users = await self._users.get_many([m.user_id for m in memberships])

        members = []
        for membership in memberships:
            user = users.get(membership.user_id)
            if user is None:
                logger.warning(
                    f"Membership without user record skipped: "
                    f"conversation={conversation_id}, user={membership.user_id}"
                )
                continue
            members.append(
                Member(
                    user_id=user.id,
                    preferred_language=user.preferred_language,
                    role=membership.role,
                )
            )
        return members

    async def preferred_language_of(self, user_id: str) -> str | None:
        user = await self._users.get(user_id)
        return user.preferred_language if user else None

    async def is_admin(self, conversation_id: str, user_id: str) -> bool:
        membership = await self._conversations.get_membership(conversation_id, user_id)
        return membership is not None and membership.role == MemberRole.ADMIN

    async def get_conversation(self, conversation_id: str) -> Conversation:
        conversation = await self._conversations.get(conversation_id)
        if conversation is None:
            raise NotFoundError(
                f"Conversation {conversation_id} not found",
                details={"conversation_id": conversation_id},
            )
        return conversation

    async def conversations_for(self, user_id: str) -> list[Conversation]:
        return await self._conversations.list_for_user(user_id)

    async def get_or_create_direct(self, user_id: str, contact_user_id: str) -> tuple[Conversation, bool]:
        """Return the DIRECT conversation between two users, creating it once.

        The pair is unordered: (A, B) and (B, A) resolve to the same conversation.

        Returns:
            (conversation, created)

        Raises:
            ValidationError: If a user tries to open a conversation with themselves
            NotFoundError: If either user does not exist
        """
        if user_id == contact_user_id:
            raise ValidationError("Cannot create a direct conversation with yourself")
        await self._users.require(user_id)
        await self._users.require(contact_user_id)

        conversation, created = await self._conversations.get_or_create_direct(
            user_id, contact_user_id
        )
        if created:
            logger.info(f"Direct conversation created: id={conversation.id}")
        return conversation, created

    async def create_group(self, creator_id: str, name: str, member_ids: list[str]) -> Conversation:
        """Create a GROUP; the creator becomes ADMIN, everyone else MEMBER.

        Raises:
            ValidationError: If the name is blank
            NotFoundError: If any user does not exist
        """
        if not name or not name.strip():
            raise ValidationError("Group name is required")
        for uid in [creator_id, *member_ids]:
            await self._users.require(uid)

        conversation = await self._conversations.create_group(name.strip(), creator_id, member_ids)
        logger.info(f"Group conversation created: id={conversation.id}, name={conversation.name}")
        return conversation

    async def add_member(
        self,
        conversation_id: str,
        user_id: str,
        role: MemberRole = MemberRole.MEMBER,
        actor_id: str | None = None,
    ) -> Membership:
        """Add a user to a GROUP. Adding an existing member returns their membership.

        Args:
            actor_id: Acting user, who must be an admin; None skips the check

        Raises:
            NotFoundError: Unknown conversation or user
            ValidationError: The conversation is DIRECT
            NotMemberError / NotAdminError: The actor may not administer the group
        """
        conversation = await self._require_group(conversation_id)
        await self._users.require(user_id)
        if actor_id is not None:
            await self._require_admin(conversation.id, actor_id)

        membership = await self._conversations.add_membership(
            Membership(conversation_id=conversation.id, user_id=user_id, role=role)
        )
        logger.info(
            f"Member added: conversation={conversation.id}, user={user_id}, "
            f"role={membership.role.value}"
        )
        return membership

    async def promote(self, conversation_id: str, user_id: str, actor_id: str | None = None) -> Membership:
        """Make a group member an ADMIN."""
        conversation = await self._require_group(conversation_id)
        if actor_id is not None:
            await self._require_admin(conversation.id, actor_id)

        async with self._admin_lock:
            updated = await self._conversations.set_role(conversation.id, user_id, MemberRole.ADMIN)
        if updated is None:
            raise NotFoundError(
                f"User {user_id} is not a member of conversation {conversation_id}",
                details={"conversation_id": conversation_id, "user_id": user_id},
            )
        return updated

    async def remove_member(self, conversation_id: str, user_id: str, actor_id: str | None = None) -> Membership:
        """Remove a member from a GROUP.

        Admins may remove anyone; any member may remove themselves (leave).

        Raises:
            NotFoundError: Unknown conversation, or the user is not a member
            ValidationError: The conversation is DIRECT
            NotMemberError / NotAdminError: The actor may not remove this user
            InvariantViolation: The user is the group's only ADMIN
        """
        conversation = await self._require_group(conversation_id)
        if actor_id is not None and actor_id != user_id:
            await self._require_admin(conversation.id, actor_id)

        async with self._admin_lock:
            memberships = await self._conversations.list_memberships(conversation.id)
            target = next((m for m in memberships if m.user_id == user_id), None)
            if target is None:
                raise NotFoundError(
                    f"User {user_id} is not a member of conversation {conversation_id}",
                    details={"conversation_id": conversation_id, "user_id": user_id},
                )

            if target.role == MemberRole.ADMIN:
                admins = sum(1 for m in memberships if m.role == MemberRole.ADMIN)
                if admins <= 1:
                    raise InvariantViolation(
                        "Cannot remove the last admin of a group",
                        details={"conversation_id": conversation_id, "user_id": user_id},
                    )

            await self._conversations.delete_membership(conversation.id, user_id)

        logger.info(f"Member removed: conversation={conversation.id}, user={user_id}")
        return target

    async def _require_group(self, conversation_id: str) -> Conversation:
        conversation = await self.get_conversation(conversation_id)
        if conversation.kind != ConversationKind.GROUP:
            raise ValidationError("Direct conversations have a fixed pair of members")
        return conversation

    async def _require_admin(self, conversation_id: str, actor_id: str) -> None:
        await self.require_member(conversation_id, actor_id)
        if not await self.is_admin(conversation_id, actor_id):
            raise NotAdminError(
                f"User {actor_id} is not an admin of conversation {conversation_id}",
                details={"conversation_id": conversation_id, "user_id": actor_id},
            )
