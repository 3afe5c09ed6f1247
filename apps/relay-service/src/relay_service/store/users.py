"""In-memory user records."""

import asyncio

from relay_service.errors import NotFoundError, ValidationError
from relay_service.models.user import User, utcnow


class UserStore:
    """Keyed user store.

    Reads are lock-free snapshots; writes serialize on one asyncio.Lock.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = asyncio.Lock()

    async def create(
        self,
        name: str,
        preferred_language: str = "en",
        email: str | None = None,
        user_id: str | None = None,
    ) -> User:
        """Create a user.

        Raises:
            ValidationError: If user_id is already taken
        """
        async with self._lock:
            fields = {"name": name, "preferred_language": preferred_language, "email": email}
            if user_id is not None:
                if user_id in self._users:
                    raise ValidationError(f"User {user_id} already exists")
                fields["id"] = user_id
            user = User(**fields)
            self._users[user.id] = user
            return user

    async def get(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    async def require(self, user_id: str) -> User:
        """Get a user or raise NotFoundError."""
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", details={"user_id": user_id})
        return user

    async def get_many(self, user_ids: list[str]) -> dict[str, User]:
        """Batch lookup; unknown ids are omitted."""
        return {uid: self._users[uid] for uid in user_ids if uid in self._users}

    async def update(
        self,
        user_id: str,
        name: str | None = None,
        preferred_language: str | None = None,
    ) -> User:
        """Update name and/or preferred language.

        The language is normalized to lowercase and applies from the next send.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the new language code is blank
        """
        async with self._lock:
            user = await self.require(user_id)
            changes: dict = {"updated_at": utcnow()}
            if name is not None:
                changes["name"] = name
            if preferred_language is not None:
                language = preferred_language.strip().lower()
                if len(language) < 2:
                    raise ValidationError("preferredLanguage must be a language code")
                changes["preferred_language"] = language
            updated = user.model_copy(update=changes)
            self._users[user_id] = updated
            return updated

    async def all(self) -> list[User]:
        return list(self._users.values())
