"""
Keyed record stores for users, conversations and message rows.

In-memory implementations; the storage engine itself is an external
collaborator, so these keep to the operations the service needs.
"""

from .conversations import ConversationStore
from .messages import MessageStore
from .users import UserStore

__all__ = ["ConversationStore", "MessageStore", "UserStore"]
