"""User model.

Only the fields the delivery pipeline reads are modelled here; credentials
and profile details live with the (external) account service.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class User(BaseModel):
    """A messaging user and their standing language preference.

    preferred_language is read at send time for every recipient, so a
    change takes effect on the next message.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(min_length=1)
    email: str | None = None
    preferred_language: str = Field(default="en", min_length=2, max_length=10)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("preferred_language")
    @classmethod
    def normalize_language(cls, value: str) -> str:
        return value.strip().lower()

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
