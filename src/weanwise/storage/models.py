"""Data models for the identity and record store platform."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthEvent(str, Enum):
    """Auth state transitions reported to subscribers."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


class User(BaseModel):
    """An authenticated platform user."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    email: str = Field(description="Normalized (lower-case) email address")
    created_at: datetime = Field(default_factory=_utcnow)

    @field_serializer("created_at")
    def serialize_datetime(self, value: datetime) -> str:
        """Serialize datetime to ISO format."""
        return value.isoformat()


class Record(BaseModel):
    """A row in a record store table."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    table: str = Field(description="Table the record belongs to")
    data: dict[str, Any] = Field(default_factory=dict, description="Record payload")
    created_at: datetime = Field(default_factory=_utcnow)

    @field_serializer("created_at")
    def serialize_datetime(self, value: datetime) -> str:
        """Serialize datetime to ISO format."""
        return value.isoformat()

    def matches(self, filters: dict[str, Any] | None) -> bool:
        """Check equality filters against the payload."""
        if not filters:
            return True
        return all(self.data.get(key) == value for key, value in filters.items())
