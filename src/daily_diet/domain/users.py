"""Domain models for registered users."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    session_id: UUID
    username: str
    email: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class UserChanges:
    """Validated fields for a user update; None means unchanged."""

    username: str | None = None
    email: str | None = None

    def is_empty(self) -> bool:
        return self.username is None and self.email is None


@dataclass(frozen=True)
class NewUser:
    """Validated fields for registering a user."""

    username: str
    email: str
