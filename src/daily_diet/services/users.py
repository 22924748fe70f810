"""User registration and profile management."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID, uuid4

from daily_diet.domain.users import UserChanges, UserRecord
from daily_diet.errors import DuplicateEmailError, NotFoundError
from daily_diet.services.validation import validate_new_user, validate_user_changes

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data.

    Implementations must enforce email uniqueness themselves and raise
    ``DuplicateEmailError`` when an insert or update would violate it.
    """

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""

    def get_by_session_id(self, session_id: UUID) -> UserRecord | None:
        """Return the user owning a session credential, if present."""

    def create_user(
        self, user_id: UUID, session_id: UUID, username: str, email: str
    ) -> UserRecord:
        """Create and return a new user record."""

    def update_user(self, user_id: UUID, changes: UserChanges) -> UserRecord | None:
        """Apply changes and return the updated user, or None if it vanished."""

    def delete_user(self, user_id: UUID) -> bool:
        """Delete a user and report whether a row was removed."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def register(self, payload: Mapping[str, object] | None) -> UserRecord:
        """Validate a registration body and create the user with a session."""
        new_user = validate_new_user(payload)
        if self.repository.get_by_email(new_user.email):
            raise DuplicateEmailError()
        user = self.repository.create_user(
            user_id=uuid4(),
            session_id=uuid4(),
            username=new_user.username,
            email=new_user.email,
        )
        logger.info("Registered user: user_id=%s", user.id)
        return user

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise when it does not exist."""
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("user not found")
        return user

    def update_user(
        self, user_id: UUID, payload: Mapping[str, object] | None
    ) -> UserRecord:
        """Apply a partial update to a user."""
        changes = validate_user_changes(payload)
        current = self.get_user(user_id)
        if changes.email is not None:
            existing = self.repository.get_by_email(changes.email)
            if existing and existing.id != current.id:
                raise DuplicateEmailError()
        if changes.is_empty():
            return current
        updated = self.repository.update_user(user_id, changes)
        if updated is None:
            raise NotFoundError("user not found")
        return updated

    def delete_user(self, user_id: UUID) -> None:
        """Delete a user or raise when it does not exist."""
        if not self.repository.delete_user(user_id):
            raise NotFoundError("user not found")
        logger.info("Deleted user: user_id=%s", user_id)
