"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from daily_diet.domain.users import UserChanges, UserRecord
from daily_diet.errors import DuplicateEmailError
from daily_diet.services.users import UserRepository

_USER_COLUMNS = "id, session_id, username, email, created_at"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence.

    Email uniqueness is guaranteed by a unique index on ``users.email``.
    """

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        return self._find_one("id", str(user_id))

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""
        return self._find_one("email", email)

    def get_by_session_id(self, session_id: UUID) -> UserRecord | None:
        """Return the user owning a session credential, if present."""
        return self._find_one("session_id", str(session_id))

    def create_user(
        self, user_id: UUID, session_id: UUID, username: str, email: str
    ) -> UserRecord:
        """Create a new user row and return it."""
        try:
            response = (
                self.client.table("users")
                .insert(
                    {
                        "id": str(user_id),
                        "session_id": str(session_id),
                        "username": username,
                        "email": email,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateEmailError() from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_user(self, user_id: UUID, changes: UserChanges) -> UserRecord | None:
        """Update username and/or email for a user."""
        payload: dict[str, object] = {}
        if changes.username is not None:
            payload["username"] = changes.username
        if changes.email is not None:
            payload["email"] = changes.email
        try:
            response = (
                self.client.table("users")
                .update(payload)
                .eq("id", str(user_id))
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateEmailError() from exc
            raise
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def delete_user(self, user_id: UUID) -> bool:
        """Delete a user row."""
        response = self.client.table("users").delete().eq("id", str(user_id)).execute()
        return bool(response.data)

    def _find_one(self, column: str, value: str) -> UserRecord | None:
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None


def _parse_user(row: dict[str, object]) -> UserRecord:
    created_at = row.get("created_at")
    return UserRecord(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        username=str(row["username"]),
        email=str(row["email"]),
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )
