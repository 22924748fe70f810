"""Session cookie authentication."""

import logging
from dataclasses import dataclass
from uuid import UUID

from daily_diet.domain.sessions import Session
from daily_diet.errors import UnauthorizedError
from daily_diet.services.users import UserRepository
from daily_diet.services.validation import parse_canonical_uuid

logger = logging.getLogger(__name__)


@dataclass
class SessionAuthenticator:
    """Resolve a session cookie to an authenticated session.

    A missing cookie, a value that is not a UUID and a UUID that belongs to
    no user all raise the same ``UnauthorizedError`` so callers cannot tell
    which check failed.
    """

    users: UserRepository

    def authenticate(self, raw_token: str | None) -> Session:
        """Return the session for a cookie value or raise UnauthorizedError."""
        token = _parse_token(raw_token)
        if token is None:
            raise _rejected()
        session = self.resolve(token)
        if session is None:
            raise _rejected()
        return session

    def resolve(self, token: UUID) -> Session | None:
        """Look up the session owning a token."""
        user = self.users.get_by_session_id(token)
        if user is None:
            return None
        return Session(token=user.session_id, user_id=user.id)


def _parse_token(raw_token: str | None) -> UUID | None:
    if not raw_token:
        return None
    try:
        return parse_canonical_uuid(raw_token)
    except ValueError:
        return None


def _rejected() -> UnauthorizedError:
    logger.debug("Rejected request with missing or invalid session")
    return UnauthorizedError()
