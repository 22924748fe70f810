"""Domain models for session credentials."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Session:
    """An authenticated session resolved from a cookie token.

    Tokens are issued once at registration and never rotated, so
    ``expires_at`` is always None for now.
    """

    token: UUID
    user_id: UUID
    expires_at: datetime | None = None
