"""Liveness and storage connectivity checks."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol


class StatusRepository(Protocol):
    """Persistence interface used to check storage connectivity."""

    def ping(self) -> None:
        """Run a trivial query, raising when storage is unreachable."""


@dataclass
class HealthService:
    """Service reporting whether the API can reach its storage."""

    repository: StatusRepository

    def check(self) -> dict[str, str]:
        """Return a status snapshot; storage errors propagate."""
        self.repository.ping()
        return {
            "status": "ok",
            "database": "up",
            "checked_at": datetime.now(tz=UTC).isoformat(),
        }
