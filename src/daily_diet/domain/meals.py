"""Domain models for meal records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class MealRecord:
    """A meal owned by a single user."""

    id: UUID
    user_id: UUID
    name: str
    description: str
    is_on_diet: bool
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(frozen=True)
class NewMeal:
    """Validated fields for creating a meal."""

    name: str
    description: str
    is_on_diet: bool
    created_at: datetime


@dataclass(frozen=True)
class MealChanges:
    """Validated fields for a partial meal update; None means unchanged."""

    name: str | None = None
    description: str | None = None
    is_on_diet: bool | None = None
    created_at: datetime | None = None

    def as_dict(self) -> dict[str, object]:
        """Return only the fields being changed."""
        changes: dict[str, object] = {}
        if self.name is not None:
            changes["name"] = self.name
        if self.description is not None:
            changes["description"] = self.description
        if self.is_on_diet is not None:
            changes["is_on_diet"] = self.is_on_diet
        if self.created_at is not None:
            changes["created_at"] = self.created_at
        return changes
