"""Meal record management scoped to the owning user."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from daily_diet.domain.meals import MealChanges, MealRecord, NewMeal
from daily_diet.domain.sessions import Session
from daily_diet.domain.stats import DietMetrics
from daily_diet.errors import NotFoundError
from daily_diet.services.stats import analyze_meals
from daily_diet.services.validation import validate_meal_changes, validate_new_meal

logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meal records."""

    def get_owned_meal(self, meal_id: UUID, user_id: UUID) -> MealRecord | None:
        """Return a meal matching both id and owner in one query."""

    def list_meals(self, user_id: UUID) -> list[MealRecord]:
        """Return a user's meals ordered by created_at, newest first."""

    def create_meal(self, meal_id: UUID, user_id: UUID, meal: NewMeal) -> MealRecord:
        """Insert a meal and return it."""

    def update_meal(
        self,
        meal_id: UUID,
        user_id: UUID,
        changes: MealChanges,
        updated_at: datetime,
    ) -> MealRecord | None:
        """Update an owned meal, returning None when no row matched."""

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> bool:
        """Delete an owned meal and report whether a row was removed."""


@dataclass
class MealOwnershipGuard:
    """Confirms a meal belongs to the session's user before mutation.

    A meal owned by someone else is reported exactly like a missing one.
    """

    repository: MealRepository

    def require_owned(self, session: Session, meal_id: UUID) -> MealRecord:
        """Return the owned meal or raise NotFoundError."""
        meal = self.repository.get_owned_meal(meal_id, session.user_id)
        if meal is None:
            raise meal_not_found()
        return meal


@dataclass
class MealService:
    """Application service for a user's meals."""

    repository: MealRepository
    guard: MealOwnershipGuard = field(init=False)

    def __post_init__(self) -> None:
        self.guard = MealOwnershipGuard(self.repository)

    def list_meals(self, session: Session) -> list[MealRecord]:
        """Return the session user's meals."""
        return self.repository.list_meals(session.user_id)

    def create_meal(
        self, session: Session, payload: Mapping[str, object] | None
    ) -> MealRecord:
        """Validate a creation body and store the meal."""
        meal = validate_new_meal(payload)
        created = self.repository.create_meal(
            meal_id=uuid4(), user_id=session.user_id, meal=meal
        )
        logger.info("Created meal: meal_id=%s", created.id)
        return created

    def update_meal(
        self, session: Session, meal_id: UUID, payload: Mapping[str, object] | None
    ) -> MealRecord:
        """Validate a partial update and apply it to an owned meal."""
        changes = validate_meal_changes(payload)
        self.guard.require_owned(session, meal_id)
        updated = self.repository.update_meal(
            meal_id=meal_id,
            user_id=session.user_id,
            changes=changes,
            updated_at=datetime.now(tz=UTC),
        )
        if updated is None:
            # Deleted between the ownership check and the update.
            raise meal_not_found()
        return updated

    def delete_meal(self, session: Session, meal_id: UUID) -> None:
        """Delete an owned meal."""
        self.guard.require_owned(session, meal_id)
        if not self.repository.delete_meal(meal_id, session.user_id):
            raise meal_not_found()
        logger.info("Deleted meal: meal_id=%s", meal_id)

    def get_metrics(self, session: Session) -> DietMetrics:
        """Return totals and the best on-diet streak for the session user."""
        return analyze_meals(self.repository.list_meals(session.user_id))


def meal_not_found() -> NotFoundError:
    return NotFoundError("meal not found")
