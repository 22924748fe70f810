"""Supabase repository for meal records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from daily_diet.domain.meals import MealChanges, MealRecord, NewMeal
from daily_diet.services.meals import MealRepository

_MEAL_COLUMNS = "id, user_id, name, description, is_on_diet, created_at, updated_at"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals.

    Every lookup and mutation filters on ``user_id`` as well as ``id``.
    """

    client: Client

    def get_owned_meal(self, meal_id: UUID, user_id: UUID) -> MealRecord | None:
        """Return a meal matching both id and owner."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(self, user_id: UUID) -> list[MealRecord]:
        """Return a user's meals, newest first."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def create_meal(self, meal_id: UUID, user_id: UUID, meal: NewMeal) -> MealRecord:
        """Insert a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "id": str(meal_id),
                    "user_id": str(user_id),
                    "name": meal.name,
                    "description": meal.description,
                    "is_on_diet": meal.is_on_diet,
                    "created_at": meal.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def update_meal(
        self,
        meal_id: UUID,
        user_id: UUID,
        changes: MealChanges,
        updated_at: datetime,
    ) -> MealRecord | None:
        """Update an owned meal row."""
        payload = {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in changes.as_dict().items()
        }
        payload["updated_at"] = updated_at.isoformat()
        response = (
            self.client.table("meals")
            .update(payload)
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> bool:
        """Delete an owned meal row."""
        response = (
            self.client.table("meals")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_meal(row: dict[str, object]) -> MealRecord:
    updated_at = row.get("updated_at")
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row["name"]),
        description=str(row["description"]),
        is_on_diet=bool(row["is_on_diet"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=(
            datetime.fromisoformat(updated_at)
            if isinstance(updated_at, str) and updated_at
            else None
        ),
    )
