"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from httpx import Response

from daily_diet.api.app import create_app
from daily_diet.config import Settings
from daily_diet.containers import AppContainer
from daily_diet.domain.meals import MealChanges, MealRecord, NewMeal
from daily_diet.domain.users import UserChanges, UserRecord
from daily_diet.errors import DuplicateEmailError
from daily_diet.services.health import HealthService, StatusRepository
from daily_diet.services.meals import MealRepository, MealService
from daily_diet.services.sessions import SessionAuthenticator
from daily_diet.services.users import UserRepository, UserService

# JWT-shaped so the Supabase client accepts it without network access.
FAKE_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)

@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository with a unique email constraint."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        return self._owner_of(email)

    def get_by_session_id(self, session_id: UUID) -> UserRecord | None:
        for user in self.users.values():
            if user.session_id == session_id:
                return user
        return None

    def create_user(
        self, user_id: UUID, session_id: UUID, username: str, email: str
    ) -> UserRecord:
        if self._owner_of(email):
            raise DuplicateEmailError()
        user = UserRecord(
            id=user_id,
            session_id=session_id,
            username=username,
            email=email,
            created_at=datetime.now(tz=UTC),
        )
        self.users[user_id] = user
        return user

    def update_user(self, user_id: UUID, changes: UserChanges) -> UserRecord | None:
        current = self.users.get(user_id)
        if current is None:
            return None
        if changes.email is not None:
            owner = self._owner_of(changes.email)
            if owner and owner.id != user_id:
                raise DuplicateEmailError()
        updated = replace(
            current,
            username=changes.username or current.username,
            email=changes.email or current.email,
        )
        self.users[user_id] = updated
        return updated

    def delete_user(self, user_id: UUID) -> bool:
        return self.users.pop(user_id, None) is not None

    def _owner_of(self, email: str) -> UserRecord | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealRecord] = field(default_factory=dict)
    vanish_on_mutate: bool = False

    def get_owned_meal(self, meal_id: UUID, user_id: UUID) -> MealRecord | None:
        meal = self.meals.get(meal_id)
        if meal is None or meal.user_id != user_id:
            return None
        return meal

    def list_meals(self, user_id: UUID) -> list[MealRecord]:
        owned = [meal for meal in self.meals.values() if meal.user_id == user_id]
        return sorted(owned, key=lambda meal: meal.created_at, reverse=True)

    def create_meal(self, meal_id: UUID, user_id: UUID, meal: NewMeal) -> MealRecord:
        record = MealRecord(
            id=meal_id,
            user_id=user_id,
            name=meal.name,
            description=meal.description,
            is_on_diet=meal.is_on_diet,
            created_at=meal.created_at,
        )
        self.meals[meal_id] = record
        return record

    def update_meal(
        self,
        meal_id: UUID,
        user_id: UUID,
        changes: MealChanges,
        updated_at: datetime,
    ) -> MealRecord | None:
        self._simulate_concurrent_delete(meal_id)
        current = self.get_owned_meal(meal_id, user_id)
        if current is None:
            return None
        updated = replace(current, **changes.as_dict(), updated_at=updated_at)
        self.meals[meal_id] = updated
        return updated

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> bool:
        self._simulate_concurrent_delete(meal_id)
        if self.get_owned_meal(meal_id, user_id) is None:
            return False
        del self.meals[meal_id]
        return True

    def _simulate_concurrent_delete(self, meal_id: UUID) -> None:
        if self.vanish_on_mutate:
            self.meals.pop(meal_id, None)


@dataclass
class FakeStatusRepository(StatusRepository):
    """Status check that can be switched to failing."""

    healthy: bool = True
    pings: int = 0

    def ping(self) -> None:
        self.pings += 1
        if not self.healthy:
            raise ConnectionError("database unreachable")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=FAKE_SERVICE_KEY,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def status_repository() -> FakeStatusRepository:
    return FakeStatusRepository()


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    meal_repository: InMemoryMealRepository,
    status_repository: FakeStatusRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        user_service=UserService(user_repository),
        session_authenticator=SessionAuthenticator(user_repository),
        meal_service=MealService(meal_repository),
        health_service=HealthService(status_repository),
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def register_user(
    client: TestClient, username: str = "meal_user", email: str = "a@example.com"
) -> Response:
    """Register a user without keeping its cookie on the client."""
    response = client.post("/users", json={"username": username, "email": email})
    client.cookies.clear()
    return response


def session_headers(session_id: str) -> dict[str, str]:
    return {"Cookie": f"sessionId={session_id}"}


def salad(**overrides: object) -> dict[str, object]:
    """Return a valid meal creation body."""
    body: dict[str, object] = {
        "name": "Salad",
        "description": "Fresh vegetable salad",
        "is_on_diet": True,
        "created_at": "2024-01-01T12:00:00Z",
    }
    body.update(overrides)
    return body
