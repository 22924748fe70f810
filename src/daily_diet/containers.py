"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from daily_diet.adapters.supabase_meal_repository import SupabaseMealRepository
from daily_diet.adapters.supabase_status_repository import SupabaseStatusRepository
from daily_diet.adapters.supabase_user_repository import SupabaseUserRepository
from daily_diet.config import Settings
from daily_diet.services.health import HealthService
from daily_diet.services.meals import MealService
from daily_diet.services.sessions import SessionAuthenticator
from daily_diet.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    session_authenticator: SessionAuthenticator
    meal_service: MealService
    health_service: HealthService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    status_repository = SupabaseStatusRepository(supabase_client)
    return AppContainer(
        settings=resolved_settings,
        user_service=UserService(user_repository),
        session_authenticator=SessionAuthenticator(user_repository),
        meal_service=MealService(meal_repository),
        health_service=HealthService(status_repository),
    )
