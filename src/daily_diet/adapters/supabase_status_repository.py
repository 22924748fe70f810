"""Supabase storage connectivity check."""

from dataclasses import dataclass

from supabase import Client

from daily_diet.services.health import StatusRepository


@dataclass
class SupabaseStatusRepository(StatusRepository):
    """Check Supabase by reading a single user id."""

    client: Client

    def ping(self) -> None:
        """Run a minimal select; client errors propagate."""
        self.client.table("users").select("id").limit(1).execute()
