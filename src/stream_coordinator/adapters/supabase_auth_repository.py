"""Supabase Auth token verification and profile lookup."""

import logging
from dataclasses import dataclass

from supabase import Client

from stream_coordinator.services.auth import AuthRepository

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthRepository(AuthRepository):
    """Verifies access tokens with Supabase Auth."""

    client: Client

    def get_user_for_token(self, token: str) -> tuple[str, str] | None:
        """Return (user id, email) when Supabase accepts the token."""
        try:
            response = self.client.auth.get_user(token)
        except Exception:
            logger.warning("Supabase rejected access token", exc_info=True)
            return None
        user = response.user if response else None
        if user is None:
            return None
        return str(user.id), user.email or ""

    def get_profile(self, user_id: str) -> dict[str, object] | None:
        """Return the profile row for a user."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]
