"""Bearer token authentication against the external auth provider."""

from dataclasses import dataclass
from typing import Protocol

from stream_coordinator.domain.models import AuthUser


class AuthRepository(Protocol):
    """Interface for verifying tokens and loading profiles."""

    def get_user_for_token(self, token: str) -> tuple[str, str] | None:
        """Return (user id, email) for a valid access token."""

    def get_profile(self, user_id: str) -> dict[str, object] | None:
        """Return the profile row for a user, if present."""


class AuthenticationError(Exception):
    """Raised when a request cannot be authenticated."""


@dataclass
class AuthService:
    """Resolves platform users from bearer tokens."""

    repository: AuthRepository

    def authenticate(self, token: str) -> AuthUser:
        """Return the user owning the token or raise AuthenticationError."""
        identity = self.repository.get_user_for_token(token)
        if identity is None:
            raise AuthenticationError("Unauthorized: Invalid token")
        user_id, email = identity
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise AuthenticationError("Unauthorized: User profile not found")
        return AuthUser(id=user_id, email=email)
