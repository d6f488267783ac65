"""Domain models for the stream coordinator."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    """Authenticated platform user resolved from a bearer token."""

    id: str
    email: str
