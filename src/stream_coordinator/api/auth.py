"""Bearer token dependency for authenticated endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from stream_coordinator.domain.models import AuthUser  # noqa: TC001
from stream_coordinator.services.auth import AuthenticationError

if TYPE_CHECKING:
    from stream_coordinator.containers import AppContainer


async def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> AuthUser:
    """Resolve the calling user from the Authorization header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: No token provided",
        )
    token = authorization.removeprefix("Bearer ").strip()
    container: AppContainer = request.app.state.container
    try:
        return container.auth_service.authenticate(token)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)
        ) from exc
