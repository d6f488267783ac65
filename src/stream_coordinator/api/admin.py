"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

if TYPE_CHECKING:
    from stream_coordinator.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/streams", dependencies=[Depends(require_admin)])
async def live_streams(request: Request) -> dict[str, object]:
    """Return the in-memory registry of live streams."""
    container: AppContainer = request.app.state.container
    return {"streams": container.admin_service.list_live_streams()}


@router.get("/history", dependencies=[Depends(require_admin)])
async def stream_history(
    request: Request, limit: int = Query(default=20, ge=1, le=200)
) -> dict[str, object]:
    """Return recently ended streams."""
    container: AppContainer = request.app.state.container
    return {"history": container.admin_service.list_history(limit)}
