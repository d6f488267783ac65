"""HTTP listing of streams from the durable mirror."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from stream_coordinator.api.auth import require_user
from stream_coordinator.domain.models import AuthUser  # noqa: TC001
from stream_coordinator.services.catalog import serialize_stream

if TYPE_CHECKING:
    from stream_coordinator.containers import AppContainer
    from stream_coordinator.domain.streams import ActiveStreamRow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/streams", tags=["streams"])


@router.get("")
async def list_streams(
    request: Request,
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    user: AuthUser = Depends(require_user),
) -> JSONResponse:
    """Return live streams as mirrored in the database, newest first."""
    container: AppContainer = request.app.state.container
    try:
        rows = container.catalog_service.list_active(limit=limit, offset=offset)
    except Exception:
        logger.exception("Failed to fetch active streams", extra={"user_id": user.id})
        return _server_error()
    return _listing(rows)


@router.get("/trending")
async def list_trending_streams(
    request: Request, user: AuthUser = Depends(require_user)
) -> JSONResponse:
    """Return the most watched live streams."""
    container: AppContainer = request.app.state.container
    try:
        rows = container.catalog_service.list_trending()
    except Exception:
        logger.exception(
            "Failed to fetch trending streams", extra={"user_id": user.id}
        )
        return _server_error()
    return _listing(rows)


def _listing(rows: list[ActiveStreamRow]) -> JSONResponse:
    return JSONResponse(
        {
            "success": True,
            "count": len(rows),
            "streams": [serialize_stream(row) for row in rows],
        }
    )


def _server_error() -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": "Internal server error"}, status_code=500
    )
