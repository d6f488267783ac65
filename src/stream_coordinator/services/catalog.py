"""Read model over the active streams mirror."""

from dataclasses import dataclass

from stream_coordinator.domain.streams import ActiveStreamRow
from stream_coordinator.services.streams import ActiveStreamRepository


@dataclass
class StreamCatalogService:
    """Fetch-once listings for clients without a realtime connection."""

    repository: ActiveStreamRepository
    page_size: int = 50
    max_page_size: int = 100
    trending_limit: int = 10

    def list_active(
        self, limit: int | None = None, offset: int = 0
    ) -> list[ActiveStreamRow]:
        """Return a page of mirrored streams, newest first."""
        resolved_limit = min(limit or self.page_size, self.max_page_size)
        return self.repository.list_active(limit=resolved_limit, offset=max(offset, 0))

    def list_trending(self) -> list[ActiveStreamRow]:
        """Return the most watched mirrored streams."""
        return self.repository.list_trending(limit=self.trending_limit)


def serialize_stream(row: ActiveStreamRow) -> dict[str, object]:
    """Shape a mirror row for the HTTP listing."""
    return {
        "id": row.id,
        "email": row.email,
        "title": row.title,
        "creator_socket": row.creator_socket,
        "createdAt": row.created_at.isoformat() if row.created_at else None,
        "viewerCount": row.viewer_count,
        "thumbnailUrl": row.thumbnail_url,
        "category": row.category,
    }
