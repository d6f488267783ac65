"""Supabase-backed mirror of live streams."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from stream_coordinator.domain.streams import ActiveStreamRow, LiveStream
from stream_coordinator.services.streams import ActiveStreamRepository

_LISTING_COLUMNS = (
    "stream_id, email, stream_title, creator_socket, created_at, viewer_count, "
    "thumbnail_url, stream_category_id (name)"
)


@dataclass
class SupabaseActiveStreamRepository(ActiveStreamRepository):
    """Supabase implementation for the active_streams table."""

    client: Client

    def insert_stream(self, stream: LiveStream) -> None:
        """Insert the mirror row for a new stream."""
        response = (
            self.client.table("active_streams")
            .insert(
                {
                    "stream_id": stream.id,
                    "email": stream.details.email,
                    "stream_title": stream.details.title,
                    "stream_category_id": stream.details.category_id,
                    "creator_socket": stream.creator_sid,
                    "created_at": stream.created_at.isoformat(),
                    "viewer_count": stream.viewer_count,
                    "thumbnail_url": stream.details.thumbnail_url,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create active stream record")

    def update_viewer_count(self, stream_id: str, viewer_count: int) -> None:
        """Update the mirrored viewer count."""
        self.client.table("active_streams").update(
            {"viewer_count": viewer_count}
        ).eq("stream_id", stream_id).execute()

    def delete_stream(self, stream_id: str) -> None:
        """Delete the mirror row for a stream."""
        self.client.table("active_streams").delete().eq(
            "stream_id", stream_id
        ).execute()

    def list_active(self, limit: int, offset: int) -> list[ActiveStreamRow]:
        """Return a page of mirrored streams, newest first."""
        response = (
            self.client.table("active_streams")
            .select(_LISTING_COLUMNS)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [_parse_active_stream(row) for row in response.data or []]

    def list_trending(self, limit: int) -> list[ActiveStreamRow]:
        """Return mirrored streams ordered by viewer count."""
        response = (
            self.client.table("active_streams")
            .select(_LISTING_COLUMNS)
            .order("viewer_count", desc=True)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_active_stream(row) for row in response.data or []]


def _parse_active_stream(row: dict[str, object]) -> ActiveStreamRow:
    """Parse an active_streams row into a domain model."""
    created_raw = row.get("created_at")
    category = row.get("stream_category_id")
    category_name = category.get("name") if isinstance(category, dict) else None
    return ActiveStreamRow(
        id=str(row["stream_id"]),
        email=row.get("email"),
        title=row.get("stream_title"),
        creator_socket=row.get("creator_socket"),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
        viewer_count=int(row.get("viewer_count") or 0),
        thumbnail_url=row.get("thumbnail_url"),
        category=str(category_name or "Uncategorized"),
    )
