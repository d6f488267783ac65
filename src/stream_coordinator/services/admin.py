"""Admin service for inspecting live and past streams."""

from dataclasses import dataclass

from stream_coordinator.domain.streams import LiveStream, StreamHistoryRow
from stream_coordinator.services.registry import StreamRegistry
from stream_coordinator.services.streams import StreamHistoryRepository


@dataclass
class AdminService:
    """Service for admin dashboards."""

    registry: StreamRegistry
    history_repository: StreamHistoryRepository

    def list_live_streams(self) -> list[dict[str, object]]:
        """Return the in-memory view of every live stream."""
        return [
            _serialize_live_stream(stream, self.registry.message_count(stream.id) or 0)
            for stream in self.registry.list_streams()
        ]

    def list_history(self, limit: int = 20) -> list[dict[str, object]]:
        """Return recently ended streams."""
        return [
            _serialize_history(row)
            for row in self.history_repository.list_recent(limit)
        ]


def _serialize_live_stream(
    stream: LiveStream, message_count: int
) -> dict[str, object]:
    return {
        "id": stream.id,
        "email": stream.details.email,
        "title": stream.details.title,
        "category": stream.details.category,
        "creator_sid": stream.creator_sid,
        "participants": sorted(stream.participants),
        "viewer_count": stream.viewer_count,
        "message_count": message_count,
        "created_at": stream.created_at.isoformat(),
    }


def _serialize_history(row: StreamHistoryRow) -> dict[str, object]:
    return {
        "stream_id": row.stream_id,
        "email": row.email,
        "creator_socket": row.creator_socket,
        "started_at": row.started_at.isoformat() if row.started_at else None,
        "ended_at": row.ended_at.isoformat() if row.ended_at else None,
        "total_views": row.total_views,
        "total_messages": row.total_messages,
    }
