"""Supabase-backed stream history repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from stream_coordinator.domain.streams import StreamEnding, StreamHistoryRow
from stream_coordinator.services.streams import StreamHistoryRepository


@dataclass
class SupabaseStreamHistoryRepository(StreamHistoryRepository):
    """Supabase implementation for the streams_history table."""

    client: Client

    def record_stream(self, ending: StreamEnding) -> None:
        """Insert the summary row for an ended stream."""
        stream = ending.stream
        self.client.table("streams_history").insert(
            {
                "stream_id": stream.id,
                "email": stream.details.email,
                "creator_socket": stream.creator_sid,
                "started_at": stream.created_at.isoformat(),
                "ended_at": ending.ended_at.isoformat(),
                "total_views": ending.total_views,
                "total_messages": ending.total_messages,
                "date": ending.ended_at.date().isoformat(),
            }
        ).execute()

    def list_recent(self, limit: int) -> list[StreamHistoryRow]:
        """Return recently ended streams."""
        response = (
            self.client.table("streams_history")
            .select(
                "stream_id, email, creator_socket, started_at, ended_at, "
                "total_views, total_messages"
            )
            .order("ended_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_history(row) for row in response.data or []]


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_history(row: dict[str, object]) -> StreamHistoryRow:
    return StreamHistoryRow(
        stream_id=str(row["stream_id"]),
        email=row.get("email"),
        creator_socket=row.get("creator_socket"),
        started_at=_parse_timestamp(row.get("started_at")),
        ended_at=_parse_timestamp(row.get("ended_at")),
        total_views=int(row.get("total_views") or 0),
        total_messages=int(row.get("total_messages") or 0),
    )
