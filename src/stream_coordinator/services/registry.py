"""In-memory registry of live streams.

The registry is the authority on which streams are live and who is in them.
It holds no external resources and every operation is synchronous, so it must
only be mutated from the event loop that owns it. Logical failures come back
as ``Rejection`` values rather than exceptions.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from stream_coordinator.domain.streams import (
    Departure,
    LiveStream,
    Rejection,
    RejectionReason,
    StreamDetails,
    StreamEnding,
)

ENDED_BY_CREATOR = "stopped"
ENDED_CREATOR_LEFT = "creator_left"
ENDED_EMPTY = "empty"


@dataclass
class StreamRegistry:
    """Process-local map of live streams plus their message counters."""

    _streams: dict[str, LiveStream] = field(default_factory=dict)
    _message_counts: dict[str, int] = field(default_factory=dict)

    def is_live(self, stream_id: str) -> bool:
        """Return true when the stream is registered."""
        return stream_id in self._streams

    def get(self, stream_id: str) -> LiveStream | None:
        """Return a live stream by id, if present."""
        return self._streams.get(stream_id)

    def list_streams(self) -> list[LiveStream]:
        """Return all live streams in creation order."""
        return list(self._streams.values())

    def message_count(self, stream_id: str) -> int | None:
        """Return the relayed message count, or None when not live."""
        return self._message_counts.get(stream_id)

    def create(
        self, stream_id: str, creator_sid: str, details: StreamDetails
    ) -> LiveStream | Rejection:
        """Register a stream with its creator as the first participant."""
        if stream_id in self._streams:
            return Rejection(RejectionReason.CONFLICT, "Stream already exists.")
        stream = LiveStream(
            id=stream_id,
            creator_sid=creator_sid,
            details=details,
            created_at=datetime.now(tz=UTC),
            participants={creator_sid},
        )
        self._streams[stream_id] = stream
        self._message_counts[stream_id] = 0
        return stream

    def discard(self, stream_id: str) -> None:
        """Drop a stream without producing an ending."""
        self._streams.pop(stream_id, None)
        self._message_counts.pop(stream_id, None)

    def join(self, stream_id: str, sid: str) -> LiveStream | Rejection:
        """Add a participant. Joining twice is a successful no-op."""
        stream = self._streams.get(stream_id)
        if stream is None:
            return Rejection(RejectionReason.NOT_FOUND, "Stream does not exist.")
        stream.participants.add(sid)
        return stream

    def leave(self, stream_id: str, sid: str) -> Departure | None:
        """Remove a participant, tearing the stream down when required."""
        stream = self._streams.get(stream_id)
        if stream is None or sid not in stream.participants:
            return None
        return self._depart(stream, sid)

    def stop(self, stream_id: str, requester_sid: str) -> StreamEnding | Rejection:
        """End a stream on behalf of its creator."""
        stream = self._streams.get(stream_id)
        if stream is None:
            return Rejection(RejectionReason.NOT_FOUND, "Stream does not exist.")
        if stream.creator_sid != requester_sid:
            return Rejection(
                RejectionReason.UNAUTHORIZED, "Only the creator can stop this stream."
            )
        return self._end(
            stream, total_views=stream.viewer_count, reason=ENDED_BY_CREATOR
        )

    def record_message(self, stream_id: str, sid: str) -> int | Rejection:
        """Count a relayed message from a current participant."""
        stream = self._streams.get(stream_id)
        if stream is None or sid not in stream.participants:
            return Rejection(
                RejectionReason.UNAUTHORIZED,
                "Not authorized to send messages to this stream.",
            )
        count = self._message_counts.get(stream_id, 0) + 1
        self._message_counts[stream_id] = count
        return count

    def remove_connection(self, sid: str) -> list[Departure]:
        """Remove a dropped connection from every stream it was part of."""
        departures = []
        for stream in list(self._streams.values()):
            if sid in stream.participants:
                departures.append(self._depart(stream, sid))
        return departures

    def snapshot(self) -> list[dict[str, object]]:
        """Return the public list of live streams for broadcasts."""
        return [
            {
                "id": stream.id,
                "email": stream.details.email,
                "title": stream.details.title,
                "category": stream.details.category,
                "categoryId": stream.details.category_id,
                "createdAt": stream.created_at.isoformat(),
                "viewerCount": stream.viewer_count,
                "thumbnailUrl": stream.details.thumbnail_url,
            }
            for stream in self._streams.values()
        ]

    def _depart(self, stream: LiveStream, sid: str) -> Departure:
        views_before = stream.viewer_count
        stream.participants.discard(sid)
        was_creator = sid == stream.creator_sid
        if was_creator or not stream.participants:
            ending = self._end(
                stream,
                total_views=views_before,
                reason=ENDED_CREATOR_LEFT if was_creator else ENDED_EMPTY,
            )
            return Departure(
                stream=stream, sid=sid, was_creator=was_creator, ending=ending
            )
        return Departure(stream=stream, sid=sid, was_creator=was_creator)

    def _end(self, stream: LiveStream, total_views: int, reason: str) -> StreamEnding:
        total_messages = self._message_counts.get(stream.id, 0)
        self.discard(stream.id)
        return StreamEnding(
            stream=stream,
            ended_at=datetime.now(tz=UTC),
            total_views=total_views,
            total_messages=total_messages,
            reason=reason,
        )
