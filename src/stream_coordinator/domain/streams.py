"""Domain models for live streams."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class RejectionReason(Enum):
    """Logical reasons a registry operation can be refused."""

    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"


@dataclass(frozen=True)
class Rejection:
    """Typed failure returned by the registry instead of raising."""

    reason: RejectionReason
    message: str


@dataclass(frozen=True)
class StreamDetails:
    """Descriptive metadata supplied when a stream is created."""

    email: str
    title: str | None
    category_id: str
    category: str
    thumbnail_url: str | None


@dataclass
class LiveStream:
    """In-memory state of a live stream."""

    id: str
    creator_sid: str
    details: StreamDetails
    created_at: datetime
    participants: set[str] = field(default_factory=set)

    @property
    def viewer_count(self) -> int:
        return len(self.participants)


@dataclass(frozen=True)
class StreamEnding:
    """Final snapshot of a stream that has been torn down."""

    stream: LiveStream
    ended_at: datetime
    total_views: int
    total_messages: int
    reason: str


@dataclass(frozen=True)
class Departure:
    """Result of a connection leaving a stream."""

    stream: LiveStream
    sid: str
    was_creator: bool
    ending: StreamEnding | None = None

    @property
    def ended(self) -> bool:
        return self.ending is not None


@dataclass(frozen=True)
class ActiveStreamRow:
    """Row from the active streams mirror."""

    id: str
    email: str | None
    title: str | None
    creator_socket: str | None
    created_at: datetime | None
    viewer_count: int
    thumbnail_url: str | None
    category: str


@dataclass(frozen=True)
class StreamHistoryRow:
    """Row from the stream history table."""

    stream_id: str
    email: str | None
    creator_socket: str | None
    started_at: datetime | None
    ended_at: datetime | None
    total_views: int
    total_messages: int
