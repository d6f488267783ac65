"""Socket.IO event names for the streaming protocol."""

from enum import Enum


class ClientEvent(str, Enum):
    """Events accepted from connected clients (single source of truth)."""

    CREATE_STREAM = "create_stream"
    JOIN_STREAM = "join_stream"
    LEAVE_STREAM = "leave_stream"
    STOP_STREAM = "stop_stream"
    STREAM_MESSAGE = "stream_message"
    CHAT_MESSAGE = "chatMessage"
    SIGNAL = "signal"


class ServerEvent(str, Enum):
    """Events emitted by the server."""

    STREAMS_UPDATED = "streams_updated"
    STREAM_ERROR = "streamError"
    VIEWER_JOINED = "viewer-joined"
    VIEWER_LEFT = "viewer-left"
    NEW_PARTICIPANT = "newParticipant"
    VIEWER_COUNT_UPDATE = "viewer_count_update"
    STREAM_ENDED = "stream_ended"
    STREAM_MESSAGE = "stream_message"
    CHAT_MESSAGE = "chatMessage"
    SIGNAL = "signal"


def client_events() -> list[str]:
    """Return the event names the gateway subscribes to."""
    return [event.value for event in ClientEvent]
