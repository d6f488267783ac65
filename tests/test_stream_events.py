"""Tests for Socket.IO event names."""

from stream_coordinator.stream_events import ClientEvent, ServerEvent, client_events


def test_client_events_match_protocol() -> None:
    assert client_events() == [
        "create_stream",
        "join_stream",
        "leave_stream",
        "stop_stream",
        "stream_message",
        "chatMessage",
        "signal",
    ]
    assert ClientEvent.CHAT_MESSAGE.value == ServerEvent.CHAT_MESSAGE.value


def test_server_event_names() -> None:
    assert ServerEvent.VIEWER_JOINED.value == "viewer-joined"
    assert ServerEvent.STREAM_ERROR.value == "streamError"
    assert ServerEvent.STREAMS_UPDATED.value == "streams_updated"
