"""Live stream event gateway.

Translates realtime events into registry operations, mirrors the outcome to
the durable store and fans the result out to connected clients. The registry
is always mutated before the store is touched; mirror failures outside of
``create_stream`` are logged and never block teardown or broadcasts.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from stream_coordinator.adapters.realtime_client import RealtimeClient
from stream_coordinator.domain.events import (
    ChatMessagePayload,
    CreateStreamPayload,
    JoinStreamPayload,
    LeaveStreamPayload,
    SignalPayload,
    StopStreamPayload,
    StreamMessagePayload,
)
from stream_coordinator.domain.streams import (
    ActiveStreamRow,
    Departure,
    LiveStream,
    Rejection,
    StreamDetails,
    StreamEnding,
    StreamHistoryRow,
)
from stream_coordinator.services.categories import CategoryService
from stream_coordinator.services.registry import StreamRegistry
from stream_coordinator.stream_events import ServerEvent

logger = logging.getLogger(__name__)


class ActiveStreamRepository(Protocol):
    """Persistence interface for the active streams mirror."""

    def insert_stream(self, stream: LiveStream) -> None:
        """Insert the mirror row for a newly created stream."""

    def update_viewer_count(self, stream_id: str, viewer_count: int) -> None:
        """Update the mirrored viewer count."""

    def delete_stream(self, stream_id: str) -> None:
        """Delete the mirror row for an ended stream."""

    def list_active(self, limit: int, offset: int) -> list[ActiveStreamRow]:
        """Return mirrored streams, newest first."""

    def list_trending(self, limit: int) -> list[ActiveStreamRow]:
        """Return mirrored streams with the most viewers first."""


class StreamHistoryRepository(Protocol):
    """Persistence interface for ended stream summaries."""

    def record_stream(self, ending: StreamEnding) -> None:
        """Insert a history row for an ended stream."""

    def list_recent(self, limit: int) -> list[StreamHistoryRow]:
        """Return the most recently ended streams."""


@dataclass
class StreamService:
    """Coordinates stream lifecycle events for connected clients."""

    registry: StreamRegistry
    active_stream_repository: ActiveStreamRepository
    history_repository: StreamHistoryRepository
    category_service: CategoryService
    realtime: RealtimeClient

    async def connect(self, sid: str) -> None:
        """Send the current stream list to a new connection."""
        logger.info("Client connected", extra={"sid": sid})
        await self.realtime.emit(
            ServerEvent.STREAMS_UPDATED.value, self.registry.snapshot(), to=sid
        )

    async def create_stream(self, sid: str, payload: CreateStreamPayload) -> None:
        """Register a new stream owned by the sending connection."""
        stream_id = payload.stream_id
        if self.registry.is_live(stream_id):
            await self.reject(sid, "Stream already exists.")
            return

        try:
            category_id = await asyncio.to_thread(
                self.category_service.ensure_category, payload.category
            )
        except Exception:
            logger.exception(
                "Failed to resolve stream category",
                extra={"stream_id": stream_id, "category": payload.category},
            )
            await self.reject(sid, "Failed to resolve stream category.")
            return

        result = self.registry.create(
            stream_id,
            sid,
            StreamDetails(
                email=payload.email,
                title=payload.title,
                category_id=category_id,
                category=payload.category,
                thumbnail_url=payload.thumbnail_url,
            ),
        )
        if isinstance(result, Rejection):
            await self.reject(sid, result.message)
            return

        await self.realtime.enter_room(sid, stream_id)
        try:
            await asyncio.to_thread(
                self.active_stream_repository.insert_stream, result
            )
        except Exception:
            logger.exception(
                "Failed to create active stream record",
                extra={"stream_id": stream_id},
            )
            await self._roll_back_creation(sid, result)
            return

        if self.registry.get(stream_id) is not result:
            # Ended while the insert was in flight; its teardown ran already.
            await self._mirror(
                "delete active stream",
                self.active_stream_repository.delete_stream,
                stream_id,
            )
            return

        logger.info(
            "Stream created",
            extra={"stream_id": stream_id, "sid": sid, "category": payload.category},
        )
        await self._broadcast_streams()

    async def join_stream(self, sid: str, payload: JoinStreamPayload) -> None:
        """Add the sending connection to a live stream."""
        result = self.registry.join(payload.stream_id, sid)
        if isinstance(result, Rejection):
            await self.reject(sid, result.message)
            return

        stream = result
        await self.realtime.enter_room(sid, stream.id)
        await self._mirror(
            "update viewer count",
            self.active_stream_repository.update_viewer_count,
            stream.id,
            stream.viewer_count,
        )
        await self.realtime.emit(
            ServerEvent.VIEWER_JOINED.value,
            {"viewerSocketId": sid},
            to=stream.creator_sid,
        )
        await self.realtime.emit(
            ServerEvent.NEW_PARTICIPANT.value,
            {"email": payload.email, "viewerCount": stream.viewer_count},
            to=stream.id,
        )
        logger.info(
            "Viewer joined stream",
            extra={"stream_id": stream.id, "sid": sid},
        )
        await self._broadcast_streams()

    async def leave_stream(self, sid: str, payload: LeaveStreamPayload) -> None:
        """Remove the sending connection from a stream it joined."""
        departure = self.registry.leave(payload.stream_id, sid)
        if departure is None:
            return
        if departure.ended:
            # The leaving creator is still in the room for stream_ended.
            await self._handle_departure(departure)
        else:
            await self.realtime.leave_room(sid, departure.stream.id)
            await self._handle_departure(departure)
        await self._broadcast_streams()

    async def stop_stream(self, sid: str, payload: StopStreamPayload) -> None:
        """End a stream at the request of its creator."""
        result = self.registry.stop(payload.stream_id, sid)
        if isinstance(result, Rejection):
            await self.reject(sid, result.message)
            return
        await self._end_stream(result)
        await self._broadcast_streams()

    async def send_stream_message(
        self, sid: str, payload: StreamMessagePayload
    ) -> None:
        """Relay a generic stream message to the stream room."""
        result = self.registry.record_message(payload.stream_id, sid)
        if isinstance(result, Rejection):
            await self.reject(sid, result.message)
            return
        await self.realtime.emit(
            ServerEvent.STREAM_MESSAGE.value,
            {
                "from": sid,
                "message": payload.message,
                "timestamp": _now_iso(),
            },
            to=payload.stream_id,
        )

    async def send_chat_message(self, sid: str, payload: ChatMessagePayload) -> None:
        """Relay a structured chat message to the stream room."""
        result = self.registry.record_message(payload.stream_id, sid)
        if isinstance(result, Rejection):
            await self.reject(sid, result.message)
            return
        server_timestamp = _now_iso()
        await self.realtime.emit(
            ServerEvent.CHAT_MESSAGE.value,
            {
                "id": payload.id,
                "user": payload.user,
                "text": payload.text,
                "isSystem": payload.is_system,
                "timestamp": payload.timestamp or server_timestamp,
                "serverTimestamp": server_timestamp,
                "streamId": payload.stream_id,
                "from": sid,
            },
            to=payload.stream_id,
        )

    async def relay_signal(self, sid: str, payload: SignalPayload) -> None:
        """Forward opaque peer negotiation data to a single connection."""
        # Stream ids double as room names; a signal must never fan out.
        if self.registry.is_live(payload.to):
            await self.reject(sid, "Signal target must be a connection.")
            return
        await self.realtime.emit(
            ServerEvent.SIGNAL.value,
            {"from": sid, "data": payload.data},
            to=payload.to,
        )

    async def disconnect(self, sid: str) -> None:
        """Clean up every stream the dropped connection took part in."""
        departures = self.registry.remove_connection(sid)
        logger.info(
            "Client disconnected",
            extra={
                "sid": sid,
                "ended_streams": [d.stream.id for d in departures if d.ended],
            },
        )
        if not departures:
            return
        for departure in departures:
            await self._handle_departure(departure)
        await self._broadcast_streams()

    async def reject(self, sid: str, message: str) -> None:
        """Report an error to the originating connection only."""
        logger.warning("Rejected stream event", extra={"sid": sid, "reason": message})
        await self.realtime.emit(
            ServerEvent.STREAM_ERROR.value, {"message": message}, to=sid
        )

    async def _roll_back_creation(self, sid: str, stream: LiveStream) -> None:
        if self.registry.get(stream.id) is not stream:
            await self.reject(sid, "Failed to create stream record.")
            return
        joined = stream.participants - {sid}
        self.registry.discard(stream.id)
        await self.reject(sid, "Failed to create stream record.")
        if joined:
            await self.realtime.emit(
                ServerEvent.STREAM_ENDED.value, {"streamId": stream.id}, to=stream.id
            )
        await self.realtime.close_room(stream.id)
        if joined:
            await self._broadcast_streams()

    async def _handle_departure(self, departure: Departure) -> None:
        if departure.ending is not None:
            await self._end_stream(departure.ending)
            return
        stream = departure.stream
        await self._mirror(
            "update viewer count",
            self.active_stream_repository.update_viewer_count,
            stream.id,
            stream.viewer_count,
        )
        await self.realtime.emit(
            ServerEvent.VIEWER_LEFT.value,
            {"viewerSocketId": departure.sid},
            to=stream.creator_sid,
        )
        await self.realtime.emit(
            ServerEvent.VIEWER_COUNT_UPDATE.value,
            {"viewerCount": stream.viewer_count},
            to=stream.id,
        )

    async def _end_stream(self, ending: StreamEnding) -> None:
        stream_id = ending.stream.id
        await self._mirror(
            "record stream history", self.history_repository.record_stream, ending
        )
        await self._mirror(
            "delete active stream",
            self.active_stream_repository.delete_stream,
            stream_id,
        )
        await self.realtime.emit(
            ServerEvent.STREAM_ENDED.value, {"streamId": stream_id}, to=stream_id
        )
        await self.realtime.close_room(stream_id)
        logger.info(
            "Stream ended",
            extra={
                "stream_id": stream_id,
                "reason": ending.reason,
                "total_views": ending.total_views,
                "total_messages": ending.total_messages,
            },
        )

    async def _broadcast_streams(self) -> None:
        await self.realtime.emit(
            ServerEvent.STREAMS_UPDATED.value, self.registry.snapshot()
        )

    async def _mirror(
        self, action: str, operation: Callable[..., None], *args: object
    ) -> None:
        """Run a best-effort store write off the event loop."""
        try:
            await asyncio.to_thread(operation, *args)
        except Exception:
            logger.exception("Failed to %s", action, extra={"mirror_args": args})


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()
