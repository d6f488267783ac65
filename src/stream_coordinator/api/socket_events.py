"""Socket.IO handler registration for the streaming protocol."""

import logging
from collections.abc import Awaitable, Callable

import socketio
from pydantic import BaseModel, ValidationError

from stream_coordinator.domain.events import (
    ChatMessagePayload,
    CreateStreamPayload,
    JoinStreamPayload,
    LeaveStreamPayload,
    SignalPayload,
    StopStreamPayload,
    StreamMessagePayload,
)
from stream_coordinator.services.streams import StreamService
from stream_coordinator.stream_events import ClientEvent, client_events

logger = logging.getLogger(__name__)


def register_stream_handlers(
    server: socketio.AsyncServer, service: StreamService
) -> None:
    """Attach the streaming event handlers to a Socket.IO server."""

    async def connect(sid: str, environ: dict, auth: object = None) -> None:
        await service.connect(sid)

    async def disconnect(sid: str, reason: object = None) -> None:
        await service.disconnect(sid)

    server.on("connect", connect)
    server.on("disconnect", disconnect)

    routes = {
        ClientEvent.CREATE_STREAM: (CreateStreamPayload, service.create_stream),
        ClientEvent.JOIN_STREAM: (JoinStreamPayload, service.join_stream),
        ClientEvent.LEAVE_STREAM: (LeaveStreamPayload, service.leave_stream),
        ClientEvent.STOP_STREAM: (StopStreamPayload, service.stop_stream),
        ClientEvent.STREAM_MESSAGE: (
            StreamMessagePayload,
            service.send_stream_message,
        ),
        ClientEvent.CHAT_MESSAGE: (ChatMessagePayload, service.send_chat_message),
        ClientEvent.SIGNAL: (SignalPayload, service.relay_signal),
    }
    for event, (model, handler) in routes.items():
        server.on(event.value, _validated(service, event, model, handler))
    logger.info("Registered stream handlers", extra={"events": client_events()})


def _validated(
    service: StreamService,
    event: ClientEvent,
    model: type[BaseModel],
    handler: Callable[..., Awaitable[None]],
) -> Callable[..., Awaitable[None]]:
    """Wrap a handler so it only ever receives a validated payload."""

    async def on_event(sid: str, data: object = None) -> None:
        try:
            payload = model.model_validate(data if data is not None else {})
        except ValidationError as exc:
            logger.warning(
                "Malformed event payload",
                extra={"event": event.value, "sid": sid, "errors": exc.errors()},
            )
            await service.reject(sid, f"Invalid {event.value} payload.")
            return
        await handler(sid, payload)

    return on_event
