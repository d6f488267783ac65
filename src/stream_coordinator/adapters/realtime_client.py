"""Socket.IO realtime client adapter."""

from dataclasses import dataclass
from typing import Protocol

import socketio


class RealtimeClient(Protocol):
    """Interface for pushing events to connected clients."""

    async def emit(self, event: str, data: object, to: str | None = None) -> None:
        """Emit to one connection or room, or to everyone when `to` is None."""

    async def enter_room(self, sid: str, room: str) -> None:
        """Subscribe a connection to a broadcast room."""

    async def leave_room(self, sid: str, room: str) -> None:
        """Unsubscribe a connection from a broadcast room."""

    async def close_room(self, room: str) -> None:
        """Remove every connection from a room."""


@dataclass
class SocketIORealtimeClient:
    """Realtime client backed by a python-socketio async server."""

    server: socketio.AsyncServer

    async def emit(self, event: str, data: object, to: str | None = None) -> None:
        """Emit an event through the Socket.IO server."""
        await self.server.emit(event, data, to=to)

    async def enter_room(self, sid: str, room: str) -> None:
        """Add the connection to the room."""
        await self.server.enter_room(sid, room)

    async def leave_room(self, sid: str, room: str) -> None:
        """Remove the connection from the room."""
        await self.server.leave_room(sid, room)

    async def close_room(self, room: str) -> None:
        """Close the room for all of its members."""
        await self.server.close_room(room)
