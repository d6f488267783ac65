"""ASGI entrypoint for the stream coordinator."""

from stream_coordinator.api.app import create_asgi_app
from stream_coordinator.containers import build_container

app = create_asgi_app(build_container())
