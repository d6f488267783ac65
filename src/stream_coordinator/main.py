"""Command-line entrypoint that serves the ASGI app with uvicorn."""

import uvicorn

from stream_coordinator.config import Settings


def main() -> None:
    """Run the stream coordinator in a single process."""
    settings = Settings()
    # Single worker: the stream registry is process-local.
    uvicorn.run(
        "stream_coordinator.api.asgi:app",
        host=settings.host,
        port=settings.port,
        workers=1,
    )


if __name__ == "__main__":
    main()
