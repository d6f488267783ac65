"""Dependency container wiring for the application."""

from dataclasses import dataclass

import socketio
from supabase import create_client

from stream_coordinator.adapters.realtime_client import SocketIORealtimeClient
from stream_coordinator.adapters.supabase_active_stream_repository import (
    SupabaseActiveStreamRepository,
)
from stream_coordinator.adapters.supabase_auth_repository import (
    SupabaseAuthRepository,
)
from stream_coordinator.adapters.supabase_category_repository import (
    SupabaseCategoryRepository,
)
from stream_coordinator.adapters.supabase_stream_history_repository import (
    SupabaseStreamHistoryRepository,
)
from stream_coordinator.config import Settings, parse_allowed_origins
from stream_coordinator.services.admin import AdminService
from stream_coordinator.services.auth import AuthService
from stream_coordinator.services.catalog import StreamCatalogService
from stream_coordinator.services.categories import CategoryService
from stream_coordinator.services.registry import StreamRegistry
from stream_coordinator.services.streams import StreamService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    socket_server: socketio.AsyncServer
    registry: StreamRegistry
    stream_service: StreamService
    catalog_service: StreamCatalogService
    auth_service: AuthService
    admin_service: AdminService


def build_socket_server(settings: Settings) -> socketio.AsyncServer:
    """Create the Socket.IO server.

    Handlers run inline rather than as background tasks so that events from a
    single connection are processed in the order they arrive.
    """
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=parse_allowed_origins(settings.cors_allowed_origins),
        async_handlers=False,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    active_stream_repository = SupabaseActiveStreamRepository(supabase_client)
    history_repository = SupabaseStreamHistoryRepository(supabase_client)
    category_repository = SupabaseCategoryRepository(supabase_client)
    auth_repository = SupabaseAuthRepository(supabase_client)

    socket_server = build_socket_server(resolved_settings)
    registry = StreamRegistry()
    stream_service = StreamService(
        registry=registry,
        active_stream_repository=active_stream_repository,
        history_repository=history_repository,
        category_service=CategoryService(category_repository),
        realtime=SocketIORealtimeClient(socket_server),
    )
    catalog_service = StreamCatalogService(
        repository=active_stream_repository,
        page_size=resolved_settings.stream_page_size,
        max_page_size=resolved_settings.stream_page_size_max,
        trending_limit=resolved_settings.trending_limit,
    )
    admin_service = AdminService(
        registry=registry,
        history_repository=history_repository,
    )

    return AppContainer(
        settings=resolved_settings,
        socket_server=socket_server,
        registry=registry,
        stream_service=stream_service,
        catalog_service=catalog_service,
        auth_service=AuthService(auth_repository),
        admin_service=admin_service,
    )
