"""Tests for main module."""

from stream_coordinator import main as main_module
from tests.conftest import TEST_SERVICE_KEY


def test_main_runs_single_worker(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", TEST_SERVICE_KEY)
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    monkeypatch.setenv("PORT", "9001")
    calls = []
    monkeypatch.setattr(
        main_module.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs))
    )

    main_module.main()

    [(args, kwargs)] = calls
    assert args == ("stream_coordinator.api.asgi:app",)
    assert kwargs["port"] == 9001
    assert kwargs["workers"] == 1
