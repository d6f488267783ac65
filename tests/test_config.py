"""Tests for configuration helpers."""

from stream_coordinator.config import Settings, parse_allowed_origins
from tests.conftest import TEST_SERVICE_KEY


def test_parse_allowed_origins() -> None:
    assert parse_allowed_origins(None) == "*"
    assert parse_allowed_origins(" * ") == "*"
    assert parse_allowed_origins("") == "*"
    assert parse_allowed_origins("https://a.example, https://b.example,") == [
        "https://a.example",
        "https://b.example",
    ]


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", TEST_SERVICE_KEY)
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    monkeypatch.setenv("STREAM_PAGE_SIZE", "25")

    settings = Settings()

    assert settings.admin_token == "secret"
    assert settings.stream_page_size == 25
    assert settings.stream_page_size_max == 100
    assert settings.trending_limit == 10
