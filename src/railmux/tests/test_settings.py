"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from railmux.foundation.config import RAILWAY_API_URL, RailmuxSettings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("RAILMUX_DEBUG", "RAILMUX_TRANSPORT", "RAILMUX_LOG_LEVEL", "RAILMUX_HTTP_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    settings = RailmuxSettings()
    assert settings.transport == "stdio"
    assert settings.server_name == "railway"
    assert settings.http.api_url == RAILWAY_API_URL
    assert settings.http.timeout == 30.0
    assert settings.log_level == "INFO"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RAILMUX_HTTP_TIMEOUT", "60")
    monkeypatch.setenv("RAILMUX_LOG_LEVEL", "warning")
    monkeypatch.setenv("RAILMUX_LOG_FORMAT", "json")
    monkeypatch.setenv("RAILMUX_TRANSPORT", "sse")
    settings = RailmuxSettings()
    assert settings.http.timeout == 60.0
    assert settings.logging.level == "WARNING"
    assert settings.logging.format == "json"
    assert settings.transport == "sse"


def test_debug_forces_debug_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RAILMUX_DEBUG", "true")
    monkeypatch.setenv("RAILMUX_LOG_LEVEL", "ERROR")
    assert RailmuxSettings().log_level == "DEBUG"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
