"""Tests for the railmux command-line entry point."""

from __future__ import annotations

import logging
import os

import pytest

from railmux import cli
from railmux.runtime.observability.logging import ROOT_LOGGER


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> object:
    for key in list(os.environ):
        if key.startswith(("RAILWAY_", "RAILMUX_")):
            monkeypatch.delenv(key)
    root = logging.getLogger(ROOT_LOGGER)
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate


def test_refuses_to_start_without_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([]) == 1
    err = capsys.readouterr().err
    assert "No Railway API tokens found" in err
    assert "RAILWAY_API_TOKEN" in err


def test_serves_configured_workspaces(monkeypatch: pytest.MonkeyPatch) -> None:
    served: dict[str, object] = {}

    def fake_serve(router, **kwargs):
        served["router"] = router
        served.update(kwargs)

    monkeypatch.setattr(cli, "serve_mcp", fake_serve)
    monkeypatch.setenv("RAILWAY_API_TOKENS", "tok_a,tok_b")
    monkeypatch.setenv("RAILMUX_PORT", "9000")

    assert cli.main(["--transport", "sse"]) == 0
    assert served["router"].labels == ["workspace-1", "workspace-2"]
    assert served["transport"] == "sse"
    assert served["port"] == 9000
    assert served["name"] == "railway"
