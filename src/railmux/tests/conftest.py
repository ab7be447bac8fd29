"""Shared fixtures: in-memory backend connections standing in for Railway."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

import pytest

from railmux.foundation.config import clear_settings_cache
from railmux.runtime.routing import WorkspaceRouter


class FakeConnection:
    """Records every call; answers with a fixed payload or raises a fixed error."""

    def __init__(
        self,
        result: dict[str, Any] | Callable[[str, Mapping[str, Any] | None], dict[str, Any]] | None = None,
        *,
        error: BaseException | None = None,
        delay: float = 0.0,
    ) -> None:
        self._result = result if result is not None else {}
        self._error = error
        self._delay = delay
        self.calls: list[tuple[str, dict[str, Any] | None]] = []
        self.closed = False

    async def execute(self, document: str, variables: Mapping[str, Any] | None = None) -> dict[str, Any]:
        self.calls.append((document, dict(variables) if variables is not None else None))
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        if callable(self._result):
            return self._result(document, variables)
        return self._result

    async def aclose(self) -> None:
        self.closed = True


def make_router(**connections: FakeConnection) -> WorkspaceRouter:
    """Router over keyword-ordered fake connections (label=keyword)."""
    return WorkspaceRouter.from_connections(connections.items())


@pytest.fixture(autouse=True)
def clean_settings() -> object:
    """Reset cached settings around each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
