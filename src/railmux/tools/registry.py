"""Registry of Railway tools available to the MCP front end.

Provides registration and lookup by name.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from .base import RouterTool


class ToolRegistry:
    """Name-indexed collection of `RouterTool` instances.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(get_project_tool)
        >>> registry["get_project"].metadata.category
        'projects'
    """

    __slots__ = ("_tools",)

    def __init__(self, tools: Iterable[RouterTool[Any]] = ()) -> None:
        self._tools: dict[str, RouterTool[Any]] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: RouterTool[Any]) -> None:
        """Register a tool. Names must be unique."""
        name = tool.metadata.name
        if name in self._tools:
            raise ValueError(f"Tool '{name}' already registered. Use unregister() first.")
        self._tools[name] = tool

    def unregister(self, name: str) -> bool:
        """Remove a tool by name. Returns True if found."""
        return self._tools.pop(name, None) is not None

    def get(self, name: str) -> RouterTool[Any] | None:
        return self._tools.get(name)

    def __getitem__(self, name: str) -> RouterTool[Any]:
        return self._tools[name]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[RouterTool[Any]]:
        return iter(self._tools.values())

    @property
    def names(self) -> list[str]:
        return list(self._tools)


def build_registry() -> ToolRegistry:
    """Registry preloaded with the full Railway tool catalogue."""
    from .catalog import build_catalog

    return ToolRegistry(build_catalog())
