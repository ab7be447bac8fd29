"""MCP server for the Railway tool catalogue.

`ToolServer` owns the tool boundary: it validates arguments, runs the
router operation and renders the outcome as text. Nothing raised by a
tool escapes `invoke`. `MCPServer` adapts that boundary to FastMCP.

Example:
    >>> router = WorkspaceRouter.from_credentials(load_workspaces())
    >>> serve_mcp(router, transport="stdio")

Requires: fastmcp
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

import orjson
from pydantic import BaseModel, ValidationError

from railmux.foundation.errors import ErrorCode, ToolError
from railmux.runtime.routing import TaggedResult
from railmux.tools import ToolRegistry, build_registry

if TYPE_CHECKING:
    from railmux.runtime.routing import WorkspaceRouter

logger = logging.getLogger("railmux.mcp")

Transport = Literal["stdio", "sse", "streamable-http"]


@dataclass(slots=True, frozen=True)
class ToolOutcome:
    """Rendered result of one tool call."""

    text: str
    is_error: bool = False


def _default(obj: Any) -> Any:
    if isinstance(obj, TaggedResult):
        return obj.to_dict()
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def render_result(result: Any) -> str:
    """Pretty-printed JSON with two-space indentation."""
    return orjson.dumps(result, default=_default, option=orjson.OPT_INDENT_2).decode()


# ═══════════════════════════════════════════════════════════════════════════════
# Tool boundary
# ═══════════════════════════════════════════════════════════════════════════════


class ToolServer:
    """Binds a tool registry to a workspace router."""

    __slots__ = ("_name", "_registry", "_router")

    def __init__(self, name: str, registry: ToolRegistry, router: WorkspaceRouter) -> None:
        self._name = name
        self._registry = registry
        self._router = router

    @property
    def name(self) -> str:
        return self._name

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def router(self) -> WorkspaceRouter:
        return self._router

    def list_tools(self) -> list[dict[str, object]]:
        """List all enabled tools with schemas."""
        from .bridge import get_required_params, get_tool_properties

        return [
            {
                "name": tool.metadata.name,
                "description": tool.metadata.description,
                "category": tool.metadata.category,
                "parameters": {
                    "type": "object",
                    "properties": get_tool_properties(tool),
                    "required": get_required_params(tool),
                },
            }
            for tool in self._registry
            if tool.metadata.enabled
        ]

    async def invoke(self, tool_name: str, params: dict[str, Any]) -> ToolOutcome:
        """Invoke a tool by name. Failures come back as error outcomes, never raised."""
        tool = self._registry.get(tool_name)
        if tool is None or not tool.metadata.enabled:
            return self._error(ToolError.create(tool_name, f"Tool '{tool_name}' not found", ErrorCode.NOT_FOUND))

        try:
            validated = tool.params_schema.model_validate(params)
        except ValidationError as e:
            return self._error(ToolError.create(tool_name, f"Invalid parameters: {e}", ErrorCode.INVALID_PARAMS))

        logger.debug(f"Invoking {tool_name}")
        try:
            result = await tool.arun(self._router, validated)
        except Exception as e:
            return self._error(ToolError.from_exception(tool_name, e))

        try:
            return ToolOutcome(render_result(result))
        except TypeError as e:
            return self._error(ToolError.from_exception(tool_name, e, "Unserializable result"))

    @staticmethod
    def _error(error: ToolError) -> ToolOutcome:
        logger.warning(f"Tool {error.tool_name} failed [{error.code}]: {error.message}")
        return ToolOutcome(error.render(), is_error=True)


# ═══════════════════════════════════════════════════════════════════════════════
# FastMCP Adapter
# ═══════════════════════════════════════════════════════════════════════════════


class MCPServer(ToolServer):
    """FastMCP-backed server for MCP clients.

    Example:
        >>> server = MCPServer("railway", build_registry(), router)
        >>> server.run(transport="sse", port=8080)
    """

    __slots__ = ("_mcp",)

    def __init__(self, name: str, registry: ToolRegistry, router: WorkspaceRouter) -> None:
        super().__init__(name, registry, router)
        self._mcp = self._create_server()

    def _create_server(self):
        """Create FastMCP server and register tools."""
        try:
            from fastmcp import FastMCP
        except ImportError as e:
            raise ImportError("MCP integration requires fastmcp. Install with: pip install fastmcp") from e

        mcp = FastMCP(self._name)
        self._register_tools(mcp)
        return mcp

    def _register_tools(self, mcp) -> None:
        from .bridge import tool_to_handler

        for tool in self._registry:
            if not tool.metadata.enabled:
                continue
            mcp.tool(name=tool.metadata.name, description=tool.metadata.description)(
                tool_to_handler(tool, self._call)
            )

    async def _call(self, tool_name: str, params: dict[str, Any]) -> str:
        from fastmcp.exceptions import ToolError as MCPToolError

        outcome = await self.invoke(tool_name, params)
        if outcome.is_error:
            raise MCPToolError(outcome.text)
        return outcome.text

    def run(
        self,
        transport: Transport = "stdio",
        *,
        host: str = "127.0.0.1",
        port: int = 8080,
    ) -> None:
        """Start MCP server (blocking).

        Args:
            transport: "stdio" (CLI), "sse" (HTTP), "streamable-http"
            host: Host for HTTP transports
            port: Port for HTTP transports
        """
        if transport == "stdio":
            self._mcp.run()
        else:
            self._mcp.run(transport=transport, host=host, port=port)

    @property
    def fastmcp(self):
        """Access underlying FastMCP instance."""
        return self._mcp


def serve_mcp(
    router: WorkspaceRouter,
    *,
    name: str = "railway",
    registry: ToolRegistry | None = None,
    transport: Transport = "stdio",
    host: str = "127.0.0.1",
    port: int = 8080,
) -> None:
    """Build the Railway tool catalogue and serve it over MCP (blocking)."""
    server = MCPServer(name, build_registry() if registry is None else registry, router)
    logger.info(f"Serving {len(server.registry)} tools over {transport}")
    server.run(transport, host=host, port=port)
