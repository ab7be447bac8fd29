"""MCP front end: tool boundary and FastMCP adapter."""

from .bridge import build_signature, get_required_params, get_tool_properties, tool_to_handler
from .server import MCPServer, ToolOutcome, ToolServer, Transport, render_result, serve_mcp

__all__ = [
    "build_signature", "get_required_params", "get_tool_properties", "tool_to_handler",
    "MCPServer", "ToolOutcome", "ToolServer", "Transport", "render_result", "serve_mcp",
]
