"""railmux: one Railway API over many workspace tokens, served over MCP.

Each Railway API token is scoped to one account or team. railmux loads
every configured token, routes each operation to the workspace that owns
the resource (fallback), merges listings across all of them (fan-out), and
sends creations to the primary workspace.

Quick Start:
    >>> from railmux import WorkspaceRouter, load_workspaces
    >>> async with WorkspaceRouter.from_credentials(load_workspaces()) as router:
    ...     projects = await router.list_all_projects()
    ...     service = await router.get_project("prj_123")
"""

from railmux.client import BackendConnection, RailwayClient
from railmux.foundation.config import RailmuxSettings, WorkspaceCredential, get_settings, load_workspaces
from railmux.foundation.errors import (
    AggregateFailure,
    ErrorCode,
    ProtocolError,
    RailwayError,
    ToolError,
    TransportError,
)
from railmux.runtime.routing import Strategy, TaggedResult, WorkspaceHandle, WorkspaceRouter

__version__ = "0.1.0"

__all__ = [
    "BackendConnection", "RailwayClient",
    "RailmuxSettings", "WorkspaceCredential", "get_settings", "load_workspaces",
    "AggregateFailure", "ErrorCode", "ProtocolError", "RailwayError", "ToolError", "TransportError",
    "Strategy", "TaggedResult", "WorkspaceHandle", "WorkspaceRouter",
    "__version__",
]
