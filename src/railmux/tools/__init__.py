"""Railway tools: typed parameter schemas bound to router operations."""

from .base import EmptyParams, Handler, RouterTool, ToolMetadata, ToolParams
from .catalog import build_catalog
from .registry import ToolRegistry, build_registry

__all__ = [
    "EmptyParams", "Handler", "RouterTool", "ToolMetadata", "ToolParams",
    "build_catalog", "ToolRegistry", "build_registry",
]
