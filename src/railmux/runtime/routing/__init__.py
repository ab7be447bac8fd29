"""Workspace routing: fallback, fan-out-merge and single-target dispatch."""

from .router import WorkspaceRouter, routed, strategy_of, tagged_to_dicts
from .strategies import (
    Operation,
    Strategy,
    TaggedResult,
    WorkspaceHandle,
    as_railway_error,
    from_all,
    on_primary,
    try_each,
)

__all__ = [
    "WorkspaceRouter", "routed", "strategy_of", "tagged_to_dicts",
    "Operation", "Strategy", "TaggedResult", "WorkspaceHandle", "as_railway_error",
    "try_each", "from_all", "on_primary",
]
