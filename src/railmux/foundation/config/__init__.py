"""Configuration: pydantic-settings and the workspace registry."""

from .settings import (
    RAILWAY_API_URL,
    HttpSettings,
    LoggingSettings,
    RailmuxSettings,
    clear_settings_cache,
    get_settings,
)
from .workspaces import MISSING_TOKENS_HELP, WorkspaceCredential, load_workspaces

__all__ = [
    "RAILWAY_API_URL", "HttpSettings", "LoggingSettings", "RailmuxSettings",
    "get_settings", "clear_settings_cache",
    "WorkspaceCredential", "load_workspaces", "MISSING_TOKENS_HELP",
]
