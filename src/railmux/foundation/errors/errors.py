"""Standardized error handling for Railway operations.

Two layers:
- Exceptions (`RailwayError` and subclasses) raised by backend connections
  and by the workspace router.
- `ToolError`, a structured model rendered at the MCP boundary so every
  failure reaches the agent as one readable message.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(StrEnum):
    """Machine-readable error codes.

    Using StrEnum allows these to serialize cleanly and be pattern-matched.
    """
    API_KEY_INVALID = "API_KEY_INVALID"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    INVALID_PARAMS = "INVALID_PARAMS"
    PARSE_ERROR = "PARSE_ERROR"
    GRAPHQL_ERROR = "GRAPHQL_ERROR"
    NO_WORKSPACES = "NO_WORKSPACES"
    ALL_WORKSPACES_FAILED = "ALL_WORKSPACES_FAILED"
    NOT_FOUND = "NOT_FOUND"
    UNKNOWN = "UNKNOWN"


# Exception type -> ErrorCode mapping for automatic classification
_EXCEPTION_PATTERNS: dict[str, ErrorCode] = {
    "timeout": ErrorCode.TIMEOUT,
    "connect": ErrorCode.NETWORK_ERROR,
    "network": ErrorCode.NETWORK_ERROR,
    "transport": ErrorCode.NETWORK_ERROR,
    "auth": ErrorCode.API_KEY_INVALID,
    "json": ErrorCode.PARSE_ERROR,
    "decode": ErrorCode.PARSE_ERROR,
    "validation": ErrorCode.INVALID_PARAMS,
    "value": ErrorCode.INVALID_PARAMS,
    "notfound": ErrorCode.NOT_FOUND,
}


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map exception to an error code. RailwayError subclasses carry their own."""
    if isinstance(exc, RailwayError):
        return exc.code
    exc_name = type(exc).__name__.lower()
    for pattern, code in _EXCEPTION_PATTERNS.items():
        if pattern in exc_name:
            return code
    return ErrorCode.UNKNOWN


# ═══════════════════════════════════════════════════════════════════════════════
# Exception taxonomy
# ═══════════════════════════════════════════════════════════════════════════════


class RailwayError(Exception):
    """Base class for every failure that crosses the router boundary."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return self.message


class TransportError(RailwayError):
    """Connection or HTTP-status failure talking to the backend."""

    code = ErrorCode.NETWORK_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: ErrorCode | None = None,
    ) -> None:
        if code is None and status_code in (401, 403):
            code = ErrorCode.API_KEY_INVALID
        super().__init__(message, code=code)
        self.status_code = status_code


class ProtocolError(RailwayError):
    """The backend answered but reported logical (GraphQL) errors."""

    code = ErrorCode.GRAPHQL_ERROR

    def __init__(self, message: str, *, messages: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.messages = tuple(messages)


class AggregateFailure(RailwayError):
    """Raised by the router when no workspace could serve an operation.

    `last_error` is the error that determines the message; `errors` keeps
    every per-workspace failure in attempt order for diagnostics.
    """

    code = ErrorCode.ALL_WORKSPACES_FAILED

    def __init__(self, message: str, *, errors: Sequence[RailwayError] = ()) -> None:
        super().__init__(message, code=ErrorCode.ALL_WORKSPACES_FAILED if errors else ErrorCode.NO_WORKSPACES)
        self.errors = tuple(errors)

    @property
    def last_error(self) -> RailwayError | None:
        return self.errors[-1] if self.errors else None

    @classmethod
    def no_workspaces(cls) -> Self:
        return cls("No workspaces configured")

    @classmethod
    def exhausted(cls, errors: Sequence[RailwayError]) -> Self:
        """Build from the ordered per-workspace errors; the last one wins the message."""
        if not errors:
            return cls.no_workspaces()
        return cls(errors[-1].message, errors=errors)


# ═══════════════════════════════════════════════════════════════════════════════
# Tool-boundary error model
# ═══════════════════════════════════════════════════════════════════════════════


class ToolError(BaseModel):
    """Structured error response for tool failures.

    Example:
        >>> error = ToolError.create("get_project", "GraphQL errors: Not Authorized", ErrorCode.GRAPHQL_ERROR)
        >>> error.render()
        'Error: GraphQL errors: Not Authorized'
    """

    model_config = ConfigDict(frozen=True)

    tool_name: str = Field(..., description="Tool that encountered the error")
    message: str = Field(..., description="Human-readable error message")
    code: ErrorCode = Field(default=ErrorCode.UNKNOWN, description="Machine-readable error code")

    @classmethod
    def create(
        cls,
        tool_name: str,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
    ) -> Self:
        """Factory method for construction."""
        return cls(tool_name=tool_name, message=message, code=code)

    @classmethod
    def from_exception(
        cls,
        tool_name: str,
        exc: BaseException,
        context: str = "",
    ) -> Self:
        """Create from exception with auto-classification."""
        return cls(
            tool_name=tool_name,
            message=f"{context}: {exc}" if context else str(exc),
            code=classify_exception(exc),
        )

    def render(self) -> str:
        """Format error for the agent."""
        return f"Error: {self.message}"

    __str__ = render
