"""Unified error handling for railmux.

- ErrorCode: Standard error codes
- RailwayError / TransportError / ProtocolError / AggregateFailure: raised failures
- ToolError: Structured error rendered at the tool boundary
"""

from .errors import (
    AggregateFailure,
    ErrorCode,
    ProtocolError,
    RailwayError,
    ToolError,
    TransportError,
    classify_exception,
)

__all__ = [
    "ErrorCode", "classify_exception",
    "RailwayError", "TransportError", "ProtocolError", "AggregateFailure",
    "ToolError",
]
