"""Observability: logging configuration."""

from .logging import ConsoleFormatter, JsonFormatter, configure_logging

__all__ = ["configure_logging", "ConsoleFormatter", "JsonFormatter"]
