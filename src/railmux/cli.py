"""Command-line entry point: serve the Railway tools over MCP.

Configuration comes from the environment (see `railmux.foundation.config`);
the flags below override the transport settings for one run.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from railmux.ext.mcp import serve_mcp
from railmux.foundation.config import MISSING_TOKENS_HELP, get_settings, load_workspaces
from railmux.runtime.observability import configure_logging
from railmux.runtime.routing import WorkspaceRouter

logger = logging.getLogger("railmux.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="railmux", description="Railway MCP server over one or more workspaces")
    parser.add_argument("--transport", choices=["stdio", "sse", "streamable-http"], default=None,
                        help="Transport protocol (default: RAILMUX_TRANSPORT or stdio)")
    parser.add_argument("--host", default=None, help="Host for HTTP transports")
    parser.add_argument("--port", type=int, default=None, help="Port for HTTP transports")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(
        settings.log_level,
        settings.logging.format,
        show_timestamp=settings.logging.include_timestamps,
    )

    credentials = load_workspaces()
    if not credentials:
        logger.error("No workspaces configured")
        print(MISSING_TOKENS_HELP, file=sys.stderr)
        return 1

    labels = ", ".join(c.label for c in credentials)
    logger.info(f"Loaded {len(credentials)} workspace(s): {labels}")

    router = WorkspaceRouter.from_credentials(credentials, settings=settings.http)
    serve_mcp(
        router,
        name=settings.server_name,
        transport=args.transport or settings.transport,
        host=args.host or settings.host,
        port=args.port or settings.port,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
