"""MCP server entry point for the mailbox daemon.

Exposes the daemon's control commands as tools via the Model Context
Protocol using the official Python MCP SDK with stdio transport. Every
tool opens its own bus connection and closes it before returning.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from mcp.server.fastmcp import FastMCP

from . import handlers
from .handlers import CommandResult
from .transport.dbus_connection import DBusConnection

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "mboxctl",
    instructions="Control the mailbox daemon that arbitrates host flash access",
)


def _open_connection() -> DBusConnection:
    """Create a connection to the daemon on the system bus."""
    return DBusConnection()


def _run(handler: Callable[..., CommandResult], *args: Any) -> dict[str, Any]:
    with _open_connection() as conn:
        result = handler(conn, *args)
    logger.info("%s: %s", result.operation, result.message)
    return result.to_dict()


# ─── DAEMON CONTROL TOOLS ────────────────────────────────────────────

@mcp.tool()
def ping() -> dict[str, Any]:
    """Check that the mailbox daemon is running and answering requests."""
    return _run(handlers.ping)


@mcp.tool()
def get_status() -> dict[str, Any]:
    """Report whether the daemon is Active or Suspended.

    While suspended the daemon does not touch flash, so the host may.
    """
    return _run(handlers.status)


@mcp.tool()
def reset() -> dict[str, Any]:
    """Hard reset the daemon state and point the LPC window back to flash."""
    return _run(handlers.reset)


@mcp.tool()
def suspend() -> dict[str, Any]:
    """Suspend the daemon to inhibit its flash accesses."""
    return _run(handlers.suspend)


@mcp.tool()
def resume(flash_modified: bool) -> dict[str, Any]:
    """Resume the daemon after a suspend.

    Args:
        flash_modified: True if flash was written while the daemon was
            suspended, so it must drop its cached contents.
    """
    return _run(handlers.resume, flash_modified)


@mcp.tool()
def flash_modified() -> dict[str, Any]:
    """Tell the daemon that flash contents changed and its cache is stale."""
    return _run(handlers.flash_modified)


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
