"""Command-line entry point: ``mboxctl <command> [args]``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from . import NAME, SUBVERSION, VERSION, handlers
from .errors import MboxctlError
from .handlers import CommandResult
from .protocol.commands import parse_resume_arg
from .transport.dbus_connection import DBusConnection

logger = logging.getLogger(__name__)

VERSION_TEXT = f"{NAME} V{VERSION}.{SUBVERSION:02d}"

# command key -> (name used in diagnostics, handler)
COMMANDS: dict[str, tuple[str, Callable[..., CommandResult]]] = {
    "ping": ("ping", handlers.ping),
    "status": ("status", handlers.status),
    "reset": ("reset", handlers.reset),
    "point-to-flash": ("reset", handlers.point_to_flash),
    "suspend": ("suspend", handlers.suspend),
    "resume": ("resume", handlers.resume),
    "flash-modified": ("flash modified", handlers.flash_modified),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mboxctl",
        description="Send a control command to the mailbox daemon.",
    )
    commands = parser.add_mutually_exclusive_group(required=True)
    commands.add_argument(
        "--ping", dest="command", action="store_const", const="ping",
        help="ping the daemon",
    )
    commands.add_argument(
        "--status", dest="command", action="store_const", const="status",
        help="check status of the daemon",
    )
    commands.add_argument(
        "--reset", dest="command", action="store_const", const="reset",
        help="hard reset the daemon state",
    )
    commands.add_argument(
        "--point-to-flash", dest="command", action="store_const",
        const="point-to-flash",
        help="point the lpc mapping back to flash",
    )
    commands.add_argument(
        "--suspend", dest="command", action="store_const", const="suspend",
        help="suspend the daemon to inhibit flash accesses",
    )
    commands.add_argument(
        "--resume", metavar="0|1",
        help="resume the daemon; argument is whether flash was modified "
             "(0 - no | 1 - yes)",
    )
    commands.add_argument(
        "--flash-modified", "--flash_modified", dest="command",
        action="store_const", const="flash-modified",
        help="tell the daemon to discard its cache",
    )
    parser.add_argument("--version", action="version", version=VERSION_TEXT)
    parser.add_argument(
        "--session", action="store_true",
        help="talk to a daemon on the session bus instead of the system bus",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging",
    )
    return parser


def report(result: CommandResult) -> int:
    """Print a command outcome and return the process exit code."""
    if result.operation == "Status":
        if not result.ok:
            print(f"Status: {result.message}", file=sys.stderr)
            return result.exit_code
        print(f"Daemon Status: {result.state.label}")
        return 0

    print(f"{result.operation}: {result.message}")
    return result.exit_code


def run_command(
    command: str,
    connection: DBusConnection,
    arg: str | None = None,
) -> int:
    """Run one command over ``connection`` and return the exit code.

    The connection is opened here and closed on every path.
    """
    label, handler = COMMANDS[command]
    try:
        # resume input is checked before the bus is touched
        extra = (parse_resume_arg(arg),) if command == "resume" else ()
        with connection as conn:
            result = handler(conn, *extra)
    except MboxctlError as e:
        logger.debug("%s command failed", label, exc_info=True)
        print(f"Failed to send {label} command: {e}", file=sys.stderr)
        return e.exit_code
    return report(result)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    command = "resume" if args.resume is not None else args.command
    connection = DBusConnection(bus="SESSION" if args.session else "SYSTEM")
    return run_command(command, connection, args.resume)


if __name__ == "__main__":
    sys.exit(main())
