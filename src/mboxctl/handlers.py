"""One handler per administrative command.

Each handler builds its request, performs a single RPC exchange and
returns a :class:`CommandResult`. Handlers keep no state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from . import rpc
from .errors import DaemonError
from .protocol.commands import (
    Command,
    ResumeFlag,
    build_flash_modified,
    build_ping,
    build_reset,
    build_resume,
    build_status,
    build_suspend,
    parse_resume_arg,
    reply_length,
)
from .protocol.framing import CommandMessage
from .protocol.parser import DaemonState, parse_daemon_state
from .protocol.status import describe_status, is_success
from .rpc import Transport


@dataclass
class CommandResult:
    """Outcome of one command as reported by the daemon."""

    operation: str
    status: int
    state: DaemonState | None = None

    @property
    def ok(self) -> bool:
        return is_success(self.status)

    @property
    def message(self) -> str:
        return describe_status(self.status)

    @property
    def exit_code(self) -> int:
        return -self.status

    def raise_for_status(self) -> CommandResult:
        """Raise :class:`DaemonError` unless the daemon reported success."""
        if not self.ok:
            raise DaemonError(self.operation, self.status, self.message)
        return self

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "operation": self.operation,
            "status": self.status,
            "message": self.message,
        }
        if self.state is not None:
            result["state"] = self.state.label
        return result


def _exchange(
    transport: Transport, operation: str, request: CommandMessage
) -> CommandResult:
    response = rpc.call(
        transport, request, expected_len=reply_length(Command(request.command))
    )
    return CommandResult(operation=operation, status=response.status)


def ping(transport: Transport) -> CommandResult:
    """Check that the daemon is alive and answering."""
    return _exchange(transport, "Ping", build_ping())


def status(transport: Transport) -> CommandResult:
    """Ask whether the daemon is active or suspended.

    ``state`` is set only when the daemon reports success.
    """
    response = rpc.call(
        transport, build_status(), expected_len=reply_length(Command.STATUS)
    )
    result = CommandResult(operation="Status", status=response.status)
    if result.ok:
        result.state = parse_daemon_state(response)
    return result


def reset(transport: Transport) -> CommandResult:
    """Hard-reset the daemon state."""
    return _exchange(transport, "Reset", build_reset())


def point_to_flash(transport: Transport) -> CommandResult:
    """Point the LPC mapping back at flash.

    The daemon implements this as a reset.
    """
    return reset(transport)


def suspend(transport: Transport) -> CommandResult:
    """Suspend the daemon so the host can access flash directly."""
    return _exchange(transport, "Suspend", build_suspend())


def resume(
    transport: Transport, arg: str | bool | ResumeFlag | None
) -> CommandResult:
    """Resume the daemon.

    Args:
        transport: Connected transport to the daemon.
        arg: ``"1"`` (or ``True``) if flash was modified while suspended,
            ``"0"`` (or ``False``) otherwise.

    Raises:
        ValidationError: If ``arg`` is anything else. Nothing is sent.
    """
    flag = parse_resume_arg(arg)
    return _exchange(transport, "Resume", build_resume(flag))


def flash_modified(transport: Transport) -> CommandResult:
    """Tell the daemon flash changed behind its back so it drops its cache."""
    return _exchange(transport, "Flash Modified", build_flash_modified())
