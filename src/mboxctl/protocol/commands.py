"""Command identifiers and request builders.

Each command has a fixed request argument length and a fixed number of
reply argument bytes the client reads back. Both are recorded in
:data:`COMMAND_SPECS`, so a builder can never send a mismatched length.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from ..errors import EncodingError, ValidationError
from .framing import CommandMessage


class Command(IntEnum):
    """Command identifiers understood by the daemon."""

    PING = 0x00
    STATUS = 0x01
    RESET = 0x02
    SUSPEND = 0x03
    RESUME = 0x04
    MODIFIED = 0x05


class ResumeFlag(IntEnum):
    """Argument to RESUME: whether flash changed while suspended."""

    NOT_MODIFIED = 0x00
    FLASH_MODIFIED = 0x01


@dataclass(frozen=True)
class CommandSpec:
    """Argument shape of one command."""

    args_len: int
    reply_len: int = 0


COMMAND_SPECS: dict[Command, CommandSpec] = {
    Command.PING: CommandSpec(args_len=0),
    Command.STATUS: CommandSpec(args_len=0, reply_len=1),
    Command.RESET: CommandSpec(args_len=0),
    Command.SUSPEND: CommandSpec(args_len=0),
    Command.RESUME: CommandSpec(args_len=1),
    Command.MODIFIED: CommandSpec(args_len=0),
}


def build_command(command: Command, args: bytes = b"") -> CommandMessage:
    """Build a request, checking ``args`` against the command's shape.

    Raises:
        EncodingError: If the argument length does not match the command.
    """
    spec = COMMAND_SPECS[command]
    if len(args) != spec.args_len:
        raise EncodingError(
            f"{command.name} takes {spec.args_len} argument byte(s), "
            f"got {len(args)}"
        )
    return CommandMessage(command=command, args=bytes(args))


def reply_length(command: Command) -> int:
    """Number of reply argument bytes the client reads for ``command``."""
    return COMMAND_SPECS[command].reply_len


def build_ping() -> CommandMessage:
    return build_command(Command.PING)


def build_status() -> CommandMessage:
    return build_command(Command.STATUS)


def build_reset() -> CommandMessage:
    """Build a RESET request, which also points the LPC window back at flash."""
    return build_command(Command.RESET)


def build_suspend() -> CommandMessage:
    return build_command(Command.SUSPEND)


def build_resume(flag: ResumeFlag) -> CommandMessage:
    """Build a RESUME request carrying its single modified/not-modified byte."""
    return build_command(Command.RESUME, bytes([ResumeFlag(flag)]))


def build_flash_modified() -> CommandMessage:
    """Build a MODIFIED request telling the daemon to drop its flash cache."""
    return build_command(Command.MODIFIED)


def parse_resume_arg(arg: str | bool | ResumeFlag | None) -> ResumeFlag:
    """Convert a resume argument into a :class:`ResumeFlag`.

    Command-line input must be exactly ``"0"`` or ``"1"``. Booleans are
    accepted for programmatic callers, and an already parsed
    :class:`ResumeFlag` is returned unchanged.

    Raises:
        ValidationError: For any other value.
    """
    if isinstance(arg, ResumeFlag):
        return arg
    if isinstance(arg, bool):
        return ResumeFlag.FLASH_MODIFIED if arg else ResumeFlag.NOT_MODIFIED
    if arg == "1":
        return ResumeFlag.FLASH_MODIFIED
    if arg == "0":
        return ResumeFlag.NOT_MODIFIED
    raise ValidationError(
        f"Resume argument must be 0 (not modified) or 1 (modified), got {arg!r}"
    )
