"""Command and response message codec.

The daemon exposes a single D-Bus method whose request and reply share the
same two-field shape, signature ``yay``::

    +-----------+----------------------------+
    | Tag       | Arguments                  |
    | 1 byte    | byte array, 0..MAX_ARGS    |
    +-----------+----------------------------+

- Request tag: the command identifier (see :class:`~.commands.Command`)
- Reply tag: the status byte (see :class:`~.status.DaemonStatus`)
- Arguments: command-specific bytes; their meaning is not interpreted here

The codec only packs and unpacks these fields. It never looks at argument
semantics.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import EncodingError

MAX_ARGS = 255  # largest argument array the daemon accepts
TAG_MAX = 0xFF


@dataclass(frozen=True)
class CommandMessage:
    """A request from the client to the daemon."""

    command: int
    args: bytes = b""

    def __repr__(self) -> str:
        return (
            f"CommandMessage(command=0x{self.command:02X}, "
            f"args={self.args.hex(' ') if self.args else '(empty)'})"
        )


@dataclass(frozen=True)
class ResponseMessage:
    """A reply from the daemon.

    ``args`` is only meaningful when ``status`` is success.
    """

    status: int
    args: bytes = b""

    def __repr__(self) -> str:
        return (
            f"ResponseMessage(status=0x{self.status:02X}, "
            f"args={self.args.hex(' ') if self.args else '(empty)'})"
        )


def _check_tag(tag: int, what: str) -> int:
    try:
        value = int(tag)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"{what} byte must be an integer, got {tag!r}") from e
    if not 0 <= value <= TAG_MAX:
        raise EncodingError(f"{what} byte must be 0-255, got {tag}")
    return value


def _check_fields(tag: int, args: bytes, what: str) -> bytes:
    _check_tag(tag, what)
    args = bytes(args)
    if len(args) > MAX_ARGS:
        raise EncodingError(
            f"{what} arguments must be at most {MAX_ARGS} bytes, got {len(args)}"
        )
    return args


def encode_command(message: CommandMessage) -> tuple[int, bytes]:
    """Pack a command into the transport's native ``(command, args)`` form.

    Raises:
        EncodingError: If the command byte or argument length is out of range.
    """
    args = _check_fields(message.command, message.args, "Command")
    return int(message.command), args


def decode_command(command: int, args: bytes) -> CommandMessage:
    """Unpack a ``(command, args)`` pair into a :class:`CommandMessage`."""
    args = _check_fields(command, args, "Command")
    return CommandMessage(command=int(command), args=args)


def encode_response(message: ResponseMessage) -> tuple[int, bytes]:
    """Pack a response into the transport's native ``(status, args)`` form."""
    args = _check_fields(message.status, message.args, "Status")
    return int(message.status), args


def decode_response(status: int, args: bytes) -> ResponseMessage:
    """Unpack a transport reply into a :class:`ResponseMessage`.

    Unlike commands, a reply is accepted with any argument length. Length
    checks against what the caller expects belong to the RPC exchange.
    """
    status = _check_tag(status, "Status")
    try:
        args = bytes(args)
    except TypeError as e:
        raise EncodingError(f"Status arguments must be bytes, got {args!r}") from e
    return ResponseMessage(status=status, args=args)
