"""Synchronous request/reply exchange with the daemon.

One :func:`call` sends exactly one request and waits for exactly one reply.
Retries and timeouts are left to the caller and the transport.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .errors import EncodingError, MboxctlError, ProtocolError, TransportError
from .protocol.framing import (
    CommandMessage,
    ResponseMessage,
    decode_response,
    encode_command,
)

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything that can deliver one ``(command, args)`` request.

    ``call`` blocks until the reply arrives and returns ``(status, args)``.
    """

    def call(self, command: int, args: bytes) -> tuple[int, bytes]:
        ...


def call(
    transport: Transport,
    request: CommandMessage,
    expected_len: int = 0,
) -> ResponseMessage:
    """Send ``request`` and return the decoded reply.

    Args:
        transport: Connected transport to the daemon.
        request: The command to send.
        expected_len: Reply argument bytes the caller will read. Zero
            means the payload is ignored.

    Returns:
        A ``ResponseMessage`` whose ``args`` holds exactly ``expected_len``
        bytes. Any extra bytes in the reply are dropped.

    Raises:
        EncodingError: If ``request`` cannot be encoded.
        TransportError: If the transport fails to deliver or read.
        ProtocolError: If the reply carries fewer than ``expected_len``
            argument bytes.
    """
    if expected_len < 0:
        raise ValueError(f"expected_len must be >= 0, got {expected_len}")

    command, args = encode_command(request)
    logger.debug("-> %r", request)

    try:
        status, reply_args = transport.call(command, args)
    except MboxctlError:
        raise
    except Exception as e:
        raise TransportError(f"Request 0x{command:02X} failed: {e}", cause=e) from e

    try:
        response = decode_response(status, reply_args)
    except EncodingError as e:
        raise ProtocolError(f"Malformed reply: {e}") from e
    logger.debug("<- %r", response)

    if len(response.args) < expected_len:
        raise ProtocolError(
            f"Command returned insufficient response args: expected "
            f"{expected_len}, got {len(response.args)}"
        )

    return ResponseMessage(status=response.status, args=response.args[:expected_len])
