"""Exception hierarchy for the mailbox control client.

Every error carries the process exit code the CLI reports for it. Codes
are negative, matching the daemon's convention of negated status values.
"""

from __future__ import annotations

import errno


class MboxctlError(Exception):
    """Base class for all client-side failures."""

    exit_code: int = -1


class ValidationError(MboxctlError, ValueError):
    """Raised for malformed input before any request is sent."""

    # -DaemonStatus.INVALID_REQUEST
    exit_code = -0x02


class EncodingError(MboxctlError, ValueError):
    """Raised when a message cannot be packed into its wire form."""

    exit_code = -0x02


class TransportError(MboxctlError, ConnectionError):
    """Raised when connecting to, sending to or reading from the bus fails.

    The underlying exception is kept as ``cause`` and is also chained via
    ``raise ... from``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        code = getattr(self.cause, "errno", None)
        if isinstance(code, int) and code > 0:
            return -code
        return -errno.EIO


class ProtocolError(MboxctlError):
    """Raised when a reply does not have the shape the caller expects."""

    # -DaemonStatus.INTERNAL_ERROR
    exit_code = -0x01


class DaemonError(MboxctlError):
    """Raised when the daemon answers with a non-success status."""

    def __init__(self, operation: str, status: int, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.status = status
        self.message = message

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return -self.status
