"""Interpretation of reply payloads."""

from __future__ import annotations

from enum import IntEnum

from ..errors import ProtocolError
from .framing import ResponseMessage


class DaemonState(IntEnum):
    """Access state reported by STATUS."""

    ACTIVE = 0x00
    SUSPENDED = 0x01

    @property
    def label(self) -> str:
        return self.name.capitalize()


def parse_daemon_state(response: ResponseMessage) -> DaemonState:
    """Decode the single STATUS payload byte.

    Only call this for a successful reply. Any value other than ACTIVE is
    reported as suspended, matching the daemon's own test.
    """
    if len(response.args) < 1:
        raise ProtocolError("Status reply carries no state byte")
    if response.args[0] == DaemonState.ACTIVE:
        return DaemonState.ACTIVE
    return DaemonState.SUSPENDED
