"""Daemon status codes and their operator-facing text."""

from __future__ import annotations

from enum import IntEnum


class DaemonStatus(IntEnum):
    """Status byte returned by the daemon for every request."""

    SUCCESS = 0x00
    INTERNAL_ERROR = 0x01
    INVALID_REQUEST = 0x02
    REJECTED = 0x03
    HARDWARE_ERROR = 0x04


UNKNOWN_ERROR = "Failed - Unknown Error"

STATUS_MESSAGES: dict[DaemonStatus, str] = {
    DaemonStatus.SUCCESS: "Success",
    DaemonStatus.INTERNAL_ERROR: "Failed - Internal Error",
    DaemonStatus.INVALID_REQUEST: "Failed - Invalid Command or Request",
    DaemonStatus.REJECTED: "Failed - Request Rejected by Daemon",
    DaemonStatus.HARDWARE_ERROR: "Failed - BMC Hardware Error",
}


def describe_status(value: int) -> str:
    """Return the phrase for a raw status byte.

    Values the client does not know about map to :data:`UNKNOWN_ERROR`
    instead of raising, so a newer daemon can add codes.
    """
    try:
        return STATUS_MESSAGES[DaemonStatus(value)]
    except ValueError:
        return UNKNOWN_ERROR


def is_success(value: int) -> bool:
    return value == DaemonStatus.SUCCESS
