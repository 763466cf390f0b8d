"""D-Bus connection to the mailbox daemon.

The daemon registers ``org.openbmc.mboxd`` on the system bus and exposes a
single ``cmd`` method taking ``(y command, ay args)`` and returning
``(y status, ay args)``. Messages are built and exchanged with ``jeepney``'s
blocking I/O.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jeepney.wrappers import (
    DBusAddress,
    DBusErrorResponse,
    new_method_call,
    unwrap_msg,
)
from jeepney.io.blocking import open_dbus_connection

from ..errors import TransportError

logger = logging.getLogger(__name__)

DBUS_NAME = "org.openbmc.mboxd"
DOBJ_NAME = "/org/openbmc/mboxd"
DBUS_INTERFACE = DBUS_NAME
DBUS_METHOD = "cmd"
DBUS_SIGNATURE = "yay"


@dataclass
class EndpointInfo:
    """Where requests are delivered."""

    bus: str = "SYSTEM"
    bus_name: str = DBUS_NAME
    object_path: str = DOBJ_NAME
    interface: str = DBUS_INTERFACE


class DBusConnection:
    """Manages the bus connection used to reach the daemon.

    Usage::

        with DBusConnection() as conn:
            status, args = conn.call(command, args)

    The connection is opened on entry and always closed on exit.
    """

    def __init__(
        self,
        bus: str = "SYSTEM",
        bus_name: str = DBUS_NAME,
        object_path: str = DOBJ_NAME,
        interface: str = DBUS_INTERFACE,
    ) -> None:
        self._endpoint = EndpointInfo(
            bus=bus.upper(),
            bus_name=bus_name,
            object_path=object_path,
            interface=interface,
        )
        self._address = DBusAddress(
            object_path, bus_name=bus_name, interface=interface
        )
        self._conn = None

    @property
    def connected(self) -> bool:
        return self._conn is not None

    @property
    def endpoint(self) -> EndpointInfo:
        return self._endpoint

    def open(self) -> EndpointInfo:
        """Connect to the configured bus.

        Raises:
            TransportError: If the bus cannot be reached.
        """
        if self._conn is not None:
            return self._endpoint
        try:
            self._conn = open_dbus_connection(bus=self._endpoint.bus)
        except Exception as e:
            raise TransportError(
                f"Failed to connect to the {self._endpoint.bus.lower()} bus: {e}",
                cause=e,
            ) from e

        logger.info("Connected to %s bus", self._endpoint.bus.lower())
        return self._endpoint

    def close(self) -> None:
        """Close the bus connection."""
        if self._conn is None:
            return

        try:
            self._conn.close()
        except Exception as e:
            logger.warning("Error closing bus connection: %s", e)
        finally:
            self._conn = None
            logger.info("Disconnected")

    def __enter__(self) -> DBusConnection:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def call(self, command: int, args: bytes) -> tuple[int, bytes]:
        """Invoke the daemon's ``cmd`` method and wait for its reply.

        Returns:
            The ``(status, args)`` pair from the reply.

        Raises:
            TransportError: If not connected, or if the call or the reply
                read fails.
        """
        if self._conn is None:
            raise TransportError("Not connected to the bus")

        msg = new_method_call(
            self._address, DBUS_METHOD, DBUS_SIGNATURE, (command, bytes(args))
        )
        try:
            reply = self._conn.send_and_get_reply(msg)
            status, reply_args = unwrap_msg(reply)
        except DBusErrorResponse as e:
            raise TransportError(f"Failed to post message: {e.name}", cause=e) from e
        except (OSError, ValueError) as e:
            raise TransportError(f"Failed to post message: {e}", cause=e) from e

        return status, bytes(reply_args)
