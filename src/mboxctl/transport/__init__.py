"""Transport layer: bus connection to the daemon."""

from .dbus_connection import DBusConnection
