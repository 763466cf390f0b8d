"""Tests for the D-Bus transport, with the bus itself mocked out."""

import errno
from unittest.mock import MagicMock, patch

import pytest
from jeepney.low_level import HeaderFields
from jeepney.wrappers import new_error, new_method_return

from mboxctl.errors import TransportError
from mboxctl.transport import dbus_connection
from mboxctl.transport.dbus_connection import DBUS_NAME, DOBJ_NAME, DBusConnection

MODULE = "mboxctl.transport.dbus_connection"


def test_default_endpoint():
    conn = DBusConnection()
    assert conn.endpoint.bus == "SYSTEM"
    assert conn.endpoint.bus_name == DBUS_NAME == "org.openbmc.mboxd"
    assert conn.endpoint.object_path == DOBJ_NAME == "/org/openbmc/mboxd"
    assert not conn.connected


def test_context_manager_opens_and_closes():
    bus = MagicMock()
    with patch(f"{MODULE}.open_dbus_connection", return_value=bus) as opener:
        with DBusConnection(bus="session") as conn:
            assert conn.connected
        opener.assert_called_once_with(bus="SESSION")
    bus.close.assert_called_once()
    assert not conn.connected


def test_closes_on_error_inside_block():
    bus = MagicMock()
    with patch(f"{MODULE}.open_dbus_connection", return_value=bus):
        with pytest.raises(RuntimeError):
            with DBusConnection():
                raise RuntimeError("handler failed")
    bus.close.assert_called_once()


def test_open_failure_is_transport_error():
    cause = FileNotFoundError(errno.ENOENT, "No such file or directory")
    with patch(f"{MODULE}.open_dbus_connection", side_effect=cause):
        with pytest.raises(TransportError) as excinfo:
            DBusConnection().open()
    assert excinfo.value.cause is cause
    assert excinfo.value.exit_code == -errno.ENOENT


def test_call_builds_cmd_method_call():
    bus = MagicMock()
    with patch(f"{MODULE}.open_dbus_connection", return_value=bus), \
            patch(f"{MODULE}.unwrap_msg", return_value=(0, b"\x01")):
        with DBusConnection() as conn:
            status, args = conn.call(0x04, b"\x01")

    assert (status, args) == (0, b"\x01")
    msg = bus.send_and_get_reply.call_args[0][0]
    assert msg.body == (0x04, b"\x01")
    assert msg.header.fields[HeaderFields.member] == "cmd"
    assert msg.header.fields[HeaderFields.destination] == DBUS_NAME
    assert msg.header.fields[HeaderFields.path] == DOBJ_NAME


def test_call_failure_is_transport_error():
    bus = MagicMock()
    bus.send_and_get_reply.side_effect = ConnectionResetError(
        errno.ECONNRESET, "Connection reset by peer"
    )
    with patch(f"{MODULE}.open_dbus_connection", return_value=bus):
        with DBusConnection() as conn:
            with pytest.raises(TransportError) as excinfo:
                conn.call(0x00, b"")
    assert excinfo.value.exit_code == -errno.ECONNRESET
    bus.close.assert_called_once()


def test_call_when_not_connected():
    with pytest.raises(TransportError):
        DBusConnection().call(0x00, b"")


def test_close_is_idempotent():
    bus = MagicMock()
    with patch.object(dbus_connection, "open_dbus_connection", return_value=bus):
        conn = DBusConnection()
        conn.open()
        conn.close()
        conn.close()
    bus.close.assert_called_once()


def test_call_unwraps_real_method_return():
    """A genuine jeepney reply is unpacked into status and args."""
    bus = MagicMock()
    bus.send_and_get_reply.side_effect = lambda msg: new_method_return(
        msg, "yay", (0, b"\x01")
    )
    with patch(f"{MODULE}.open_dbus_connection", return_value=bus):
        with DBusConnection() as conn:
            status, args = conn.call(0x01, b"")

    assert status == 0
    assert args == b"\x01"
    assert isinstance(args, bytes)


def test_call_error_reply_is_transport_error():
    bus = MagicMock()
    bus.send_and_get_reply.side_effect = lambda msg: new_error(
        msg, "org.freedesktop.DBus.Error.ServiceUnknown", "s", ("no mboxd",)
    )
    with patch(f"{MODULE}.open_dbus_connection", return_value=bus):
        with DBusConnection() as conn:
            with pytest.raises(TransportError) as excinfo:
                conn.call(0x00, b"")

    assert "ServiceUnknown" in str(excinfo.value)
    bus.close.assert_called_once()
