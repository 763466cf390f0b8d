"""Tests for the MCP tool surface."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from mboxctl.errors import TransportError
from mboxctl.protocol.commands import Command


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
        sys.modules.pop("mboxctl.server", None)
        import mboxctl.server as server_mod

    return server_mod


def _connection(status: int = 0, args: bytes = b"") -> MagicMock:
    conn = MagicMock()
    conn.__enter__.return_value = conn
    conn.__exit__.return_value = None
    conn.call.return_value = (status, args)
    return conn


def test_get_status_tool():
    server = _get_server_module()
    conn = _connection(args=b"\x01")

    with patch.object(server, "_open_connection", return_value=conn):
        result = server.get_status()

    assert result == {
        "operation": "Status",
        "status": 0,
        "message": "Success",
        "state": "Suspended",
    }
    conn.__exit__.assert_called_once()


def test_resume_tool_passes_flag():
    server = _get_server_module()
    conn = _connection()

    with patch.object(server, "_open_connection", return_value=conn):
        result = server.resume(flash_modified=True)

    conn.call.assert_called_once_with(Command.RESUME, b"\x01")
    assert result["message"] == "Success"


def test_resume_tool_not_modified():
    server = _get_server_module()
    conn = _connection()

    with patch.object(server, "_open_connection", return_value=conn):
        server.resume(flash_modified=False)

    conn.call.assert_called_once_with(Command.RESUME, b"\x00")


def test_failure_status_is_returned():
    server = _get_server_module()
    conn = _connection(status=3)

    with patch.object(server, "_open_connection", return_value=conn):
        result = server.suspend()

    assert result["message"] == "Failed - Request Rejected by Daemon"


@pytest.mark.parametrize(
    "tool, command",
    [
        ("ping", Command.PING),
        ("reset", Command.RESET),
        ("flash_modified", Command.MODIFIED),
    ],
)
def test_simple_tools(tool, command):
    server = _get_server_module()
    conn = _connection()

    with patch.object(server, "_open_connection", return_value=conn):
        getattr(server, tool)()

    conn.call.assert_called_once_with(command, b"")


def test_transport_error_propagates():
    server = _get_server_module()
    conn = MagicMock()
    conn.__enter__.side_effect = TransportError("Failed to connect to the system bus")

    with patch.object(server, "_open_connection", return_value=conn):
        with pytest.raises(TransportError):
            server.ping()


def test_resume_tool_requires_flag():
    """Leaving out whether flash changed must not default to unmodified."""
    server = _get_server_module()
    with pytest.raises(TypeError):
        server.resume()
