"""Tests for the Socket.IO channel."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from socketio import exceptions as socketio_exceptions

from pingboard.channel.socketio_channel import SocketIOChannel
from pingboard.core.config import ChannelConfig, ReconnectConfig
from pingboard.core.exceptions import ChannelError, ChannelUnavailableError


def make_client() -> MagicMock:
    client = MagicMock()
    client.connect = AsyncMock()
    client.disconnect = AsyncMock()
    client.emit = AsyncMock()
    client.connected = False
    client.handlers = {}
    return client


class TestSocketIOChannel:
    """Tests for SocketIOChannel."""

    @pytest.mark.asyncio
    async def test_connect_arguments(self):
        """Test connect passes URL, transports, namespace and timeout."""
        client = make_client()
        config = ChannelConfig(server_url="http://probe:3001", transports="websocket", connect_timeout=3.0)
        channel = SocketIOChannel(config, client=client)

        await channel.connect()

        client.connect.assert_awaited_once_with(
            "http://probe:3001",
            transports=["websocket"],
            namespaces=["/"],
            wait_timeout=3.0,
        )

    @pytest.mark.asyncio
    async def test_connect_skipped_when_connected(self):
        """Test connect is a no-op on a connected client."""
        client = make_client()
        client.connected = True
        channel = SocketIOChannel(client=client)

        await channel.connect()

        client.connect.assert_not_awaited()
        assert channel.is_connected

    @pytest.mark.asyncio
    async def test_connect_failure(self):
        """Test connection errors become ChannelUnavailableError."""
        client = make_client()
        client.connect.side_effect = socketio_exceptions.ConnectionError("refused")
        channel = SocketIOChannel(ChannelConfig(server_url="http://probe:3001"), client=client)

        with pytest.raises(ChannelUnavailableError) as exc_info:
            await channel.connect()

        assert exc_info.value.server_url == "http://probe:3001"

    @pytest.mark.asyncio
    async def test_emit(self):
        """Test emit sends on the configured namespace."""
        client = make_client()
        channel = SocketIOChannel(client=client)

        await channel.emit("addIP", "8.8.8.8")

        client.emit.assert_awaited_once_with("addIP", "8.8.8.8", namespace="/")

    @pytest.mark.asyncio
    async def test_emit_failure(self):
        """Test emit errors become ChannelError."""
        client = make_client()
        client.emit.side_effect = socketio_exceptions.BadNamespaceError("/ is not a connected namespace.")
        channel = SocketIOChannel(client=client)

        with pytest.raises(ChannelError):
            await channel.emit("addIP", "8.8.8.8")

    def test_on_and_off(self):
        """Test handlers are registered on and removed from the namespace."""
        client = make_client()
        channel = SocketIOChannel(client=client)
        handler = MagicMock()

        channel.on("pingResult", handler)
        client.on.assert_any_call("pingResult", handler, namespace="/")

        client.handlers["/"] = {"pingResult": handler}
        channel.off("pingResult")
        channel.off("unknown")
        assert client.handlers["/"] == {}

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        """Test close disconnects once."""
        client = make_client()
        channel = SocketIOChannel(client=client)

        await channel.close()
        await channel.close()

        client.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test async with connects and closes."""
        client = make_client()

        async with SocketIOChannel(client=client):
            client.connect.assert_awaited_once()

        client.disconnect.assert_awaited_once()

    def test_reconnect_settings(self):
        """Test ReconnectConfig is passed to the client."""
        reconnect = ReconnectConfig(max_attempts=3, base_delay=2.0, max_delay=10.0, jitter=0.1)

        with patch("pingboard.channel.socketio_channel.socketio.AsyncClient") as client_class:
            SocketIOChannel(reconnect_config=reconnect)

        client_class.assert_called_once_with(
            reconnection=True,
            reconnection_attempts=3,
            reconnection_delay=2.0,
            reconnection_delay_max=10.0,
            randomization_factor=0.1,
        )
