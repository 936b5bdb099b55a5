"""Socket.IO channel to the probing service."""

from __future__ import annotations

import contextlib
from typing import Any

import socketio
from socketio import exceptions as socketio_exceptions
import structlog

from pingboard.channel.base import Channel, EventHandler
from pingboard.core.config import ChannelConfig, ReconnectConfig
from pingboard.core.exceptions import ChannelError, ChannelUnavailableError

logger = structlog.get_logger()


class SocketIOChannel(Channel):
    """Channel backed by a python-socketio AsyncClient.

    Reconnection is delegated to the client; ReconnectConfig only tunes it.
    """

    def __init__(
        self,
        config: ChannelConfig | None = None,
        reconnect_config: ReconnectConfig | None = None,
        client: socketio.AsyncClient | None = None,
    ) -> None:
        """Initialize the channel.

        Args:
            config: Connection settings. Defaults to ChannelConfig().
            reconnect_config: Reconnection settings. Defaults to ReconnectConfig().
            client: Pre-built client, mainly for tests.
        """
        self.config = config or ChannelConfig()
        self.reconnect_config = reconnect_config or ReconnectConfig()
        self._namespace = self.config.namespace
        self._client = client or self._create_client()
        self._closed = False

        self._client.on("connect", self._on_connect, namespace=self._namespace)
        self._client.on("disconnect", self._on_disconnect, namespace=self._namespace)

    def _create_client(self) -> socketio.AsyncClient:
        reconn = self.reconnect_config
        return socketio.AsyncClient(
            reconnection=reconn.auto_reconnect,
            reconnection_attempts=reconn.max_attempts,
            reconnection_delay=reconn.base_delay,
            reconnection_delay_max=reconn.max_delay,
            randomization_factor=reconn.jitter,
        )

    @property
    def server_url(self) -> str:
        return self.config.server_url

    @property
    def is_connected(self) -> bool:
        return bool(self._client.connected)

    def _on_connect(self) -> None:
        logger.info("Channel connected", server=self.server_url)

    def _on_disconnect(self, *args: Any) -> None:
        logger.warning("Channel disconnected", server=self.server_url)

    async def connect(self) -> None:
        if self.is_connected:
            return
        self._closed = False
        logger.debug("Connecting channel", server=self.server_url)
        try:
            await self._client.connect(
                self.server_url,
                transports=self.config.get_transports(),
                namespaces=[self._namespace],
                wait_timeout=self.config.connect_timeout,
            )
        except socketio_exceptions.ConnectionError as e:
            raise ChannelUnavailableError(self.server_url, str(e)) from e

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        with contextlib.suppress(Exception):
            await self._client.disconnect()
        logger.info("Channel closed", server=self.server_url)

    def on(self, event: str, handler: EventHandler) -> None:
        self._client.on(event, handler, namespace=self._namespace)

    def off(self, event: str) -> None:
        self._client.handlers.get(self._namespace, {}).pop(event, None)

    async def emit(self, event: str, payload: Any) -> None:
        try:
            await self._client.emit(event, payload, namespace=self._namespace)
        except socketio_exceptions.SocketIOError as e:
            raise ChannelError(f"Failed to emit {event}: {e}") from e
