"""Abstract push channel between the dashboard and the probing service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

EventHandler = Callable[[Any], None]


class Channel(ABC):
    """A bidirectional event channel.

    Inbound events are delivered to handlers registered with on(). Handlers are
    plain callables and run on the event loop one event at a time, in arrival
    order. Outbound events are sent with emit().
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the channel is connected."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the channel.

        Raises:
            ChannelUnavailableError: If the channel cannot be opened.
        """

    @abstractmethod
    async def close(self) -> None:
        """Close the channel. Safe to call more than once."""

    @abstractmethod
    def on(self, event: str, handler: EventHandler) -> None:
        """Register the handler for an inbound event, replacing any previous one."""

    @abstractmethod
    def off(self, event: str) -> None:
        """Unregister the handler for an inbound event."""

    @abstractmethod
    async def emit(self, event: str, payload: Any) -> None:
        """Send an outbound event.

        Raises:
            ChannelError: If the event could not be sent.
        """

    async def __aenter__(self) -> Channel:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
