"""Shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from pingboard.channel.base import Channel, EventHandler
from pingboard.core.exceptions import ChannelError, ChannelUnavailableError


class FakeChannel(Channel):
    """In-memory channel that records emitted events and delivers inbound ones."""

    def __init__(self, fail_emit: bool = False, fail_connect: bool = False) -> None:
        self.handlers: dict[str, EventHandler] = {}
        self.emitted: list[tuple[str, Any]] = []
        self.fail_emit = fail_emit
        self.fail_connect = fail_connect
        self.connected = False
        self.close_calls = 0

    @property
    def is_connected(self) -> bool:
        return self.connected

    async def connect(self) -> None:
        if self.fail_connect:
            raise ChannelUnavailableError("http://fake:3001", "refused")
        self.connected = True

    async def close(self) -> None:
        self.connected = False
        self.close_calls += 1

    def on(self, event: str, handler: EventHandler) -> None:
        self.handlers[event] = handler

    def off(self, event: str) -> None:
        self.handlers.pop(event, None)

    async def emit(self, event: str, payload: Any) -> None:
        if self.fail_emit:
            raise ChannelError("channel down")
        self.emitted.append((event, payload))

    def deliver(self, event: str, payload: Any) -> None:
        handler = self.handlers.get(event)
        if handler is not None:
            handler(payload)


def ping_payload(ip: str, latency: float = 10.0, status: str = "success", timestamp: float = 1000) -> dict:
    return {"ip": ip, "latency": latency, "status": status, "timestamp": timestamp}


def traceroute_payload(ip: str, hops: list[tuple[int, str, float]]) -> dict:
    return {
        "ip": ip,
        "hops": [{"hop": n, "address": addr, "latency": lat} for n, addr, lat in hops],
    }


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()
