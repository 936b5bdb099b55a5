"""Exception types raised by the Pingboard core."""

from __future__ import annotations


class PingboardError(Exception):
    """Base class for all Pingboard errors."""


class TargetError(PingboardError):
    """Base class for target registry errors."""

    def __init__(self, address: str, message: str) -> None:
        self.address = address
        super().__init__(message)


class AlreadyMonitoredError(TargetError):
    """Raised when adding an address that is already monitored."""

    def __init__(self, address: str) -> None:
        super().__init__(address, f"Target already monitored: {address}")


class NotMonitoredError(TargetError):
    """Raised when removing an address that is not monitored."""

    def __init__(self, address: str) -> None:
        super().__init__(address, f"Target not monitored: {address}")


class InvalidTargetError(TargetError):
    """Raised when a target address is empty or malformed."""

    def __init__(self, address: str) -> None:
        super().__init__(address, f"Invalid target address: {address!r}")


class ChannelError(PingboardError):
    """Raised when the push channel fails to send or receive."""


class ChannelUnavailableError(ChannelError):
    """Raised when the push channel cannot be opened."""

    def __init__(self, server_url: str, reason: str | None = None) -> None:
        self.server_url = server_url
        self.reason = reason
        message = f"Cannot connect to {server_url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
