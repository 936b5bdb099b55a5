"""Core."""

from .config import (
    ChannelConfig,
    HistoryConfig,
    PingboardConfig,
    ReconnectConfig,
    clear_config,
    get_config,
    load_config,
)
from .exceptions import (
    AlreadyMonitoredError,
    ChannelError,
    ChannelUnavailableError,
    InvalidTargetError,
    NotMonitoredError,
    PingboardError,
    TargetError,
)

__all__ = [
    # Config
    "PingboardConfig",
    "ChannelConfig",
    "ReconnectConfig",
    "HistoryConfig",
    "get_config",
    "clear_config",
    "load_config",
    # Errors
    "PingboardError",
    "TargetError",
    "AlreadyMonitoredError",
    "NotMonitoredError",
    "InvalidTargetError",
    "ChannelError",
    "ChannelUnavailableError",
]
