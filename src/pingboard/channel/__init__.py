"""Push channel to the probing service."""

from pingboard.channel.base import Channel, EventHandler
from pingboard.channel.socketio_channel import SocketIOChannel

__all__ = [
    "Channel",
    "EventHandler",
    "SocketIOChannel",
]
