"""Wire protocol of the probing service."""

from pingboard.protocol.messages import (
    ADD_IP,
    PING_RESULT,
    REMOVE_IP,
    TRACEROUTE_RESULT,
    PingResult,
    TracerouteHop,
    TracerouteResult,
    decode_ping_result,
    decode_traceroute_result,
)

__all__ = [
    "PING_RESULT",
    "TRACEROUTE_RESULT",
    "ADD_IP",
    "REMOVE_IP",
    "PingResult",
    "TracerouteHop",
    "TracerouteResult",
    "decode_ping_result",
    "decode_traceroute_result",
]
