"""Wire messages exchanged with the probing service over the push channel."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from pingboard.telemetry.models import (
    Hop,
    PingOutcome,
    PingSample,
    TracerouteSnapshot,
)

# Inbound events
PING_RESULT = "pingResult"
TRACEROUTE_RESULT = "tracerouteResult"

# Outbound events, payload is the bare address string
ADD_IP = "addIP"
REMOVE_IP = "removeIP"

# 9999-12-31T23:59:59Z, the last instant a datetime can hold
MAX_TIMESTAMP_MS = 253_402_300_799_000


class PingResult(BaseModel):
    """Result of one ping probe."""

    model_config = ConfigDict(str_strip_whitespace=True)

    ip: str
    latency: float
    status: Literal["success", "failed"]
    timestamp: float = Field(
        ge=0,
        le=MAX_TIMESTAMP_MS,
        allow_inf_nan=False,
        description="Epoch milliseconds.",
    )

    def to_sample(self) -> PingSample:
        return PingSample.from_epoch_ms(
            address=self.ip,
            latency_ms=self.latency,
            outcome=PingOutcome(self.status),
            timestamp_ms=self.timestamp,
        )


class TracerouteHop(BaseModel):
    hop: int = Field(ge=1)
    address: str
    latency: float


class TracerouteResult(BaseModel):
    """Full hop list of one traceroute probe."""

    model_config = ConfigDict(str_strip_whitespace=True)

    ip: str
    hops: list[TracerouteHop] = Field(default_factory=list)

    def to_snapshot(self) -> TracerouteSnapshot:
        return TracerouteSnapshot(
            address=self.ip,
            hops=tuple(
                Hop(index=h.hop, address=h.address, latency_ms=h.latency) for h in self.hops
            ),
        )


def decode_ping_result(payload: Any) -> PingResult:
    """Validate a pingResult payload.

    Raises:
        pydantic.ValidationError: If the payload does not match the schema.
    """
    return PingResult.model_validate(payload)


def decode_traceroute_result(payload: Any) -> TracerouteResult:
    """Validate a tracerouteResult payload.

    Raises:
        pydantic.ValidationError: If the payload does not match the schema.
    """
    return TracerouteResult.model_validate(payload)
