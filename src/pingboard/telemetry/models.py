"""Domain types for monitored targets and the telemetry recorded about them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class PingOutcome(Enum):
    """Result of a single ping probe."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class MonitoredTarget:
    """A network address under monitoring and its display label."""

    address: str
    label: str

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {"address": self.address, "label": self.label}


@dataclass(frozen=True)
class PingSample:
    """One ping measurement for a target."""

    address: str
    latency_ms: float
    outcome: PingOutcome
    observed_at: datetime

    @property
    def succeeded(self) -> bool:
        return self.outcome is PingOutcome.SUCCESS

    @classmethod
    def from_epoch_ms(
        cls,
        address: str,
        latency_ms: float,
        outcome: PingOutcome,
        timestamp_ms: float,
    ) -> PingSample:
        """Build a sample from an epoch-milliseconds timestamp."""
        return cls(
            address=address,
            latency_ms=float(latency_ms),
            outcome=outcome,
            observed_at=datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC),
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "address": self.address,
            "latency_ms": round(self.latency_ms, 2),
            "outcome": self.outcome.value,
            "observed_at": self.observed_at.isoformat(),
        }


@dataclass(frozen=True)
class Hop:
    """A single hop on a traceroute path."""

    index: int
    address: str
    latency_ms: float


@dataclass(frozen=True)
class TracerouteSnapshot:
    """The most recent route to a target."""

    address: str
    hops: tuple[Hop, ...] = ()

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "address": self.address,
            "hops": [
                {"hop": h.index, "address": h.address, "latency_ms": round(h.latency_ms, 2)}
                for h in self.hops
            ],
        }


@dataclass(frozen=True)
class TargetStatus:
    """Current status row for a target: its label and latest ping, if any."""

    address: str
    label: str
    latest: PingSample | None = None


@dataclass(frozen=True)
class ChartSeries:
    """Chart-ready latency series for one target."""

    series_label: str
    x_labels: list[str] = field(default_factory=list)
    y_values: list[float] = field(default_factory=list)
    color: str = ""

    def to_dict(self) -> dict:
        """Convert to the labels/datasets shape most chart libraries accept."""
        return {
            "labels": list(self.x_labels),
            "datasets": [
                {
                    "label": self.series_label,
                    "data": list(self.y_values),
                    "borderColor": self.color,
                    "fill": False,
                }
            ],
        }


@dataclass(frozen=True)
class LatencySummary:
    """Aggregate statistics over a target's retained ping history."""

    count: int = 0
    failed: int = 0
    min_ms: float | None = None
    avg_ms: float | None = None
    max_ms: float | None = None

    @property
    def loss_pct(self) -> float:
        if self.count == 0:
            return 0.0
        return 100.0 * self.failed / self.count
