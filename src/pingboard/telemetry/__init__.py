"""Client-side telemetry aggregation.

Keeps the monitored targets, their ping history and latest routes, and builds
chart-ready projections from them. The event ingestor lives in
``pingboard.telemetry.ingestor`` and is not re-exported here because it
depends on the wire protocol, which itself builds on these models.
"""

from pingboard.telemetry.history import LatencyHistoryStore
from pingboard.telemetry.models import (
    ChartSeries,
    Hop,
    LatencySummary,
    MonitoredTarget,
    PingOutcome,
    PingSample,
    TargetStatus,
    TracerouteSnapshot,
)
from pingboard.telemetry.projection import project, series_color, summarize
from pingboard.telemetry.registry import TargetRegistry
from pingboard.telemetry.routes import RouteSnapshotStore

__all__ = [
    # Models
    "MonitoredTarget",
    "PingOutcome",
    "PingSample",
    "Hop",
    "TracerouteSnapshot",
    "TargetStatus",
    "ChartSeries",
    "LatencySummary",
    # Stores
    "TargetRegistry",
    "LatencyHistoryStore",
    "RouteSnapshotStore",
    # Projections
    "project",
    "series_color",
    "summarize",
]
