"""Terminal rendering of the dashboard with rich."""

from __future__ import annotations

import colorsys
import re

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pingboard.dashboard.controller import DashboardController
from pingboard.telemetry.models import (
    ChartSeries,
    LatencySummary,
    PingOutcome,
    TargetStatus,
    TracerouteSnapshot,
)

NOT_AVAILABLE = "N/A"
SPARK_CHARS = "▁▂▃▄▅▆▇█"
SPARKLINE_WIDTH = 40

_HSL_RE = re.compile(r"hsl\(\s*([\d.]+)\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*\)")


def format_latency(latency_ms: float | None) -> str:
    """Format a latency for display."""
    if latency_ms is None:
        return NOT_AVAILABLE
    return f"{latency_ms:.2f} ms"


def _outcome_text(status: TargetStatus) -> Text:
    if status.latest is None:
        return Text(NOT_AVAILABLE, style="dim")
    if status.latest.outcome is PingOutcome.SUCCESS:
        return Text(status.latest.outcome.value, style="green")
    return Text(status.latest.outcome.value, style="red")


def render_status_table(
    statuses: list[TargetStatus],
    summaries: dict[str, LatencySummary] | None = None,
) -> Table:
    """Build the table of targets with their latest ping result."""
    summaries = summaries or {}

    table = Table(title="Ping Results", expand=True)
    table.add_column("Target", style="cyan")
    table.add_column("Label")
    table.add_column("Latency", justify="right")
    table.add_column("Status")
    table.add_column("Loss", justify="right")
    table.add_column("Min/Avg/Max", justify="right", style="dim")

    for status in statuses:
        latest = status.latest
        summary = summaries.get(status.address, LatencySummary())
        if summary.avg_ms is None:
            stats = NOT_AVAILABLE
        else:
            stats = f"{summary.min_ms:.1f}/{summary.avg_ms:.1f}/{summary.max_ms:.1f}"
        table.add_row(
            status.address,
            status.label,
            format_latency(latest.latency_ms if latest else None),
            _outcome_text(status),
            f"{summary.loss_pct:.0f}%" if summary.count else NOT_AVAILABLE,
            stats,
        )

    return table


def sparkline(values: list[float], width: int = SPARKLINE_WIDTH) -> str:
    """Render the most recent values as a block-character sparkline."""
    if not values:
        return ""
    recent = values[-width:]
    lo, hi = min(recent), max(recent)
    rng = hi - lo if hi != lo else 1.0
    return "".join(SPARK_CHARS[min(int((v - lo) / rng * 7), 7)] for v in recent)


def rich_color(color: str) -> str:
    """Convert an ``hsl(h, s%, l%)`` series color to a rich hex color."""
    match = _HSL_RE.fullmatch(color.strip())
    if match is None:
        return "default"
    hue, sat, light = (float(g) for g in match.groups())
    r, g, b = colorsys.hls_to_rgb(hue / 360, light / 100, sat / 100)
    return f"#{round(r * 255):02x}{round(g * 255):02x}{round(b * 255):02x}"


def render_latency_table(series: list[ChartSeries], width: int = SPARKLINE_WIDTH) -> Table:
    """Build the per-target latency chart, one sparkline row per series."""
    table = Table(title="Latency History", expand=True)
    table.add_column("Target")
    table.add_column("Trend", no_wrap=True)
    table.add_column("From", style="dim")
    table.add_column("To", style="dim")
    table.add_column("Last", justify="right")

    for s in series:
        style = rich_color(s.color)
        if not s.y_values:
            table.add_row(Text(s.series_label, style=style), Text(NOT_AVAILABLE, style="dim"),
                          NOT_AVAILABLE, NOT_AVAILABLE, NOT_AVAILABLE)
            continue
        window = s.x_labels[-width:]
        table.add_row(
            Text(s.series_label, style=style),
            Text(sparkline(s.y_values, width), style=style),
            window[0],
            window[-1],
            format_latency(s.y_values[-1]),
        )

    return table


def render_route_table(label: str, snapshot: TracerouteSnapshot) -> Table:
    """Build the hop table of one traceroute snapshot."""
    table = Table(title=f"Traceroute: {label}", expand=True)
    table.add_column("Hop", justify="right")
    table.add_column("Address", style="cyan")
    table.add_column("Latency", justify="right")

    for hop in snapshot.hops:
        table.add_row(str(hop.index), hop.address, format_latency(hop.latency_ms))

    return table


def render_dashboard(controller: DashboardController) -> RenderableType:
    """Render the full dashboard: status table, latency chart, then known routes."""
    statuses = controller.statuses()
    if not statuses:
        return Panel("[dim]No monitored targets[/dim]", title="Pingboard", border_style="cyan")

    summaries = {s.address: controller.summary(s.address) for s in statuses}
    parts: list[RenderableType] = [
        render_status_table(statuses, summaries),
        render_latency_table([controller.series(s.address) for s in statuses]),
    ]

    for status in statuses:
        snapshot = controller.current_route(status.address)
        if snapshot is not None:
            parts.append(render_route_table(status.label, snapshot))

    return Group(*parts)
