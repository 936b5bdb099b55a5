"""Live latency and route dashboard."""

from pingboard.dashboard.controller import DashboardController
from pingboard.dashboard.render import (
    format_latency,
    render_dashboard,
    render_latency_table,
    render_route_table,
    render_status_table,
    sparkline,
)

__all__ = [
    "DashboardController",
    "format_latency",
    "render_dashboard",
    "render_latency_table",
    "render_route_table",
    "render_status_table",
    "sparkline",
]
