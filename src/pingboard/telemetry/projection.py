"""Chart-ready views derived from the latency history.

Everything here is a pure function of the history store. Nothing is cached:
each call re-reads the current history.
"""

from __future__ import annotations

import hashlib
from datetime import tzinfo

from pingboard.telemetry.history import LatencyHistoryStore
from pingboard.telemetry.models import ChartSeries, LatencySummary


def series_color(address: str) -> str:
    """Derive a stable HSL line color for an address.

    The hue comes from a SHA-1 digest, so it is the same in every process.
    """
    digest = hashlib.sha1(address.encode("utf-8")).digest()
    hue = int.from_bytes(digest[:2], "big") % 360
    return f"hsl({hue}, 100%, 50%)"


def project(
    history: LatencyHistoryStore,
    address: str,
    target_label: str | None = None,
    *,
    tz: tzinfo | None = None,
    time_format: str = "%X",
) -> ChartSeries:
    """Build the latency series for one target.

    Args:
        history: Store to read samples from.
        address: Target address.
        target_label: Series label. Falls back to the address when empty.
        tz: Timezone for the x labels. Defaults to the local timezone.
        time_format: strftime format for the x labels. ``%X`` is the locale's
            time-of-day representation.

    Returns:
        ChartSeries with one x label and one y value per stored sample.
    """
    samples = history.all_for(address)
    return ChartSeries(
        series_label=target_label or address,
        x_labels=[s.observed_at.astimezone(tz).strftime(time_format) for s in samples],
        y_values=[s.latency_ms for s in samples],
        color=series_color(address),
    )


def summarize(history: LatencyHistoryStore, address: str) -> LatencySummary:
    """Compute loss and min/avg/max latency over the retained history.

    Latency statistics only consider successful probes.
    """
    samples = history.all_for(address)
    if not samples:
        return LatencySummary()

    latencies = [s.latency_ms for s in samples if s.succeeded]
    failed = len(samples) - len(latencies)
    if not latencies:
        return LatencySummary(count=len(samples), failed=failed)

    return LatencySummary(
        count=len(samples),
        failed=failed,
        min_ms=min(latencies),
        avg_ms=sum(latencies) / len(latencies),
        max_ms=max(latencies),
    )
