"""Dashboard controller: the entry point the presentation layer talks to.

The controller owns the target registry and the channel for the lifetime of a
session. Adding or removing a target is a two-step operation: the local change
is committed first, then the probing service is notified. A failed
notification is logged and never undoes the local change.

Usage:
    async with DashboardController(SocketIOChannel()) as dashboard:
        await dashboard.add_target("8.8.8.8", "Google DNS")
        status = dashboard.current_status("8.8.8.8")
        series = dashboard.series("8.8.8.8")
"""

from __future__ import annotations

from typing import Any

import structlog

from pingboard.channel.base import Channel
from pingboard.core.config import HistoryConfig
from pingboard.core.exceptions import ChannelError
from pingboard.protocol.messages import ADD_IP, REMOVE_IP
from pingboard.telemetry.history import LatencyHistoryStore
from pingboard.telemetry.ingestor import EventIngestor
from pingboard.telemetry.models import (
    ChartSeries,
    LatencySummary,
    MonitoredTarget,
    TargetStatus,
    TracerouteSnapshot,
)
from pingboard.telemetry.projection import project, summarize
from pingboard.telemetry.registry import TargetRegistry, address_key
from pingboard.telemetry.routes import RouteSnapshotStore

logger = structlog.get_logger()


class DashboardController:
    """Orchestrates target management, ingestion and read-only views."""

    def __init__(
        self,
        channel: Channel,
        registry: TargetRegistry | None = None,
        history: LatencyHistoryStore | None = None,
        routes: RouteSnapshotStore | None = None,
        history_config: HistoryConfig | None = None,
    ) -> None:
        """Initialize the controller and subscribe to the channel's events.

        Args:
            channel: Channel to the probing service, owned by this controller.
            registry: Target registry. A new one is created when omitted.
            history: Latency history store. Built from history_config when omitted.
            routes: Route snapshot store. A new one is created when omitted.
            history_config: Retention settings used when history is omitted.
        """
        if history is None:
            history_config = history_config or HistoryConfig()
            history = LatencyHistoryStore(
                max_samples=history_config.max_samples,
                max_age_seconds=history_config.max_age_seconds,
            )

        self.channel = channel
        self.registry = registry if registry is not None else TargetRegistry()
        self.history = history
        self.routes = routes if routes is not None else RouteSnapshotStore()
        self.ingestor = EventIngestor(self.registry, self.history, self.routes)

        self.ingestor.attach(self.channel)
        self._attached = True

    @property
    def is_open(self) -> bool:
        return self._attached and self.channel.is_connected

    async def open(self) -> None:
        """Connect the channel.

        Raises:
            ChannelUnavailableError: If the channel cannot be opened.
        """
        if not self._attached:
            self.ingestor.attach(self.channel)
            self._attached = True
        await self.channel.connect()

    async def close(self) -> None:
        """Unsubscribe from the channel and close it."""
        if self._attached:
            self.ingestor.detach(self.channel)
            self._attached = False
        await self.channel.close()
        logger.debug("Dashboard closed", stats=self.ingestor.stats)

    async def __aenter__(self) -> DashboardController:
        await self.open()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def add_target(self, address: str, label: str | None = None) -> MonitoredTarget:
        """Start monitoring an address and ask the probing service to probe it.

        Raises:
            AlreadyMonitoredError: If the address is already monitored. Nothing
                is sent to the channel in that case.
            InvalidTargetError: If the address is empty.
        """
        target = self.registry.add(address, label)
        await self._notify(ADD_IP, target.address)
        return target

    async def remove_target(self, address: str) -> MonitoredTarget:
        """Stop monitoring an address, purge its data and stop its probes.

        Raises:
            NotMonitoredError: If the address is not monitored.
        """
        target = self.registry.remove(address)
        await self._notify(REMOVE_IP, target.address)
        return target

    async def _notify(self, event: str, address: str) -> None:
        try:
            await self.channel.emit(event, address)
        except ChannelError as e:
            logger.warning("Probe notification failed", event_name=event, address=address, error=str(e))

    def targets(self) -> list[MonitoredTarget]:
        return self.registry.list()

    def current_status(self, address: str) -> TargetStatus | None:
        """Get the label and latest ping of a target, or None if not monitored."""
        target = self.registry.get(address)
        if target is None:
            return None
        return TargetStatus(
            address=target.address,
            label=target.label,
            latest=self.history.latest_for(target.address),
        )

    def statuses(self) -> list[TargetStatus]:
        """Get the status of every target in registry order."""
        return [
            TargetStatus(address=t.address, label=t.label, latest=self.history.latest_for(t.address))
            for t in self.registry.list()
        ]

    def current_route(self, address: str) -> TracerouteSnapshot | None:
        return self.routes.get(address_key(address))

    def series(self, address: str, **kwargs: Any) -> ChartSeries:
        """Build the latency chart series of a target.

        Keyword arguments are passed to project().
        """
        address = address_key(address)
        target = self.registry.get(address)
        label = target.label if target else None
        return project(self.history, address, label, **kwargs)

    def summary(self, address: str) -> LatencySummary:
        return summarize(self.history, address_key(address))
