"""Routes inbound telemetry events into the history and route stores.

Events for addresses that are not registered are dropped, counted and logged
at debug level. Results for a target can still arrive after it was removed.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError

from pingboard.channel.base import Channel
from pingboard.protocol.messages import (
    PING_RESULT,
    TRACEROUTE_RESULT,
    decode_ping_result,
    decode_traceroute_result,
)
from pingboard.telemetry.history import LatencyHistoryStore
from pingboard.telemetry.metrics import EVENTS_DISCARDED, EVENTS_INGESTED
from pingboard.telemetry.registry import TargetRegistry
from pingboard.telemetry.routes import RouteSnapshotStore

logger = structlog.get_logger()


class EventIngestor:
    """Applies ping and traceroute events to the stores of registered targets."""

    def __init__(
        self,
        registry: TargetRegistry,
        history: LatencyHistoryStore,
        routes: RouteSnapshotStore,
    ) -> None:
        self.registry = registry
        self.history = history
        self.routes = routes

        self._pings_applied = 0
        self._routes_applied = 0
        self._orphans = 0
        self._malformed = 0

        registry.add_removal_hook(self.purge)

    @property
    def stats(self) -> dict[str, int]:
        """Get ingestion counters."""
        return {
            "pings_applied": self._pings_applied,
            "routes_applied": self._routes_applied,
            "orphans_discarded": self._orphans,
            "malformed_discarded": self._malformed,
        }

    def attach(self, channel: Channel) -> None:
        """Subscribe to the channel's telemetry events."""
        channel.on(PING_RESULT, self.handle_ping_result)
        channel.on(TRACEROUTE_RESULT, self.handle_traceroute_result)

    def detach(self, channel: Channel) -> None:
        """Unsubscribe from the channel's telemetry events."""
        channel.off(PING_RESULT)
        channel.off(TRACEROUTE_RESULT)

    def purge(self, address: str) -> None:
        """Drop all history and the route of an address."""
        self.history.purge(address)
        self.routes.purge(address)

    def handle_ping_result(self, payload: Any) -> None:
        try:
            message = decode_ping_result(payload)
            sample = message.to_sample()
        except ValidationError as e:
            self._discard_malformed("ping", e)
            return
        except (ValueError, OverflowError, OSError) as e:
            # timestamp accepted by the schema but not representable as a datetime
            self._discard_malformed("ping", e)
            return

        if message.ip not in self.registry:
            self._discard_orphan("ping", message.ip)
            return

        self.history.append(message.ip, sample)
        self._pings_applied += 1
        EVENTS_INGESTED.labels(kind="ping").inc()

    def handle_traceroute_result(self, payload: Any) -> None:
        try:
            message = decode_traceroute_result(payload)
        except ValidationError as e:
            self._discard_malformed("traceroute", e)
            return

        if message.ip not in self.registry:
            self._discard_orphan("traceroute", message.ip)
            return

        self.routes.set(message.ip, message.to_snapshot())
        self._routes_applied += 1
        EVENTS_INGESTED.labels(kind="traceroute").inc()

    def _discard_orphan(self, kind: str, address: str) -> None:
        self._orphans += 1
        EVENTS_DISCARDED.labels(kind=kind, reason="orphan").inc()
        logger.debug("Discarded event for unmonitored target", kind=kind, address=address)

    def _discard_malformed(self, kind: str, error: Exception) -> None:
        self._malformed += 1
        EVENTS_DISCARDED.labels(kind=kind, reason="malformed").inc()
        if isinstance(error, ValidationError):
            logger.warning("Discarded malformed event", kind=kind, errors=error.error_count())
        else:
            logger.warning("Discarded malformed event", kind=kind, error=str(error))
