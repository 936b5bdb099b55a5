from prometheus_client import Counter, Gauge

EVENTS_INGESTED = Counter(
    "pingboard_events_total",
    "Telemetry events applied to a monitored target",
    ["kind"],  # kind: ping/traceroute
)

EVENTS_DISCARDED = Counter(
    "pingboard_events_discarded_total",
    "Telemetry events dropped before reaching a store",
    ["kind", "reason"],  # reason: orphan/malformed
)

MONITORED_TARGETS = Gauge(
    "pingboard_monitored_targets",
    "Current monitored targets",
)
