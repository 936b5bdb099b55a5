"""Latest traceroute result per target. Routes are replaced, never accumulated."""

from __future__ import annotations

from pingboard.telemetry.models import TracerouteSnapshot


class RouteSnapshotStore:
    def __init__(self) -> None:
        self._snapshots: dict[str, TracerouteSnapshot] = {}

    def __len__(self) -> int:
        return len(self._snapshots)

    def set(self, address: str, snapshot: TracerouteSnapshot) -> None:
        """Replace any prior snapshot for the address."""
        self._snapshots[address] = snapshot

    def get(self, address: str) -> TracerouteSnapshot | None:
        return self._snapshots.get(address)

    def purge(self, address: str) -> None:
        self._snapshots.pop(address, None)

    def clear(self) -> None:
        self._snapshots.clear()
