"""Registry of monitored targets.

The registry is the single source of truth for which addresses are monitored.
Removing a target runs the registered removal hooks synchronously, which is how
the history and route stores purge a target in the same step as its removal.

Example:
    registry = TargetRegistry()
    registry.add("8.8.8.8", "Google DNS")
    registry.remove("8.8.8.8")
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import structlog

from pingboard.core.exceptions import (
    AlreadyMonitoredError,
    InvalidTargetError,
    NotMonitoredError,
)
from pingboard.telemetry.metrics import MONITORED_TARGETS
from pingboard.telemetry.models import MonitoredTarget

logger = structlog.get_logger()

RemovalHook = Callable[[str], None]


def address_key(address: str | None) -> str:
    """Strip surrounding whitespace. Lookups and mutations share this key."""
    return (address or "").strip()


def normalize_address(address: str) -> str:
    """Strip surrounding whitespace and reject empty addresses."""
    normalized = address_key(address)
    if not normalized:
        raise InvalidTargetError(address)
    return normalized


class TargetRegistry:
    """Ordered set of monitored targets keyed by address."""

    def __init__(self) -> None:
        # dicts keep insertion order, which is the rendering order
        self._targets: dict[str, MonitoredTarget] = {}
        self._removal_hooks: list[RemovalHook] = []

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and address_key(address) in self._targets

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[MonitoredTarget]:
        return iter(list(self._targets.values()))

    def add_removal_hook(self, hook: RemovalHook) -> None:
        """Add a hook called with the address of every removed target."""
        self._removal_hooks.append(hook)

    def remove_removal_hook(self, hook: RemovalHook) -> None:
        """Remove a removal hook."""
        if hook in self._removal_hooks:
            self._removal_hooks.remove(hook)

    def add(self, address: str, label: str | None = None) -> MonitoredTarget:
        """Start monitoring an address.

        Args:
            address: IP or domain to monitor.
            label: Display label. Defaults to the address when empty.

        Returns:
            The new MonitoredTarget.

        Raises:
            InvalidTargetError: If the address is empty.
            AlreadyMonitoredError: If the address is already monitored. The
                existing entry is left untouched.
        """
        address = normalize_address(address)
        if address in self._targets:
            raise AlreadyMonitoredError(address)

        label = (label or "").strip() or address
        target = MonitoredTarget(address=address, label=label)
        self._targets[address] = target
        MONITORED_TARGETS.set(len(self._targets))

        logger.info("Target added", address=address, label=label)
        return target

    def remove(self, address: str) -> MonitoredTarget:
        """Stop monitoring an address and purge everything recorded for it.

        Raises:
            NotMonitoredError: If the address is not monitored.
        """
        address = address_key(address)
        target = self._targets.pop(address, None)
        if target is None:
            raise NotMonitoredError(address)
        MONITORED_TARGETS.set(len(self._targets))

        for hook in list(self._removal_hooks):
            try:
                hook(address)
            except Exception as e:
                logger.warning("Removal hook error", address=address, error=str(e))

        logger.info("Target removed", address=address)
        return target

    def get(self, address: str) -> MonitoredTarget | None:
        return self._targets.get(address_key(address))

    def list(self) -> list[MonitoredTarget]:
        """Return all targets in insertion order."""
        return list(self._targets.values())
