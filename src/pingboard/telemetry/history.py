"""Per-target latency history with bounded retention.

Each target gets a fixed-capacity deque, so the oldest sample is dropped once
the capacity is reached. An optional time window additionally evicts samples
older than the newest one by more than ``max_age_seconds``. Eviction only
removes from the front, so stored order is always arrival order.
"""

from __future__ import annotations

from collections import deque
from datetime import timedelta

from pingboard.telemetry.models import PingSample

DEFAULT_MAX_SAMPLES = 300


class LatencyHistoryStore:
    """Ordered ping samples per target address."""

    def __init__(
        self,
        max_samples: int = DEFAULT_MAX_SAMPLES,
        max_age_seconds: float | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            max_samples: Maximum samples kept per target.
            max_age_seconds: Optional sliding window relative to the newest sample.
        """
        if max_samples < 1:
            raise ValueError("max_samples must be at least 1")
        if max_age_seconds is not None and max_age_seconds <= 0:
            raise ValueError("max_age_seconds must be positive")

        self._max_samples = max_samples
        self._max_age = timedelta(seconds=max_age_seconds) if max_age_seconds else None
        self._samples: dict[str, deque[PingSample]] = {}

    @property
    def max_samples(self) -> int:
        return self._max_samples

    def __len__(self) -> int:
        return len(self._samples)

    def append(self, address: str, sample: PingSample) -> None:
        """Append a sample in arrival order, evicting expired ones."""
        samples = self._samples.get(address)
        if samples is None:
            samples = deque(maxlen=self._max_samples)
            self._samples[address] = samples
        samples.append(sample)

        if self._max_age is not None:
            cutoff = sample.observed_at - self._max_age
            while samples and samples[0].observed_at < cutoff:
                samples.popleft()

    def all_for(self, address: str) -> list[PingSample]:
        """Return a copy of the target's history in arrival order."""
        samples = self._samples.get(address)
        return list(samples) if samples else []

    def latest_for(self, address: str) -> PingSample | None:
        samples = self._samples.get(address)
        return samples[-1] if samples else None

    def purge(self, address: str) -> None:
        self._samples.pop(address, None)

    def addresses(self) -> list[str]:
        return list(self._samples)

    def clear(self) -> None:
        self._samples.clear()
