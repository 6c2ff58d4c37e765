"""
In-Memory Metrics Collector.

Keeps the samples a ViewPipeline records (view and stage timings,
records removed per stage, filtered-record gauges) so tests and debug
screens can read them back by name, or narrowed to one view or stage.
"""

from __future__ import annotations

from collections import defaultdict
from threading import Lock
from typing import Dict, List, NamedTuple, Optional


class Sample(NamedTuple):
    """One recorded value."""

    kind: str
    value: float
    tags: Dict[str, str]


class InMemoryMetricsCollector:
    """MetricsCollector that holds every sample in memory."""

    def __init__(self) -> None:
        self._samples: Dict[str, List[Sample]] = defaultdict(list)
        self._lock = Lock()

    def record_timing(
        self, name: str, duration_seconds: float, tags: Optional[Dict[str, str]] = None
    ) -> None:
        self._add(name, Sample("timing", duration_seconds, dict(tags or {})))

    def record_count(
        self, name: str, value: int, tags: Optional[Dict[str, str]] = None
    ) -> None:
        self._add(name, Sample("count", value, dict(tags or {})))

    def record_gauge(
        self, name: str, value: float, tags: Optional[Dict[str, str]] = None
    ) -> None:
        self._add(name, Sample("gauge", value, dict(tags or {})))

    def get_metrics(self) -> Dict[str, Dict[str, float]]:
        """Summary per metric: number of samples, total and last value."""
        with self._lock:
            return {
                name: {
                    "count": len(samples),
                    "total": sum(s.value for s in samples),
                    "last": samples[-1].value,
                }
                for name, samples in self._samples.items()
                if samples
            }

    def get_entries(self, name: str, **tags: str) -> List[Sample]:
        """Samples under a name whose tags include every given tag."""
        with self._lock:
            samples = list(self._samples.get(name, ()))
        return [
            s for s in samples if all(s.tags.get(k) == v for k, v in tags.items())
        ]

    def total(self, name: str, **tags: str) -> float:
        """Sum of the matching samples, e.g. total("records_removed_total", stage="search")."""
        return sum(s.value for s in self.get_entries(name, **tags))

    def clear(self) -> None:
        with self._lock:
            self._samples.clear()

    def _add(self, name: str, sample: Sample) -> None:
        with self._lock:
            self._samples[name].append(sample)
