"""In-memory read models for the latest sensor readings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from threading import Lock
from typing import Iterable, Optional, Tuple

from prometheus_client import (
    CollectorRegistry,
    Gauge,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from models.records import Reading

METRIC_NAME = "onewire_temperature_c"
METRIC_HELP = "Onewire Temperature Sensor Value in Celsius."
DEVICE_LABEL = "device_id"
HOST_LABEL = "hostname"


@dataclass(frozen=True)
class Snapshot:
    """Readings of one completed sampling cycle."""

    readings: Tuple[Reading, ...] = ()
    cycle: int = 0
    completed_at: Optional[datetime] = None


class ReadingStore:
    """Holds the gauge projection and the JSON snapshot projection.

    The sampler is the only writer. Gauge entries are upserted and never
    removed. The snapshot is swapped as a whole, so readers see either the
    previous cycle or the new one.
    """

    def __init__(
        self,
        registry: Optional[CollectorRegistry] = None,
        include_process_metrics: bool = False,
    ) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        if include_process_metrics:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
        self._gauge = Gauge(
            METRIC_NAME,
            METRIC_HELP,
            labelnames=(DEVICE_LABEL, HOST_LABEL),
            registry=self.registry,
        )
        self._snapshot = Snapshot()
        self._lock = Lock()

    def set(self, device_id: str, host_id: str, value: float) -> None:
        self._gauge.labels(device_id, host_id).set(value)

    def gauge_value(self, device_id: str, host_id: str) -> Optional[float]:
        return self.registry.get_sample_value(
            METRIC_NAME, {DEVICE_LABEL: device_id, HOST_LABEL: host_id}
        )

    def replace(self, readings: Iterable[Reading], completed_at: Optional[datetime] = None) -> Snapshot:
        frozen = tuple(readings)
        with self._lock:
            snapshot = Snapshot(
                readings=frozen,
                cycle=self._snapshot.cycle + 1,
                completed_at=completed_at,
            )
            self._snapshot = snapshot
        return snapshot

    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    def current(self) -> Tuple[Reading, ...]:
        return self.snapshot().readings

    def exposition(self) -> bytes:
        return generate_latest(self.registry)


@lru_cache
def build_default_store() -> ReadingStore:
    return ReadingStore(include_process_metrics=True)
