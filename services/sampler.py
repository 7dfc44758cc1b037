"""Background sampling of the discovered temperature sensors."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Tuple

from datastore.reading_store import ReadingStore, build_default_store
from models.records import Reading, ReadingKind
from services.discovery import TEMPERATURE_FAMILY, DiscoveryStrategy, discover
from services.reader import ReadError, SampleReader
from settings import get_settings
from storage.onewire import OneWireFilesystem

logger = logging.getLogger(__name__)

SAMPLE_INTERVAL_SECONDS = 10.0


class SamplerState(str, Enum):
    idle = "idle"
    discovering = "discovering"
    sampling = "sampling"
    stopped = "stopped"


class TemperatureSampler:
    """Discovers sensors once, then republishes their readings every interval."""

    def __init__(
        self,
        filesystem: OneWireFilesystem,
        store: ReadingStore,
        hostname: str,
        interval: float = SAMPLE_INTERVAL_SECONDS,
        family: str = TEMPERATURE_FAMILY,
        strategy: DiscoveryStrategy = DiscoveryStrategy.family_file,
    ) -> None:
        self.filesystem = filesystem
        self.store = store
        self.hostname = hostname
        self.interval = interval
        self.family = family
        self.strategy = strategy
        self.reader = SampleReader(filesystem)
        self.state = SamplerState.idle
        self._devices: Tuple[str, ...] = ()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def devices(self) -> Tuple[str, ...]:
        return self._devices

    def discover(self) -> Tuple[str, ...]:
        """Enumerate devices once; ``DiscoveryError`` propagates to the caller."""
        self.state = SamplerState.discovering
        self._devices = discover(self.filesystem, family=self.family, strategy=self.strategy)
        logger.info(
            "Discovery finished",
            extra={"device_count": len(self._devices), "path": str(self.filesystem.root_path)},
        )
        self.state = SamplerState.sampling
        return self._devices

    def sample_once(self) -> List[Reading]:
        """Run one sampling cycle over the device list and publish its results."""
        readings: List[Reading] = []
        for device_id in self._devices:
            result = self.reader.read(device_id)
            if isinstance(result, ReadError):
                logger.error(
                    "Error reading from device",
                    extra={
                        "device_id": device_id,
                        "path": result.path,
                        "error_kind": result.kind.value,
                        "reason": result.reason,
                    },
                )
                continue

            logger.info(
                "Value read from device",
                extra={"device_id": device_id, "value": result, "hostname": self.hostname},
            )
            self.store.set(device_id, self.hostname, result)
            readings.append(Reading(device_id=device_id, kind=ReadingKind.temperature, value=result))

        snapshot = self.store.replace(readings, completed_at=datetime.now(timezone.utc))
        logger.debug(
            "Sampling cycle complete",
            extra={"cycle": snapshot.cycle, "device_count": len(readings)},
        )
        return readings

    def run(
        self,
        stop_event: Optional[threading.Event] = None,
        max_cycles: Optional[int] = None,
    ) -> None:
        """Sample until ``stop_event`` is set or ``max_cycles`` cycles have run."""
        stop = stop_event if stop_event is not None else self._stop_event
        self.state = SamplerState.sampling
        cycles = 0
        try:
            while not stop.is_set():
                self.sample_once()
                cycles += 1
                if max_cycles is not None and cycles >= max_cycles:
                    break
                stop.wait(self.interval)
        finally:
            self.state = SamplerState.stopped

    def start(self) -> None:
        """Discover devices and launch the sampling thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self.discover()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.run,
            name="onewire-sampler",
            daemon=True,
        )
        self._thread.start()
        logger.info("Sampler started", extra={"device_count": len(self._devices)})

    def shutdown(self, timeout: Optional[float] = 5.0) -> None:
        """Signal the sampling thread to stop and wait for it."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Sampler thread did not stop within the timeout")
                return
        self._thread = None
        self.state = SamplerState.stopped


@lru_cache
def build_default_sampler() -> TemperatureSampler:
    """Factory that wires the sampler to the fixed sensor root and default store."""
    settings = get_settings()
    return TemperatureSampler(
        filesystem=OneWireFilesystem(),
        store=build_default_store(),
        hostname=settings.hostname,
        strategy=DiscoveryStrategy(settings.discovery_strategy),
    )
