"""Unit tests for the dual-projection reading store."""

from __future__ import annotations

import threading
from datetime import datetime, timezone

from datastore.reading_store import METRIC_NAME, ReadingStore
from models.records import Reading, ReadingKind


def _reading(device_id: str, value: float) -> Reading:
    return Reading(device_id=device_id, kind=ReadingKind.temperature, value=value)


def test_empty_store_has_no_readings_or_series() -> None:
    store = ReadingStore()

    assert store.current() == ()
    assert store.snapshot().cycle == 0
    assert store.gauge_value("28.aaa", "host") is None


def test_set_is_last_write_wins_per_key() -> None:
    store = ReadingStore()

    store.set("28.aaa", "host", 20.0)
    store.set("28.aaa", "host", 21.5)
    store.set("28.aaa", "host", 21.5)
    store.set("28.bbb", "host", 30.0)

    assert store.gauge_value("28.aaa", "host") == 21.5
    assert store.gauge_value("28.bbb", "host") == 30.0
    assert store.gauge_value("28.aaa", "other-host") is None


def test_replace_swaps_whole_snapshot() -> None:
    store = ReadingStore()
    completed_at = datetime(2024, 1, 1, tzinfo=timezone.utc)

    store.replace([_reading("28.aaa", 1.0), _reading("28.bbb", 2.0)])
    snapshot = store.replace([_reading("28.bbb", 3.0)], completed_at=completed_at)

    assert store.current() == (_reading("28.bbb", 3.0),)
    assert snapshot.cycle == 2
    assert store.snapshot().completed_at == completed_at


def test_replace_copies_the_input_list() -> None:
    store = ReadingStore()
    readings = [_reading("28.aaa", 1.0)]

    store.replace(readings)
    readings.append(_reading("28.bbb", 2.0))

    assert store.current() == (_reading("28.aaa", 1.0),)


def test_exposition_contains_labelled_series() -> None:
    store = ReadingStore()
    store.set("28.aaa", "sensor-host", 23.5)

    body = store.exposition().decode("utf-8")

    assert f"# TYPE {METRIC_NAME} gauge" in body
    assert f'{METRIC_NAME}{{device_id="28.aaa",hostname="sensor-host"}} 23.5' in body


def test_stores_use_independent_registries() -> None:
    first = ReadingStore()
    second = ReadingStore()

    first.set("28.aaa", "host", 1.0)

    assert second.gauge_value("28.aaa", "host") is None


def test_concurrent_readers_never_see_a_mixed_snapshot() -> None:
    store = ReadingStore()
    devices = [f"28.{index:03d}" for index in range(50)]
    generations = 200
    stop = threading.Event()
    mixed: list[tuple[Reading, ...]] = []

    def reader() -> None:
        while not stop.is_set():
            readings = store.current()
            values = {reading.value for reading in readings}
            if len(values) > 1 or (readings and len(readings) != len(devices)):
                mixed.append(readings)

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for thread in threads:
        thread.start()
    try:
        for generation in range(generations):
            store.replace(_reading(device_id, float(generation)) for device_id in devices)
    finally:
        stop.set()
        for thread in threads:
            thread.join()

    assert mixed == []
    assert store.snapshot().cycle == generations
