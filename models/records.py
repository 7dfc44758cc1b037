"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ReadingKind(str, Enum):
    """Measurement kinds produced by the sampler."""

    temperature = "temperature"


@dataclass(frozen=True, slots=True)
class Reading:
    """A single value read from a sensor during one sampling cycle."""

    device_id: str
    kind: ReadingKind
    value: float
