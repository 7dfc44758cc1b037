"""Reading and parsing raw sensor value files."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from storage.onewire import OneWireFilesystem


class ReadErrorKind(str, Enum):
    io_failure = "io_failure"
    parse_failure = "parse_failure"


@dataclass(frozen=True)
class ReadError:
    """Why a device produced no value in the current cycle."""

    device_id: str
    kind: ReadErrorKind
    path: str
    reason: str


ReadResult = Union[float, ReadError]


def parse_value(raw: str) -> float:
    """Parse the decimal text of a value file.

    Raises ``ValueError`` for empty, non-decimal or non-finite content.
    """
    candidate = raw.strip()
    if not candidate:
        raise ValueError("value file is empty")
    if "_" in candidate:
        raise ValueError(f"invalid numeric value {candidate!r}")
    value = float(candidate)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value {candidate!r}")
    return value


class SampleReader:
    """Reads the current temperature of a device without raising."""

    def __init__(self, filesystem: OneWireFilesystem) -> None:
        self.filesystem = filesystem

    def read(self, device_id: str) -> ReadResult:
        path = self.filesystem.value_path(device_id)
        try:
            raw = self.filesystem.read_text(path)
        except OSError as exc:
            return ReadError(
                device_id=device_id,
                kind=ReadErrorKind.io_failure,
                path=str(path),
                reason=exc.strerror or str(exc),
            )
        except UnicodeDecodeError as exc:
            return ReadError(
                device_id=device_id,
                kind=ReadErrorKind.parse_failure,
                path=str(path),
                reason=f"value file is not ASCII text: {exc.reason}",
            )

        try:
            return parse_value(raw)
        except ValueError as exc:
            return ReadError(
                device_id=device_id,
                kind=ReadErrorKind.parse_failure,
                path=str(path),
                reason=str(exc),
            )
