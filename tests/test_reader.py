"""Unit tests for reading sensor value files."""

from __future__ import annotations

from pathlib import Path

import pytest

from services.reader import ReadError, ReadErrorKind, SampleReader, parse_value
from storage.onewire import OneWireFilesystem


def _reader_with_value(root: Path, contents: bytes, device_id: str = "28.aaa") -> SampleReader:
    device = root / device_id
    device.mkdir()
    (device / "temperature").write_bytes(contents)
    return SampleReader(OneWireFilesystem(root))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("23.500", 23.5),
        ("     23.5625", 23.5625),
        ("-10.125\n", -10.125),
        ("0", 0.0),
        ("85", 85.0),
        ("1e1", 10.0),
    ],
)
def test_parse_value_accepts_decimal_text(raw: str, expected: float) -> None:
    assert parse_value(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "23,5", "1_000", "nan", "inf", "-Infinity"])
def test_parse_value_rejects_invalid_text(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_value(raw)


def test_read_returns_parsed_value(tmp_path: Path) -> None:
    reader = _reader_with_value(tmp_path, b"23.500")

    assert reader.read("28.aaa") == 23.5


def test_read_missing_file_is_io_failure(tmp_path: Path) -> None:
    (tmp_path / "28.aaa").mkdir()
    reader = SampleReader(OneWireFilesystem(tmp_path))

    result = reader.read("28.aaa")

    assert isinstance(result, ReadError)
    assert result.kind is ReadErrorKind.io_failure
    assert result.device_id == "28.aaa"
    assert result.path.endswith("temperature")


def test_read_garbage_is_parse_failure(tmp_path: Path) -> None:
    reader = _reader_with_value(tmp_path, b"not-a-number")

    result = reader.read("28.aaa")

    assert isinstance(result, ReadError)
    assert result.kind is ReadErrorKind.parse_failure


def test_read_non_ascii_is_parse_failure(tmp_path: Path) -> None:
    reader = _reader_with_value(tmp_path, "23.5°".encode("utf-8"))

    result = reader.read("28.aaa")

    assert isinstance(result, ReadError)
    assert result.kind is ReadErrorKind.parse_failure


class RecordingFilesystem(OneWireFilesystem):
    def __init__(self, root_path: Path) -> None:
        super().__init__(root_path)
        self.reads: list[Path] = []

    def read_text(self, path: Path) -> str:
        self.reads.append(path)
        return super().read_text(path)


def test_read_goes_through_filesystem(tmp_path: Path) -> None:
    device = tmp_path / "28.aaa"
    device.mkdir()
    (device / "temperature").write_text("18.25")
    filesystem = RecordingFilesystem(tmp_path)

    assert SampleReader(filesystem).read("28.aaa") == 18.25
    assert filesystem.reads == [device / "temperature"]
