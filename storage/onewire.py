"""Read-only view over a 1-Wire filesystem mount (owfs)."""

from __future__ import annotations

from pathlib import Path
from typing import List

DEFAULT_ROOT_PATH = Path("/mnt/1wire")
TEMPERATURE_FILENAME = "temperature"
FAMILY_FILENAME = "family"


class OneWireFilesystem:

    def __init__(self, root_path: Path = DEFAULT_ROOT_PATH) -> None:
        self.root_path = Path(root_path)

    def list_device_dirs(self) -> List[str]:
        """Return the names of the device directories directly under the root.

        Entries are sorted by name. Anything that is not a directory is
        ignored. Raises ``OSError`` when the root itself cannot be listed.
        """
        names: List[str] = []
        for entry in self.root_path.iterdir():
            try:
                if not entry.is_dir():
                    continue
            except OSError:
                continue
            names.append(entry.name)
        return sorted(names)

    def device_path(self, device_id: str) -> Path:
        return self.root_path / device_id

    def value_path(self, device_id: str) -> Path:
        return self.device_path(device_id) / TEMPERATURE_FILENAME

    def family_path(self, device_id: str) -> Path:
        return self.device_path(device_id) / FAMILY_FILENAME

    @staticmethod
    def read_text(path: Path) -> str:
        return path.read_bytes().decode("ascii")
