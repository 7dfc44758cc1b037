"""Discovery of temperature sensors exposed through the 1-Wire mount."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Tuple

from storage.onewire import OneWireFilesystem

logger = logging.getLogger(__name__)

TEMPERATURE_FAMILY = "28"


class DiscoveryError(RuntimeError):
    """Raised when the sensor root directory cannot be listed."""


class DiscoveryStrategy(str, Enum):
    """How a device directory is matched against the wanted family code."""

    family_file = "family-file"
    name_prefix = "name-prefix"


def _matches_family(
    filesystem: OneWireFilesystem,
    device_id: str,
    family: str,
    strategy: DiscoveryStrategy,
) -> bool:
    if strategy is DiscoveryStrategy.name_prefix:
        matched = device_id.startswith(f"{family}.")
        if not matched:
            logger.debug("Skipping device of another family", extra={"device_id": device_id})
        return matched

    family_path = filesystem.family_path(device_id)
    try:
        device_family = filesystem.read_text(family_path).strip()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(
            "Skipping device without a readable family file",
            extra={"device_id": device_id, "path": str(family_path), "reason": str(exc)},
        )
        return False

    if device_family != family:
        logger.debug(
            "Skipping device of another family",
            extra={"device_id": device_id, "family": device_family},
        )
        return False
    return True


def discover(
    filesystem: OneWireFilesystem,
    family: str = TEMPERATURE_FAMILY,
    strategy: DiscoveryStrategy = DiscoveryStrategy.family_file,
) -> Tuple[str, ...]:
    """Return the ids of the devices of ``family`` that expose a value file.

    Devices failing the family check or missing their value file are skipped
    with a diagnostic. Raises ``DiscoveryError`` if the root cannot be listed.
    """
    try:
        candidates = filesystem.list_device_dirs()
    except OSError as exc:
        raise DiscoveryError(
            f"Unable to list sensor root {str(filesystem.root_path)!r}: {exc}"
        ) from exc

    devices: list[str] = []
    for device_id in candidates:
        if not _matches_family(filesystem, device_id, family, strategy):
            continue

        value_path = filesystem.value_path(device_id)
        try:
            value_path.stat()
        except OSError as exc:
            logger.warning(
                "Skipping device without a value file",
                extra={"device_id": device_id, "path": str(value_path), "reason": str(exc)},
            )
            continue

        devices.append(device_id)
        logger.info("Device found", extra={"device_id": device_id})

    return tuple(devices)
