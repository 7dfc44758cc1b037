from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "http://localhost:8105"
DEFAULT_JSON_PATH = "/json"
DEFAULT_TIMEOUT = 10.0

_BASE_URL_ENV = "ONEWIRE_EXPORTER_URL"
_JSON_PATH_ENV = "ONEWIRE_EXPORTER_JSON_PATH"
_TIMEOUT_ENV = "CLI_REQUEST_TIMEOUT"


@dataclass(frozen=True)
class CLIConfig:
    base_url: str = DEFAULT_BASE_URL
    json_path: str = DEFAULT_JSON_PATH
    timeout: float = DEFAULT_TIMEOUT


def _read_float(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def load_config(
    base_url: Optional[str] = None,
    json_path: Optional[str] = None,
    timeout: Optional[float] = None,
) -> CLIConfig:
    url = base_url or os.getenv(_BASE_URL_ENV) or DEFAULT_BASE_URL
    path = json_path or os.getenv(_JSON_PATH_ENV) or DEFAULT_JSON_PATH
    if not path.startswith("/"):
        path = "/" + path
    request_timeout = (
        timeout if timeout is not None and timeout > 0 else _read_float(os.getenv(_TIMEOUT_ENV), DEFAULT_TIMEOUT)
    )
    return CLIConfig(base_url=url.rstrip("/"), json_path=path, timeout=request_timeout)
