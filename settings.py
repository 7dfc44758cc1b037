from __future__ import annotations

import os
import socket
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


_LISTEN_ADDRESS_ENV = "ONEWIRE_EXPORTER_LISTEN_ADDRESS"
_METRICS_PATH_ENV = "ONEWIRE_EXPORTER_METRICS_PATH"
_JSON_PATH_ENV = "ONEWIRE_EXPORTER_JSON_PATH"
_HOSTNAME_ENV = "ONEWIRE_EXPORTER_HOSTNAME"
_DISCOVERY_STRATEGY_ENV = "ONEWIRE_DISCOVERY_STRATEGY"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_LOG_FORMAT_ENV = "LOG_FORMAT"

_LOG_FORMATS = {"json", "text"}
_DISCOVERY_STRATEGIES = {"family-file", "name-prefix"}


@dataclass(frozen=True)
class Settings:
    listen_address: str
    metrics_path: str
    json_path: str
    hostname: str
    discovery_strategy: str
    log_level: str
    log_format: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def normalize_path(value: str) -> str:
    candidate = value.strip()
    if not candidate:
        raise ValueError("HTTP path must not be empty.")
    if not candidate.startswith("/"):
        candidate = "/" + candidate
    return candidate


def _read_path_env(name: str, default: str) -> str:
    return normalize_path(_read_str_env(name, default))


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


def _read_log_format(default: str) -> str:
    candidate = _read_str_env(_LOG_FORMAT_ENV, default).lower()
    return candidate if candidate in _LOG_FORMATS else default


def _read_discovery_strategy(default: str) -> str:
    candidate = _read_str_env(_DISCOVERY_STRATEGY_ENV, default).lower()
    return candidate if candidate in _DISCOVERY_STRATEGIES else default


def parse_listen_address(address: str) -> Tuple[str, int]:
    """Split a ``host:port`` listen address; an empty host binds all interfaces."""
    host, sep, port = address.strip().rpartition(":")
    if not sep:
        raise ValueError(f"Listen address {address!r} is missing a port.")
    try:
        parsed_port = int(port)
    except ValueError as exc:
        raise ValueError(f"Listen address {address!r} has an invalid port.") from exc
    if not 0 < parsed_port < 65536:
        raise ValueError(f"Listen address {address!r} has an out of range port.")
    host = host.strip("[]") or "0.0.0.0"
    return host, parsed_port


@lru_cache
def get_settings() -> Settings:
    return Settings(
        listen_address=_read_str_env(_LISTEN_ADDRESS_ENV, ":8105"),
        metrics_path=_read_path_env(_METRICS_PATH_ENV, "/metrics"),
        json_path=_read_path_env(_JSON_PATH_ENV, "/json"),
        hostname=_read_str_env(_HOSTNAME_ENV, socket.gethostname()),
        discovery_strategy=_read_discovery_strategy("family-file"),
        log_level=_read_log_level("INFO"),
        log_format=_read_log_format("json"),
    )
