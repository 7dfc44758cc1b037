from __future__ import annotations

import pytest

from services.discovery import DiscoveryStrategy
from services.sampler import build_default_sampler
from settings import get_settings, parse_listen_address


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    build_default_sampler.cache_clear()


def test_defaults(monkeypatch) -> None:
    for name in (
        "ONEWIRE_EXPORTER_LISTEN_ADDRESS",
        "ONEWIRE_EXPORTER_METRICS_PATH",
        "ONEWIRE_EXPORTER_JSON_PATH",
        "ONEWIRE_DISCOVERY_STRATEGY",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.listen_address == ":8105"
    assert settings.metrics_path == "/metrics"
    assert settings.json_path == "/json"
    assert settings.discovery_strategy == "family-file"
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"
    assert settings.hostname


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("ONEWIRE_EXPORTER_LISTEN_ADDRESS", "127.0.0.1:9000")
    monkeypatch.setenv("ONEWIRE_EXPORTER_METRICS_PATH", "prom")
    monkeypatch.setenv("ONEWIRE_EXPORTER_JSON_PATH", " /readings ")
    monkeypatch.setenv("ONEWIRE_EXPORTER_HOSTNAME", "garage")
    monkeypatch.setenv("ONEWIRE_DISCOVERY_STRATEGY", "NAME-PREFIX")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "text")

    settings = get_settings()

    assert settings.listen_address == "127.0.0.1:9000"
    assert settings.metrics_path == "/prom"
    assert settings.json_path == "/readings"
    assert settings.hostname == "garage"
    assert settings.discovery_strategy == "name-prefix"
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "text"

    sampler = build_default_sampler()
    assert sampler.hostname == "garage"
    assert sampler.strategy is DiscoveryStrategy.name_prefix
    assert sampler.interval == 10.0
    assert str(sampler.filesystem.root_path) == "/mnt/1wire"


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("ONEWIRE_EXPORTER_LISTEN_ADDRESS", "   ")
    monkeypatch.setenv("ONEWIRE_DISCOVERY_STRATEGY", "guess")
    monkeypatch.setenv("LOG_FORMAT", "xml")

    settings = get_settings()

    assert settings.listen_address == ":8105"
    assert settings.discovery_strategy == "family-file"
    assert settings.log_format == "json"


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        (":8105", ("0.0.0.0", 8105)),
        ("127.0.0.1:9000", ("127.0.0.1", 9000)),
        ("[::1]:8105", ("::1", 8105)),
    ],
)
def test_parse_listen_address(address: str, expected: tuple[str, int]) -> None:
    assert parse_listen_address(address) == expected


@pytest.mark.parametrize("address", ["8105", ":http", ":70000"])
def test_parse_listen_address_rejects_invalid(address: str) -> None:
    with pytest.raises(ValueError):
        parse_listen_address(address)
