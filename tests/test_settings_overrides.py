from __future__ import annotations

import asyncio
from typing import Iterable

from datastore.weather_store import build_default_store
from services.coordinator import build_default_coordinator
from settings import DEFAULT_API_BASE_URL, get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_defaults_apply_when_environment_is_blank(monkeypatch) -> None:
    for name in (
        "WEATHER_API_BASE_URL",
        "WEATHER_API_KEY",
        "WEATHER_HTTP_TIMEOUT",
        "WEATHER_STORE_PATH",
        "WEATHER_LOOKBACK_YEARS",
        "WEATHER_CONNECTIVITY_HOST",
        "WEATHER_CONNECTIVITY_PORT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WEATHER_LOOKBACK_YEARS", "not-a-number")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.lookback_years == 10
        assert settings.http_timeout == 30.0
        assert settings.connectivity_host == "weather.visualcrossing.com"
        assert settings.connectivity_port == 443
        assert settings.log_level == "INFO"
    finally:
        get_settings.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    store_path = tmp_path / "weather.json"

    monkeypatch.setenv("WEATHER_API_BASE_URL", "https://example.test/api/")
    monkeypatch.setenv("WEATHER_API_KEY", "abc123")
    monkeypatch.setenv("WEATHER_STORE_PATH", str(store_path))
    monkeypatch.setenv("WEATHER_LOOKBACK_YEARS", "5")
    monkeypatch.setenv("WEATHER_CONNECTIVITY_PORT", "8443")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    caches = (get_settings, build_default_store, build_default_coordinator)
    _clear_caches(caches)

    coordinator = build_default_coordinator()
    try:
        settings = get_settings()
        assert settings.api_base_url == "https://example.test/api"
        assert settings.api_key == "abc123"
        assert settings.connectivity_host == "example.test"
        assert settings.log_level == "DEBUG"
        assert coordinator.store.persistence_path == store_path
        assert coordinator.averager.lookback_years == 5
        assert coordinator.source.base_url == "https://example.test/api"
        assert coordinator.probe.port == 8443
    finally:
        asyncio.run(coordinator.shutdown())
        _clear_caches(caches)
