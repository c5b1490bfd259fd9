from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from urllib.parse import urlsplit


DEFAULT_API_BASE_URL = (
    "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services"
)

_API_BASE_URL_ENV = "WEATHER_API_BASE_URL"
_API_KEY_ENV = "WEATHER_API_KEY"
_HTTP_TIMEOUT_ENV = "WEATHER_HTTP_TIMEOUT"
_STORE_PATH_ENV = "WEATHER_STORE_PATH"
_LOOKBACK_YEARS_ENV = "WEATHER_LOOKBACK_YEARS"
_CONNECTIVITY_HOST_ENV = "WEATHER_CONNECTIVITY_HOST"
_CONNECTIVITY_PORT_ENV = "WEATHER_CONNECTIVITY_PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    api_key: str
    http_timeout: float
    store_path: Optional[str]
    lookback_years: int
    connectivity_host: str
    connectivity_port: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
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


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


def _default_probe_host(base_url: str) -> str:
    return urlsplit(base_url).hostname or "weather.visualcrossing.com"


@lru_cache
def get_settings() -> Settings:
    base_url = _read_str_env(_API_BASE_URL_ENV, DEFAULT_API_BASE_URL).rstrip("/")
    return Settings(
        api_base_url=base_url,
        api_key=_read_str_env(_API_KEY_ENV, ""),
        http_timeout=_read_positive_float(_HTTP_TIMEOUT_ENV, 30.0),
        store_path=_read_optional_env(_STORE_PATH_ENV, "./tmp/weather_store.json"),
        lookback_years=_read_positive_int(_LOOKBACK_YEARS_ENV, 10),
        connectivity_host=_read_str_env(
            _CONNECTIVITY_HOST_ENV, _default_probe_host(base_url)
        ),
        connectivity_port=_read_positive_int(_CONNECTIVITY_PORT_ENV, 443),
        log_level=_read_log_level("INFO"),
    )
