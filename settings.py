from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_SENSOR_ID_ENV = "PURPLEAIR_SENSOR_ID"
_API_URL_ENV = "PURPLEAIR_API_URL"
_TIMEOUT_ENV = "PURPLEAIR_TIMEOUT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_SENSOR_ID = "34663"
DEFAULT_API_URL = "https://www.purpleair.com/json?show="
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    sensor_id: str
    api_url: str
    request_timeout: float
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_timeout(default: float) -> float:
    value = os.getenv(_TIMEOUT_ENV)
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


@lru_cache
def get_settings() -> Settings:
    return Settings(
        sensor_id=_read_str_env(_SENSOR_ID_ENV, DEFAULT_SENSOR_ID),
        api_url=_read_str_env(_API_URL_ENV, DEFAULT_API_URL),
        request_timeout=_read_timeout(DEFAULT_TIMEOUT),
        log_level=_read_log_level("INFO"),
    )
