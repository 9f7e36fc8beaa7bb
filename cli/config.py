from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from settings import DEFAULT_API_URL, DEFAULT_SENSOR_ID, DEFAULT_TIMEOUT, get_settings

_APPEARANCE_ENV = "AQI_APPEARANCE"


@dataclass(frozen=True)
class CLIConfig:
    sensor_id: str = DEFAULT_SENSOR_ID
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    dark_mode: bool = False


def _read_appearance(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate == "dark":
        return True
    if candidate == "light":
        return False
    return default


def load_config(
    sensor_id: Optional[str] = None,
    api_url: Optional[str] = None,
    timeout: Optional[float] = None,
    dark_mode: Optional[bool] = None,
) -> CLIConfig:
    settings = get_settings()
    if timeout is None or timeout <= 0:
        timeout = settings.request_timeout
    if dark_mode is None:
        dark_mode = _read_appearance(os.getenv(_APPEARANCE_ENV), False)
    return CLIConfig(
        sensor_id=(sensor_id or settings.sensor_id).strip(),
        api_url=api_url or settings.api_url,
        timeout=timeout,
        dark_mode=dark_mode,
    )
