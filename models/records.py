"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class SensorSnapshot:
    """One PurpleAir reading as returned by the sensor API.

    PM and statistic fields keep their raw payload values; parsing happens in
    the pipeline stages that consume them.
    """

    sensor_id: str
    channel_a: Any = None
    channel_b: Any = None
    humidity: Any = None
    stat_short_window: Any = None
    stat_long_window: Any = None
    observed_at_epoch_seconds: Optional[int] = None
    label: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
