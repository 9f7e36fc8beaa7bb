"""EPA correction for PurpleAir PM2.5 readings."""

from __future__ import annotations

from typing import Any

from services.errors import InvalidInput
from services.parsing import parse_truncated_int

# EPA draft correction for PurpleAir sensors under wood smoke, applied to the
# cf_1 channel average and relative humidity.
PM_COEFFICIENT = 0.52
HUMIDITY_COEFFICIENT = 0.085
INTERCEPT = 5.71


class PMCorrector:
    """Pure correction step; results may be negative and are not clamped."""

    def correct(self, channel_a: Any, channel_b: Any, humidity: Any) -> float:
        adj_a = self._require(channel_a, "channel_a")
        adj_b = self._require(channel_b, "channel_b")
        hum = self._require(humidity, "humidity")

        average = (adj_a + adj_b) / 2
        return PM_COEFFICIENT * average - HUMIDITY_COEFFICIENT * hum + INTERCEPT

    @staticmethod
    def _require(value: Any, field: str) -> int:
        parsed = parse_truncated_int(value)
        if parsed is None:
            raise InvalidInput(field, value)
        try:
            float(parsed)
        except OverflowError as exc:
            raise InvalidInput(field, value) from exc
        return parsed
