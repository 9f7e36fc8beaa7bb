"""Short-term particulate trend from PurpleAir rolling averages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from services.parsing import parse_int_or_zero

IMPROVING_DELTA = 5
WORSENING_DELTA = -5


class Trend(str, Enum):
    improving = "Improving"
    worsening = "Worsening"
    stable = "Stable"


@dataclass(frozen=True)
class TrendResult:
    direction: Trend
    delta: int


class TrendAnalyzer:
    def analyze(self, stat_short_window: Any, stat_long_window: Any) -> TrendResult:
        """Compare the longer-window average against the live one.

        Unreadable statistics count as zero instead of failing, so a sensor
        without ``Stats`` still gets a result.
        """
        short = parse_int_or_zero(stat_short_window)
        long = parse_int_or_zero(stat_long_window)
        delta = long - short

        if delta > IMPROVING_DELTA:
            direction = Trend.improving
        elif delta < WORSENING_DELTA:
            direction = Trend.worsening
        else:
            direction = Trend.stable
        return TrendResult(direction=direction, delta=delta)
