"""Concentration to AQI conversion."""

from __future__ import annotations

import math
from enum import Enum
from typing import Union

from services.breakpoints import PM25_BREAKPOINTS, BreakpointTable


class Undefined(Enum):
    """Marker for concentrations that have no AQI."""

    UNDEFINED = "-"

    def __str__(self) -> str:
        return self.value


UNDEFINED = Undefined.UNDEFINED


class AQICalculator:
    def __init__(self, table: BreakpointTable = PM25_BREAKPOINTS) -> None:
        self.table = table

    def to_aqi(self, concentration: float) -> Union[int, Undefined]:
        """Interpolate ``concentration`` on the breakpoint table.

        Negative concentrations are unclassifiable and yield :data:`UNDEFINED`
        rather than a number; so do NaN and infinite inputs. Values above the
        top segment extrapolate along it.
        """
        if not math.isfinite(concentration):
            return UNDEFINED
        segment = self.table.find(concentration)
        if segment is None:
            return UNDEFINED
        return segment.interpolate(concentration)
