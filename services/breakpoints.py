"""PM2.5 AQI breakpoint table."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class BreakpointSegment:
    """One linear interpolation range from concentration to index."""

    concentration_high: float
    concentration_low: float
    index_high: float
    index_low: float

    def __post_init__(self) -> None:
        if self.concentration_high <= self.concentration_low:
            raise ValueError(
                f"Segment concentration bounds are inverted: "
                f"{self.concentration_low} .. {self.concentration_high}"
            )
        if self.index_high <= self.index_low:
            raise ValueError(
                f"Segment index bounds are inverted: {self.index_low} .. {self.index_high}"
            )

    def interpolate(self, concentration: float) -> int:
        slope = (self.index_high - self.index_low) / (
            self.concentration_high - self.concentration_low
        )
        return round_half_up(slope * (concentration - self.concentration_low) + self.index_low)


@dataclass(frozen=True)
class BreakpointTable:
    """Segments ordered from the highest concentration range to the lowest.

    Every segment but the last matches concentrations strictly above its lower
    bound. The last segment is the floor and also matches its lower bound
    itself, so ``0.0`` resolves to the bottom of the scale.
    """

    segments: Tuple[BreakpointSegment, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("Breakpoint table must contain at least one segment.")
        lows = [segment.concentration_low for segment in self.segments]
        if lows != sorted(lows, reverse=True) or len(set(lows)) != len(lows):
            raise ValueError("Breakpoint segments must be in descending concentration order.")

    @property
    def floor(self) -> BreakpointSegment:
        return self.segments[-1]

    def find(self, concentration: float) -> Optional[BreakpointSegment]:
        for segment in self.segments[:-1]:
            if concentration > segment.concentration_low:
                return segment
        if concentration >= self.floor.concentration_low:
            return self.floor
        return None


# US EPA PM2.5 breakpoints
PM25_BREAKPOINTS = BreakpointTable(
    segments=(
        BreakpointSegment(500.0, 350.5, 500.0, 401.0),
        BreakpointSegment(350.4, 250.5, 400.0, 301.0),
        BreakpointSegment(250.4, 150.5, 300.0, 201.0),
        BreakpointSegment(150.4, 55.5, 200.0, 151.0),
        BreakpointSegment(55.4, 35.5, 150.0, 101.0),
        BreakpointSegment(35.4, 12.1, 100.0, 51.0),
        BreakpointSegment(12.0, 0.0, 50.0, 0.0),
    )
)
