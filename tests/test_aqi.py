"""Unit tests for the breakpoint table and AQI interpolation."""

from __future__ import annotations

import math

import pytest

from services.aqi import UNDEFINED, AQICalculator
from services.breakpoints import PM25_BREAKPOINTS, BreakpointSegment, BreakpointTable


@pytest.fixture()
def calculator() -> AQICalculator:
    return AQICalculator()


def test_table_has_seven_descending_segments() -> None:
    lows = [segment.concentration_low for segment in PM25_BREAKPOINTS.segments]

    assert len(PM25_BREAKPOINTS.segments) == 7
    assert lows == [350.5, 250.5, 150.5, 55.5, 35.5, 12.1, 0.0]
    assert PM25_BREAKPOINTS.floor == BreakpointSegment(12.0, 0.0, 50.0, 0.0)


def test_segments_reject_inverted_bounds() -> None:
    with pytest.raises(ValueError):
        BreakpointSegment(10.0, 12.0, 50.0, 0.0)
    with pytest.raises(ValueError):
        BreakpointSegment(12.0, 0.0, 0.0, 50.0)


def test_table_rejects_ascending_order() -> None:
    with pytest.raises(ValueError):
        BreakpointTable(
            segments=(
                BreakpointSegment(12.0, 0.0, 50.0, 0.0),
                BreakpointSegment(35.4, 12.1, 100.0, 51.0),
            )
        )


def test_zero_concentration_is_zero_aqi(calculator: AQICalculator) -> None:
    assert calculator.to_aqi(0.0) == 0


@pytest.mark.parametrize("concentration", [-0.1, -25.0, math.nan, math.inf])
def test_unclassifiable_concentrations_are_undefined(
    calculator: AQICalculator, concentration: float
) -> None:
    result = calculator.to_aqi(concentration)

    assert result is UNDEFINED
    assert str(result) == "-"


@pytest.mark.parametrize(
    ("concentration", "expected"),
    [
        (6.0, 25),
        (12.0, 50),
        (13.23, 53),
        (40.0, 112),
        (100.0, 174),
        (200.0, 250),
        (300.0, 350),
        (400.0, 434),
    ],
)
def test_interpolates_within_segment(
    calculator: AQICalculator, concentration: float, expected: int
) -> None:
    assert calculator.to_aqi(concentration) == expected


def test_values_above_table_extrapolate(calculator: AQICalculator) -> None:
    assert calculator.to_aqi(600.0) == 566


def test_boundary_value_uses_lower_segment(calculator: AQICalculator) -> None:
    assert calculator.to_aqi(12.1) == 50
    assert calculator.to_aqi(12.1 + 1e-9) == 51


def test_interpolation_rounds_half_up() -> None:
    segment = BreakpointSegment(4.0, 0.0, 1.0, 0.0)

    assert segment.interpolate(2.0) == 1
    assert segment.interpolate(6.0) == 2
    assert segment.interpolate(1.9) == 0


@pytest.mark.parametrize("boundary", [12.1, 35.5, 55.5, 150.5, 250.5, 350.5])
def test_no_discontinuity_across_boundaries(
    calculator: AQICalculator, boundary: float
) -> None:
    segments = PM25_BREAKPOINTS.segments
    upper_index = next(
        index for index, segment in enumerate(segments) if segment.concentration_low == boundary
    )
    upper, lower = segments[upper_index], segments[upper_index + 1]

    assert abs(upper.interpolate(boundary) - lower.interpolate(boundary)) <= 1
    assert abs(calculator.to_aqi(boundary + 1e-9) - calculator.to_aqi(boundary)) <= 1
