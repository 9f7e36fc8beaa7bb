"""Exceptions raised by the AQI calculation pipeline."""

from __future__ import annotations

from typing import Any


class AQIError(Exception):
    """Base class for pipeline failures surfaced to callers."""


class InvalidInput(AQIError, ValueError):
    """A PM correction input is missing or cannot be read as a number."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"Invalid {field} reading: {value!r}")
        self.field = field
        self.value = value


class UndefinedAQI(AQIError):
    """The corrected concentration is negative and has no AQI."""

    def __init__(self, concentration: float) -> None:
        super().__init__(
            f"AQI is undefined for corrected concentration {concentration:.2f}"
        )
        self.concentration = concentration


class UnclassifiedLevel(AQIError, ValueError):
    """No level entry applies to the given AQI value."""

    def __init__(self, aqi: Any) -> None:
        super().__init__(f"No AQI level defined for {aqi!r}")
        self.aqi = aqi
