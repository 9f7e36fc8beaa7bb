"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.records import SensorSnapshot
from services.classifier import ClassificationResult
from services.levels import ColorSet, LevelEntry
from services.trend import Trend, TrendResult

RawReading = Optional[Union[float, str]]


class ColorSchema(BaseModel):
    """Hex colours for the widget background gradient and its text."""

    model_config = ConfigDict(frozen=True)

    start: str
    end: str
    text: str

    @classmethod
    def from_color_set(cls, colors: ColorSet) -> "ColorSchema":
        return cls(start=colors.start, end=colors.end, text=colors.text)


class LevelSchema(BaseModel):
    """Severity tier matched for an AQI value."""

    model_config = ConfigDict(frozen=True)

    threshold: int = Field(..., ge=0)
    label: str
    light_colors: ColorSchema
    dark_colors: ColorSchema
    text_size: int

    @classmethod
    def from_entry(cls, entry: LevelEntry) -> "LevelSchema":
        return cls(
            threshold=entry.threshold,
            label=entry.label,
            light_colors=ColorSchema.from_color_set(entry.light_colors),
            dark_colors=ColorSchema.from_color_set(entry.dark_colors),
            text_size=entry.text_size,
        )


class ClassificationSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    aqi: int = Field(..., ge=0)
    level: LevelSchema

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "ClassificationSchema":
        return cls(aqi=result.aqi, level=LevelSchema.from_entry(result.level))


class TrendSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    direction: Trend
    delta: int = Field(..., description="Long-window average minus the live average.")

    @classmethod
    def from_result(cls, result: TrendResult) -> "TrendSchema":
        return cls(direction=result.direction, delta=result.delta)

    def header_text(self) -> str:
        if self.direction is Trend.stable:
            return "AQI"
        return f"AQI {self.direction.value}"


class PresentationResult(BaseModel):
    """Everything a renderer needs to draw the AQI widget for one sensor."""

    model_config = ConfigDict(frozen=True)

    sensor_id: str
    label: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    observed_at_epoch_seconds: Optional[int] = None
    corrected_concentration: float = Field(
        ..., description="EPA-corrected PM2.5 concentration in ug/m3."
    )
    classification: ClassificationSchema
    trend: TrendSchema
    map_url: str

    def updated_text(self, tz: Optional[tzinfo] = None) -> str:
        """Hour and minute of the last reading, in local time unless ``tz`` is given."""
        if self.observed_at_epoch_seconds is None:
            return "Updated --:--"
        try:
            observed = datetime.fromtimestamp(self.observed_at_epoch_seconds, tz=timezone.utc)
            return f"Updated {observed.astimezone(tz):%H:%M}"
        except (OverflowError, OSError, ValueError):
            return "Updated --:--"


class SnapshotRequest(BaseModel):
    """Sensor readings supplied directly instead of fetched from PurpleAir."""

    sensor_id: str = Field(..., min_length=1)
    channel_a: RawReading = Field(None, description="PM2.5 cf_1 reading, channel A.")
    channel_b: RawReading = Field(None, description="PM2.5 cf_1 reading, channel B.")
    humidity: RawReading = None
    stat_short_window: RawReading = Field(None, description="Live rolling average (v1).")
    stat_long_window: RawReading = Field(None, description="Longer rolling average (v2).")
    observed_at_epoch_seconds: Optional[int] = None
    label: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_snapshot(self) -> SensorSnapshot:
        values: dict[str, Any] = self.model_dump()
        return SensorSnapshot(**values)
