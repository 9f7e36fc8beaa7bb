"""End-to-end AQI computation for a single sensor snapshot."""

from __future__ import annotations

import logging
from functools import lru_cache

from app.schemas import ClassificationSchema, PresentationResult, TrendSchema
from models.records import SensorSnapshot
from services.aqi import UNDEFINED, AQICalculator
from services.classifier import LevelClassifier
from services.correction import PMCorrector
from services.errors import UndefinedAQI
from services.trend import TrendAnalyzer
from sources.purpleair import build_map_url

logger = logging.getLogger(__name__)


class AQIPipeline:
    """Turns a raw snapshot into a presentation-ready result.

    Failures are raised to the caller unchanged: :class:`InvalidInput` when a
    correction input is unreadable, :class:`UndefinedAQI` when the corrected
    concentration is negative. No default AQI is ever substituted.
    """

    def __init__(
        self,
        corrector: PMCorrector,
        calculator: AQICalculator,
        classifier: LevelClassifier,
        trend_analyzer: TrendAnalyzer,
    ) -> None:
        self.corrector = corrector
        self.calculator = calculator
        self.classifier = classifier
        self.trend_analyzer = trend_analyzer

    def run(self, snapshot: SensorSnapshot) -> PresentationResult:
        trend = self.trend_analyzer.analyze(
            snapshot.stat_short_window, snapshot.stat_long_window
        )

        corrected = self.corrector.correct(
            snapshot.channel_a, snapshot.channel_b, snapshot.humidity
        )
        aqi = self.calculator.to_aqi(corrected)
        if aqi is UNDEFINED:
            logger.warning(
                "AQI undefined for corrected reading",
                extra={"sensor_id": snapshot.sensor_id, "corrected_pm": corrected},
            )
            raise UndefinedAQI(corrected)

        classification = self.classifier.classify_result(aqi)
        logger.info(
            "Computed AQI",
            extra={
                "sensor_id": snapshot.sensor_id,
                "corrected_pm": corrected,
                "aqi": classification.aqi,
                "level": classification.level.label,
                "trend": trend.direction,
            },
        )

        return PresentationResult(
            sensor_id=snapshot.sensor_id,
            label=snapshot.label,
            latitude=snapshot.latitude,
            longitude=snapshot.longitude,
            observed_at_epoch_seconds=snapshot.observed_at_epoch_seconds,
            corrected_concentration=corrected,
            classification=ClassificationSchema.from_result(classification),
            trend=TrendSchema.from_result(trend),
            map_url=build_map_url(snapshot.sensor_id, snapshot.latitude, snapshot.longitude),
        )


@lru_cache
def build_default_pipeline() -> AQIPipeline:
    """Factory that wires the pipeline with the EPA tables."""
    return AQIPipeline(
        corrector=PMCorrector(),
        calculator=AQICalculator(),
        classifier=LevelClassifier(),
        trend_analyzer=TrendAnalyzer(),
    )
