"""AQI level classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from services.errors import UnclassifiedLevel
from services.levels import LEVEL_CATALOG, LevelCatalog, LevelEntry


@dataclass(frozen=True)
class ClassificationResult:
    aqi: int
    level: LevelEntry


class LevelClassifier:
    """Maps an AQI value to the tightest level threshold strictly below it.

    An AQI of exactly 0 has no threshold strictly below it; it resolves to the
    catalog's floor entry.
    """

    def __init__(self, catalog: LevelCatalog = LEVEL_CATALOG) -> None:
        self.catalog = catalog

    def classify(self, aqi: Any) -> LevelEntry:
        if isinstance(aqi, bool) or not isinstance(aqi, int) or aqi < 0:
            raise UnclassifiedLevel(aqi)

        applicable = [entry for entry in self.catalog.entries if entry.threshold < aqi]
        if not applicable:
            return self.catalog.floor
        return max(applicable, key=lambda entry: entry.threshold)

    def classify_result(self, aqi: int) -> ClassificationResult:
        return ClassificationResult(aqi=aqi, level=self.classify(aqi))
