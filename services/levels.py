"""AQI severity levels and their widget presentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple, TypeVar

ColorsT = TypeVar("ColorsT", covariant=True)


@dataclass(frozen=True)
class ColorSet:
    """Gradient start/end colours and the text colour drawn over them."""

    start: str
    end: str
    text: str


@dataclass(frozen=True)
class LevelEntry:
    """A severity tier that applies to AQI values above ``threshold``."""

    threshold: int
    label: str
    light_colors: ColorSet
    dark_colors: ColorSet
    text_size: int


@dataclass(frozen=True)
class LevelCatalog:
    """Levels ordered from the highest threshold to the floor entry."""

    entries: Tuple[LevelEntry, ...]

    def __post_init__(self) -> None:
        thresholds = [entry.threshold for entry in self.entries]
        if len(set(thresholds)) != len(thresholds):
            raise ValueError("Level thresholds must be unique.")
        if any(threshold < 0 for threshold in thresholds):
            raise ValueError("Level thresholds must be non-negative.")
        if thresholds.count(0) != 1:
            raise ValueError("Level catalog needs exactly one floor entry with threshold 0.")
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError("Level entries must be in descending threshold order.")

    @property
    def floor(self) -> LevelEntry:
        return self.entries[-1]


def _same_in_both_modes(start: str, end: str, text: str) -> Tuple[ColorSet, ColorSet]:
    colors = ColorSet(start=start, end=end, text=text)
    return colors, colors


def _level(threshold: int, label: str, colors: Tuple[ColorSet, ColorSet], text_size: int) -> LevelEntry:
    light, dark = colors
    return LevelEntry(
        threshold=threshold,
        label=label,
        light_colors=light,
        dark_colors=dark,
        text_size=text_size,
    )


LEVEL_CATALOG = LevelCatalog(
    entries=(
        _level(300, "Hazardous", _same_in_both_modes("9e2043", "7e0023", "ffffff"), 20),
        _level(200, "Very Unhealthy", _same_in_both_modes("8f3f97", "6f1f77", "ffffff"), 15),
        _level(150, "Unhealthy", _same_in_both_modes("FF3D3D", "D60000", "000000"), 20),
        _level(100, "Unhealthy (S.G.)", _same_in_both_modes("FFA63D", "D67200", "000000"), 15),
        _level(50, "Moderate", _same_in_both_modes("ffff00", "cccc00", "000000"), 20),
        _level(
            0,
            "Good",
            (
                ColorSet(start="ffffff", end="ffffff", text="00e400"),
                ColorSet(start="000000", end="000000", text="00e400"),
            ),
            20,
        ),
    )
)


class ThemedLevel(Protocol[ColorsT]):
    @property
    def light_colors(self) -> ColorsT: ...

    @property
    def dark_colors(self) -> ColorsT: ...


def select_colors(entry: ThemedLevel[ColorsT], dark_mode: bool) -> ColorsT:
    """Pick the colour set matching the host's appearance.

    Works on catalog entries and on their serialized ``LevelSchema`` form alike.
    """
    return entry.dark_colors if dark_mode else entry.light_colors
