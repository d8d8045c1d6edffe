from __future__ import annotations

from typing import Mapping

from regression_playground.exceptions import UnknownPreset
from regression_playground.models import Point, Preset


def _points(*pairs: tuple[float, float]) -> tuple[Point, ...]:
    return tuple(Point(float(x), float(y)) for x, y in pairs)


# Dataset the window opens with.
INITIAL_POINTS: tuple[Point, ...] = _points((2, 3), (4, 5), (6, 7), (8, 9))


class PresetCatalog:
    """Fixed registry of named datasets, in button display order."""

    PRESETS: tuple[Preset, ...] = (
        Preset(
            name="linear",
            label="Perfect Linear",
            points=_points((1, 2), (3, 4), (5, 6), (7, 8), (9, 10)),
        ),
        Preset(
            name="scattered",
            label="Some Scatter",
            points=_points((2, 3), (4, 7), (6, 5), (8, 11), (10, 9)),
        ),
        Preset(
            name="noCorrelation",
            label="No Correlation",
            points=_points((2, 8), (4, 3), (6, 12), (8, 5), (10, 9)),
        ),
    )

    def __init__(self) -> None:
        self._by_name: Mapping[str, Preset] = {p.name: p for p in self.PRESETS}

    def get(self, name: str) -> Preset:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownPreset(name) from None

    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.PRESETS)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name
