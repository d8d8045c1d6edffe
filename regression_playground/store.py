from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, Optional

import numpy as np

from regression_playground.exceptions import IndexOutOfRange
from regression_playground.models import PlotSettings, Point

logger = logging.getLogger(__name__)


def clamp(value: float, upper: float) -> float:
    return max(0.0, min(upper, float(value)))


def snap(value: float, step: float) -> float:
    """Round *value* to the nearest multiple of *step*, halves rounding up."""
    return math.floor(float(value) / step + 0.5) * step


class PointStore:
    """Single-writer ordered collection of points.

    Insertion order is the identity used by :meth:`update` and :meth:`remove`.
    Consumers read the current state through :meth:`snapshot`, which never
    changes after it has been handed out.
    """

    def __init__(
        self,
        points: Iterable[Point] = (),
        settings: Optional[PlotSettings] = None,
    ) -> None:
        self.settings = settings if settings is not None else PlotSettings()
        self._points: list[Point] = list(points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> Point:
        self._check_index(index)
        return self._points[index]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, point: Point) -> Point:
        stored = self._clamped(point.x, point.y)
        self._points.append(stored)
        logger.debug(f"Added point {stored} ({len(self._points)} total)")
        return stored

    def add_at_position(self, x: float, y: float) -> Point:
        """Snap to the grid, then clamp into the domain."""
        step = self.settings.step
        return self.add(Point(snap(x, step), snap(y, step)))

    def add_random(self, rng: np.random.Generator) -> Point:
        low, high = self.settings.random_low, self.settings.random_high
        x, y = rng.uniform(low, high, size=2)
        return self.add_at_position(float(x), float(y))

    def update(self, index: int, x: float, y: float) -> Point:
        self._check_index(index)
        stored = self._clamped(x, y)
        self._points[index] = stored
        logger.debug(f"Updated point {index} to {stored}")
        return stored

    def remove(self, index: int) -> Point:
        self._check_index(index)
        removed = self._points.pop(index)
        logger.debug(f"Removed point {index} {removed} ({len(self._points)} left)")
        return removed

    def replace_all(self, points: Iterable[Point]) -> None:
        self._points = list(points)
        logger.debug(f"Replaced store contents with {len(self._points)} point(s)")

    def clear(self) -> None:
        self.replace_all(())

    def reconfigure(self, settings: PlotSettings) -> int:
        """Switch settings and clamp stored points into the new domain.

        Returns the number of points that moved.
        """
        self.settings = settings
        clamped = [self._clamped(p.x, p.y) for p in self._points]
        moved = sum(1 for old, new in zip(self._points, clamped) if old != new)
        self._points = clamped
        if moved:
            logger.info(f"Clamped {moved} point(s) into [0, {settings.domain_max:g}]")
        return moved

    def snapshot(self) -> tuple[Point, ...]:
        return tuple(self._points)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _clamped(self, x: float, y: float) -> Point:
        upper = self.settings.domain_max
        return Point(clamp(x, upper), clamp(y, upper))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._points):
            raise IndexOutOfRange(index, len(self._points))
