from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from regression_playground.models import FitResult, FloatArray, Point, SampleRow
from regression_playground.regression import as_arrays


def fill_grid(x_min: float, x_max: float, step: float) -> FloatArray:
    """Inclusive grid ``x_min, x_min + step, ... <= x_max`` built by index."""
    count = int(math.floor((x_max - x_min) / step + 1e-9)) + 1
    return x_min + step * np.arange(max(count, 0), dtype=np.float64)


def sample(
    points: Sequence[Point],
    fit: FitResult,
    domain_padding: float = 1.0,
    step: float = 0.5,
) -> list[SampleRow]:
    """Merge the data points with fill rows that trace the fitted line.

    Fill rows span ``[min x - padding, max x + padding]`` on a *step* grid and
    are skipped where a data point already sits within ``step / 5``.  A fit
    that is not finite has no line to trace, so only the data rows come back.
    """
    if not points:
        return []

    has_line = len(points) >= 2 and fit.is_finite
    rows: list[SampleRow] = [
        SampleRow(
            x=p.x,
            actual_y=p.y,
            fitted_y=fit.slope * p.x + fit.intercept if has_line else None,
            is_data_point=True,
        )
        for p in points
    ]

    if has_line:
        xs, _ = as_arrays(points)
        tolerance = step / 5.0
        grid = fill_grid(float(np.min(xs)) - domain_padding,
                         float(np.max(xs)) + domain_padding, step)
        for gx in grid:
            if np.any(np.abs(xs - gx) < tolerance):
                continue
            x = float(gx)
            rows.append(SampleRow(
                x=x,
                actual_y=None,
                fitted_y=fit.slope * x + fit.intercept,
                is_data_point=False,
            ))

    # sorted() is stable, so equal x keep data rows in insertion order
    return sorted(rows, key=lambda row: row.x)


def line_arrays(rows: Sequence[SampleRow]) -> tuple[FloatArray, FloatArray]:
    """x / fitted-y arrays of every row that lies on the fitted line."""
    on_line = [r for r in rows if r.fitted_y is not None]
    return (
        np.asarray([r.x for r in on_line], dtype=np.float64),
        np.asarray([r.fitted_y for r in on_line], dtype=np.float64),
    )
