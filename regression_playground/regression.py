"""
Closed-form ordinary least squares for the playground.

    slope     = (n·Σxy − Σx·Σy) / (n·Σx² − (Σx)²)
    intercept = (Σy − slope·Σx) / n
    R²        = 1 − SS_res / SS_tot        (0 when SS_tot == 0)

Degenerate inputs never raise:

- fewer than two points give ``FitResult(0, 0, 0)`` so the statistics panel
  always has something to show;
- a vertical scatter (every x identical) has no least-squares line, and the
  slope and intercept come back as NaN.  R² is NaN as well unless the y values
  are also constant, in which case the zero-variance rule makes it 0.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from regression_playground.models import FitResult, FloatArray, Point

STRONG_FIT: float = 0.8
MODERATE_FIT: float = 0.5

NO_FIT = FitResult(slope=0.0, intercept=0.0, r_squared=0.0)


def as_arrays(points: Sequence[Point]) -> tuple[FloatArray, FloatArray]:
    x = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    y = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    return x, y


def fit(points: Sequence[Point]) -> FitResult:
    n = len(points)
    if n < 2:
        return NO_FIT

    x, y = as_arrays(points)
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_xx = float(np.sum(x * x))

    y_mean = sum_y / n
    ss_total = float(np.sum((y - y_mean) ** 2))

    denom = n * sum_xx - sum_x * sum_x
    if denom == 0 or float(np.ptp(x)) == 0:
        nan = float("nan")
        return FitResult(slope=nan, intercept=nan, r_squared=nan if ss_total > 0 else 0.0)

    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n

    residuals = y - (slope * x + intercept)
    ss_residual = float(np.sum(residuals ** 2))
    r_squared = 1.0 - ss_residual / ss_total if ss_total > 0 else 0.0

    return FitResult(slope=slope, intercept=intercept, r_squared=r_squared)


def predict(result: FitResult, x: Union[float, FloatArray]) -> Union[float, FloatArray]:
    if isinstance(x, np.ndarray):
        return result.slope * x + result.intercept
    return result.slope * float(x) + result.intercept


def classify_r_squared(r_squared: float) -> str:
    """Bucket R² into the strength labels shown next to the readout."""
    if r_squared > STRONG_FIT:
        return "strong"
    if r_squared > MODERATE_FIT:
        return "moderate"
    return "weak"


def format_equation(result: FitResult, decimals: int = 2) -> str:
    if not result.is_finite:
        return "undefined (vertical scatter)"
    sign = "-" if result.intercept < 0 else "+"
    return f"y = {result.slope:.{decimals}f}x {sign} {abs(result.intercept):.{decimals}f}"
