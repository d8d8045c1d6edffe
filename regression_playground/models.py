from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

FloatArray = NDArray[np.floating[Any]]


# ===========================================================================
# Data-classes
# ===========================================================================

@dataclass(frozen=True, slots=True)
class PlotSettings:
    domain_max: float = 15.0     # visible domain is [0, domain_max] on both axes
    step: float = 0.5            # grid granularity for snapping and line sampling
    domain_padding: float = 1.0  # fitted line extends this far past the outer points
    random_low: float = 1.0
    random_high: float = 13.0
    latex_approx: bool = True
    latex_decimals: int = 2

    def __post_init__(self) -> None:
        for name in ("domain_max", "step", "domain_padding", "random_low", "random_high"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value}")
        if not self.domain_max > 0:
            raise ValueError(f"domain_max must be positive, got {self.domain_max}")
        if not self.step > 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.domain_padding < 0:
            raise ValueError(f"domain_padding cannot be negative, got {self.domain_padding}")
        if not (0 <= self.random_low <= self.random_high <= self.domain_max):
            raise ValueError(
                f"random range [{self.random_low}, {self.random_high}] "
                f"must lie within [0, {self.domain_max}]"
            )
        if not (0 <= self.latex_decimals <= 10):
            raise ValueError(f"latex_decimals must be in [0, 10], got {self.latex_decimals}")

    @property
    def near_tolerance(self) -> float:
        """Distance under which a fill row is considered to sit on a data point."""
        return self.step / 5.0


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class FitResult:
    slope: float
    intercept: float
    r_squared: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.slope) and math.isfinite(self.intercept)


@dataclass(frozen=True, slots=True)
class SampleRow:
    x: float
    actual_y: Optional[float]
    fitted_y: Optional[float]
    is_data_point: bool


@dataclass(frozen=True, slots=True)
class Preset:
    name: str
    label: str
    points: tuple[Point, ...]
