"""Interactive least-squares line fitting over an editable set of 2D points."""

from regression_playground.exceptions import (
    IndexOutOfRange,
    RegressionPlaygroundError,
    UnknownPreset,
)
from regression_playground.models import FitResult, PlotSettings, Point, Preset, SampleRow
from regression_playground.presets import INITIAL_POINTS, PresetCatalog
from regression_playground.regression import fit
from regression_playground.sampling import sample
from regression_playground.store import PointStore

__all__ = [
    "FitResult",
    "INITIAL_POINTS",
    "IndexOutOfRange",
    "PlotSettings",
    "Point",
    "PointStore",
    "Preset",
    "PresetCatalog",
    "RegressionPlaygroundError",
    "SampleRow",
    "UnknownPreset",
    "fit",
    "sample",
]
