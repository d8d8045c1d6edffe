from __future__ import annotations

import math
from typing import Mapping, Optional

from regression_playground.models import PlotSettings


def parse_coordinate(text: str) -> Optional[float]:
    try:
        value = float(text.strip())
    except (ValueError, TypeError, AttributeError):
        return None
    return value if math.isfinite(value) else None


def parse_coordinates(x_text: str, y_text: str) -> Optional[tuple[float, float]]:
    """Parse the manual-entry fields; None unless both hold finite numbers."""
    x = parse_coordinate(x_text)
    y = parse_coordinate(y_text)
    if x is None or y is None:
        return None
    return x, y


def parse_settings(
    fields: Mapping[str, str], latex_approx: bool, latex_decimals: int
) -> Optional[PlotSettings]:
    """Build PlotSettings from the dialog's text fields; None if any is invalid."""
    try:
        values = {name: float(text) for name, text in fields.items()}
        return PlotSettings(latex_approx=latex_approx, latex_decimals=latex_decimals, **values)
    except (ValueError, TypeError):
        return None
