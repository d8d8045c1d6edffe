from __future__ import annotations

import sympy as sp

from regression_playground.models import FitResult


class LaTeXGenerator:
    """Converts FitResult -> display-math LaTeX string.

    Parameters
    ----------
    approx : bool
        When True (default) the slope and intercept are rendered as rounded
        decimals with *decimals* digits after the point.
        When False, exact rational fractions are used.
    decimals : int
        Number of digits after the decimal point in approximate mode.
    """

    def __init__(self, approx: bool = True, decimals: int = 2) -> None:
        self.approx = approx
        self.decimals = max(0, min(10, int(decimals)))

    def reconfigure(self, approx: bool, decimals: int) -> None:
        self.approx = approx
        self.decimals = max(0, min(10, int(decimals)))

    def generate(self, result: FitResult) -> str:
        if not result.is_finite:
            return self._fallback()
        x = sp.Symbol("x")
        return self._wrap(self._n(result.slope) * x + self._n(result.intercept))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _n(self, v: float) -> sp.Expr:
        """Convert float to sympy number respecting approx mode.

        Approx mode  → sp.Float with string representation at self.decimals places.
        Exact mode   → sp.Rational with denominator ≤ 1000 (exact fraction).
        """
        if self.approx:
            return sp.Float(f"{v:.{self.decimals}f}")
        return sp.Rational(v).limit_denominator(1000)

    @staticmethod
    def _wrap(expr: sp.Basic) -> str:
        return f"$$f(x) = {sp.latex(expr)}$$"

    @staticmethod
    def _fallback() -> str:
        return r"$$f(x) = \text{undefined (vertical scatter)}$$"
