"""
Interactive Linear Regression: a point editor with a live least-squares line.

Pipeline on every user action
-----------------------------
PointStore.snapshot()  →  regression.fit()  →  sampling.sample()  →  redraw

Mouse
-----
Left click on empty plot area   add a point snapped to the grid
Left drag on a point            move it (clamped, not snapped)
Right click on a point          remove it
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QCursor, QMouseEvent
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from regression_playground.exceptions import RegressionPlaygroundError
from regression_playground.latex_gen import LaTeXGenerator
from regression_playground.logging_config import setup_logging
from regression_playground.models import FitResult, PlotSettings, Point, SampleRow
from regression_playground.parsing import parse_coordinates, parse_settings
from regression_playground.presets import INITIAL_POINTS, PresetCatalog
from regression_playground.regression import (
    NO_FIT,
    classify_r_squared,
    fit,
    format_equation,
)
from regression_playground.sampling import line_arrays, sample
from regression_playground.store import PointStore

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV: str = "REGRESSION_PLAYGROUND_LOG_LEVEL"

# Pick radius around a data point, in screen pixels.
HIT_RADIUS_PX: float = 10.0


# ===========================================================================
# Settings dialog
# ===========================================================================

class SettingsDialog(QDialog):
    """Edits PlotSettings in three groups: domain, random points, equation output."""

    def __init__(self, settings: PlotSettings, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Plot Settings")
        self._settings = settings
        self._edits: dict[str, QLineEdit] = {}

        layout = QVBoxLayout(self)
        layout.addWidget(self._field_group("Domain and Grid", (
            ("domain_max", "Axis maximum (D):"),
            ("step", "Grid step:"),
            ("domain_padding", "Line overhang:"),
        )))
        layout.addWidget(self._field_group("Random Points", (
            ("random_low", "Lowest coordinate:"),
            ("random_high", "Highest coordinate:"),
        )))
        layout.addWidget(self._latex_group())

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _field_group(self, title: str, fields: tuple[tuple[str, str], ...]) -> QGroupBox:
        group = QGroupBox(title)
        form = QFormLayout(group)
        for name, label in fields:
            edit = QLineEdit(f"{getattr(self._settings, name):g}")
            self._edits[name] = edit
            form.addRow(label, edit)
        return group

    def _latex_group(self) -> QGroupBox:
        group = QGroupBox("Equation Output")
        form = QFormLayout(group)
        self._latex_approx_cb = QCheckBox("Decimal coefficients (off: fractions)")
        self._latex_approx_cb.setChecked(self._settings.latex_approx)
        self._latex_decimals_sb = QSpinBox()
        self._latex_decimals_sb.setRange(0, 10)
        self._latex_decimals_sb.setValue(self._settings.latex_decimals)
        self._latex_decimals_sb.setEnabled(self._settings.latex_approx)
        self._latex_approx_cb.toggled.connect(self._latex_decimals_sb.setEnabled)
        form.addRow(self._latex_approx_cb)
        form.addRow("Decimals:", self._latex_decimals_sb)
        return group

    def get_settings(self) -> Optional[PlotSettings]:
        """New settings, or None when a field is not a valid number."""
        return parse_settings(
            {name: edit.text() for name, edit in self._edits.items()},
            latex_approx=bool(self._latex_approx_cb.isChecked()),
            latex_decimals=int(self._latex_decimals_sb.value()),
        )


# ===========================================================================
# Main window
# ===========================================================================

class RegressionApp(QMainWindow):

    _POINT_BRUSH: tuple[int, int, int] = (59, 130, 246)
    _POINT_PEN: tuple[int, int, int] = (29, 78, 216)
    _LINE_PEN: tuple[int, int, int] = (239, 68, 68)
    _STRENGTH_COLORS: dict[str, str] = {
        "strong": "#16a34a",
        "moderate": "#ca8a04",
        "weak": "#dc2626",
    }

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        super().__init__()
        self.setWindowTitle("Interactive Linear Regression")
        self.setGeometry(100, 100, 1280, 760)

        self._settings = PlotSettings()
        self._store = PointStore(INITIAL_POINTS, self._settings)
        self._catalog = PresetCatalog()
        self._latex_gen = LaTeXGenerator(
            approx=self._settings.latex_approx,
            decimals=self._settings.latex_decimals,
        )
        self._rng = rng if rng is not None else np.random.default_rng()

        self._fit: FitResult = NO_FIT
        self._rows: list[SampleRow] = []
        self._drag_index: Optional[int] = None

        self._build_ui()
        self._configure_plot()
        self._refresh()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)

        left = QVBoxLayout()
        self._plot_widget = pg.PlotWidget()
        left.addWidget(self._plot_widget)

        self._line_curve = self._plot_widget.plot(
            [], [], pen=pg.mkPen(self._LINE_PEN, width=3), name="Regression line"
        )
        self._scatter = pg.ScatterPlotItem(
            size=12,
            pen=pg.mkPen(self._POINT_PEN, width=2),
            brush=pg.mkBrush(*self._POINT_BRUSH),
        )
        self._plot_widget.addItem(self._scatter)

        btn_row = QHBoxLayout()
        random_btn = QPushButton("Add Random Point")
        random_btn.clicked.connect(self.add_random_point)
        btn_row.addWidget(random_btn)
        for preset in self._catalog.PRESETS:
            btn = QPushButton(preset.label)
            btn.clicked.connect(lambda _checked=False, name=preset.name: self.load_preset(name))
            btn_row.addWidget(btn)
        clear_btn = QPushButton("Clear All")
        clear_btn.clicked.connect(self.clear_points)
        btn_row.addWidget(clear_btn)
        left.addLayout(btn_row)

        entry_group = QGroupBox("Add Custom Point")
        entry_row = QHBoxLayout(entry_group)
        self._x_edit = QLineEdit()
        self._x_edit.setPlaceholderText("X")
        self._y_edit = QLineEdit()
        self._y_edit.setPlaceholderText("Y")
        add_btn = QPushButton("Add")
        for edit in (self._x_edit, self._y_edit):
            edit.returnPressed.connect(self.add_manual_point)
        add_btn.clicked.connect(self.add_manual_point)
        entry_row.addWidget(QLabel("X:"))
        entry_row.addWidget(self._x_edit)
        entry_row.addWidget(QLabel("Y:"))
        entry_row.addWidget(self._y_edit)
        entry_row.addWidget(add_btn)
        self._entry_hint = QLabel()
        self._entry_hint.setStyleSheet("color: gray; font-size: 10px;")
        entry_row.addWidget(self._entry_hint)
        left.addWidget(entry_group)
        root.addLayout(left, 3)

        right = QVBoxLayout()

        eq_group = QGroupBox("Regression Equation")
        eq_layout = QVBoxLayout(eq_group)
        self._equation_lbl = QLabel()
        self._equation_lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._equation_lbl.setStyleSheet("font-family: 'Courier New'; font-size: 18px;")
        eq_layout.addWidget(self._equation_lbl)
        right.addWidget(eq_group)

        stats_group = QGroupBox("Statistics")
        stats = QGridLayout(stats_group)
        self._slope_lbl = QLabel()
        self._intercept_lbl = QLabel()
        self._r2_lbl = QLabel()
        self._count_lbl = QLabel()
        for row, (label, value) in enumerate((
            ("Slope (m):", self._slope_lbl),
            ("Y-intercept (b):", self._intercept_lbl),
            ("R² (correlation):", self._r2_lbl),
            ("Data points:", self._count_lbl),
        )):
            stats.addWidget(QLabel(label), row, 0)
            value.setAlignment(Qt.AlignmentFlag.AlignRight)
            stats.addWidget(value, row, 1)
        right.addWidget(stats_group)

        guide = QLabel(
            "R² = 1.0: perfect fit\n"
            "R² > 0.8: strong correlation\n"
            "R² > 0.5: moderate correlation\n"
            "R² < 0.5: weak correlation"
        )
        guide.setStyleSheet("color: #a16207; font-size: 11px;")
        right.addWidget(guide)

        points_group = QGroupBox("Data Points")
        points_outer = QVBoxLayout(points_group)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        self._points_container = QWidget()
        self._points_layout = QVBoxLayout(self._points_container)
        self._points_layout.setSpacing(2)
        self._points_layout.addStretch(1)
        scroll.setWidget(self._points_container)
        points_outer.addWidget(scroll)
        right.addWidget(points_group, 1)

        tools_row = QHBoxLayout()
        copy_btn = QPushButton("Copy LaTeX")
        settings_btn = QPushButton("Settings")
        copy_btn.clicked.connect(self.copy_latex)
        settings_btn.clicked.connect(self.show_settings)
        tools_row.addWidget(copy_btn)
        tools_row.addWidget(settings_btn)
        right.addLayout(tools_row)
        root.addLayout(right, 1)

        vb = self._plot_widget.plotItem.vb
        vb.setMenuEnabled(False)
        vb.setMouseEnabled(x=False, y=False)
        self._plot_widget.viewport().installEventFilter(self)

    def _configure_plot(self) -> None:
        self._plot_widget.setLabel("left", "Y Values")
        self._plot_widget.setLabel("bottom", "X Values")
        self._plot_widget.showGrid(x=True, y=True, alpha=0.3)
        vb = self._plot_widget.plotItem.vb
        vb.disableAutoRange()
        d = self._settings.domain_max
        self._plot_widget.setXRange(0.0, d, padding=0.02)
        self._plot_widget.setYRange(0.0, d, padding=0.02)
        self._entry_hint.setText(
            f"Enter X and Y values (0-{d:g}) and press Enter or click Add"
        )

    # ------------------------------------------------------------------
    # Recompute pipeline
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        """snapshot → fit → sample → redraw, once per user action."""
        points = self._store.snapshot()
        self._fit = fit(points)
        self._rows = sample(
            points, self._fit,
            domain_padding=self._settings.domain_padding,
            step=self._settings.step,
        )
        logger.debug(
            f"Refreshed: n={len(points)} slope={self._fit.slope:.4f} "
            f"intercept={self._fit.intercept:.4f} r2={self._fit.r_squared:.4f} "
            f"rows={len(self._rows)}"
        )
        self._redraw_plot(points)
        self._update_statistics(len(points))
        self._rebuild_point_list(points)

    def _redraw_plot(self, points: tuple[Point, ...]) -> None:
        x_line, y_line = line_arrays(self._rows)
        self._line_curve.setData(x_line, y_line)
        self._line_curve.setVisible(len(x_line) > 0)
        # Scatter keeps store order so spot index == store index.
        self._scatter.setData(
            x=[p.x for p in points], y=[p.y for p in points],
            data=list(range(len(points))),
        )

    def _update_statistics(self, n: int) -> None:
        result = self._fit
        self._equation_lbl.setText(format_equation(result, decimals=2))
        self._slope_lbl.setText(f"{result.slope:.3f}")
        self._intercept_lbl.setText(f"{result.intercept:.3f}")
        strength = classify_r_squared(result.r_squared)
        self._r2_lbl.setText(f"{result.r_squared:.3f}")
        self._r2_lbl.setStyleSheet(
            f"color: {self._STRENGTH_COLORS[strength]}; font-weight: bold;"
        )
        self._count_lbl.setText(str(n))

    def _rebuild_point_list(self, points: tuple[Point, ...]) -> None:
        # Drop every row except the trailing stretch.
        while self._points_layout.count() > 1:
            item = self._points_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        for idx, point in enumerate(points):
            self._points_layout.insertWidget(idx, self._create_point_row(idx, point))

    def _create_point_row(self, idx: int, point: Point) -> QWidget:
        row = QWidget()
        hl = QHBoxLayout(row)
        hl.setContentsMargins(2, 1, 2, 1)
        hl.setSpacing(6)
        lbl = QLabel(f"({point.x:.1f}, {point.y:.1f})")
        lbl.setStyleSheet("font-family: 'Courier New';")
        remove_btn = QPushButton("✕")
        remove_btn.setFixedWidth(28)
        remove_btn.setStyleSheet("color: #ef4444;")
        remove_btn.clicked.connect(lambda _checked=False, i=idx: self.remove_point(i))
        hl.addWidget(lbl)
        hl.addStretch(1)
        hl.addWidget(remove_btn)
        return row

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add_random_point(self) -> None:
        self._store.add_random(self._rng)
        self._refresh()

    def add_manual_point(self) -> None:
        parsed = parse_coordinates(self._x_edit.text(), self._y_edit.text())
        if parsed is None:
            return
        self._store.add_at_position(*parsed)
        self._x_edit.clear()
        self._y_edit.clear()
        self._refresh()

    def load_preset(self, name: str) -> None:
        try:
            preset = self._catalog.get(name)
        except RegressionPlaygroundError as exc:
            QMessageBox.critical(self, "Unknown Preset", str(exc))
            return
        self._store.replace_all(preset.points)
        logger.info(f"Loaded preset '{preset.name}' ({len(preset.points)} points)")
        self._refresh()

    def clear_points(self) -> None:
        self._store.clear()
        self._drag_index = None
        self._refresh()

    def remove_point(self, index: int) -> None:
        try:
            self._store.remove(index)
        except RegressionPlaygroundError as exc:
            QMessageBox.warning(self, "Remove Point", str(exc))
            return
        self._drag_index = None
        self._refresh()

    def move_point(self, index: int, x: float, y: float) -> None:
        try:
            self._store.update(index, x, y)
        except RegressionPlaygroundError as exc:
            self._drag_index = None
            QMessageBox.warning(self, "Move Point", str(exc))
            return
        self._refresh()

    def copy_latex(self) -> None:
        text = self._latex_gen.generate(self._fit)
        QApplication.clipboard().setText(text)
        QMessageBox.information(self, "Copied", f"LaTeX copied to clipboard:\n{text}")

    def show_settings(self) -> None:
        dlg = SettingsDialog(self._settings, self)
        if dlg.exec():
            new_s = dlg.get_settings()
            if new_s is None:
                QMessageBox.critical(self, "Invalid Settings",
                                     "One or more values are invalid.")
                return
            self._settings = new_s
            self._store.reconfigure(new_s)
            self._latex_gen.reconfigure(new_s.latex_approx, new_s.latex_decimals)
            logger.info(f"Settings changed: {new_s}")
            self._configure_plot()
            self._refresh()

    # ------------------------------------------------------------------
    # Mouse handling
    # ------------------------------------------------------------------

    def _hit_test(self, view_x: float, view_y: float) -> Optional[int]:
        """Index of the point nearest to (view_x, view_y) within HIT_RADIUS_PX."""
        points = self._store.snapshot()
        if not points:
            return None
        vb = self._plot_widget.plotItem.vb
        (x0, x1), (y0, y1) = vb.viewRange()
        rect = vb.boundingRect()
        if rect.width() <= 0 or rect.height() <= 0:
            return None
        # Distances in pixels so the pick radius is independent of the domain.
        px = (np.array([p.x for p in points]) - view_x) * rect.width() / (x1 - x0)
        py = (np.array([p.y for p in points]) - view_y) * rect.height() / (y1 - y0)
        dist = np.hypot(px, py)
        idx = int(np.argmin(dist))
        return idx if dist[idx] <= HIT_RADIUS_PX else None

    def eventFilter(self, obj: Any, event: QEvent) -> bool:  # noqa: N802
        if obj is not self._plot_widget.viewport() or not isinstance(event, QMouseEvent):
            return super().eventFilter(obj, event)

        vb = self._plot_widget.plotItem.vb
        et = event.type()

        if et == QEvent.Type.MouseButtonPress:
            vp = vb.mapSceneToView(event.position())
            vx, vy = float(vp.x()), float(vp.y())
            hit = self._hit_test(vx, vy)
            if event.button() == Qt.MouseButton.LeftButton:
                if hit is None:
                    self._store.add_at_position(vx, vy)
                    self._refresh()
                else:
                    self._drag_index = hit
                    self._plot_widget.viewport().setCursor(
                        QCursor(Qt.CursorShape.ClosedHandCursor)
                    )
                return True
            if event.button() == Qt.MouseButton.RightButton and hit is not None:
                self.remove_point(hit)
                return True

        if et == QEvent.Type.MouseMove and self._drag_index is not None:
            vp = vb.mapSceneToView(event.position())
            self.move_point(self._drag_index, float(vp.x()), float(vp.y()))
            return True

        if et == QEvent.Type.MouseButtonRelease and event.button() == Qt.MouseButton.LeftButton:
            if self._drag_index is not None:
                self._drag_index = None
                self._plot_widget.viewport().unsetCursor()
                return True

        return super().eventFilter(obj, event)


# ===========================================================================
# Entry point
# ===========================================================================

def main() -> None:
    setup_logging(os.environ.get(LOG_LEVEL_ENV, "INFO"))
    app = QApplication(sys.argv)
    window = RegressionApp()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
