"""
plot_view.py

Графіки процесу пошуку кореня (карусель сторінок, один графік за раз):
    - "function" : f(x) (або g(x) разом з y = x) + геометрія поточного кроку:
        * бісекція / regula falsi — поточний інтервал [a, b] та точка c;
        * січні — січна через (xₖ₋₁, f), (xₖ, f);
        * Ньютон — дотична в xₖ;
        * проста ітерація — "павутинка" x -> g(x) -> y = x;
    - "error"    : похибка кроку від k у логарифмічному масштабі.

Точки, де вираз не обчислюється, малюються як розриви (NaN).
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
from PyQt6.QtWidgets import QComboBox, QHBoxLayout, QLabel, QPushButton, QStackedWidget, QVBoxLayout, QWidget

from ..core.expressions import EvalFailure, ExpressionEvaluator
from ..core.iteration_result import (
    BracketRecord,
    FixedPointRecord,
    IterationRecord,
    NewtonRecord,
    SecantRecord,
)
from ..core.method_config import Method, MethodConfig
from .styles import MARGIN, PALETTE, SPACING

GRID_SIZE = 400


class PlotPage:
    def __init__(self, figure: Figure, canvas: FigureCanvas, axes):
        self.figure = figure
        self.canvas = canvas
        self.axes = axes


def sample_expression(
    evaluator: ExpressionEvaluator,
    expression: str,
    xs: np.ndarray,
) -> np.ndarray:
    """Обчислити вираз на сітці; збої -> NaN."""
    values = []
    for x in xs:
        value = evaluator.evaluate(expression, float(x))
        values.append(np.nan if isinstance(value, EvalFailure) else value)
    return np.array(values, dtype=float)


def plot_range(config: MethodConfig, records: Sequence[IterationRecord], padding: float = 0.25) -> Tuple[float, float]:
    """Діапазон по x, що охоплює стартові дані та всіх кандидатів."""
    points: List[float] = []
    for pair in (config.bounds, config.seeds):
        if pair is not None:
            points.extend(float(v) for v in pair)
    if config.initial_guess is not None:
        points.append(float(config.initial_guess))
    points.extend(float(rec.candidate) for rec in records)

    lo, hi = min(points), max(points)
    if hi - lo < 1e-9:
        lo, hi = lo - 1.0, hi + 1.0
    span = hi - lo
    return lo - padding * span, hi + padding * span


class PlotView(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("plotView")
        self.pages_order = ["function", "error"]
        self.pages: Dict[str, PlotPage] = {}
        self._build_ui()

    # ------------------------------------------------------------------
    # UI
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        layout.setSpacing(SPACING)

        nav = QHBoxLayout()
        nav.addWidget(QLabel("Графік:", self))

        self.combo_mode = QComboBox(self)
        self.combo_mode.addItems(["Функція та крок методу", "Похибка від k"])
        self.combo_mode.currentIndexChanged.connect(self._set_index)
        nav.addWidget(self.combo_mode, stretch=1)

        self.btn_toggle = QPushButton("⇄", self)
        self.btn_toggle.setFixedWidth(34)
        self.btn_toggle.clicked.connect(
            lambda: self._set_index((self.stacked.currentIndex() + 1) % len(self.pages_order))
        )
        nav.addWidget(self.btn_toggle)
        layout.addLayout(nav)

        self.stacked = QStackedWidget(self)
        layout.addWidget(self.stacked, stretch=1)

        for key in self.pages_order:
            figure = Figure(facecolor=PALETTE.surface)
            page = PlotPage(figure, FigureCanvas(figure), figure.add_subplot(111))
            self.pages[key] = page
            self.stacked.addWidget(page.canvas)

        self.show_placeholder()

    def _set_index(self, index: int) -> None:
        self.stacked.setCurrentIndex(index)
        if self.combo_mode.currentIndex() != index:
            self.combo_mode.setCurrentIndex(index)

    def _style_axes(self, ax) -> None:
        ax.set_facecolor(PALETTE.surface)
        ax.tick_params(colors=PALETTE.text_muted, labelsize=9)
        for spine in ax.spines.values():
            spine.set_color(PALETTE.border)
        ax.grid(True, color=PALETTE.border, linestyle="--", linewidth=0.5)

    def _redraw(self, key: str) -> None:
        page = self.pages[key]
        page.figure.tight_layout()
        page.canvas.draw_idle()

    # ------------------------------------------------------------------
    # Публічні методи
    # ------------------------------------------------------------------

    def show_placeholder(self) -> None:
        for key, page in self.pages.items():
            ax = page.axes
            ax.clear()
            self._style_axes(ax)
            ax.text(
                0.5, 0.5, "Натисніть «Підготувати», щоб побачити графік",
                ha="center", va="center", transform=ax.transAxes, color=PALETTE.text_muted,
            )
            page.canvas.draw_idle()

    def update_plots(
        self,
        evaluator: ExpressionEvaluator,
        config: MethodConfig,
        records: Sequence[IterationRecord],
    ) -> None:
        self.plot_function(evaluator, config, records)
        self.plot_errors(records)

    def plot_function(
        self,
        evaluator: ExpressionEvaluator,
        config: MethodConfig,
        records: Sequence[IterationRecord],
    ) -> None:
        ax = self.pages["function"].axes
        ax.clear()
        self._style_axes(ax)

        lo, hi = plot_range(config, records)
        xs = np.linspace(lo, hi, GRID_SIZE)
        ys = sample_expression(evaluator, config.expression, xs)

        is_fixed_point = Method(config.method) is Method.FIXED_POINT
        label = "g(x)" if is_fixed_point else "f(x)"

        ax.plot(xs, ys, color=PALETTE.curve, linewidth=1.6, label=label)
        if is_fixed_point:
            ax.plot(xs, xs, color=PALETTE.text_muted, linestyle="--", linewidth=1.0, label="y = x")
        else:
            ax.axhline(0.0, color=PALETTE.text_muted, linewidth=0.8)

        if records:
            self._draw_step(ax, records[-1], records, xs)

        ax.set_xlim(lo, hi)
        finite = ys[np.isfinite(ys)]
        if finite.size:
            margin = 0.1 * (finite.max() - finite.min() or 1.0)
            ax.set_ylim(finite.min() - margin, finite.max() + margin)
        ax.set_xlabel("x")
        ax.set_title(config.title)
        ax.legend(loc="best", fontsize=8)

        self._redraw("function")

    def plot_errors(self, records: Sequence[IterationRecord]) -> None:
        ax = self.pages["error"].axes
        ax.clear()
        self._style_axes(ax)

        if not records:
            self._redraw("error")
            return

        ks = [rec.index for rec in records]
        errors = [rec.absolute_error for rec in records]
        positive = [err if err > 0 else np.nan for err in errors]

        ax.semilogy(ks, positive, marker="o", markersize=4, color=PALETTE.marker)
        ax.set_xlabel("k (номер ітерації)")
        ax.set_ylabel("похибка")
        ax.set_title("Похибка кроку")

        self._redraw("error")

    # ------------------------------------------------------------------
    # Геометрія кроку
    # ------------------------------------------------------------------

    def _draw_step(self, ax, last: IterationRecord, records: Sequence[IterationRecord], xs: np.ndarray) -> None:
        if isinstance(last, BracketRecord):
            ax.axvspan(last.a, last.b, color=PALETTE.bracket, alpha=0.2, label="[a, b]")
            ax.scatter([last.a, last.b], [last.fa, last.fb], color=PALETTE.bracket, zorder=5)
            ax.scatter([last.c], [last.fc], color=PALETTE.marker, zorder=6, label="c")

        elif isinstance(last, SecantRecord):
            line = last.f_curr + last.slope * (xs - last.x_curr)
            ax.plot(xs, line, color=PALETTE.bracket, linewidth=1.0, label="січна")
            ax.scatter([last.x_prev, last.x_curr], [last.f_prev, last.f_curr], color=PALETTE.bracket, zorder=5)
            ax.scatter([last.x_next], [0.0], color=PALETTE.marker, zorder=6, label="xₖ₊₁")

        elif isinstance(last, NewtonRecord):
            tangent = last.fx + last.fpx * (xs - last.x)
            ax.plot(xs, tangent, color=PALETTE.bracket, linewidth=1.0, label="дотична")
            ax.scatter([last.x], [last.fx], color=PALETTE.bracket, zorder=5)
            ax.scatter([last.x_next], [0.0], color=PALETTE.marker, zorder=6, label="xₖ₊₁")

        elif isinstance(last, FixedPointRecord):
            web_x: List[float] = []
            web_y: List[float] = []
            for rec in records:
                if isinstance(rec, FixedPointRecord):
                    web_x.extend([rec.x, rec.x, rec.gx])
                    web_y.extend([rec.x, rec.gx, rec.gx])
            ax.plot(web_x, web_y, color=PALETTE.marker, linewidth=0.9, label="ітерації")


__all__ = [
    "PlotView",
    "sample_expression",
    "plot_range",
]
