"""
app.py

Контролер для GUI-застосунку пошуку коренів рівнянь f(x) = 0.

Зв'язує:
    - ui.MainWindow (PyQt6)
    - core.StepController (покрокове керування запуском)
    - core.results_summary (порівняння методів)

Функціонал:
    - "Підготувати"  -> StepController.prepare(config); помилки конфігурації
                        показуються діалогом;
    - "Далі"/"Назад" -> advance() / rewind();
    - подвійний клік по рядку таблиці -> jump_to();
    - "Розв'язати"   -> advance() до термінального стану + діалог з підсумком;
    - "Скинути"      -> забути поточний запуск;
    - "Порівняти"    -> прогін усіх методів для f(x) та зведена таблиця.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from PyQt6.QtWidgets import QApplication

from .core.engine import RootFindingEngine, RunState, StepController
from .core.exceptions import RootFindingError
from .core.expressions import SympyEvaluator
from .core.method_config import MethodConfig
from .core.results_summary import build_comparison_configs, compare_methods
from .ui.dialogs import show_error, show_outcome, show_summary
from .ui.main_window import MainWindow
from .ui.styles import apply_app_style

logger = logging.getLogger(__name__)


class RootFindingController:
    """
    Зв'язує MainWindow та StepController.

    Схема:
        ControlPanel --[MethodConfig]--> Controller.prepare / solve
        Controller -- StepController.advance --> callback -> MainWindow.add_iteration
        Після кожної дії: MainWindow.show_state(state)
    """

    def __init__(self, window: MainWindow, evaluator: Optional[SympyEvaluator] = None) -> None:
        self.window = window
        self.evaluator = evaluator if evaluator is not None else SympyEvaluator()
        self.steps = StepController(self.evaluator, callback=self.window.add_iteration)
        self.state: Optional[RunState] = None

        panel = self.window.control_panel
        panel.prepareRequested.connect(self.on_prepare)
        panel.stepRequested.connect(self.on_step)
        panel.rewindRequested.connect(self.on_rewind)
        panel.solveRequested.connect(self.on_solve)
        panel.resetRequested.connect(self.on_reset)
        panel.compareRequested.connect(self.on_compare)
        self.window.iterations_table.jumpRequested.connect(self.on_jump)

    # ------------------------------------------------------------------
    # Підготовка
    # ------------------------------------------------------------------

    def _prepare(self, cfg: MethodConfig) -> bool:
        """
        Підготувати новий запуск. При помилці показує діалог і НЕ чіпає
        попередній запуск.
        """
        try:
            state = self.steps.prepare(cfg)
        except RootFindingError as exc:
            logger.info("Configuration rejected: %s", exc)
            show_error(self.window, str(exc), title="Некоректні дані")
            self.window.statusBar().showMessage(f"Помилка: {exc}")
            return False

        self.state = state
        self.window.clear_results()
        self.window.show_state(state, self.evaluator)
        return True

    def on_prepare(self, cfg: MethodConfig) -> None:
        self._prepare(cfg)

    # ------------------------------------------------------------------
    # Навігація по кроках
    # ------------------------------------------------------------------

    def on_step(self) -> None:
        if self.state is None:
            return
        self.steps.advance(self.state)
        self._refresh()

    def on_rewind(self) -> None:
        if self.state is None:
            return
        self.steps.rewind(self.state)
        self.window.iterations_table.truncate(len(self.state.records))
        self._refresh()

    def on_jump(self, row: int) -> None:
        if self.state is None:
            return
        self.steps.jump_to(self.state, row)
        self.window.iterations_table.truncate(len(self.state.records))
        self._refresh()

    def on_solve(self, cfg: MethodConfig) -> None:
        """
        Довести запуск до кінця. Якщо параметри змінилися після "Підготувати"
        (або запуску ще немає) — спершу готується новий запуск.
        """
        if self.state is None or self.state.config != cfg:
            if not self._prepare(cfg):
                return

        state = self.state
        while not state.is_terminal:
            self.steps.advance(state)

        self._refresh()
        show_outcome(self.window, cfg.title, self.steps.outcome(state))

    def on_reset(self) -> None:
        self.state = None
        self.window.clear_results()
        self.window.statusBar().showMessage("Скинуто")

    def _refresh(self) -> None:
        self.window.show_state(self.state, self.evaluator)

    # ------------------------------------------------------------------
    # Порівняння методів
    # ------------------------------------------------------------------

    def on_compare(self) -> None:
        panel = self.window.control_panel
        expression, bounds, x0 = panel.comparison_inputs()

        if not expression:
            show_error(self.window, "Введіть f(x) для порівняння методів.", title="Немає функції")
            return

        configs = build_comparison_configs(
            expression,
            bounds,
            initial_guess=x0,
            tolerance=float(panel.input_tolerance.value()),
            max_iterations=int(panel.input_max_iter.value()),
        )
        summary = compare_methods(configs, RootFindingEngine(self.evaluator))

        if not summary.runs:
            show_error(
                self.window,
                "Жоден метод не вдалося запустити. Перевірте f(x) та межі [a, b].",
                title="Немає даних для порівняння",
            )
            return

        show_summary(self.window, summary)

        best = summary.best_by_iterations()
        if best is not None:
            self.window.statusBar().showMessage(
                f"Найшвидший метод: {best.method_name}, x ≈ {best.outcome.root:.10g}"
            )
        else:
            self.window.statusBar().showMessage("Жоден метод не зійшовся.")


# ---------------------------------------------------------------------------
# Точка входу
# ---------------------------------------------------------------------------

def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    apply_app_style(app)

    window = MainWindow()
    _controller = RootFindingController(window)

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
