"""
main_window.py

Головне вікно:
    - зліва: панель керування (функція, метод, стартові дані, кнопки кроків);
    - справа: графіки над таблицею ітерацій, під таблицею — рядок статусу запуску.

Саме вікно нічого не обчислює: воно лише показує RunState, який йому
передає контролер з app.py.
"""

from __future__ import annotations

from typing import Optional, Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QSplitter, QStatusBar, QVBoxLayout, QWidget

from ..core.engine import RunState
from ..core.expressions import ExpressionEvaluator
from ..core.iteration_result import IterationRecord
from ..core.method_base import RunStatus
from .control_panel import ControlPanelWidget
from .dialogs import humanize_status, show_about
from .plot_view import PlotView
from .styles import MARGIN, SPACING, apply_label_muted, apply_status_label
from .table_view import IterationsTableWidget


class MainWindow(QMainWindow):
    """Головне вікно застосунку пошуку коренів."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.setWindowTitle("Пошук коренів рівнянь f(x) = 0")
        self.resize(1360, 860)

        self._create_actions()
        self._create_menu()
        self.setStatusBar(QStatusBar(self))
        self.statusBar().showMessage("Готово")
        self._create_content()

        self.action_exit.triggered.connect(self.close)
        self.action_about.triggered.connect(lambda: show_about(self))
        self.control_panel.exitRequested.connect(self.close)

    # ------------------------------------------------------------------
    # Меню
    # ------------------------------------------------------------------

    def _create_actions(self) -> None:
        self.action_exit = QAction("Вихід", self)
        self.action_exit.setShortcut("Ctrl+Q")
        self.action_about = QAction("Про програму", self)

    def _create_menu(self) -> None:
        menu = self.menuBar()
        menu.addMenu("Файл").addAction(self.action_exit)
        menu.addMenu("Довідка").addAction(self.action_about)

    # ------------------------------------------------------------------
    # Компоновка
    # ------------------------------------------------------------------

    def _create_content(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        root.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        root.setSpacing(SPACING)

        self.control_panel = ControlPanelWidget(central)
        self.control_panel.setMinimumWidth(360)

        right = QWidget(central)
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)

        splitter = QSplitter(Qt.Orientation.Vertical, right)
        self.plot_view = PlotView(splitter)
        self.iterations_table = IterationsTableWidget(splitter)
        splitter.addWidget(self.plot_view)
        splitter.addWidget(self.iterations_table)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)
        right_layout.addWidget(splitter)

        stats = QHBoxLayout()
        self.label_status = QLabel(right)
        self.label_root = QLabel(right)
        self.label_message = QLabel(right)
        self.label_message.setWordWrap(True)
        apply_label_muted(self.label_root)
        apply_label_muted(self.label_message)
        stats.addWidget(self.label_status)
        stats.addWidget(self.label_root)
        stats.addWidget(self.label_message, stretch=1)
        right_layout.addLayout(stats)

        root.addWidget(self.control_panel, stretch=2)
        root.addWidget(right, stretch=5)

        self.clear_results()

    # ------------------------------------------------------------------
    # Публічне API (для app.py)
    # ------------------------------------------------------------------

    def clear_results(self) -> None:
        """Скинути таблицю, графіки та підписи."""
        self.iterations_table.set_family(None)
        self.plot_view.show_placeholder()
        self.label_status.setText("")
        self.label_root.setText("")
        self.label_message.setText("")
        self.control_panel.set_navigation_state(prepared=False, terminal=False, has_records=False)

    def add_iteration(self, record: IterationRecord) -> None:
        """Дописати один запис у таблицю (callback контролера)."""
        self.iterations_table.add_iteration(record)

    def show_state(self, state: RunState, evaluator: ExpressionEvaluator) -> None:
        """
        Синхронізувати вікно з RunState: таблиця, графіки, статус, кнопки.
        """
        records: Sequence[IterationRecord] = state.records

        if self.iterations_table.table.rowCount() != len(records):
            self.iterations_table.populate(records)

        self.plot_view.update_plots(evaluator, state.config, records)

        self.label_status.setText(humanize_status(state.status, state.failure))
        apply_status_label(self.label_status, state.status)

        last = state.last_record
        if last is not None and state.status is not RunStatus.FAILED:
            self.label_root.setText(f"x ≈ {last.candidate:.10g}   похибка {last.absolute_error:.3e}")
        else:
            self.label_root.setText("")
        self.label_message.setText(state.message)

        self.control_panel.set_navigation_state(
            prepared=True,
            terminal=state.is_terminal,
            has_records=bool(records),
        )
        self.statusBar().showMessage(f"{state.config.title}: ітерацій {len(records)}")


__all__ = ["MainWindow"]
