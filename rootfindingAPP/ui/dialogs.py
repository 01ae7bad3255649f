"""
ui/dialogs.py

Стандартні діалоги для GUI-застосунку:

    - show_error     – повідомлення про помилку (некоректні дані)
    - show_info      – інформаційне повідомлення
    - show_outcome   – підсумок запуску (статус, корінь, похибка)
    - show_summary   – зведена таблиця порівняння методів
    - show_about     – вікно "Про програму"
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QHeaderView,
    QLabel,
    QMessageBox,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from ..core.engine import RunOutcome
from ..core.method_base import FailureKind, RunStatus
from ..core.results_summary import ResultsSummary
from .styles import MARGIN, SPACING, apply_label_muted, apply_status_label, apply_table_style

STATUS_TEXT: Dict[RunStatus, str] = {
    RunStatus.RUNNING: "Виконується",
    RunStatus.CONVERGED: "Збіжність досягнута",
    RunStatus.MAX_ITERATIONS_REACHED: "Досягнуто ліміту ітерацій",
    RunStatus.FAILED: "Збій",
}

FAILURE_TEXT: Dict[FailureKind, str] = {
    FailureKind.EVALUATION_FAILURE: "вираз не обчислюється в поточній точці",
    FailureKind.NUMERICAL_DEGENERACY: "нульовий знаменник (похідна, нахил січної або хорда)",
    FailureKind.DIVERGENCE_DETECTED: "ітераційний процес розбігається",
    FailureKind.DERIVATIVE_UNAVAILABLE: "похідну отримати не вдалося",
}


def humanize_status(status: RunStatus, failure: Optional[FailureKind] = None) -> str:
    """Статус запуску людською мовою."""
    text = STATUS_TEXT.get(status, str(status))
    if status is RunStatus.FAILED and failure is not None:
        text = f"{text}: {FAILURE_TEXT.get(failure, failure.value)}"
    return text


# ---------------------------------------------------------------------------
# Прості діалоги
# ---------------------------------------------------------------------------

def _message_box(parent: Optional[QWidget], icon: QMessageBox.Icon, title: str, message: str) -> None:
    dlg = QMessageBox(parent)
    dlg.setIcon(icon)
    dlg.setWindowTitle(title)
    dlg.setText(message)
    dlg.setStandardButtons(QMessageBox.StandardButton.Ok)
    dlg.exec()


def show_error(parent: Optional[QWidget], message: str, title: str = "Помилка") -> None:
    _message_box(parent, QMessageBox.Icon.Critical, title, message)


def show_info(parent: Optional[QWidget], title: str, message: str) -> None:
    _message_box(parent, QMessageBox.Icon.Information, title, message)


def show_outcome(parent: Optional[QWidget], method_name: str, outcome: RunOutcome) -> None:
    """
    Показати підсумок одного запуску.
    Для FAILED корінь не показується — лише причина.
    """
    lines = [f"<b>{method_name}</b>", humanize_status(outcome.status, outcome.failure)]
    if outcome.root is not None:
        lines.append(f"x ≈ {outcome.root:.10g}")
    lines.append(f"Ітерацій: {outcome.iterations_used}, остання похибка: {outcome.final_error:.3e}")
    lines.append(outcome.message)

    icon = QMessageBox.Icon.Warning if outcome.status is RunStatus.FAILED else QMessageBox.Icon.Information
    _message_box(parent, icon, "Результат", "<br/>".join(lines))


# ---------------------------------------------------------------------------
# Зведена таблиця
# ---------------------------------------------------------------------------

class SummaryDialog(QDialog):
    """
    Діалог зі зведеною таблицею ResultsSummary (порівняння методів
    на одній f(x) з однаковими стартовими даними).
    """

    HEADERS = ["Метод", "Статус", "Корінь", "Ітерацій", "Похибка", "Пояснення"]

    def __init__(self, parent: Optional[QWidget], summary: ResultsSummary) -> None:
        super().__init__(parent)
        self.summary = summary

        self.setWindowTitle("Порівняння методів")
        self.setModal(True)
        self.resize(860, 360)

        self._build_ui()
        self._populate()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        layout.setSpacing(SPACING)

        self.label_title = QLabel("Результати всіх методів для обраної f(x)", self)
        self.label_best = QLabel(self)
        apply_label_muted(self.label_best)

        self.table = QTableWidget(self)
        self.table.setColumnCount(len(self.HEADERS))
        self.table.setHorizontalHeaderLabels(self.HEADERS)
        apply_table_style(self.table)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        self.table.horizontalHeader().setStretchLastSection(True)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok, parent=self)
        buttons.accepted.connect(self.accept)

        layout.addWidget(self.label_title)
        layout.addWidget(self.table)
        layout.addWidget(self.label_best)
        layout.addWidget(buttons)

    def _populate(self) -> None:
        rows: List[Dict[str, Any]] = self.summary.as_rows()
        self.table.setRowCount(len(rows))

        for row_idx, (row, run) in enumerate(zip(rows, self.summary.runs)):
            status = RunStatus(row["status"])
            cells = [
                row["method"],
                humanize_status(status, run.outcome.failure),
                "" if row["root"] is None else f"{row['root']:.10g}",
                str(row["iterations"]),
                f"{row['final_error']:.3e}",
                row["message"],
            ]
            for col, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setFlags(item.flags() & ~Qt.ItemFlag.ItemIsEditable)
                self.table.setItem(row_idx, col, item)

        best = self.summary.best_by_iterations()
        if best is None:
            self.label_best.setText("Жоден метод не зійшовся.")
        else:
            self.label_best.setText(
                f"Найшвидше зійшовся: {best.method_name} "
                f"({best.outcome.iterations_used} ітерацій)."
            )
            apply_status_label(self.label_best, RunStatus.CONVERGED)


def show_summary(parent: Optional[QWidget], summary: ResultsSummary) -> None:
    SummaryDialog(parent, summary).exec()


def show_about(parent: Optional[QWidget]) -> None:
    show_info(
        parent,
        "Про програму",
        "<b>Чисельні методи розв'язування рівнянь f(x) = 0</b><br/><br/>"
        "Покрокова демонстрація методів: бісекції, хибного положення, січних, "
        "Ньютона–Рафсона та простої ітерації.<br/>"
        "Таблиця ітерацій, графік функції з геометрією кроку та графік похибки.<br/><br/>"
        "Версія: 1.0.0",
    )


__all__ = [
    "STATUS_TEXT",
    "FAILURE_TEXT",
    "humanize_status",
    "show_error",
    "show_info",
    "show_outcome",
    "SummaryDialog",
    "show_summary",
    "show_about",
]
