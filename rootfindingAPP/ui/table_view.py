"""
table_view.py

Таблиця ітерацій пошуку кореня.

Набір колонок залежить від сімейства методу (IterationRecord.method_family):
    bracketing  : k, a, b, f(a), f(b), c, f(c), інтервал, |f(c)|
    secant      : k, x_{k-1}, x_k, f(x_{k-1}), f(x_k), x_{k+1}, f(x_{k+1}), |Δx|, ε, %
    newton      : k, x_k, f(x_k), f'(x_k), x_{k+1}, |Δx|
    fixed_point : k, x_k, g(x_k), |g(x) - x|

Подвійний клік по рядку -> сигнал jumpRequested(row) (перехід до ітерації).
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from ..core.iteration_result import IterationRecord
from .styles import MARGIN, SPACING, apply_label_muted, apply_table_style

Column = Tuple[str, Callable[[IterationRecord], str]]


def _num(attr: str, fmt: str = ".8f") -> Callable[[IterationRecord], str]:
    return lambda rec: format(getattr(rec, attr), fmt)


COLUMNS: Dict[str, List[Column]] = {
    "bracketing": [
        ("a", _num("a")),
        ("b", _num("b")),
        ("f(a)", _num("fa", ".6e")),
        ("f(b)", _num("fb", ".6e")),
        ("c", _num("c")),
        ("f(c)", _num("fc", ".6e")),
        ("інтервал", lambda rec: "[a, c]" if rec.chosen == "left" else "[c, b]"),
        ("|f(c)|", _num("absolute_error", ".3e")),
    ],
    "secant": [
        ("xₖ₋₁", _num("x_prev")),
        ("xₖ", _num("x_curr")),
        ("f(xₖ₋₁)", _num("f_prev", ".6e")),
        ("f(xₖ)", _num("f_curr", ".6e")),
        ("xₖ₊₁", _num("x_next")),
        ("f(xₖ₊₁)", _num("f_next", ".6e")),
        ("|Δx|", _num("absolute_error", ".3e")),
        ("ε, %", _num("relative_error", ".4f")),
    ],
    "newton": [
        ("xₖ", _num("x")),
        ("f(xₖ)", _num("fx", ".6e")),
        ("f'(xₖ)", _num("fpx", ".6e")),
        ("xₖ₊₁", _num("x_next")),
        ("|Δx|", _num("absolute_error", ".3e")),
    ],
    "fixed_point": [
        ("xₖ", _num("x")),
        ("g(xₖ)", _num("gx")),
        ("|g(x) - x|", _num("absolute_error", ".3e")),
    ],
}


class IterationsTableWidget(QWidget):
    """
    Обгортка над QTableWidget для траси ітерацій одного запуску.

    Перша колонка завжди k (номер ітерації), решта — за COLUMNS.
    """

    jumpRequested = pyqtSignal(int)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._family: Optional[str] = None
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        root.setSpacing(SPACING)

        header_row = QHBoxLayout()
        title = QLabel("Ітерації", self)
        self.subtitle = QLabel("подвійний клік по рядку — повернутися до цієї ітерації", self)
        apply_label_muted(self.subtitle)
        header_row.addWidget(title)
        header_row.addStretch(1)
        header_row.addWidget(self.subtitle)
        root.addLayout(header_row)

        self.table = QTableWidget(self)
        apply_table_style(self.table)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setDefaultSectionSize(22)
        self.table.cellDoubleClicked.connect(lambda row, _col: self.jumpRequested.emit(row))

        root.addWidget(self.table)

    # ------------------------------------------------------------------
    # Публічне API
    # ------------------------------------------------------------------

    def clear_table(self) -> None:
        """Очистити всі рядки (заголовки лишаються)."""
        self.table.setRowCount(0)

    def set_family(self, family: Optional[str]) -> None:
        """Перебудувати заголовки під сімейство методу."""
        self._family = family
        self.clear_table()

        headers = ["k"] + [title for title, _ in COLUMNS.get(family, [])]
        self.table.setColumnCount(len(headers))
        self.table.setHorizontalHeaderLabels(headers)

    def add_iteration(self, record: IterationRecord) -> None:
        """Додати один рядок у кінець таблиці."""
        if record.method_family != self._family:
            self.set_family(record.method_family)

        row = self.table.rowCount()
        self.table.insertRow(row)

        cells = [str(record.index)] + [getter(record) for _, getter in COLUMNS[record.method_family]]
        for col, text in enumerate(cells):
            item = QTableWidgetItem(text)
            item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            self.table.setItem(row, col, item)

        self.table.scrollToItem(self.table.item(row, 0))

    def populate(self, records: Iterable[IterationRecord]) -> None:
        """Повністю перезаповнити таблицю трасою."""
        self.clear_table()
        for record in records:
            self.add_iteration(record)

    def truncate(self, count: int) -> None:
        """Залишити лише перші count рядків (після Назад / переходу)."""
        self.table.setRowCount(max(0, min(count, self.table.rowCount())))


__all__ = [
    "COLUMNS",
    "IterationsTableWidget",
]
