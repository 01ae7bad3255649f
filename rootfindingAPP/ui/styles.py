"""
styles.py

Світла "зошитова" тема для застосунку пошуку коренів.

    - нейтральний світлий фон, таблиці з чергуванням рядків;
    - один акцент для дій (Next / Solve);
    - окремі кольори для статусів запуску (збіжність, ліміт, збій).
"""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPalette
from PyQt6.QtWidgets import QApplication, QGroupBox, QHeaderView, QLabel, QPushButton, QTableWidget

from ..core.method_base import RunStatus

MARGIN = 10
SPACING = 8
RADIUS = 4

FONT_FAMILY = "Segoe UI"
FONT_SIZE = 10


@dataclass(frozen=True)
class AppPalette:
    background: str = "#f4f5f7"
    surface: str = "#ffffff"
    surface_alt: str = "#eef1f5"

    text_main: str = "#1d2330"
    text_muted: str = "#667085"
    text_inverse: str = "#ffffff"

    accent: str = "#2f6fde"
    accent_alt: str = "#4a86f0"
    border: str = "#d0d5dd"

    ok: str = "#1f9d55"
    warn: str = "#c27c0e"
    error: str = "#d03a3a"

    # Кольори графіків (matplotlib)
    curve: str = "#2f6fde"
    marker: str = "#d03a3a"
    bracket: str = "#f2b544"


PALETTE = AppPalette()

STATUS_COLORS = {
    RunStatus.RUNNING: PALETTE.text_muted,
    RunStatus.CONVERGED: PALETTE.ok,
    RunStatus.MAX_ITERATIONS_REACHED: PALETTE.warn,
    RunStatus.FAILED: PALETTE.error,
}


# ---------------------------------------------------------------------------
# Глобальна таблиця стилів
# ---------------------------------------------------------------------------

def build_app_stylesheet() -> str:
    p = PALETTE

    return f"""
    QWidget {{
        background-color: {p.background};
        color: {p.text_main};
        font-size: {FONT_SIZE}pt;
    }}

    QGroupBox {{
        background-color: {p.surface};
        border: 1px solid {p.border};
        border-radius: {RADIUS}px;
        margin-top: 12px;
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 8px;
        padding: 0 3px;
        color: {p.accent};
        font-weight: 600;
    }}

    QMenuBar, QStatusBar {{
        background-color: {p.surface};
        border-color: {p.border};
    }}
    QMenu::item:selected, QMenuBar::item:selected {{
        background-color: {p.accent};
        color: {p.text_inverse};
    }}

    QPushButton {{
        background-color: {p.accent};
        color: {p.text_inverse};
        border: 1px solid {p.accent};
        border-radius: {RADIUS}px;
        padding: 6px 12px;
    }}
    QPushButton:hover {{
        background-color: {p.accent_alt};
    }}
    QPushButton:disabled {{
        background-color: {p.surface_alt};
        color: {p.text_muted};
        border-color: {p.border};
    }}

    QLineEdit, QSpinBox, QDoubleSpinBox, QComboBox {{
        background-color: {p.surface};
        border: 1px solid {p.border};
        border-radius: {RADIUS}px;
        padding: 4px 6px;
    }}
    QLineEdit:focus, QSpinBox:focus, QDoubleSpinBox:focus, QComboBox:focus {{
        border-color: {p.accent};
    }}

    QTableWidget {{
        background-color: {p.surface};
        alternate-background-color: {p.surface_alt};
        gridline-color: {p.border};
        selection-background-color: {p.accent};
        selection-color: {p.text_inverse};
    }}
    QHeaderView::section {{
        background-color: {p.surface_alt};
        padding: 4px;
        border: none;
        border-right: 1px solid {p.border};
        font-weight: 600;
    }}

    QTabWidget::pane {{
        border: 1px solid {p.border};
        background: {p.surface};
    }}
    """


def apply_app_style(app: QApplication) -> None:
    palette = app.palette()
    palette.setColor(QPalette.ColorRole.Window, QColor(PALETTE.background))
    palette.setColor(QPalette.ColorRole.Base, QColor(PALETTE.surface))
    palette.setColor(QPalette.ColorRole.Text, QColor(PALETTE.text_main))

    app.setPalette(palette)
    app.setFont(QFont(FONT_FAMILY, FONT_SIZE))
    app.setStyleSheet(build_app_stylesheet())


# ---------------------------------------------------------------------------
# Допоміжні функції для окремих віджетів
# ---------------------------------------------------------------------------

def apply_groupbox_style(group: QGroupBox) -> None:
    group.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)


def apply_table_style(table: QTableWidget) -> None:
    table.verticalHeader().setVisible(False)
    table.setAlternatingRowColors(True)
    header = table.horizontalHeader()
    header.setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
    header.setDefaultAlignment(Qt.AlignmentFlag.AlignCenter)


def apply_button_secondary(btn: QPushButton) -> None:
    p = PALETTE
    btn.setStyleSheet(
        f"QPushButton {{ background-color: {p.surface}; color: {p.text_main}; "
        f"border: 1px solid {p.border}; border-radius: {RADIUS}px; padding: 6px 12px; }}"
        f"QPushButton:hover {{ border-color: {p.accent}; }}"
        f"QPushButton:disabled {{ color: {p.text_muted}; }}"
    )


def apply_label_muted(lbl: QLabel) -> None:
    lbl.setStyleSheet(f"color: {PALETTE.text_muted};")


def apply_status_label(lbl: QLabel, status: RunStatus) -> None:
    """Пофарбувати мітку статусу запуску відповідно до RunStatus."""
    color = STATUS_COLORS.get(status, PALETTE.text_main)
    lbl.setStyleSheet(f"color: {color}; font-weight: 600;")


__all__ = [
    "MARGIN",
    "SPACING",
    "PALETTE",
    "STATUS_COLORS",
    "apply_app_style",
    "apply_groupbox_style",
    "apply_table_style",
    "apply_button_secondary",
    "apply_label_muted",
    "apply_status_label",
]
