"""
control_panel.py

Панель керування для GUI:
    - навчальний приклад (пресет) або власна функція f(x) / g(x);
    - необов'язкова похідна f'(x) (лише для Ньютона–Рафсона);
    - вибір методу;
    - стартові дані методу: [a, b] / x0, x1 / x0;
    - tolerance та max_iter;
    - кнопки: Підготувати, Назад, Далі, Розв'язати, Скинути, Порівняти, Вихід.

Видає назовні:
    - prepareRequested(MethodConfig)
    - stepRequested(), rewindRequested()
    - solveRequested(MethodConfig)
    - resetRequested(), compareRequested(), exitRequested()
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QDoubleSpinBox,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from ..core.expressions import PRESETS
from ..core.method_config import (
    BRACKETING_METHODS,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    MAX_ITERATIONS_LIMIT,
    METHOD_TITLES,
    Method,
    MethodConfig,
)
from .styles import MARGIN, SPACING, apply_button_secondary, apply_groupbox_style, apply_label_muted

# Порядок методів у combobox
METHOD_ORDER: List[Method] = list(METHOD_TITLES.keys())

# Сторінки QStackedWidget зі стартовими даними
_PAGE_BOUNDS = 0
_PAGE_SEEDS = 1
_PAGE_GUESS = 2


def _make_spin(parent: QWidget, value: float) -> QDoubleSpinBox:
    spin = QDoubleSpinBox(parent)
    spin.setRange(-1e6, 1e6)
    spin.setDecimals(6)
    spin.setSingleStep(0.1)
    spin.setValue(value)
    return spin


class ControlPanelWidget(QWidget):
    """
    Ліва панель керування пошуком кореня.

    Сигнали:
        prepareRequested(MethodConfig) – "Підготувати"
        stepRequested()                – "Далі"
        rewindRequested()              – "Назад"
        solveRequested(MethodConfig)   – "Розв'язати"
        resetRequested()               – "Скинути"
        compareRequested()             – "Порівняти методи"
        exitRequested()                – "Вихід"
    """

    prepareRequested = pyqtSignal(object)
    stepRequested = pyqtSignal()
    rewindRequested = pyqtSignal()
    solveRequested = pyqtSignal(object)
    resetRequested = pyqtSignal()
    compareRequested = pyqtSignal()
    exitRequested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._build_ui()
        self._connect_signals()
        self._on_method_changed(self.combo_method.currentIndex())
        self.set_navigation_state(prepared=False, terminal=False, has_records=False)

    # ------------------------------------------------------------------
    # Побудова UI
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.setObjectName("controlPanel")

        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        main_layout.setSpacing(SPACING)

        # Блок 1. Функція
        self.problem_group = QGroupBox("Функція", self)
        apply_groupbox_style(self.problem_group)
        problem_layout = QVBoxLayout(self.problem_group)
        problem_layout.setSpacing(SPACING)

        self.combo_preset = QComboBox(self.problem_group)
        self.combo_preset.addItem("Власна функція", None)
        for key, preset in PRESETS.items():
            self.combo_preset.addItem(f"{METHOD_TITLES[preset.method]}: {preset.name}", key)

        self.input_expression = QLineEdit(self.problem_group)
        self.input_expression.setPlaceholderText("наприклад: x^3 - 2x - 5")

        self.input_derivative = QLineEdit(self.problem_group)
        self.input_derivative.setPlaceholderText("f'(x), якщо порожньо — символьно")

        self.label_expression = QLabel("f(x) =", self.problem_group)
        self.label_hint = QLabel("Допустимо: + - * / ^, sin, cos, exp, log, sqrt, e", self.problem_group)
        apply_label_muted(self.label_hint)

        problem_layout.addWidget(QLabel("Приклад:", self.problem_group))
        problem_layout.addWidget(self.combo_preset)
        problem_layout.addWidget(self.label_expression)
        problem_layout.addWidget(self.input_expression)
        self.label_derivative = QLabel("f'(x) =", self.problem_group)
        problem_layout.addWidget(self.label_derivative)
        problem_layout.addWidget(self.input_derivative)
        problem_layout.addWidget(self.label_hint)

        main_layout.addWidget(self.problem_group)

        # Блок 2. Метод та стартові дані
        self.method_group = QGroupBox("Метод", self)
        apply_groupbox_style(self.method_group)
        method_layout = QVBoxLayout(self.method_group)
        method_layout.setSpacing(SPACING)

        self.combo_method = QComboBox(self.method_group)
        for method in METHOD_ORDER:
            self.combo_method.addItem(METHOD_TITLES[method], method)

        self.start_stack = QStackedWidget(self.method_group)

        bounds_page = QWidget(self.start_stack)
        bounds_row = QHBoxLayout(bounds_page)
        bounds_row.setContentsMargins(0, 0, 0, 0)
        self.input_a = _make_spin(bounds_page, 2.8)
        self.input_b = _make_spin(bounds_page, 3.0)
        bounds_row.addWidget(QLabel("a:", bounds_page))
        bounds_row.addWidget(self.input_a)
        bounds_row.addWidget(QLabel("b:", bounds_page))
        bounds_row.addWidget(self.input_b)

        seeds_page = QWidget(self.start_stack)
        seeds_row = QHBoxLayout(seeds_page)
        seeds_row.setContentsMargins(0, 0, 0, 0)
        self.input_seed0 = _make_spin(seeds_page, 0.8)
        self.input_seed1 = _make_spin(seeds_page, 0.9)
        seeds_row.addWidget(QLabel("x₀:", seeds_page))
        seeds_row.addWidget(self.input_seed0)
        seeds_row.addWidget(QLabel("x₁:", seeds_page))
        seeds_row.addWidget(self.input_seed1)

        guess_page = QWidget(self.start_stack)
        guess_row = QHBoxLayout(guess_page)
        guess_row.setContentsMargins(0, 0, 0, 0)
        self.input_x0 = _make_spin(guess_page, 2.0)
        guess_row.addWidget(QLabel("x₀:", guess_page))
        guess_row.addWidget(self.input_x0)
        guess_row.addStretch(1)

        self.start_stack.insertWidget(_PAGE_BOUNDS, bounds_page)
        self.start_stack.insertWidget(_PAGE_SEEDS, seeds_page)
        self.start_stack.insertWidget(_PAGE_GUESS, guess_page)

        method_layout.addWidget(self.combo_method)
        method_layout.addWidget(self.start_stack)

        main_layout.addWidget(self.method_group)

        # Блок 3. Точність та ітерації
        self.params_group = QGroupBox("Точність та ітерації", self)
        apply_groupbox_style(self.params_group)
        params_row = QHBoxLayout(self.params_group)
        params_row.setSpacing(SPACING)

        self.input_tolerance = QDoubleSpinBox(self.params_group)
        self.input_tolerance.setDecimals(12)
        self.input_tolerance.setRange(1e-12, 1.0)
        self.input_tolerance.setSingleStep(1e-6)
        self.input_tolerance.setValue(DEFAULT_TOLERANCE)

        self.input_max_iter = QSpinBox(self.params_group)
        self.input_max_iter.setRange(1, MAX_ITERATIONS_LIMIT)
        self.input_max_iter.setValue(DEFAULT_MAX_ITERATIONS)

        params_row.addWidget(QLabel("tol:", self.params_group))
        params_row.addWidget(self.input_tolerance)
        params_row.addWidget(QLabel("max_iter:", self.params_group))
        params_row.addWidget(self.input_max_iter)

        main_layout.addWidget(self.params_group)

        # Кнопки
        buttons = QGridLayout()
        buttons.setSpacing(SPACING)

        self.button_prepare = QPushButton("Підготувати", self)
        self.button_prev = QPushButton("◀ Назад", self)
        self.button_next = QPushButton("Далі ▶", self)
        self.button_solve = QPushButton("Розв'язати", self)
        self.button_reset = QPushButton("Скинути", self)
        self.button_compare = QPushButton("Порівняти методи", self)
        self.button_exit = QPushButton("Вихід", self)

        for btn in (self.button_prev, self.button_reset, self.button_compare, self.button_exit):
            apply_button_secondary(btn)

        buttons.addWidget(self.button_prepare, 0, 0, 1, 2)
        buttons.addWidget(self.button_prev, 1, 0)
        buttons.addWidget(self.button_next, 1, 1)
        buttons.addWidget(self.button_solve, 2, 0, 1, 2)
        buttons.addWidget(self.button_reset, 3, 0)
        buttons.addWidget(self.button_compare, 3, 1)
        buttons.addWidget(self.button_exit, 4, 0, 1, 2)

        main_layout.addLayout(buttons)
        main_layout.addStretch(1)

    def _connect_signals(self) -> None:
        self.combo_method.currentIndexChanged.connect(self._on_method_changed)
        self.combo_preset.currentIndexChanged.connect(self._on_preset_changed)

        self.button_prepare.clicked.connect(lambda: self.prepareRequested.emit(self.build_config()))
        self.button_solve.clicked.connect(lambda: self.solveRequested.emit(self.build_config()))
        self.button_next.clicked.connect(self.stepRequested.emit)
        self.button_prev.clicked.connect(self.rewindRequested.emit)
        self.button_reset.clicked.connect(self.resetRequested.emit)
        self.button_compare.clicked.connect(self.compareRequested.emit)
        self.button_exit.clicked.connect(self.exitRequested.emit)

    # ------------------------------------------------------------------
    # Публічний API
    # ------------------------------------------------------------------

    def selected_method(self) -> Method:
        return Method(self.combo_method.currentData())

    def build_config(self) -> MethodConfig:
        """
        Зібрати MethodConfig з поточного стану контролів.

        Перевірку не виконує — це робить StepController.prepare().
        """
        method = self.selected_method()
        derivative = self.input_derivative.text().strip() or None

        bounds = seeds = initial_guess = None
        if method in BRACKETING_METHODS:
            bounds = (self.input_a.value(), self.input_b.value())
        elif method is Method.SECANT:
            seeds = (self.input_seed0.value(), self.input_seed1.value())
        else:
            initial_guess = self.input_x0.value()

        return MethodConfig(
            method=method,
            expression=self.input_expression.text().strip(),
            derivative_expression=derivative if method is Method.NEWTON_RAPHSON else None,
            bounds=bounds,
            seeds=seeds,
            initial_guess=initial_guess,
            tolerance=float(self.input_tolerance.value()),
            max_iterations=int(self.input_max_iter.value()),
        )

    def comparison_inputs(self) -> Tuple[str, Tuple[float, float], Optional[float]]:
        """
        Дані для порівняння методів: f(x), інтервал [a, b] та x0 (якщо обрано
        метод з одним початковим наближенням).
        """
        method = self.selected_method()
        if method is Method.SECANT:
            bounds = (self.input_seed0.value(), self.input_seed1.value())
        else:
            bounds = (self.input_a.value(), self.input_b.value())
        x0 = self.input_x0.value() if self.start_stack.currentIndex() == _PAGE_GUESS else None
        return self.input_expression.text().strip(), bounds, x0

    def load_preset(self, key: str) -> None:
        preset = PRESETS[key]

        self.combo_method.setCurrentIndex(METHOD_ORDER.index(preset.method))
        self.input_expression.setText(preset.expression)
        self.input_derivative.clear()
        if preset.bounds is not None:
            self.input_a.setValue(preset.bounds[0])
            self.input_b.setValue(preset.bounds[1])
        if preset.seeds is not None:
            self.input_seed0.setValue(preset.seeds[0])
            self.input_seed1.setValue(preset.seeds[1])
        if preset.initial_guess is not None:
            self.input_x0.setValue(preset.initial_guess)
        self.input_tolerance.setValue(preset.tolerance)
        self.input_max_iter.setValue(preset.max_iterations)

    def set_navigation_state(self, prepared: bool, terminal: bool, has_records: bool) -> None:
        """Увімкнути/вимкнути Next/Previous відповідно до стану запуску."""
        self.button_next.setEnabled(prepared and not terminal)
        self.button_prev.setEnabled(prepared and (has_records or terminal))
        self.button_reset.setEnabled(prepared)

    # ------------------------------------------------------------------
    # Обробники
    # ------------------------------------------------------------------

    def _on_method_changed(self, index: int) -> None:
        method = Method(self.combo_method.itemData(index))

        if method in BRACKETING_METHODS:
            self.start_stack.setCurrentIndex(_PAGE_BOUNDS)
        elif method is Method.SECANT:
            self.start_stack.setCurrentIndex(_PAGE_SEEDS)
        else:
            self.start_stack.setCurrentIndex(_PAGE_GUESS)

        is_newton = method is Method.NEWTON_RAPHSON
        self.input_derivative.setVisible(is_newton)
        self.label_derivative.setVisible(is_newton)
        self.label_expression.setText("g(x) =" if method is Method.FIXED_POINT else "f(x) =")

    def _on_preset_changed(self, index: int) -> None:
        key = self.combo_preset.itemData(index)
        if key is not None:
            self.load_preset(key)


__all__ = [
    "METHOD_ORDER",
    "ControlPanelWidget",
]
