"""
method_config.py

Незмінна конфігурація одного запуску методу пошуку кореня.

MethodConfig створюється з уже зібраних користувацьких даних (GUI, тести,
пресети) і ніколи не змінюється. Структурна перевірка виконується один раз,
на початку запуску (StepController.prepare -> MethodConfig.validate).

Набір обов'язкових полів залежить від методу:
    bisection, regula_falsi : bounds = (a, b)
    secant                  : seeds = (x0, x1)
    newton_raphson          : initial_guess (+ опційно derivative_expression)
    fixed_point             : initial_guess (expression задає g(x))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .exceptions import ValidationError

DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 20

# Запобіжник від необмеженого росту таблиці ітерацій
MAX_ITERATIONS_LIMIT = 1000


class Method(str, Enum):
    BISECTION = "bisection"
    REGULA_FALSI = "regula_falsi"
    SECANT = "secant"
    NEWTON_RAPHSON = "newton_raphson"
    FIXED_POINT = "fixed_point"


METHOD_TITLES: Dict[Method, str] = {
    Method.BISECTION: "Метод бісекції",
    Method.REGULA_FALSI: "Метод хибного положення (regula falsi)",
    Method.SECANT: "Метод січних",
    Method.NEWTON_RAPHSON: "Метод Ньютона–Рафсона",
    Method.FIXED_POINT: "Метод простої ітерації",
}

BRACKETING_METHODS = (Method.BISECTION, Method.REGULA_FALSI)

# Які з позиційних полів потрібні кожному методу
_REQUIRED_FIELDS: Dict[Method, Tuple[str, ...]] = {
    Method.BISECTION: ("bounds",),
    Method.REGULA_FALSI: ("bounds",),
    Method.SECANT: ("seeds",),
    Method.NEWTON_RAPHSON: ("initial_guess",),
    Method.FIXED_POINT: ("initial_guess",),
}

_POSITIONAL_FIELDS = ("bounds", "seeds", "initial_guess")


def _is_finite_number(value) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


@dataclass(frozen=True)
class MethodConfig:
    """
    Вхідні дані одного запуску.

    Атрибути:
        method                - обраний метод (Method)
        expression            - f(x) (або g(x) для методу простої ітерації)
        derivative_expression - f'(x) для Ньютона–Рафсона; якщо None —
                                буде отримана диференціюванням expression
        bounds                - (a, b) для бісекції / regula falsi
        seeds                 - (x0, x1) для методу січних
        initial_guess         - x0 для Ньютона та простої ітерації
        tolerance             - поріг збіжності (> 0)
        max_iterations        - максимальна кількість ітерацій (>= 1)
    """
    method: Method
    expression: str
    derivative_expression: Optional[str] = None
    bounds: Optional[Tuple[float, float]] = None
    seeds: Optional[Tuple[float, float]] = None
    initial_guess: Optional[float] = None
    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    @property
    def title(self) -> str:
        return METHOD_TITLES[Method(self.method)]

    def validate(self) -> None:
        """
        Структурна перевірка конфігурації.

        Не обчислює функцію — передумови, які вимагають обчислень
        (зміна знаку на [a, b], f(x0) != f(x1)), перевіряє сам метод
        у prepare().

        Raises
        ------
        ValidationError
            Якщо конфігурація некоректна.
        """
        try:
            method = Method(self.method)
        except ValueError:
            raise ValidationError(f"Невідомий метод: {self.method!r}", field="method") from None

        if not isinstance(self.expression, str) or not self.expression.strip():
            raise ValidationError("Вираз функції не може бути порожнім.", field="expression")

        if isinstance(self.tolerance, bool) or not _is_finite_number(self.tolerance) or self.tolerance <= 0.0:
            raise ValidationError("Точність (tolerance) повинна бути додатним числом.", field="tolerance")

        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ValidationError("max_iterations повинно бути цілим числом.", field="max_iterations")
        if self.max_iterations < 1:
            raise ValidationError("max_iterations повинно бути не менше 1.", field="max_iterations")
        if self.max_iterations > MAX_ITERATIONS_LIMIT:
            raise ValidationError(
                f"max_iterations не може перевищувати {MAX_ITERATIONS_LIMIT}.",
                field="max_iterations",
            )

        required = _REQUIRED_FIELDS[method]
        for name in _POSITIONAL_FIELDS:
            value = getattr(self, name)
            if name in required and value is None:
                raise ValidationError(f"Для методу '{method.value}' потрібне поле {name}.", field=name)
            if name not in required and value is not None:
                raise ValidationError(f"Поле {name} не використовується методом '{method.value}'.", field=name)

        if self.derivative_expression is not None:
            if method is not Method.NEWTON_RAPHSON:
                raise ValidationError(
                    "derivative_expression задається лише для методу Ньютона–Рафсона.",
                    field="derivative_expression",
                )
            if not isinstance(self.derivative_expression, str) or not self.derivative_expression.strip():
                raise ValidationError("Вираз похідної не може бути порожнім.", field="derivative_expression")

        if method in BRACKETING_METHODS:
            a, b = self._pair("bounds")
            if a >= b:
                raise ValidationError("Межі інтервалу повинні задовольняти a < b.", field="bounds")

        if method is Method.SECANT:
            x0, x1 = self._pair("seeds")
            if abs(x0 - x1) < 1e-12:
                raise ValidationError("Початкові точки x0 та x1 повинні бути різними.", field="seeds")

        if method in (Method.NEWTON_RAPHSON, Method.FIXED_POINT):
            if isinstance(self.initial_guess, bool) or not _is_finite_number(self.initial_guess):
                raise ValidationError("Початкове наближення x0 повинно бути скінченним числом.", field="initial_guess")

    def _pair(self, name: str) -> Tuple[float, float]:
        value = getattr(self, name)
        try:
            first, second = value
        except (TypeError, ValueError):
            raise ValidationError(f"Поле {name} повинно містити рівно два числа.", field=name) from None
        if not (_is_finite_number(first) and _is_finite_number(second)):
            raise ValidationError(f"Поле {name} повинно містити скінченні числа.", field=name)
        return float(first), float(second)


__all__ = [
    "DEFAULT_TOLERANCE",
    "DEFAULT_MAX_ITERATIONS",
    "MAX_ITERATIONS_LIMIT",
    "Method",
    "METHOD_TITLES",
    "BRACKETING_METHODS",
    "MethodConfig",
]
