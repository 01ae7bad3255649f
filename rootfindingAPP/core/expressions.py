"""
expressions.py

Обчислення користувацьких виразів f(x) та їх похідних.

Ядро не розбирає вирази самостійно — воно працює через протокол
ExpressionEvaluator:
    evaluate(expression, x, e=None)         -> float | EvalFailure
    differentiate(expression, variable="x") -> str | EvalFailure

Жоден із методів не кидає винятків назовні: будь-яка проблема (синтаксис,
невідома змінна, вихід за область визначення, NaN/∞, надто велике значення)
повертається як EvalFailure.

Реалізація за замовчуванням — SympyEvaluator:
    - розбір через sympy.parsing.sympy_parser.parse_expr з неявним множенням
      та '^' як степенем, тож приймаються записи на кшталт "-0.9x^2 + 1.7x + 2.5";
    - компіляція через sympy.lambdify(..., "math") з кешуванням;
    - символ e за замовчуванням — число Ейлера.

Також тут живе реєстр PRESETS з навчальними прикладами.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Optional, Protocol, Tuple, Union, runtime_checkable

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from .method_config import Method, MethodConfig

X_SYMBOL = sp.Symbol("x", real=True)
E_SYMBOL = sp.Symbol("e")

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

# Значення за модулем більше за цю межу вважаються фактично розбіжними
DEFAULT_CEILING = 1e10

# Допустима уявна частина, яку ще можна відкинути як похибку округлення
_IMAG_TOLERANCE = 1e-12

# Види збоїв обчислення
FAILURE_PARSE = "parse"
FAILURE_UNDEFINED = "undefined"
FAILURE_DOMAIN = "domain"
FAILURE_NON_FINITE = "non_finite"
FAILURE_OVERFLOW = "overflow"


@dataclass(frozen=True)
class EvalFailure:
    """
    Сигнал про невдале обчислення виразу.

    Атрибути:
        kind    - вид збою (FAILURE_*)
        message - людино-зрозумілий опис
        x       - точка, в якій намагалися обчислити (None для розбору/похідної)
    """
    kind: str
    message: str
    x: Optional[float] = None

    @property
    def is_divergent(self) -> bool:
        """Чи означає збій нескінченне / надто велике значення."""
        return self.kind in (FAILURE_NON_FINITE, FAILURE_OVERFLOW)


EvalResult = Union[float, EvalFailure]


@runtime_checkable
class ExpressionEvaluator(Protocol):
    """
    Протокол обчислювача виразів, який споживає ядро.

    Реалізації не повинні кидати винятки: усі збої — через EvalFailure.
    """

    ceiling: float

    def evaluate(self, expression: str, x: float, e: Optional[float] = None) -> EvalResult:
        ...

    def differentiate(self, expression: str, variable: str = "x") -> Union[str, EvalFailure]:
        ...


# ---------------------------------------------------------------------------
# Розбір та компіляція (кешуються на рівні модуля)
# ---------------------------------------------------------------------------

@lru_cache(maxsize=256)
def _parse(expression: str) -> sp.Expr:
    """Розібрати рядок у вираз SymPy. Кидає виняток при синтаксичній помилці."""
    return parse_expr(
        expression,
        local_dict={"x": X_SYMBOL, "e": E_SYMBOL},
        transformations=TRANSFORMATIONS,
    )


@lru_cache(maxsize=256)
def _compile(expression: str) -> Callable[[float, float], object]:
    expr = _parse(expression)
    return sp.lambdify((X_SYMBOL, E_SYMBOL), expr, "math")


def parse_expression(expression: str) -> Union[sp.Expr, EvalFailure]:
    """
    Розібрати вираз та перевірити, що в ньому немає невідомих змінних.
    """
    if not isinstance(expression, str) or not expression.strip():
        return EvalFailure(FAILURE_PARSE, "Вираз порожній.")

    try:
        expr = _parse(expression.strip())
    except Exception as exc:  # noqa: BLE001 (parse_expr кидає дуже різні винятки)
        return EvalFailure(FAILURE_PARSE, f"Не вдалося розібрати вираз '{expression}': {exc}")

    if not isinstance(expr, sp.Expr):
        return EvalFailure(FAILURE_PARSE, f"'{expression}' не є математичним виразом.")

    unknown = expr.free_symbols - {X_SYMBOL, E_SYMBOL}
    if unknown:
        names = ", ".join(sorted(str(s) for s in unknown))
        return EvalFailure(FAILURE_UNDEFINED, f"Невідомі змінні у виразі '{expression}': {names}")

    return expr


class SympyEvaluator:
    """
    Обчислювач виразів на базі SymPy.

    Parameters
    ----------
    ceiling : float
        Межа модуля результату; більші значення повертаються як
        EvalFailure(kind="overflow").
    """

    def __init__(self, ceiling: float = DEFAULT_CEILING) -> None:
        self.ceiling = float(ceiling)

    def evaluate(self, expression: str, x: float, e: Optional[float] = None) -> EvalResult:
        parsed = parse_expression(expression)
        if isinstance(parsed, EvalFailure):
            return parsed

        try:
            func = _compile(expression.strip())
        except Exception as exc:  # noqa: BLE001 (кодогенератор lambdify кидає різні винятки)
            return EvalFailure(FAILURE_PARSE, f"Вираз '{expression}' неможливо скомпілювати: {exc}")

        e_value = math.e if e is None else float(e)

        try:
            value = func(float(x), e_value)
        except OverflowError:
            return EvalFailure(FAILURE_OVERFLOW, f"Переповнення при обчисленні виразу в x = {x}.", x)
        except Exception as exc:  # noqa: BLE001 (назовні лише EvalFailure)
            return EvalFailure(FAILURE_DOMAIN, f"Не вдалося обчислити вираз при x = {x}: {exc}", x)

        return self._to_float(value, x)

    def differentiate(self, expression: str, variable: str = "x") -> Union[str, EvalFailure]:
        parsed = parse_expression(expression)
        if isinstance(parsed, EvalFailure):
            return parsed

        symbol = X_SYMBOL if variable == "x" else sp.Symbol(variable, real=True)
        try:
            derivative = sp.diff(parsed, symbol)
        except Exception as exc:  # noqa: BLE001
            return EvalFailure(FAILURE_PARSE, f"Не вдалося обчислити похідну '{expression}': {exc}")

        if derivative.has(sp.Derivative):
            return EvalFailure(FAILURE_PARSE, f"Похідна '{expression}' не виражається в замкненій формі: {derivative}")

        return str(derivative)

    # ------------------------------------------------------------------

    def _to_float(self, value: object, x: float) -> EvalResult:
        if isinstance(value, complex):
            if abs(value.imag) > _IMAG_TOLERANCE:
                return EvalFailure(FAILURE_DOMAIN, f"Вираз має комплексне значення при x = {x}.", x)
            value = value.real

        try:
            result = float(value)
        except (TypeError, ValueError, OverflowError) as exc:
            return EvalFailure(FAILURE_DOMAIN, f"Результат при x = {x} не є дійсним числом: {exc}", x)

        if not math.isfinite(result):
            return EvalFailure(FAILURE_NON_FINITE, f"Вираз дає нескінченне значення або NaN при x = {x}.", x)

        if abs(result) > self.ceiling:
            return EvalFailure(
                FAILURE_OVERFLOW,
                f"|значення| при x = {x} перевищує {self.ceiling:.0e}.",
                x,
            )

        return result


# ---------------------------------------------------------------------------
# Реєстр навчальних прикладів
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PresetProblem:
    key: str
    name: str
    method: Method
    expression: str
    bounds: Optional[Tuple[float, float]] = None
    seeds: Optional[Tuple[float, float]] = None
    initial_guess: Optional[float] = None
    tolerance: float = 1e-6
    max_iterations: int = 20

    def to_config(self) -> MethodConfig:
        return MethodConfig(
            method=self.method,
            expression=self.expression,
            bounds=self.bounds,
            seeds=self.seeds,
            initial_guess=self.initial_guess,
            tolerance=self.tolerance,
            max_iterations=self.max_iterations,
        )


PRESETS: Dict[str, PresetProblem] = {
    "bisection_quadratic": PresetProblem(
        key="bisection_quadratic",
        name="f(x) = -0.9x² + 1.7x + 2.5 на [2.8, 3.0]",
        method=Method.BISECTION,
        expression="-0.9x^2 + 1.7x + 2.5",
        bounds=(2.8, 3.0),
    ),
    "regula_falsi_quadratic": PresetProblem(
        key="regula_falsi_quadratic",
        name="f(x) = -0.9x² + 1.7x + 2.5 на [2.8, 3.0]",
        method=Method.REGULA_FALSI,
        expression="-0.9x^2 + 1.7x + 2.5",
        bounds=(2.8, 3.0),
    ),
    "secant_golden": PresetProblem(
        key="secant_golden",
        name="f(x) = x² - x - 1, x0 = 0.8, x1 = 0.9",
        method=Method.SECANT,
        expression="x^2 - x - 1",
        seeds=(0.8, 0.9),
    ),
    "newton_cubic": PresetProblem(
        key="newton_cubic",
        name="x³ - 2x - 5 = 0",
        method=Method.NEWTON_RAPHSON,
        expression="x^3 - 2*x - 5",
        initial_guess=2.0,
        tolerance=1e-4,
    ),
    "newton_square": PresetProblem(
        key="newton_square",
        name="x² - 4 = 0",
        method=Method.NEWTON_RAPHSON,
        expression="x^2 - 4",
        initial_guess=1.0,
        tolerance=1e-4,
    ),
    "newton_cos": PresetProblem(
        key="newton_cos",
        name="cos(x) - x = 0",
        method=Method.NEWTON_RAPHSON,
        expression="cos(x) - x",
        initial_guess=0.5,
        tolerance=1e-4,
    ),
    "newton_exp": PresetProblem(
        key="newton_exp",
        name="e^x - 2x - 1 = 0",
        method=Method.NEWTON_RAPHSON,
        expression="exp(x) - 2*x - 1",
        initial_guess=1.0,
        tolerance=1e-4,
    ),
    "fixed_point_cbrt": PresetProblem(
        key="fixed_point_cbrt",
        name="g(x) = (x + 2)^(1/3)  (x³ - x - 2 = 0)",
        method=Method.FIXED_POINT,
        expression="(x+2)^(1/3)",
        initial_guess=1.5,
        tolerance=1e-4,
        max_iterations=50,
    ),
}


__all__ = [
    "X_SYMBOL",
    "E_SYMBOL",
    "TRANSFORMATIONS",
    "DEFAULT_CEILING",
    "FAILURE_PARSE",
    "FAILURE_UNDEFINED",
    "FAILURE_DOMAIN",
    "FAILURE_NON_FINITE",
    "FAILURE_OVERFLOW",
    "EvalFailure",
    "EvalResult",
    "ExpressionEvaluator",
    "parse_expression",
    "SympyEvaluator",
    "PresetProblem",
    "PRESETS",
]
