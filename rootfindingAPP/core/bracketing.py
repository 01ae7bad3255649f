"""
bracketing.py

Методи з "вилкою" кореня: бісекція та regula falsi (хибне положення).

Обидва методи:
    - вимагають f(a) * f(b) < 0 ще до першої ітерації (інакше ValidationError);
    - на кожному кроці обчислюють нову точку c та f(c);
    - залишають [a, c], якщо f(a) * f(c) < 0, інакше [c, b]
      (при f(a) * f(c) == 0 точка c стає новою лівою межею);
    - похибка кроку: |f(c)|;
    - збіжність: |f(c)| < tol або |b - a| < tol (ширина інтервалу ДО кроку).

Різниться лише формула для c:
    бісекція     : c = (a + b) / 2
    regula falsi : c = (a * f(b) - b * f(a)) / (f(b) - f(a))
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ValidationError
from .expressions import EvalFailure
from .iteration_result import BracketRecord
from .method_base import FailureKind, RootFindingMethod, StepResult


@dataclass(frozen=True)
class BracketState:
    a: float
    b: float
    fa: float
    fb: float


class BracketingMethod(RootFindingMethod):
    """
    Спільна логіка бісекції та regula falsi.
    Дочірні класи реалізують лише _next_point().
    """

    def initialize(self) -> StepResult:
        a, b = (float(v) for v in self.config.bounds)

        fa = self.eval_f(a)
        if isinstance(fa, EvalFailure):
            raise ValidationError(f"Не вдалося обчислити f(a): {fa.message}", field="bounds")
        fb = self.eval_f(b)
        if isinstance(fb, EvalFailure):
            raise ValidationError(f"Не вдалося обчислити f(b): {fb.message}", field="bounds")

        if fa * fb >= 0.0:
            raise ValidationError(
                f"На інтервалі [{a}, {b}] функція не змінює знак: "
                f"f(a) = {fa:.6g}, f(b) = {fb:.6g}, f(a)·f(b) ≥ 0.",
                field="bounds",
            )

        return StepResult(record=None, next_state=BracketState(a=a, b=b, fa=fa, fb=fb))

    def _next_point(self, state: BracketState, index: int):
        """Повернути c (float) або StepResult, якщо крок неможливий."""
        raise NotImplementedError

    def _step_impl(self, state: BracketState, index: int) -> StepResult:
        c = self._next_point(state, index)
        if isinstance(c, StepResult):
            return c

        fc = self.eval_f(c)
        if isinstance(fc, EvalFailure):
            return self.evaluation_failed(state, index, f"f(c) при c = {c:.10g}", fc)

        keep_left = state.fa * fc < 0.0

        record = BracketRecord(
            index=index,
            absolute_error=abs(fc),
            a=state.a,
            b=state.b,
            fa=state.fa,
            fb=state.fb,
            c=c,
            fc=fc,
            chosen="left" if keep_left else "right",
        )

        if keep_left:
            next_state = BracketState(a=state.a, b=c, fa=state.fa, fb=fc)
        else:
            next_state = BracketState(a=c, b=state.b, fa=fc, fb=state.fb)

        if abs(fc) < self.tolerance or abs(state.b - state.a) < self.tolerance:
            return self.converged(record, next_state)

        return StepResult(record=record, next_state=next_state)


class BisectionMethod(BracketingMethod):
    """Метод бісекції (ділення навпіл)."""

    title = "Bisection"

    def _next_point(self, state: BracketState, index: int) -> float:
        return (state.a + state.b) / 2.0


class RegulaFalsiMethod(BracketingMethod):
    """Метод хибного положення (regula falsi)."""

    title = "Regula falsi"

    def _next_point(self, state: BracketState, index: int):
        denominator = state.fb - state.fa
        if denominator == 0.0:
            return self.failed(
                state,
                FailureKind.NUMERICAL_DEGENERACY,
                f"Ітерація {index}: f(b) - f(a) = 0, хорду провести неможливо (ділення на нуль).",
            )
        return (state.a * state.fb - state.b * state.fa) / denominator


__all__ = [
    "BracketState",
    "BracketingMethod",
    "BisectionMethod",
    "RegulaFalsiMethod",
]
