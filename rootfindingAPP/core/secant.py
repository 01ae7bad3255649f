"""
secant.py

Метод січних як стратегія RootFindingMethod.

    slope    = (f(x_curr) - f(x_prev)) / (x_curr - x_prev)
    x_next   = x_curr - f(x_curr) / slope

Після кроку вікно зсувається: x_prev <- x_curr, x_curr <- x_next.
Збіжність: |f(x_next)| < tol або |x_next - x_curr| < tol.
Майже нульовий нахил зупиняє запуск зі збоєм замість нескінченного x_next.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ValidationError
from .expressions import EvalFailure
from .iteration_result import SecantRecord
from .method_base import FailureKind, RootFindingMethod, StepResult

SLOPE_EPSILON = 1e-12
SEED_EPSILON = 1e-12


@dataclass(frozen=True)
class SecantState:
    x_prev: float
    x_curr: float
    f_prev: float
    f_curr: float


class SecantMethod(RootFindingMethod):
    """
    Метод січних (без похідної, дві попередні точки).

    Передумови (перевіряються в initialize):
        - x0 != x1;
        - f(x0) != f(x1), інакше перша ж січна горизонтальна.
    """

    title = "Secant"

    def initialize(self) -> StepResult:
        x0, x1 = (float(v) for v in self.config.seeds)

        if abs(x1 - x0) < SEED_EPSILON:
            raise ValidationError("Початкові точки x0 та x1 повинні бути різними.", field="seeds")

        f0 = self.eval_f(x0)
        if isinstance(f0, EvalFailure):
            raise ValidationError(f"Не вдалося обчислити f(x0): {f0.message}", field="seeds")
        f1 = self.eval_f(x1)
        if isinstance(f1, EvalFailure):
            raise ValidationError(f"Не вдалося обчислити f(x1): {f1.message}", field="seeds")

        if abs(f1 - f0) < SEED_EPSILON:
            raise ValidationError(
                "f(x0) та f(x1) не повинні збігатися (ділення на нуль у першому кроці).",
                field="seeds",
            )

        return StepResult(record=None, next_state=SecantState(x_prev=x0, x_curr=x1, f_prev=f0, f_curr=f1))

    def _step_impl(self, state: SecantState, index: int) -> StepResult:
        slope = (state.f_curr - state.f_prev) / (state.x_curr - state.x_prev)
        if abs(slope) < SLOPE_EPSILON:
            return self.failed(
                state,
                FailureKind.NUMERICAL_DEGENERACY,
                f"Ітерація {index}: нахил січної майже нульовий ({slope:.3e}), "
                f"наступну точку обчислити неможливо.",
            )

        x_next = state.x_curr - state.f_curr / slope

        f_next = self.eval_f(x_next)
        if isinstance(f_next, EvalFailure):
            return self.evaluation_failed(state, index, f"f(x) при x = {x_next:.10g}", f_next)

        error = abs(x_next - state.x_curr)
        relative_error = (error / abs(x_next)) * 100.0 if abs(x_next) > 1e-12 else 0.0

        record = SecantRecord(
            index=index,
            absolute_error=error,
            x_prev=state.x_prev,
            x_curr=state.x_curr,
            f_prev=state.f_prev,
            f_curr=state.f_curr,
            slope=slope,
            x_next=x_next,
            f_next=f_next,
            relative_error=relative_error,
        )

        next_state = SecantState(
            x_prev=state.x_curr,
            x_curr=x_next,
            f_prev=state.f_curr,
            f_curr=f_next,
        )

        if abs(f_next) < self.tolerance or error < self.tolerance:
            return self.converged(record, next_state)

        return StepResult(record=record, next_state=next_state)


__all__ = [
    "SLOPE_EPSILON",
    "SecantState",
    "SecantMethod",
]
