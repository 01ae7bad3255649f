"""
fixed_point.py

Метод простої ітерації: розв'язуємо x = g(x) послідовними підстановками
x_{k+1} = g(x_k). Вираз конфігурації тут — це g(x), а не f(x).

Метод збігається лише якщо |g'(x)| < 1 поблизу кореня; перевірити це заздалегідь
движок не може, тому кожен крок контролює модуль g(x): нескінченність, NaN
або значення понад межу обчислювача означають розбіжність і зупиняють запуск
(без запису для цієї ітерації).
"""

from __future__ import annotations

from dataclasses import dataclass

from .expressions import EvalFailure
from .iteration_result import FixedPointRecord
from .method_base import FailureKind, RootFindingMethod, StepResult


@dataclass(frozen=True)
class FixedPointState:
    x: float


class FixedPointMethod(RootFindingMethod):
    """Метод простої ітерації x_{k+1} = g(x_k); похибка |g(x_k) - x_k|."""

    title = "Fixed-point iteration"

    def initialize(self) -> StepResult:
        return StepResult(record=None, next_state=FixedPointState(x=float(self.config.initial_guess)))

    def _step_impl(self, state: FixedPointState, index: int) -> StepResult:
        x = state.x
        gx = self.eval_f(x)

        if isinstance(gx, EvalFailure):
            if gx.is_divergent:
                return self.failed(
                    state,
                    FailureKind.DIVERGENCE_DETECTED,
                    f"Ітерація {index}: процес розбігається — g({x:.10g}) "
                    f"нескінченне або за модулем більше {self.evaluator.ceiling:.0e}.",
                )
            return self.evaluation_failed(state, index, f"g(x) при x = {x:.10g}", gx)

        error = abs(gx - x)
        record = FixedPointRecord(index=index, absolute_error=error, x=x, gx=gx)
        next_state = FixedPointState(x=gx)

        if error < self.tolerance:
            return self.converged(record, next_state)

        return StepResult(record=record, next_state=next_state)


__all__ = [
    "FixedPointState",
    "FixedPointMethod",
]
