"""
newton.py

Реалізація методу Ньютона–Рафсона як стратегії RootFindingMethod.

Ідея:
    x_{k+1} = x_k - f(x_k) / f'(x_k)

    - похідна f'(x) береться з конфігурації або отримується символьним
      диференціюванням ОДИН раз, в initialize(), а не на кожному кроці;
    - якщо |f'(x_k)| < DERIVATIVE_EPSILON, запуск завершується збоєм
      "похідна майже нульова" без запису для цієї ітерації;
    - похибка: |x_{k+1} - x_k|, збіжність при похибці < tol.
"""

from __future__ import annotations

from dataclasses import dataclass

from .expressions import EvalFailure
from .iteration_result import NewtonRecord
from .method_base import FailureKind, RootFindingMethod, StepResult

DERIVATIVE_EPSILON = 1e-12


@dataclass(frozen=True)
class NewtonState:
    x: float
    derivative_expression: str


class NewtonRaphsonMethod(RootFindingMethod):
    """
    Метод Ньютона–Рафсона для пошуку кореня f(x) = 0.

    Особливості:
        - використовує f(x) та f'(x);
        - на відміну від методів з вилкою, не гарантує збіжності —
          результат залежить від початкового наближення x0.
    """

    title = "Newton-Raphson"

    def initialize(self) -> StepResult:
        x0 = float(self.config.initial_guess)

        derivative = self.config.derivative_expression
        if derivative is None:
            derivative = self.evaluator.differentiate(self.config.expression, "x")

        if isinstance(derivative, EvalFailure):
            return self.failed(
                NewtonState(x=x0, derivative_expression=""),
                FailureKind.DERIVATIVE_UNAVAILABLE,
                f"Похідну обчислити не вдалося (derivative could not be computed): {derivative.message}",
            )

        return StepResult(record=None, next_state=NewtonState(x=x0, derivative_expression=derivative))

    def eval_derivative(self, state: NewtonState, x: float):
        return self.evaluator.evaluate(state.derivative_expression, x)

    def _step_impl(self, state: NewtonState, index: int) -> StepResult:
        x = state.x

        fx = self.eval_f(x)
        if isinstance(fx, EvalFailure):
            return self.evaluation_failed(state, index, f"f(x) при x = {x:.10g}", fx)

        fpx = self.eval_derivative(state, x)
        if isinstance(fpx, EvalFailure):
            return self.evaluation_failed(state, index, f"f'(x) при x = {x:.10g}", fpx)

        if abs(fpx) < DERIVATIVE_EPSILON:
            return self.failed(
                state,
                FailureKind.NUMERICAL_DEGENERACY,
                f"Ітерація {index}: похідна майже нульова (derivative near zero): f'({x:.10g}) = {fpx:.3e}, "
                f"метод Ньютона–Рафсона не може продовжити.",
            )

        x_next = x - fx / fpx
        error = abs(x_next - x)

        record = NewtonRecord(
            index=index,
            absolute_error=error,
            x=x,
            fx=fx,
            fpx=fpx,
            x_next=x_next,
        )
        next_state = NewtonState(x=x_next, derivative_expression=state.derivative_expression)

        if error < self.tolerance:
            return self.converged(record, next_state)

        return StepResult(record=record, next_state=next_state)


__all__ = [
    "DERIVATIVE_EPSILON",
    "NewtonState",
    "NewtonRaphsonMethod",
]
