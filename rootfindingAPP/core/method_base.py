"""
method_base.py

Базові класи та типи для реалізації методів пошуку кореня (Strategy).

Ідея:
    - Є абстрактний клас RootFindingMethod, від якого наслідуються всі
      конкретні методи:
        * BisectionMethod, RegulaFalsiMethod
        * SecantMethod
        * NewtonRaphsonMethod
        * FixedPointMethod
    - Кожен метод реалізує initialize() та _step_impl(), а движок викликає step().

Формат:
    initialize()          -> StepResult (record = None, next_state = початковий стан)
    step(state, index)    -> StepResult

Стан методу (state) — незмінний об'єкт (frozen dataclass). step() не змінює
ні state, ні сам метод, тому один і той самий стан можна "прокрутити"
повторно і отримати ідентичний запис — на цьому тримаються rewind/jump_to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .expressions import EvalFailure, EvalResult, ExpressionEvaluator
from .iteration_result import IterationRecord
from .method_config import MethodConfig


class RunStatus(str, Enum):
    RUNNING = "running"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not RunStatus.RUNNING


class FailureKind(str, Enum):
    EVALUATION_FAILURE = "evaluation_failure"
    NUMERICAL_DEGENERACY = "numerical_degeneracy"
    DIVERGENCE_DETECTED = "divergence_detected"
    DERIVATIVE_UNAVAILABLE = "derivative_unavailable"


# ---------------------------------------------------------------------------
# Результат одного кроку методу
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StepResult:
    """
    Результат одного кроку методу.

    Атрибути:
        record          - новий запис ітерації (None, якщо крок зірвався
                          до того, як запис мав сенс)
        next_state      - стан методу після кроку
        terminal        - чи завершено запуск цим кроком
        terminal_reason - CONVERGED або FAILED (MAX_ITERATIONS_REACHED
                          визначає движок, а не метод)
        failure         - вид збою для FAILED
        message         - пояснення для користувача
    """
    record: Optional[IterationRecord]
    next_state: Any
    terminal: bool = False
    terminal_reason: Optional[RunStatus] = None
    failure: Optional[FailureKind] = None
    message: str = ""


# ---------------------------------------------------------------------------
# Базовий клас RootFindingMethod (Strategy)
# ---------------------------------------------------------------------------

class RootFindingMethod(ABC):
    """
    Абстрактний базовий клас для всіх методів пошуку кореня.

    Використання:
        method = BisectionMethod(config, evaluator)
        prep = method.initialize()        # ValidationError, якщо передумова не виконана
        res = method.step(prep.next_state, index=1)
    """

    title: str = "Root-finding method"

    def __init__(self, config: MethodConfig, evaluator: ExpressionEvaluator) -> None:
        self.config = config
        self.evaluator = evaluator

    # ------------------------------------------------------------------
    # Сервісні методи
    # ------------------------------------------------------------------

    @property
    def tolerance(self) -> float:
        return float(self.config.tolerance)

    def eval_f(self, x: float) -> EvalResult:
        """Обчислити основний вираз конфігурації в точці x."""
        return self.evaluator.evaluate(self.config.expression, x)

    def converged(self, record: IterationRecord, next_state: Any) -> StepResult:
        return StepResult(
            record=record,
            next_state=next_state,
            terminal=True,
            terminal_reason=RunStatus.CONVERGED,
            message=(
                f"Корінь знайдено: x ≈ {record.candidate:.10g} "
                f"(ітерація {record.index}, похибка {record.absolute_error:.3e})."
            ),
        )

    def failed(
        self,
        state: Any,
        failure: FailureKind,
        message: str,
        record: Optional[IterationRecord] = None,
    ) -> StepResult:
        return StepResult(
            record=record,
            next_state=state,
            terminal=True,
            terminal_reason=RunStatus.FAILED,
            failure=failure,
            message=message,
        )

    def evaluation_failed(self, state: Any, index: int, what: str, failure: EvalFailure) -> StepResult:
        return self.failed(
            state,
            FailureKind.EVALUATION_FAILURE,
            f"Ітерація {index}: не вдалося обчислити {what} — {failure.message}",
        )

    # ------------------------------------------------------------------
    # Життєвий цикл методу
    # ------------------------------------------------------------------

    @abstractmethod
    def initialize(self) -> StepResult:
        """
        Підготувати початковий стан.

        Кидає ValidationError, якщо не виконано передумову методу.
        Може повернути термінальний StepResult (FAILED), якщо запуск
        неможливий, але це не помилка конфігурації (наприклад, похідну
        не вдалося отримати).
        """
        raise NotImplementedError

    def step(self, state: Any, index: int) -> StepResult:
        """
        Виконати один крок методу зі стану state.

        index — номер запису, який буде створено (1-based).
        """
        result = self._step_impl(state, index)

        if not isinstance(result, StepResult):
            raise TypeError(
                f"{self.__class__.__name__}._step_impl() "
                f"повинен повертати StepResult, отримано: {type(result)}"
            )

        return result

    @abstractmethod
    def _step_impl(self, state: Any, index: int) -> StepResult:
        raise NotImplementedError


__all__ = [
    "RunStatus",
    "FailureKind",
    "StepResult",
    "RootFindingMethod",
]
