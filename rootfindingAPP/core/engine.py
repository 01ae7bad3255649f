"""
engine.py

Ітераційний двигун та контролер кроків для методів пошуку кореня.

Функціонал:
    - StepController керує одним запуском (RunState):
        prepare(config)        - перевірити конфігурацію, підготувати стан;
        advance(state)         - один крок методу (no-op у термінальному стані);
        rewind(state)          - відкотити останній крок;
        jump_to(state, index)  - обрізати трасу до запису index (0-based);
        run_to_completion(cfg) - prepare + advance до термінального стану;
        outcome(state)         - підсумок RunOutcome;
    - RootFindingEngine.run() — пакетний запуск з callback на кожну ітерацію
      (для GUI / логів), побудований поверх того самого advance().

Пакетний і покроковий режими йдуть одним шляхом (advance), тому
run_to_completion() дає рівно ту саму послідовність записів, що й ручні
виклики advance().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from .expressions import ExpressionEvaluator, SympyEvaluator
from .iteration_result import IterationRecord
from .method_base import FailureKind, RootFindingMethod, RunStatus, StepResult
from .method_config import Method, MethodConfig
from .bracketing import BisectionMethod, RegulaFalsiMethod
from .secant import SecantMethod
from .newton import NewtonRaphsonMethod
from .fixed_point import FixedPointMethod

logger = logging.getLogger(__name__)

METHODS: Dict[Method, Type[RootFindingMethod]] = {
    Method.BISECTION: BisectionMethod,
    Method.REGULA_FALSI: RegulaFalsiMethod,
    Method.SECANT: SecantMethod,
    Method.NEWTON_RAPHSON: NewtonRaphsonMethod,
    Method.FIXED_POINT: FixedPointMethod,
}

# Тип callback'а для GUI/логів
IterationCallback = Callable[[IterationRecord], None]


def create_method(config: MethodConfig, evaluator: ExpressionEvaluator) -> RootFindingMethod:
    """Створити стратегію за config.method."""
    return METHODS[Method(config.method)](config, evaluator)


# ---------------------------------------------------------------------------
# Стан та підсумок запуску
# ---------------------------------------------------------------------------

@dataclass
class RunOutcome:
    """
    Підсумок запуску.

    Атрибути:
        status          - термінальний (або RUNNING) статус
        root            - знайдений корінь / найкраще наближення; None при FAILED
        iterations_used - кількість записів
        final_error     - absolute_error останнього запису (0.0 без записів)
        message         - пояснення для користувача
        failure         - вид збою для FAILED
    """
    status: RunStatus
    root: Optional[float]
    iterations_used: int
    final_error: float
    message: str
    failure: Optional[FailureKind] = None

    @property
    def converged(self) -> bool:
        return self.status is RunStatus.CONVERGED


@dataclass
class RunState:
    """
    Змінний стан одного запуску. Належить StepController.

    Атрибути:
        config  - конфігурація запуску (не змінюється)
        records - траса ітерацій (лише дописується, записи незмінні)
        cursor  - позиція наступного кроку; завжди len(records)
        status  - RUNNING або термінальний статус
        message - пояснення термінального стану
        failure - вид збою для FAILED

    Службові поля:
        method          - стратегія методу
        prepared        - результат method.initialize()
        step_results    - StepResult для кожного запису (стан після кроку)
        pending_failure - термінальний крок, що не додав запису
    """
    config: MethodConfig
    records: List[IterationRecord] = field(default_factory=list)
    cursor: int = 0
    status: RunStatus = RunStatus.RUNNING
    message: str = ""
    failure: Optional[FailureKind] = None

    method: Optional[RootFindingMethod] = field(default=None, repr=False, compare=False)
    prepared: Optional[StepResult] = field(default=None, repr=False, compare=False)
    step_results: List[StepResult] = field(default_factory=list, repr=False, compare=False)
    pending_failure: Optional[StepResult] = field(default=None, repr=False, compare=False)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def method_state(self) -> Any:
        """Стан методу, з якого буде зроблено наступний крок."""
        if self.step_results:
            return self.step_results[-1].next_state
        return self.prepared.next_state if self.prepared is not None else None

    @property
    def last_record(self) -> Optional[IterationRecord]:
        return self.records[-1] if self.records else None


@dataclass
class RunResult:
    """Результат пакетного запуску: траса + підсумок (для таблиць та зведення)."""
    method_name: str
    config: MethodConfig
    records: List[IterationRecord]
    outcome: RunOutcome


# ---------------------------------------------------------------------------
# Контролер кроків
# ---------------------------------------------------------------------------

class StepController:
    """
    Покрокове керування запуском (Next / Previous / Solve у GUI).

    Parameters
    ----------
    evaluator : Optional[ExpressionEvaluator]
        Обчислювач виразів; за замовчуванням SympyEvaluator().
    callback : Optional[IterationCallback]
        Викликається для кожного нового запису в advance().
    """

    def __init__(
        self,
        evaluator: Optional[ExpressionEvaluator] = None,
        callback: Optional[IterationCallback] = None,
    ) -> None:
        self.evaluator = evaluator if evaluator is not None else SympyEvaluator()
        self.callback = callback

    # ------------------------------------------------------------------
    # Підготовка
    # ------------------------------------------------------------------

    def prepare(self, config: MethodConfig) -> RunState:
        """
        Перевірити конфігурацію та передумову методу, створити новий RunState.

        Raises
        ------
        ValidationError
            Якщо конфігурація або передумова некоректні. Жоден існуючий
            RunState при цьому не змінюється.
        """
        config.validate()
        method = create_method(config, self.evaluator)
        prepared = method.initialize()

        state = RunState(config=config, method=method, prepared=prepared)
        self._apply_prepared(state)

        logger.debug("Prepared %s run for %r", Method(config.method).value, config.expression)
        return state

    # ------------------------------------------------------------------
    # Навігація
    # ------------------------------------------------------------------

    def advance(self, state: RunState) -> RunState:
        """
        Виконати один крок. У термінальному стані нічого не робить.
        """
        if state.is_terminal:
            return state

        if len(state.records) >= state.config.max_iterations:
            self._finish_max_iterations(state)
            return state

        index = len(state.records) + 1
        result = state.method.step(state.method_state, index)

        if result.record is not None:
            state.records.append(result.record)
            state.step_results.append(result)
            state.cursor = len(state.records)

            logger.debug(
                "Iteration %d: candidate=%.12g error=%.3e",
                result.record.index,
                result.record.candidate,
                result.record.absolute_error,
            )

            if self.callback is not None:
                self.callback(result.record)

            if result.terminal:
                self._set_terminal(state, result)
            elif len(state.records) >= state.config.max_iterations:
                self._finish_max_iterations(state)
        elif result.terminal:
            # Крок зірвався до створення запису
            state.pending_failure = result
            self._set_terminal(state, result)

        if state.is_terminal:
            log = logger.warning if state.status is RunStatus.FAILED else logger.info
            log("Run finished after %d iterations: %s: %s", len(state.records), state.status.value, state.message)

        return state

    def rewind(self, state: RunState) -> RunState:
        """
        Відкотити останній крок.

        Якщо останній (термінальний) крок не додав запису, скидається лише
        термінальний статус. Без записів стан повертається до щойно
        підготовленого.
        """
        if state.pending_failure is not None:
            state.pending_failure = None
            self._recompute_status(state)
            return state

        if not state.records:
            self._apply_prepared(state)
            return state

        state.records.pop()
        state.step_results.pop()
        state.cursor = len(state.records)
        self._recompute_status(state)
        return state

    def jump_to(self, state: RunState, index: int) -> RunState:
        """
        Обрізати трасу до index + 1 записів (index — 0-based).
        Індекс поза [0, len(records)) ігнорується.
        """
        if not 0 <= index < len(state.records):
            logger.debug("jump_to(%d) ignored: %d records", index, len(state.records))
            return state

        del state.records[index + 1:]
        del state.step_results[index + 1:]
        state.pending_failure = None
        state.cursor = len(state.records)
        self._recompute_status(state)
        return state

    def run_to_completion(self, config: MethodConfig) -> RunState:
        """prepare(config), потім advance() до термінального стану."""
        state = self.prepare(config)
        while not state.is_terminal:
            self.advance(state)
        return state

    # ------------------------------------------------------------------
    # Підсумок
    # ------------------------------------------------------------------

    @staticmethod
    def outcome(state: RunState) -> RunOutcome:
        last = state.last_record

        if state.status is RunStatus.FAILED or last is None:
            root = None
        else:
            root = float(last.candidate)

        message = state.message
        if not message:
            message = f"Виконано ітерацій: {len(state.records)}."

        return RunOutcome(
            status=state.status,
            root=root,
            iterations_used=len(state.records),
            final_error=float(last.absolute_error) if last is not None else 0.0,
            message=message,
            failure=state.failure,
        )

    # ------------------------------------------------------------------
    # Службові методи
    # ------------------------------------------------------------------

    def _apply_prepared(self, state: RunState) -> None:
        state.records.clear()
        state.step_results.clear()
        state.pending_failure = None
        state.cursor = 0
        self._set_running(state)
        if state.prepared is not None and state.prepared.terminal:
            self._set_terminal(state, state.prepared)

    def _recompute_status(self, state: RunState) -> None:
        if not state.step_results:
            self._apply_prepared(state)
            return

        last = state.step_results[-1]
        self._set_running(state)
        if last.terminal:
            self._set_terminal(state, last)
        elif len(state.records) >= state.config.max_iterations:
            self._finish_max_iterations(state)

    @staticmethod
    def _set_running(state: RunState) -> None:
        state.status = RunStatus.RUNNING
        state.message = ""
        state.failure = None

    @staticmethod
    def _set_terminal(state: RunState, result: StepResult) -> None:
        state.status = result.terminal_reason or RunStatus.FAILED
        state.message = result.message
        state.failure = result.failure

    @staticmethod
    def _finish_max_iterations(state: RunState) -> None:
        state.status = RunStatus.MAX_ITERATIONS_REACHED
        state.failure = None
        state.message = (
            f"Досягнуто максимальної кількості ітерацій ({state.config.max_iterations}); "
            f"задана точність не досягнута."
        )


# ---------------------------------------------------------------------------
# Пакетний запуск
# ---------------------------------------------------------------------------

class RootFindingEngine:
    """
    Движок для пакетного запуску ("Розв'язати"), побудований над StepController.

    Використання:
        engine = RootFindingEngine()
        result = engine.run(config, callback=print)
        result.outcome.root
    """

    def __init__(self, evaluator: Optional[ExpressionEvaluator] = None) -> None:
        self.evaluator = evaluator if evaluator is not None else SympyEvaluator()

    def run(
        self,
        config: MethodConfig,
        callback: Optional[IterationCallback] = None,
    ) -> RunResult:
        """
        Запустити метод до завершення.

        Raises
        ------
        ValidationError
            Якщо конфігурацію відхилено до початку обчислень.
        """
        controller = StepController(self.evaluator, callback=callback)
        state = controller.run_to_completion(config)

        return RunResult(
            method_name=config.title,
            config=config,
            records=list(state.records),
            outcome=controller.outcome(state),
        )


__all__ = [
    "METHODS",
    "IterationCallback",
    "create_method",
    "RunOutcome",
    "RunState",
    "RunResult",
    "StepController",
    "RootFindingEngine",
]
