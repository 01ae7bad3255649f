"""
results_summary.py

Зведена таблиця результатів роботи різних методів пошуку кореня
для однієї обраної функції f(x).

Працює поверх RunResult:
    - method_name
    - outcome.status / root / iterations_used / final_error / message

Також містить compare_methods() — прогін усіх методів, що мають сенс для
f(x) з однаковими стартовими даними (бісекція, regula falsi, січні, Ньютон).
Метод простої ітерації у порівнянні не бере участі: йому потрібна g(x), а не f(x).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .engine import RootFindingEngine, RunResult
from .exceptions import ValidationError
from .method_base import RunStatus
from .method_config import DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE, Method, MethodConfig

logger = logging.getLogger(__name__)


@dataclass
class ResultsSummary:
    """
    Зведення результатів кількох запусків.

    Приклад використання:
        summary = ResultsSummary()
        summary.add_run(engine.run(cfg_bisection))
        summary.add_run(engine.run(cfg_newton))
        rows = summary.as_rows()  # для GUI / pandas / CSV
    """
    runs: List[RunResult] = field(default_factory=list)

    def add_run(self, run: RunResult) -> None:
        """Додати результат одного методу до зведення."""
        self.runs.append(run)

    def as_rows(self) -> List[Dict[str, Any]]:
        """
        Повернути список dict-рядків з полями:
            method, status, root, iterations, final_error, message
        """
        rows: List[Dict[str, Any]] = []

        for run in self.runs:
            outcome = run.outcome
            rows.append(
                {
                    "method": run.method_name,
                    "status": outcome.status.value,
                    "root": outcome.root,
                    "iterations": outcome.iterations_used,
                    "final_error": outcome.final_error,
                    "message": outcome.message,
                }
            )

        return rows

    def best_by_iterations(self) -> Optional[RunResult]:
        """
        Серед запусків, що зійшлися, повернути той, у якого найменша
        кількість ітерацій (при рівності — менша фінальна похибка).
        Якщо збіжних немає — None.
        """
        converged = [run for run in self.runs if run.outcome.status is RunStatus.CONVERGED]
        if not converged:
            return None

        return min(converged, key=lambda run: (run.outcome.iterations_used, run.outcome.final_error))

    def to_dataframe(self):
        """
        Повернути pandas.DataFrame зі зведеною таблицею.

        Вимога: встановлений пакет pandas (extra "summary").
        """
        try:
            import pandas as pd  # type: ignore
        except ImportError as exc:  # pragma: no cover
            raise RuntimeError(
                "Для використання ResultsSummary.to_dataframe() "
                "потрібно встановити пакет 'pandas'."
            ) from exc

        return pd.DataFrame(self.as_rows())


def build_comparison_configs(
    expression: str,
    bounds: Tuple[float, float],
    initial_guess: Optional[float] = None,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> List[MethodConfig]:
    """
    Побудувати конфігурації для порівняння методів на одній f(x).

    Межі (a, b) використовуються і як вилка, і як пара початкових точок
    методу січних; x0 для Ньютона — initial_guess або середина інтервалу.
    """
    a, b = bounds
    x0 = initial_guess if initial_guess is not None else (a + b) / 2.0
    common = dict(expression=expression, tolerance=tolerance, max_iterations=max_iterations)

    return [
        MethodConfig(method=Method.BISECTION, bounds=(a, b), **common),
        MethodConfig(method=Method.REGULA_FALSI, bounds=(a, b), **common),
        MethodConfig(method=Method.SECANT, seeds=(a, b), **common),
        MethodConfig(method=Method.NEWTON_RAPHSON, initial_guess=x0, **common),
    ]


def compare_methods(
    configs: List[MethodConfig],
    engine: Optional[RootFindingEngine] = None,
) -> ResultsSummary:
    """
    Запустити кожну конфігурацію та зібрати ResultsSummary.
    Відхилені конфігурації (ValidationError) пропускаються з попередженням у лог.
    """
    engine = engine if engine is not None else RootFindingEngine()
    summary = ResultsSummary()

    for cfg in configs:
        try:
            result = engine.run(cfg)
        except ValidationError as exc:
            logger.warning("Method %s skipped for %r: %s", Method(cfg.method).value, cfg.expression, exc)
            continue
        summary.add_run(result)

    return summary


__all__ = [
    "ResultsSummary",
    "build_comparison_configs",
    "compare_methods",
]
