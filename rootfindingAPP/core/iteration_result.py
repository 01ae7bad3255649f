"""
iteration_result.py

Структури даних для окремих ітерацій пошуку кореня.
Використовуються як у движку, так і в GUI (таблиця, графіки).

Кожен запис незмінний (frozen) і містить:
    - index          - номер ітерації (1, 2, 3, ...), без пропусків;
    - стан методу ДО кроку (a, b / x_prev, x_curr / x);
    - обчислені значення функції;
    - нового кандидата (c / x_next / g(x));
    - absolute_error - похибку у визначенні конкретного методу.

Для передачі назовні (JSON) значення не округлюються.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, Iterable, List


@dataclass(frozen=True)
class IterationRecord:
    """Спільна частина всіх записів ітерацій."""
    index: int
    absolute_error: float

    method_family: ClassVar[str] = "generic"

    @property
    def candidate(self) -> float:
        """Наближення до кореня, отримане на цьому кроці."""
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["family"] = self.method_family
        data["candidate"] = self.candidate
        return data


@dataclass(frozen=True)
class BracketRecord(IterationRecord):
    """
    Крок бісекції / regula falsi.

    Атрибути:
        a, b, fa, fb - інтервал та значення на кінцях до кроку
        c, fc        - нова точка та f(c)
        chosen       - "left" ([a, c] залишено) або "right" ([c, b])
        absolute_error = |f(c)|
    """
    a: float
    b: float
    fa: float
    fb: float
    c: float
    fc: float
    chosen: str

    method_family: ClassVar[str] = "bracketing"

    @property
    def candidate(self) -> float:
        return self.c

    @property
    def width(self) -> float:
        return abs(self.b - self.a)


@dataclass(frozen=True)
class SecantRecord(IterationRecord):
    """
    Крок методу січних.

    absolute_error = |x_next - x_curr|,
    relative_error - та сама величина у відсотках від |x_next|.
    """
    x_prev: float
    x_curr: float
    f_prev: float
    f_curr: float
    slope: float
    x_next: float
    f_next: float
    relative_error: float

    method_family: ClassVar[str] = "secant"

    @property
    def candidate(self) -> float:
        return self.x_next


@dataclass(frozen=True)
class NewtonRecord(IterationRecord):
    """Крок Ньютона–Рафсона: x, f(x), f'(x), x_next; absolute_error = |x_next - x|."""
    x: float
    fx: float
    fpx: float
    x_next: float

    method_family: ClassVar[str] = "newton"

    @property
    def candidate(self) -> float:
        return self.x_next


@dataclass(frozen=True)
class FixedPointRecord(IterationRecord):
    """Крок простої ітерації: x, g(x); absolute_error = |g(x) - x|."""
    x: float
    gx: float

    method_family: ClassVar[str] = "fixed_point"

    @property
    def candidate(self) -> float:
        return self.gx


def records_to_dicts(records: Iterable[IterationRecord]) -> List[Dict[str, Any]]:
    return [rec.to_dict() for rec in records]


def records_to_json(records: Iterable[IterationRecord], **kwargs: Any) -> str:
    """
    Серіалізувати записи в JSON (масив об'єктів).

    json.dumps пише float через repr, тож точність повністю зберігається.
    """
    return json.dumps(records_to_dicts(records), **kwargs)


__all__ = [
    "IterationRecord",
    "BracketRecord",
    "SecantRecord",
    "NewtonRecord",
    "FixedPointRecord",
    "records_to_dicts",
    "records_to_json",
]
