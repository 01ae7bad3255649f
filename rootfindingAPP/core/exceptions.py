"""
exceptions.py

Ієрархія винятків ядра пошуку коренів.

Винятки використовуються лише там, де запуск не може навіть розпочатися
(некоректна конфігурація, не виконано передумову методу). Усе, що стається
під час ітерацій (помилка обчислення, вироджений знаменник, розбіжність),
повертається як значення: RunStatus.FAILED + FailureKind + повідомлення.
"""

from __future__ import annotations

from typing import Optional


class RootFindingError(Exception):
    """Базовий виняток для ядра пошуку коренів."""


class ValidationError(RootFindingError, ValueError):
    """
    Конфігурацію відхилено до початку обчислень.

    Атрибути:
        field - назва поля MethodConfig, з яким проблема (якщо відомо).
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


__all__ = [
    "RootFindingError",
    "ValidationError",
]
