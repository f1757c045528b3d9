"""
Разбор сырых client hints.

Каждый парсер возвращает значение или None, исключений не бросает.
Источник сигнала (заголовок, query/form параметр) - одна попытка в
упорядоченном списке; побеждает первая успешная, иначе берётся default.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, TypeVar

from loguru import logger

T = TypeVar("T")

# Десятичная запись с необязательной экспонентой: 1, -2.5, .5, 3., 1e-3
_FLOAT_RE = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')
_INT_RE = re.compile(r'^[+-]?\d+$')

_INT64_LIMIT = 2 ** 63


def parse_float(raw: Optional[str]) -> Optional[float]:
    """
    Разбирает float. Пробелы, "_", nan/inf и переполнение - неудача.
    """
    if not raw or not _FLOAT_RE.match(raw):
        return None
    value = float(raw)
    if not math.isfinite(value):
        return None
    return value


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Разбирает целое со знаком: только цифры, без дробной части."""
    if not raw or not _INT_RE.match(raw):
        return None
    value = int(raw)
    if not -_INT64_LIMIT <= value < _INT64_LIMIT:
        return None
    return value


def parse_flag(expected: str) -> Callable[[Optional[str]], Optional[bool]]:
    """Парсер флага: True при точном совпадении с expected, иначе None."""

    def _parse(raw: Optional[str]) -> Optional[bool]:
        return True if raw == expected else None

    return _parse


def first_value(values: Optional[Mapping[str, Any]], key: str, case_insensitive: bool = False) -> Optional[str]:
    """
    Достаёт первое значение ключа из mapping.

    Мультизначения (list/tuple) сводятся к первому элементу.
    """
    if not values:
        return None

    if case_insensitive:
        wanted = key.lower()
        value = None
        for k, v in values.items():
            if k.lower() == wanted:
                value = v
                break
    else:
        value = values.get(key)

    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class SignalAttempt(Generic[T]):
    """Одна попытка: откуда значение и чем его разбирать."""

    source: str
    raw: Optional[str]
    parser: Callable[[Optional[str]], Optional[T]]

    def parse(self) -> Optional[T]:
        return self.parser(self.raw)


def first_parsed(attempts: Iterable[SignalAttempt[T]], default: T) -> T:
    """
    Возвращает результат первой успешной попытки или default.

    Args:
        attempts: попытки в порядке приоритета
        default: значение, если ни одна попытка не разобралась
    """
    for attempt in attempts:
        value = attempt.parse()
        if value is not None:
            logger.debug(f"[SignalParser] {attempt.source}={attempt.raw!r} -> {value}")
            return value
    return default
