"""
Структуры данных для результатов сегментации.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class TokenizeMode(IntEnum):
    """Гранулярность токенизации (значения совпадают с нативным TokenizeMode)."""
    DEFAULT = 0
    SEARCH = 1


class HMM(IntEnum):
    """Включение вероятностной дизамбигуации (HMM) для вызова."""
    DISABLED = 0
    ENABLED = 1

    @classmethod
    def coerce(cls, value: Union["HMM", bool]) -> "HMM":
        """Приводит bool или член перечисления к HMM."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.ENABLED if value else cls.DISABLED
        raise TypeError(f"Ожидался bool или HMM, получено: {type(value).__name__}")


@dataclass(frozen=True)
class Word:
    """Токен с позицией.

    start/end — байтовые смещения в UTF-8 представлении исходного текста,
    в той же индексации, что использует движок.
    """
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class WordWeight:
    """Ключевое слово с весом TF-IDF."""
    word: str
    weight: float


@dataclass(frozen=True)
class TaggedWord:
    """Слово с тегом части речи."""
    word: str
    tag: str
