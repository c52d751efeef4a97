"""
Конвертеры нативных результатов в списки Python.

Каждый конвертер проходит нативный массив до сентинела, копирует данные
в объекты Python и затем ровно один раз вызывает переданный деаллокатор.
После возврата ни одна ссылка на нативную память не сохраняется.
"""

import logging
from typing import Any, Callable, Iterable, List

from ..models.tokens import TaggedWord, Word, WordWeight

logger = logging.getLogger(__name__)

Release = Callable[[Any], None]


def _decode(raw: bytes) -> str:
    return raw.decode('utf-8', errors='replace')


def cstrings(words: Any, release: Release) -> List[str]:
    """
    Копирует char** с NULL в конце в список строк.

    Args:
        words: Нативный массив строк (может быть NULL)
        release: Деаллокатор массива

    Returns:
        Список строк в порядке массива
    """
    if not words:
        return []
    try:
        result: List[str] = []
        i = 0
        while words[i] is not None:
            result.append(_decode(words[i]))
            i += 1
        return result
    finally:
        release(words)


def cwordweights(words: Any, release: Release) -> List[WordWeight]:
    """Копирует массив CWordWeight (сентинел: word == NULL)."""
    if not words:
        return []
    try:
        result: List[WordWeight] = []
        i = 0
        while words[i].word is not None:
            record = words[i]
            result.append(WordWeight(word=_decode(record.word), weight=float(record.weight)))
            i += 1
        return result
    finally:
        release(words)


def cwords(text: bytes, words: Any, release: Release) -> List[Word]:
    """
    Копирует массив CWord (сентинел: len == 0) в список Word.

    Args:
        text: Исходный текст в UTF-8, по которому движок считал смещения
        words: Нативный массив CWord
        release: Деаллокатор массива

    Returns:
        Список Word с байтовыми смещениями, как их сообщил движок
    """
    if not words:
        return []
    try:
        result: List[Word] = []
        i = 0
        while words[i].len != 0:
            start = int(words[i].offset)
            end = start + int(words[i].len)
            if end > len(text):
                raise ValueError(f"Смещение токена вне текста: [{start}:{end}] при длине {len(text)}")
            result.append(Word(text=_decode(text[start:end]), start=start, end=end))
            i += 1
        return result
    finally:
        release(words)


def parse_tagged(items: Iterable[str]) -> List[TaggedWord]:
    """Разбирает строки "слово/тег" по последнему '/'."""
    result = []
    for item in items:
        word, sep, tag = item.rpartition('/')
        if not sep:
            # Тег отсутствует
            word, tag = item, ''
        result.append(TaggedWord(word=word, tag=tag))
    return result
