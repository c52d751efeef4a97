"""
Абстрактный контракт нативного движка сегментации.

Повторяет C API библиотеки jieba: движок создаётся по пяти путям к словарям,
возвращает непрозрачную ссылку, а каждая операция сегментации отдаёт
нативный массив, который вызывающая сторона обязана освободить
соответствующим деаллокатором ровно один раз.

Все текстовые аргументы передаются как UTF-8 bytes.
"""

from abc import ABC, abstractmethod
from typing import Any


class NativeEngineInterface(ABC):
    """Контракт нативного движка (opaque ref + массивы с сентинелом)."""

    @abstractmethod
    def new_jieba(self, dict_path: bytes, hmm_path: bytes, user_dict_path: bytes,
                  idf_path: bytes, stop_words_path: bytes) -> Any:
        """Создаёт движок. Возвращает непрозрачную ссылку или пустое значение при сбое."""
        pass

    @abstractmethod
    def free_jieba(self, ref: Any) -> None:
        """Освобождает движок."""
        pass

    @abstractmethod
    def cut(self, ref: Any, text: bytes, hmm: int) -> Any:
        """char** с NULL в конце."""
        pass

    @abstractmethod
    def cut_all(self, ref: Any, text: bytes) -> Any:
        pass

    @abstractmethod
    def cut_for_search(self, ref: Any, text: bytes, hmm: int) -> Any:
        pass

    @abstractmethod
    def tag(self, ref: Any, text: bytes) -> Any:
        """char** из строк вида "слово/тег"."""
        pass

    @abstractmethod
    def tokenize(self, ref: Any, text: bytes, mode: int, hmm: int) -> Any:
        """CWord* с записью len == 0 в конце."""
        pass

    @abstractmethod
    def extract(self, ref: Any, text: bytes, topk: int) -> Any:
        pass

    @abstractmethod
    def extract_with_weight(self, ref: Any, text: bytes, topk: int) -> Any:
        """CWordWeight* с word == NULL в конце."""
        pass

    @abstractmethod
    def add_word(self, ref: Any, word: bytes) -> None:
        pass

    @abstractmethod
    def add_word_ex(self, ref: Any, word: bytes, freq: int, tag: bytes) -> None:
        pass

    @abstractmethod
    def remove_word(self, ref: Any, word: bytes) -> None:
        pass

    @abstractmethod
    def free_words(self, words: Any) -> None:
        """Деаллокатор для char** (массив и элементы)."""
        pass

    @abstractmethod
    def free_word_weights(self, words: Any) -> None:
        pass

    @abstractmethod
    def free_tokens(self, words: Any) -> None:
        """Деаллокатор для результата tokenize."""
        pass
