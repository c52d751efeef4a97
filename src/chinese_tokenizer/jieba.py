"""
Дескриптор нативного движка jieba.

Jieba владеет ровно одним экземпляром нативного движка и проводит через
себя все вызовы сегментации. Состояния: Constructed → Freed (терминальное).

Особенности:
- free() идемпотентен: конкурентные вызовы приводят ровно к одному FreeJieba
- Любая операция на освобождённом дескрипторе сразу падает с UseAfterFreeError
- Если дескриптор стал недостижим и не был освобождён, движок освобождается
  автоматически через weakref.finalize
- Запросы (cut*, tag, tokenize, extract*) безопасно вызывать из нескольких
  потоков; free() во время выполняющегося запроса на том же дескрипторе —
  нарушение контракта вызывающей стороной и не защищается
"""

import logging
import threading
import weakref
from typing import Any, List, Optional, Union

from .dictionary import DictPaths, resolve_dict_paths, validate_dict_paths
from .exceptions import ConstructionError, UseAfterFreeError
from .interfaces.native_engine import NativeEngineInterface
from .models.tokens import HMM, TaggedWord, TokenizeMode, Word, WordWeight
from .native.converters import cstrings, cwordweights, cwords, parse_tagged
from .native.library import load_library

logger = logging.getLogger(__name__)


class _NativeHandle:
    """Нативная ссылка и однократно взводимый флаг freed."""

    __slots__ = ('engine', 'ref', 'freed', '_lock')

    def __init__(self, engine: NativeEngineInterface, ref: Any):
        self.engine = engine
        self.ref = ref
        self.freed = False
        self._lock = threading.Lock()

    def release(self) -> bool:
        """Test-and-set: освобождает движок только при первом вызове."""
        with self._lock:
            if self.freed:
                return False
            self.freed = True
            ref, self.ref = self.ref, None
        self.engine.free_jieba(ref)
        return True


def _encode(text: str) -> bytes:
    if not isinstance(text, str):
        raise TypeError(f"Ожидалась строка, получено: {type(text).__name__}")
    if '\x00' in text:
        raise ValueError("Текст содержит нулевой символ и не может быть передан в нативный вызов")
    return text.encode('utf-8')


def _check_topk(topk: int) -> int:
    topk = int(topk)
    if topk < 0:
        raise ValueError(f"topk должен быть неотрицательным, получено: {topk}")
    return topk


class Jieba:
    """
    Дескриптор нативного движка сегментации.

    Example:
        >>> with Jieba() as jb:
        ...     jb.cut("我来到北京清华大学")
        ['我', '来到', '北京', '清华大学']
    """

    def __init__(self, *paths: Optional[str], engine: Optional[NativeEngineInterface] = None):
        """
        Создаёт нативный движок по пяти словарям.

        Args:
            *paths: Ноль путей или пять (dict, hmm, user, idf, stop_words)
            engine: Реализация нативного контракта (по умолчанию libjieba)

        Raises:
            ConfigurationError: неверное число путей или отсутствующий файл
            ConstructionError: нативный движок не создан
        """
        dict_paths = resolve_dict_paths(*paths)
        validate_dict_paths(dict_paths)
        if engine is None:
            engine = load_library()

        try:
            ref = engine.new_jieba(*dict_paths.encoded())
        except Exception as e:
            logger.error(f"Нативный движок не создан: {e}")
            raise ConstructionError(f"Не удалось создать движок jieba из {dict_paths.dict_path}") from e
        if not ref:
            logger.error(f"NewJieba вернул пустую ссылку для {dict_paths.dict_path}")
            raise ConstructionError(f"Не удалось создать движок jieba из {dict_paths.dict_path}")

        self.dict_paths: DictPaths = dict_paths
        self._engine = engine
        self._handle = _NativeHandle(engine, ref)
        # Автоосвобождение при сборке мусора; не ссылается на self
        self._finalizer = weakref.finalize(self, self._handle.release)
        logger.info(f"Движок jieba создан (словарь: {dict_paths.dict_path})")

    def __repr__(self):
        state = "freed" if self.is_freed else "active"
        return f"<{type(self).__name__} dict={self.dict_paths.dict_path!r} {state}>"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.free()

    @property
    def is_freed(self) -> bool:
        return self._handle.freed

    def free(self) -> None:
        """Освобождает нативный движок. Повторные вызовы ничего не делают."""
        if self._release_native():
            self._finalizer.detach()
            logger.debug(f"Движок jieba освобождён: {self.dict_paths.dict_path}")

    def _release_native(self) -> bool:
        return self._handle.release()

    def _ref(self, operation: str) -> Any:
        ref = self._handle.ref
        if self._handle.freed or ref is None:
            raise UseAfterFreeError(operation)
        return ref

    # --- Сегментация ---
    def cut(self, text: str, hmm: Union[HMM, bool] = True) -> List[str]:
        """Точная сегментация."""
        ref = self._ref('cut')
        words = self._engine.cut(ref, _encode(text), int(HMM.coerce(hmm)))
        return cstrings(words, self._engine.free_words)

    def cut_all(self, text: str) -> List[str]:
        """Полная сегментация: все слова словаря, найденные в тексте."""
        ref = self._ref('cut_all')
        words = self._engine.cut_all(ref, _encode(text))
        return cstrings(words, self._engine.free_words)

    def cut_for_search(self, text: str, hmm: Union[HMM, bool] = True) -> List[str]:
        """Сегментация для поисковой индексации (длинные слова дополнительно дробятся)."""
        ref = self._ref('cut_for_search')
        words = self._engine.cut_for_search(ref, _encode(text), int(HMM.coerce(hmm)))
        return cstrings(words, self._engine.free_words)

    def tag(self, text: str) -> List[TaggedWord]:
        """Сегментация с тегами частей речи."""
        ref = self._ref('tag')
        words = self._engine.tag(ref, _encode(text))
        return parse_tagged(cstrings(words, self._engine.free_words))

    def tokenize(self, text: str, mode: TokenizeMode = TokenizeMode.DEFAULT,
                 hmm: Union[HMM, bool] = True) -> List[Word]:
        """
        Сегментация с позициями.

        Args:
            text: Исходный текст
            mode: DEFAULT или SEARCH
            hmm: Включить дизамбигуацию HMM

        Returns:
            Список Word; start/end — байтовые смещения в text.encode('utf-8')
        """
        ref = self._ref('tokenize')
        data = _encode(text)
        words = self._engine.tokenize(ref, data, int(TokenizeMode(mode)), int(HMM.coerce(hmm)))
        return cwords(data, words, self._engine.free_tokens)

    def extract_keywords(self, text: str, topk: int) -> List[str]:
        """Ключевые слова по TF-IDF, не более topk."""
        ref = self._ref('extract_keywords')
        words = self._engine.extract(ref, _encode(text), _check_topk(topk))
        return cstrings(words, self._engine.free_words)

    def extract_keywords_weighted(self, text: str, topk: int) -> List[WordWeight]:
        """Ключевые слова с весами, по убыванию веса, не более topk."""
        ref = self._ref('extract_keywords_weighted')
        words = self._engine.extract_with_weight(ref, _encode(text), _check_topk(topk))
        return cwordweights(words, self._engine.free_word_weights)

    # --- Словарь в памяти (не сохраняется в файлы) ---
    def add_word(self, word: str) -> None:
        ref = self._ref('add_word')
        self._engine.add_word(ref, _encode(word))

    def add_word_with_frequency(self, word: str, frequency: int, tag: str) -> None:
        ref = self._ref('add_word_with_frequency')
        self._engine.add_word_ex(ref, _encode(word), int(frequency), _encode(tag))

    def remove_word(self, word: str) -> None:
        ref = self._ref('remove_word')
        self._engine.remove_word(ref, _encode(word))
