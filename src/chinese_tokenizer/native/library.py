"""
Привязка C API библиотеки jieba через ctypes.

Функции:
- Поиск и ленивая загрузка libjieba (один раз на процесс, под блокировкой)
- Объявление argtypes/restype для всех символов
- Реализация NativeEngineInterface поверх загруженной библиотеки
"""

import ctypes
import ctypes.util
import logging
import threading
from pathlib import Path
from typing import Any, Optional

from ..config import config
from ..exceptions import EngineLoadError
from ..interfaces.native_engine import NativeEngineInterface
from .structs import CStringArray, CWordArray, CWordWeightArray

logger = logging.getLogger(__name__)

_LIB_LOCK = threading.Lock()
_LIB: Optional["CJiebaLibrary"] = None


def _declare(lib: ctypes.CDLL) -> None:
    """Объявляет сигнатуры функций C API."""
    c_char_p = ctypes.c_char_p
    c_int = ctypes.c_int
    c_void_p = ctypes.c_void_p

    lib.NewJieba.argtypes = [c_char_p, c_char_p, c_char_p, c_char_p, c_char_p]
    lib.NewJieba.restype = c_void_p
    lib.FreeJieba.argtypes = [c_void_p]
    lib.FreeJieba.restype = None

    lib.Cut.argtypes = [c_void_p, c_char_p, c_int]
    lib.Cut.restype = CStringArray
    lib.CutAll.argtypes = [c_void_p, c_char_p]
    lib.CutAll.restype = CStringArray
    lib.CutForSearch.argtypes = [c_void_p, c_char_p, c_int]
    lib.CutForSearch.restype = CStringArray
    lib.Tag.argtypes = [c_void_p, c_char_p]
    lib.Tag.restype = CStringArray
    lib.Tokenize.argtypes = [c_void_p, c_char_p, c_int, c_int]
    lib.Tokenize.restype = CWordArray
    lib.Extract.argtypes = [c_void_p, c_char_p, c_int]
    lib.Extract.restype = CStringArray
    lib.ExtractWithWeight.argtypes = [c_void_p, c_char_p, c_int]
    lib.ExtractWithWeight.restype = CWordWeightArray

    lib.AddWord.argtypes = [c_void_p, c_char_p]
    lib.AddWord.restype = None
    lib.AddWordEx.argtypes = [c_void_p, c_char_p, c_int, c_char_p]
    lib.AddWordEx.restype = None
    lib.RemoveWord.argtypes = [c_void_p, c_char_p]
    lib.RemoveWord.restype = None

    lib.FreeWords.argtypes = [CStringArray]
    lib.FreeWords.restype = None
    lib.FreeWordWeights.argtypes = [CWordWeightArray]
    lib.FreeWordWeights.restype = None


def _load_libc() -> ctypes.CDLL:
    # Результат Tokenize выделен через malloc и освобождается обычным free
    libc = ctypes.CDLL(ctypes.util.find_library("c"))
    libc.free.argtypes = [ctypes.c_void_p]
    libc.free.restype = None
    return libc


class CJiebaLibrary(NativeEngineInterface):
    """Нативный движок jieba, загруженный из разделяемой библиотеки."""

    def __init__(self, path: str):
        self.path = path
        try:
            self._lib = ctypes.CDLL(path)
            _declare(self._lib)
            self._libc = _load_libc()
        except (OSError, AttributeError) as e:
            raise EngineLoadError(f"Не удалось загрузить нативную библиотеку '{path}': {e}") from e

    def __repr__(self):
        return f"<CJiebaLibrary path={self.path!r}>"

    def new_jieba(self, dict_path, hmm_path, user_dict_path, idf_path, stop_words_path):
        return self._lib.NewJieba(dict_path, hmm_path, user_dict_path, idf_path, stop_words_path)

    def free_jieba(self, ref):
        self._lib.FreeJieba(ref)

    def cut(self, ref, text, hmm):
        return self._lib.Cut(ref, text, hmm)

    def cut_all(self, ref, text):
        return self._lib.CutAll(ref, text)

    def cut_for_search(self, ref, text, hmm):
        return self._lib.CutForSearch(ref, text, hmm)

    def tag(self, ref, text):
        return self._lib.Tag(ref, text)

    def tokenize(self, ref, text, mode, hmm):
        return self._lib.Tokenize(ref, text, mode, hmm)

    def extract(self, ref, text, topk):
        return self._lib.Extract(ref, text, topk)

    def extract_with_weight(self, ref, text, topk):
        return self._lib.ExtractWithWeight(ref, text, topk)

    def add_word(self, ref, word):
        self._lib.AddWord(ref, word)

    def add_word_ex(self, ref, word, freq, tag):
        self._lib.AddWordEx(ref, word, freq, tag)

    def remove_word(self, ref, word):
        self._lib.RemoveWord(ref, word)

    def free_words(self, words):
        self._lib.FreeWords(words)

    def free_word_weights(self, words):
        self._lib.FreeWordWeights(words)

    def free_tokens(self, words):
        self._libc.free(ctypes.cast(words, ctypes.c_void_p))


def find_library_path(path: Optional[str] = None) -> str:
    """
    Определяет путь к libjieba.

    Порядок: явный аргумент → engine.library_path из конфигурации →
    системный поиск по engine.library_name.

    Raises:
        EngineLoadError: если библиотека не найдена
    """
    if path:
        return str(Path(path).expanduser())
    configured = config.get_engine_library_path()
    if configured:
        return str(Path(configured).expanduser())
    name = config.get_engine_library_name()
    found = ctypes.util.find_library(name)
    if not found:
        raise EngineLoadError(
            f"Нативная библиотека '{name}' не найдена. "
            f"Укажите путь в engine.library_path или CHINESE_TOKENIZER_ENGINE__LIBRARY_PATH"
        )
    return found


def load_library(path: Optional[str] = None) -> CJiebaLibrary:
    """Возвращает загруженную библиотеку (один раз на процесс)."""
    global _LIB
    with _LIB_LOCK:
        if _LIB is not None:
            if path and str(Path(path).expanduser()) != _LIB.path:
                logger.warning(f"Библиотека уже загружена из {_LIB.path}, путь {path} проигнорирован")
            return _LIB
        resolved = find_library_path(path)
        _LIB = CJiebaLibrary(resolved)
        logger.info(f"Нативная библиотека jieba загружена: {resolved}")
        return _LIB
