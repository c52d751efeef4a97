"""
Chinese Tokenizer - безопасная обёртка над нативным движком сегментации jieba

Этот модуль предоставляет:
- Дескриптор нативного движка с однократным освобождением
- Общий экземпляр на процесс с потокобезопасной ленивой инициализацией
- Проверку путей к словарям до вызова нативного инициализатора
- Преобразование нативных массивов (строки, веса, позиции) в списки Python
"""

import logging

__version__ = "0.1.0"
__author__ = "Sergey"

# Библиотека не настраивает логирование сама: см. config.configure_logging()
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .jieba import Jieba  # noqa: E402
from .shared import SharedJieba, get_shared_instance  # noqa: E402
from .dictionary import DictPaths, resolve_dict_paths, validate_dict_paths  # noqa: E402
from .models import TokenizeMode, HMM, Word, WordWeight, TaggedWord  # noqa: E402
from .exceptions import (  # noqa: E402
    ChineseTokenizerError,
    ConfigurationError,
    DictionaryNotFoundError,
    ConstructionError,
    EngineLoadError,
    UseAfterFreeError,
    SharedInstanceError,
    SharedInstanceFreedError,
)

__all__ = [
    "Jieba",
    "SharedJieba",
    "get_shared_instance",
    "DictPaths",
    "resolve_dict_paths",
    "validate_dict_paths",
    "TokenizeMode",
    "HMM",
    "Word",
    "WordWeight",
    "TaggedWord",
    "ChineseTokenizerError",
    "ConfigurationError",
    "DictionaryNotFoundError",
    "ConstructionError",
    "EngineLoadError",
    "UseAfterFreeError",
    "SharedInstanceError",
    "SharedInstanceFreedError",
]
