"""
Разрешение и проверка путей к словарям движка.

Движку нужны ровно пять файлов: основной словарь, модель HMM,
пользовательский словарь, веса IDF и стоп-слова. Нативный
инициализатор не умеет работать с частично корректным набором,
поэтому все пути проверяются до его вызова.
"""

import logging
import os
from typing import NamedTuple, Optional

from .config import config
from .exceptions import ConfigurationError, DictionaryNotFoundError

logger = logging.getLogger(__name__)

# Порядок совпадает с позиционными аргументами NewJieba
DICT_ROLES = ('dict', 'hmm', 'user', 'idf', 'stop_words')


class DictPaths(NamedTuple):
    """Набор из пяти путей к словарям."""
    dict_path: str
    hmm_path: str
    user_dict_path: str
    idf_path: str
    stop_words_path: str

    def encoded(self) -> tuple:
        """Пути в виде bytes для передачи в нативный вызов."""
        return tuple(os.fsencode(p) for p in self)


def default_dict_paths() -> DictPaths:
    """Пути по умолчанию из конфигурации."""
    base = config.get_dictionary_dir()
    return DictPaths(*(_absolute(os.path.join(base, config.get_dictionary_file(role))) for role in DICT_ROLES))


def _absolute(path: str) -> str:
    return os.path.abspath(os.path.expanduser(path))


def resolve_dict_paths(*paths: Optional[str]) -> DictPaths:
    """
    Собирает набор путей из переопределений и значений по умолчанию.

    Args:
        *paths: Ноль путей (все по умолчанию) или ровно пять в порядке
            dict, hmm, user, idf, stop_words. Пустая строка или None
            на позиции означает значение по умолчанию.

    Returns:
        DictPaths с абсолютными путями

    Raises:
        ConfigurationError: если передано не 0 и не 5 путей
    """
    if len(paths) not in (0, len(DICT_ROLES)):
        raise ConfigurationError(
            f"Ожидалось 0 или {len(DICT_ROLES)} путей к словарям, получено: {len(paths)}"
        )
    defaults = default_dict_paths()
    if not paths:
        return defaults
    resolved = []
    for override, default in zip(paths, defaults):
        if override:
            resolved.append(_absolute(os.fspath(override)))
        else:
            resolved.append(default)
    return DictPaths(*resolved)


def validate_dict_paths(paths: DictPaths) -> None:
    """
    Проверяет существование всех файлов словарей.

    Raises:
        DictionaryNotFoundError: для первого отсутствующего файла
    """
    for role, path in zip(DICT_ROLES, paths):
        if not os.path.isfile(path):
            logger.error(f"Файл словаря не существует ({role}): {path}")
            raise DictionaryNotFoundError(role, path)
    logger.debug(f"Словари проверены: {paths.dict_path} и ещё {len(paths) - 1}")
