"""
Иерархия исключений пакета.

Разделяет ошибки конфигурации (исправимые вызывающей стороной),
сбои построения нативного движка и ошибки неправильного использования
дескриптора (обращение после освобождения, освобождение общего экземпляра).
"""

from typing import Optional


class ChineseTokenizerError(Exception):
    """Базовое исключение пакета."""


class ConfigurationError(ChineseTokenizerError, ValueError):
    """Некорректный набор путей к словарям или иная ошибка настройки."""


class DictionaryNotFoundError(ConfigurationError, FileNotFoundError):
    """Файл словаря отсутствует на диске."""

    def __init__(self, role: str, path: str):
        self.role = role
        self.path = path
        super().__init__(f"Файл словаря не существует ({role}): {path}")


class ConstructionError(ChineseTokenizerError, RuntimeError):
    """Нативный движок не удалось создать. Частичный дескриптор не возвращается."""


class EngineLoadError(ConstructionError):
    """Не найдена или не загружается нативная библиотека."""


class UseAfterFreeError(ChineseTokenizerError, RuntimeError):
    """Операция вызвана на уже освобождённом дескрипторе."""

    def __init__(self, operation: Optional[str] = None):
        self.operation = operation
        if operation:
            message = f"Экземпляр Jieba уже освобождён (операция: {operation})"
        else:
            message = "Экземпляр Jieba уже освобождён"
        super().__init__(message)


class SharedInstanceError(ChineseTokenizerError, RuntimeError):
    """Неправильное использование общего экземпляра."""


class SharedInstanceFreedError(SharedInstanceError):
    """Общий экземпляр был освобождён в обход запрета."""

    def __init__(self):
        super().__init__("Общий экземпляр Jieba был освобождён")
