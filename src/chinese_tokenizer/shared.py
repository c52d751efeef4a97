"""
Общий экземпляр Jieba на весь процесс.

Позволяет не загружать словари повторно, когда сегментация нужна
в нескольких местах приложения.

Правила:
- Экземпляр создаётся при первом вызове get_shared_instance(), конкурентные
  первые вызовы ждут завершения и получают один и тот же объект
- Пути к словарям фиксируются при первом создании, последующие аргументы
  игнорируются
- Экземпляр живёт до конца процесса: автоосвобождение отключено,
  а SharedJieba.free() запрещён
"""

import logging
import threading
from typing import Optional

from .concurrency import ReadWriteLock
from .exceptions import SharedInstanceError, SharedInstanceFreedError
from .interfaces.native_engine import NativeEngineInterface
from .jieba import Jieba

logger = logging.getLogger(__name__)

_shared_instance: Optional["SharedJieba"] = None
_shared_init_lock = threading.Lock()
_shared_state_lock = ReadWriteLock()


# Пропуск в конструктор SharedJieba; есть только у get_shared_instance()
_CONSTRUCTION_TOKEN = object()


class SharedJieba(Jieba):
    """
    Общий экземпляр: те же операции, что у Jieba, но без освобождения.

    Создаётся только через get_shared_instance().
    """

    def __init__(self, *paths: Optional[str],
                 engine: Optional[NativeEngineInterface] = None, _token: object = None):
        if _token is not _CONSTRUCTION_TOKEN:
            raise SharedInstanceError("SharedJieba создаётся только через get_shared_instance()")
        super().__init__(*paths, engine=engine)

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            # Исключение из тела блока важнее запрета на освобождение
            logger.warning("Выход из with для общего экземпляра по исключению, освобождение пропущено")
            return False
        self.free()

    def free(self) -> None:
        logger.warning("Попытка освободить общий экземпляр Jieba")
        raise SharedInstanceError("Общий экземпляр Jieba нельзя освобождать")

    def _release_native(self) -> bool:
        # Обход запрета (Jieba.free(shared)) сериализуется с проверками доступа
        with _shared_state_lock.writing():
            return super()._release_native()


def get_shared_instance(*paths: Optional[str],
                        engine: Optional[NativeEngineInterface] = None) -> SharedJieba:
    """
    Возвращает общий экземпляр Jieba, создавая его при первом вызове.

    Args:
        *paths: Пути к словарям (учитываются только при первом создании)
        engine: Нативный движок (учитывается только при первом создании)

    Returns:
        SharedJieba — один и тот же объект для всех вызовов

    Raises:
        ConfigurationError, ConstructionError: если первое создание не удалось
        SharedInstanceFreedError: если общий экземпляр был освобождён
    """
    global _shared_instance
    instance = _shared_instance
    if instance is None:
        with _shared_init_lock:
            if _shared_instance is None:
                created = SharedJieba(*paths, engine=engine, _token=_CONSTRUCTION_TOKEN)
                # Экземпляр живёт до завершения процесса
                created._finalizer.detach()
                _shared_instance = created
                logger.info("Создан общий экземпляр Jieba")
            elif paths or engine is not None:
                logger.debug("Общий экземпляр уже создан, аргументы проигнорированы")
            instance = _shared_instance
    elif paths or engine is not None:
        logger.debug("Общий экземпляр уже создан, аргументы проигнорированы")

    with _shared_state_lock.reading():
        if instance.is_freed:
            logger.error("Общий экземпляр Jieba был освобождён")
            raise SharedInstanceFreedError()
    return instance


def reset_shared_instance() -> None:
    """Забывает общий экземпляр, не освобождая его (для тестов)."""
    global _shared_instance
    with _shared_init_lock:
        _shared_instance = None
