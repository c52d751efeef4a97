"""
Интерфейсы нативного слоя.

Определяет абстрактный контракт движка, чтобы дескриптор работал
одинаково с реальной библиотекой и с подменой в тестах.
"""

from .native_engine import NativeEngineInterface

__all__ = [
    'NativeEngineInterface',
]
