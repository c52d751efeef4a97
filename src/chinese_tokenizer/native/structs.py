"""
ctypes-описания нативных записей, которые возвращает движок.
"""

import ctypes


class CWordWeight(ctypes.Structure):
    _fields_ = [
        ("word", ctypes.c_char_p),
        ("weight", ctypes.c_double),
    ]


class CWord(ctypes.Structure):
    # Смещение и длина в байтах UTF-8
    _fields_ = [
        ("offset", ctypes.c_size_t),
        ("len", ctypes.c_size_t),
    ]


CStringArray = ctypes.POINTER(ctypes.c_char_p)
CWordWeightArray = ctypes.POINTER(CWordWeight)
CWordArray = ctypes.POINTER(CWord)
