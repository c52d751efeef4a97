from .converters import cstrings, cwordweights, cwords, parse_tagged
from .library import CJiebaLibrary, find_library_path, load_library
from .structs import CWord, CWordWeight

__all__ = [
    "cstrings",
    "cwordweights",
    "cwords",
    "parse_tagged",
    "CJiebaLibrary",
    "find_library_path",
    "load_library",
    "CWord",
    "CWordWeight",
]
