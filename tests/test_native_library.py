"""
Тесты поиска и загрузки нативной библиотеки.
"""

import pytest

from chinese_tokenizer.config import config
from chinese_tokenizer.exceptions import ConstructionError, EngineLoadError
from chinese_tokenizer.native import library
from chinese_tokenizer.native.library import CJiebaLibrary, find_library_path, load_library


@pytest.fixture
def no_loaded_library(monkeypatch):
    """Сбрасывает кэш загруженной библиотеки на время теста."""
    monkeypatch.setattr(library, "_LIB", None)


class TestFindLibraryPath:

    def test_explicit_path_wins(self, monkeypatch):
        monkeypatch.setitem(config.config_data, 'engine', {'library_path': '/from/config.so'})
        assert find_library_path("/explicit/libjieba.so") == "/explicit/libjieba.so"

    def test_configured_path(self, monkeypatch):
        monkeypatch.setitem(config.config_data, 'engine', {'library_path': '/from/config.so'})
        assert find_library_path() == "/from/config.so"

    def test_system_lookup_by_name(self, monkeypatch):
        monkeypatch.setitem(config.config_data, 'engine', {'library_name': 'jieba'})
        monkeypatch.setattr(library.ctypes.util, "find_library", lambda name: f"lib{name}.so.1")
        assert find_library_path() == "libjieba.so.1"

    def test_not_found(self, monkeypatch):
        monkeypatch.setitem(config.config_data, 'engine', {'library_name': 'jieba'})
        monkeypatch.setattr(library.ctypes.util, "find_library", lambda name: None)
        with pytest.raises(EngineLoadError) as excinfo:
            find_library_path()
        assert "jieba" in str(excinfo.value)


class TestLoadLibrary:

    def test_missing_file_is_engine_load_error(self, tmp_path, no_loaded_library):
        with pytest.raises(EngineLoadError):
            load_library(str(tmp_path / "libjieba.so"))

    def test_engine_load_error_is_construction_error(self, tmp_path):
        with pytest.raises(ConstructionError):
            CJiebaLibrary(str(tmp_path / "nope.so"))

    def test_loaded_once(self, monkeypatch, no_loaded_library):
        created = []

        class FakeLibrary:
            def __init__(self, path):
                self.path = path
                created.append(path)

        monkeypatch.setattr(library, "CJiebaLibrary", FakeLibrary)
        first = load_library("/opt/libjieba.so")
        second = load_library()
        third = load_library("/other/libjieba.so")
        assert first is second is third
        assert created == ["/opt/libjieba.so"]
