"""
Тесты разрешения и проверки путей к словарям.
"""

import os

import pytest

from chinese_tokenizer.config import DEFAULT_DICT_FILES, config
from chinese_tokenizer.dictionary import (
    DICT_ROLES,
    DictPaths,
    default_dict_paths,
    resolve_dict_paths,
    validate_dict_paths,
)
from chinese_tokenizer.exceptions import ConfigurationError, DictionaryNotFoundError


@pytest.fixture
def configured_dict_dir(dict_dir, monkeypatch):
    """Каталог словарей по умолчанию указывает на временный набор."""
    monkeypatch.setitem(config.config_data, 'dictionary', {'dir': str(dict_dir)})
    return dict_dir


class TestResolveDictPaths:

    def test_no_paths_gives_defaults(self, configured_dict_dir):
        paths = resolve_dict_paths()
        assert paths == default_dict_paths()
        assert paths.dict_path == str(configured_dict_dir / "jieba.dict.utf8")
        assert paths.stop_words_path == str(configured_dict_dir / "stop_words.utf8")

    def test_five_paths_are_positional(self, dict_files):
        paths = resolve_dict_paths(*dict_files)
        assert list(paths) == dict_files
        assert isinstance(paths, DictPaths)

    def test_empty_entry_falls_back_to_default(self, configured_dict_dir, tmp_path):
        custom = tmp_path / "my_user.dict"
        paths = resolve_dict_paths("", None, str(custom), "", "")
        assert paths.user_dict_path == str(custom)
        assert paths.dict_path == str(configured_dict_dir / "jieba.dict.utf8")
        assert paths.hmm_path == str(configured_dict_dir / "hmm_model.utf8")

    @pytest.mark.parametrize("count", [1, 3, 4, 6])
    def test_wrong_count_is_configuration_error(self, count):
        with pytest.raises(ConfigurationError) as excinfo:
            resolve_dict_paths(*(["x"] * count))
        assert str(count) in str(excinfo.value)

    def test_relative_paths_become_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        paths = resolve_dict_paths("a", "b", "c", "d", "e")
        assert paths.dict_path == str(tmp_path / "a")
        assert all(os.path.isabs(p) for p in paths)

    def test_file_names_from_config(self, dict_dir, monkeypatch):
        monkeypatch.setitem(config.config_data, 'dictionary', {
            'dir': str(dict_dir),
            'files': {'user': 'custom_user.utf8'},
        })
        paths = default_dict_paths()
        assert paths.user_dict_path == str(dict_dir / "custom_user.utf8")
        assert paths.idf_path == str(dict_dir / DEFAULT_DICT_FILES['idf'])


class TestValidateDictPaths:

    def test_complete_set_passes(self, dict_files):
        validate_dict_paths(resolve_dict_paths(*dict_files))

    @pytest.mark.parametrize("index", range(len(DICT_ROLES)))
    def test_missing_file_reports_role_and_path(self, dict_files, index):
        os.remove(dict_files[index])
        with pytest.raises(DictionaryNotFoundError) as excinfo:
            validate_dict_paths(resolve_dict_paths(*dict_files))
        assert excinfo.value.role == DICT_ROLES[index]
        assert excinfo.value.path == dict_files[index]
        assert dict_files[index] in str(excinfo.value)

    def test_missing_file_error_is_catchable_as_builtin(self, dict_files):
        paths = resolve_dict_paths(*dict_files[:4], dict_files[4] + ".missing")
        with pytest.raises(FileNotFoundError):
            validate_dict_paths(paths)
        with pytest.raises(ValueError):
            validate_dict_paths(paths)

    def test_directory_is_not_a_dictionary(self, dict_files, tmp_path):
        paths = resolve_dict_paths(str(tmp_path), *dict_files[1:])
        with pytest.raises(DictionaryNotFoundError):
            validate_dict_paths(paths)

    def test_encoded_paths(self, dict_files):
        encoded = resolve_dict_paths(*dict_files).encoded()
        assert encoded == tuple(os.fsencode(p) for p in dict_files)
