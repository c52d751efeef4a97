import sys
from pathlib import Path
from typing import Dict, List

import pytest

# Пакет в src/ — делаем его импортируемым без установки
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from chinese_tokenizer.config import DEFAULT_DICT_FILES  # noqa: E402
from chinese_tokenizer.dictionary import DICT_ROLES  # noqa: E402
from chinese_tokenizer.jieba import Jieba  # noqa: E402
from chinese_tokenizer.shared import reset_shared_instance  # noqa: E402

from .utils.fake_engine import FakeNativeEngine  # noqa: E402


@pytest.fixture
def dict_dir(tmp_path: Path) -> Path:
    """Каталог с полным набором из пяти (фиктивных) файлов словарей."""
    directory = tmp_path / "dict"
    directory.mkdir()
    for role in DICT_ROLES:
        (directory / DEFAULT_DICT_FILES[role]).write_text("", encoding="utf-8")
    return directory


@pytest.fixture
def dict_files(dict_dir: Path) -> List[str]:
    """Пять путей к словарям в позиционном порядке NewJieba."""
    return [str(dict_dir / DEFAULT_DICT_FILES[role]) for role in DICT_ROLES]


@pytest.fixture
def fake_engine() -> FakeNativeEngine:
    """Подмена нативного движка со счётчиками вызовов."""
    return FakeNativeEngine()


@pytest.fixture
def jieba(dict_files, fake_engine):
    """Дескриптор поверх подменного движка; освобождается после теста."""
    handle = Jieba(*dict_files, engine=fake_engine)
    yield handle
    handle.free()


@pytest.fixture(scope="session")
def sample_texts() -> Dict[str, str]:
    """Наборы китайских текстов для тестирования."""
    from .fixtures.sample_texts import SAMPLE_SIMPLE_TEXT, SAMPLE_MIXED_TEXT, SAMPLE_KEYWORD_TEXT

    return {
        "simple": SAMPLE_SIMPLE_TEXT,
        "mixed": SAMPLE_MIXED_TEXT,
        "keywords": SAMPLE_KEYWORD_TEXT,
    }


def pytest_configure(config):
    """Регистрируем маркеры для проекта."""
    config.addinivalue_line("markers", "integration: тесты с настоящей libjieba")
    config.addinivalue_line("markers", "performance: тесты производительности")
    config.addinivalue_line("markers", "concurrency: многопоточные тесты")


@pytest.fixture(autouse=True)
def clean_shared_instance():
    """Сбрасывает общий экземпляр до и после каждого теста."""
    reset_shared_instance()
    yield
    reset_shared_instance()
