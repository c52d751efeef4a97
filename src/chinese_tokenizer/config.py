"""
Модуль для работы с конфигурацией проекта

Функции:
- Загрузка chinese_tokenizer.yaml (+ профили: chinese_tokenizer.prod.yaml, chinese_tokenizer.test.yaml)
- ENV-переопределения (префикс CHINESE_TOKENIZER_, вложенность через __), в том числе из .env
- Валидация разделов словарей и движка
- Настройка логирования пакета по явному вызову configure_logging()

Импорт пакета не трогает корневой логгер и os.environ приложения.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List, Mapping, Optional
from dotenv import dotenv_values, find_dotenv
import logging
from datetime import datetime

logger = logging.getLogger(__name__)

ENV_PREFIX = 'CHINESE_TOKENIZER_'
CONFIG_FILE_NAME = "chinese_tokenizer.yaml"

# Логгер пакета; настраивается только им, корневой логгер не трогаем
PACKAGE_LOGGER_NAME = __name__.rpartition('.')[0] or __name__

# Каталог словарей по умолчанию (рядом с пакетом)
PACKAGE_DICT_DIR = Path(__file__).resolve().parent / "dict"

DEFAULT_DICT_FILES = {
    'dict': "jieba.dict.utf8",
    'hmm': "hmm_model.utf8",
    'user': "user.dict.utf8",
    'idf': "idf.utf8",
    'stop_words': "stop_words.utf8",
}


class Config:
    """Класс для работы с конфигурацией проекта"""

    def __init__(self, config_path: str = None):
        """
        Инициализация конфигурации

        Args:
            config_path: Путь к файлу конфигурации. Если не задан, берётся
                CHINESE_TOKENIZER_CONFIG, иначе chinese_tokenizer.yaml ищется
                от текущего каталога вверх
        """
        self.env_data: Dict[str, str] = {}
        self._load_env()

        if not config_path:
            config_path = self.get_env('CHINESE_TOKENIZER_CONFIG')
        if config_path:
            self.config_path = Path(config_path).expanduser()
        else:
            current_dir = Path.cwd()
            candidate = current_dir / CONFIG_FILE_NAME

            # Если не найден в текущей директории, ищем в родительских
            while not candidate.exists() and current_dir.parent != current_dir:
                current_dir = current_dir.parent
                candidate = current_dir / CONFIG_FILE_NAME

            self.config_path = candidate

        self.config_data = {}

        self._load_config()
        # Применяем ENV-переопределения и проверяем разделы
        try:
            self._apply_env_overrides()
            self._validate()
        except Exception as e:
            logger.warning(f"Проблема при применении ENV/валидации: {e}")

    def _resolve_config_path(self) -> Path:
        env = str(self.get_env('CHINESE_TOKENIZER_ENV', '')).lower().strip()
        root = self.config_path.parent
        stem = self.config_path.stem
        if env == 'production':
            candidate = root / f'{stem}.prod.yaml'
        elif env == 'testing':
            candidate = root / f'{stem}.test.yaml'
        else:
            candidate = self.config_path
        if candidate.exists():
            return candidate
        # Фолбэк на исходный путь
        return self.config_path

    def _load_config(self):
        """Загружает конфигурацию из YAML файла"""
        try:
            self.config_path = self._resolve_config_path()
            if self.config_path.exists():
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    self.config_data = yaml.safe_load(f) or {}
                logger.info(f"Конфигурация загружена: {self.config_path}")
            else:
                logger.debug(f"Файл конфигурации {self.config_path} не найден, используются значения по умолчанию")
                self.config_data = self._get_default_config()
        except Exception as e:
            logger.error(f"Ошибка загрузки конфигурации: {e}")
            self.config_data = self._get_default_config()

    def _load_env(self):
        """Собирает переменные CHINESE_TOKENIZER_* из .env и окружения (окружение важнее)"""
        merged: Dict[str, str] = {}
        try:
            dotenv_path = find_dotenv(usecwd=True)
            if dotenv_path:
                merged.update({k: v for k, v in dotenv_values(dotenv_path).items() if v is not None})
                logger.debug(f"Переменные прочитаны из {dotenv_path}")
        except Exception as e:
            logger.error(f"Ошибка загрузки переменных окружения: {e}")
        merged.update(os.environ)
        self.env_data = {k: v for k, v in merged.items() if k.startswith(ENV_PREFIX)}

    def _set_nested(self, data: Dict[str, Any], dotted: str, value: Any) -> None:
        cur = data
        keys = dotted.split('.')
        for k in keys[:-1]:
            if k not in cur or not isinstance(cur[k], dict):
                cur[k] = {}
            cur = cur[k]
        cur[keys[-1]] = value

    def _apply_env_overrides(self) -> None:
        """Переопределяет конфиг значениями из ENV (CHINESE_TOKENIZER_*)."""
        for key, val in self.env_data.items():
            if key in ('CHINESE_TOKENIZER_ENV', 'CHINESE_TOKENIZER_CONFIG'):
                continue
            tail = key[len(ENV_PREFIX):]
            # Вложенность разделяется двойным подчёркиванием
            dotted = tail.replace('__', '.').lower()
            parsed: Any = val
            if val.lower() in ('true', 'false'):
                parsed = (val.lower() == 'true')
            else:
                try:
                    if '.' in val:
                        parsed = float(val)
                    else:
                        parsed = int(val)
                except ValueError:
                    parsed = val
            self._set_nested(self.config_data, dotted, parsed)
        if self.get_env('CHINESE_TOKENIZER_ENV'):
            logger.info(f"Активирован профиль: {self.get_env('CHINESE_TOKENIZER_ENV')}")

    def _validate(self) -> None:
        """Проверяет типы разделов словарей и логирования."""
        files = self.get('dictionary.files')
        if files is not None and not isinstance(files, dict):
            logger.warning("dictionary.files должен быть словарём — используются имена по умолчанию")
            self._set_nested(self.config_data, 'dictionary.files', {})
        for key in ('dictionary.dir', 'engine.library_path'):
            value = self.get(key)
            if value is not None and not isinstance(value, str):
                logger.warning(f"{key} должен быть строкой — значение приведено к str")
                self._set_nested(self.config_data, key, str(value))
        try:
            max_logs = int(self.get('logging.max_log_files', 10))
            if max_logs < 1:
                logger.warning("max_log_files < 1 — принудительно установлено в 1")
                self._set_nested(self.config_data, 'logging.max_log_files', 1)
        except (TypeError, ValueError):
            self._set_nested(self.config_data, 'logging.max_log_files', 10)

    def configure_logging(self, force: bool = False) -> logging.Logger:
        """Навешивает обработчики консоли/файла на логгер пакета chinese_tokenizer.

        Корневой логгер и чужие обработчики не затрагиваются. Повторная
        конфигурация выполняется, если:
          - ранее не конфигурировалось, или
          - изменился уровень/формат/файл логирования, или
          - явно указан force=True

        Returns:
            Настроенный логгер пакета
        """
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

        console_level_name = str(self.get_console_logging_level()).upper()
        file_level_name = str(self.get_file_logging_level()).upper()
        console_level = getattr(logging, console_level_name, logging.INFO)
        file_level = getattr(logging, file_level_name, logging.DEBUG)

        desired_fmt = self.get_logging_format()
        desired_file = self.get_logging_file() if self.is_logging_to_file_enabled() else None

        if getattr(package_logger, "_chinese_tokenizer_configured", False) and not force:
            if (
                getattr(package_logger, "_chinese_tokenizer_console_level", None) == console_level_name and
                getattr(package_logger, "_chinese_tokenizer_file_level", None) == file_level_name and
                getattr(package_logger, "_chinese_tokenizer_format", None) == desired_fmt and
                getattr(package_logger, "_chinese_tokenizer_file", None) == desired_file
            ):
                return package_logger

        # Снимаем только свои обработчики от прошлой настройки
        for old in getattr(package_logger, "_chinese_tokenizer_handlers", []):
            package_logger.removeHandler(old)
            old.close()

        handlers: List[logging.Handler] = []
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(logging.Formatter(desired_fmt))
        handlers.append(console)

        if desired_file:
            self.cleanup_old_log_files()
            log_file = Path(desired_file)
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                fh = logging.FileHandler(log_file, encoding='utf-8')
                fh.setLevel(file_level)
                fh.setFormatter(logging.Formatter(desired_fmt))
                handlers.append(fh)
            except OSError as e:
                logger.debug(f"Не удалось открыть файл лога: {e}")

        for handler in handlers:
            package_logger.addHandler(handler)
        package_logger.setLevel(min(console_level, file_level) if desired_file else console_level)
        # Иначе записи продублируются обработчиками приложения
        package_logger.propagate = False

        setattr(package_logger, "_chinese_tokenizer_handlers", handlers)
        setattr(package_logger, "_chinese_tokenizer_configured", True)
        setattr(package_logger, "_chinese_tokenizer_console_level", console_level_name)
        setattr(package_logger, "_chinese_tokenizer_file_level", file_level_name)
        setattr(package_logger, "_chinese_tokenizer_format", desired_fmt)
        setattr(package_logger, "_chinese_tokenizer_file", desired_file)
        return package_logger

    def _get_default_config(self) -> Dict[str, Any]:
        """Возвращает конфигурацию по умолчанию"""
        return {
            'dictionary': {
                # None — каталог dict внутри пакета
                'dir': None,
                'files': dict(DEFAULT_DICT_FILES),
            },
            'engine': {
                # None — поиск по имени через ctypes.util.find_library
                'library_path': None,
                'library_name': "jieba",
            },
            'logging': {
                'console_level': "INFO",
                'file_level': "DEBUG",
                'format': "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                'log_to_file': False,
                'log_file': "logs/chinese_tokenizer.log",
                'max_log_files': 10,
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Получает значение конфигурации по ключу

        Args:
            key: Ключ в формате 'section.subsection.parameter'
            default: Значение по умолчанию

        Returns:
            Значение параметра или default
        """
        try:
            keys = key.split('.')
            value = self.config_data

            for k in keys:
                value = value[k]

            return value
        except (KeyError, TypeError):
            return default

    def get_env(self, key: str, default: Any = None) -> Any:
        """
        Получает значение переменной CHINESE_TOKENIZER_* (окружение или .env)

        Args:
            key: Ключ переменной окружения
            default: Значение по умолчанию

        Returns:
            Значение переменной окружения или default
        """
        value = self.env_data.get(key)
        return default if value is None else value

    def get_dictionary_dir(self) -> str:
        """Получает каталог словарей по умолчанию"""
        configured = self.get('dictionary.dir')
        if configured:
            return os.path.expanduser(configured)
        return str(PACKAGE_DICT_DIR)

    def get_dictionary_file(self, role: str) -> str:
        """Получает имя файла словаря для роли (dict, hmm, user, idf, stop_words)"""
        return self.get(f'dictionary.files.{role}') or DEFAULT_DICT_FILES[role]

    def get_engine_library_path(self) -> Optional[str]:
        """Получает явный путь к libjieba (или None)"""
        return self.get('engine.library_path') or None

    def get_engine_library_name(self) -> str:
        """Получает имя библиотеки для системного поиска"""
        return self.get('engine.library_name', "jieba")

    def get_console_logging_level(self) -> str:
        """Получает уровень логирования для консоли"""
        return self.get('logging.console_level', "INFO")

    def get_file_logging_level(self) -> str:
        """Получает уровень логирования для файла"""
        return self.get('logging.file_level', "DEBUG")

    def get_logging_format(self) -> str:
        """Получает формат логов"""
        return self.get('logging.format', "%(asctime)s - %(levelname)s - %(message)s")

    def get_logging_file(self) -> str:
        """Получает путь к файлу логов"""
        log_file_template = self.get('logging.log_file', "logs/chinese_tokenizer.log")
        if "{timestamp}" in log_file_template:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            return log_file_template.replace("{timestamp}", timestamp)
        return log_file_template

    def is_logging_to_file_enabled(self) -> bool:
        """Проверяет, включено ли логирование в файл"""
        return bool(self.get('logging.log_to_file', False))

    def get_max_log_files(self) -> int:
        """Получает максимальное количество файлов логов для хранения"""
        return int(self.get('logging.max_log_files', 10))

    def cleanup_old_log_files(self) -> None:
        """Удаляет старые файлы логов, оставляя только последние max_log_files"""
        logs_dir = Path(self.get_logging_file()).parent
        if not logs_dir.exists():
            return
        log_files = list(logs_dir.glob("chinese_tokenizer*.log"))
        max_files = self.get_max_log_files()
        if len(log_files) <= max_files:
            return

        # Самые новые последними
        log_files.sort(key=lambda f: f.stat().st_mtime)
        for old_file in log_files[:-max_files]:
            try:
                old_file.unlink()
                logger.debug(f"Удален старый лог файл: {old_file}")
            except OSError as e:
                logger.debug(f"Не удалось удалить лог файл {old_file}: {e}")


# Глобальный экземпляр конфигурации
config = Config()
