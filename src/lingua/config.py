"""
Конфигурация lingua.

Порядок приоритетов (последний побеждает):
    значения по умолчанию -> lingua.yaml -> .env / переменные окружения LINGUA_* -> CLI

Настройки неизменяемы и передаются в каждую стадию явно.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "lingua.yaml"

DEFAULT_MODEL_NAME = "nllb-200-distilled-600M"
DEFAULT_MODEL_REPO = "facebook/nllb-200-distilled-600M"

# Переменные окружения -> поле настроек
ENV_MAP: Dict[str, str] = {
    "LINGUA_WORK_DIR": "work_dir",
    "LINGUA_MODELS_DIR": "models_dir",
    "LINGUA_BACKEND": "backend",
    "LINGUA_MODEL_NAME": "model_name",
    "LINGUA_MODEL_REPO": "model_repo",
    "LINGUA_OLLAMA_URL": "ollama_url",
    "LINGUA_OLLAMA_MODEL": "ollama_model",
    "LINGUA_MAX_WORKERS": "max_workers",
    "LINGUA_SOURCE_LANG": "source_lang",
    "LINGUA_LOG_LEVEL": "log_level",
}


def default_max_workers() -> int:
    """Число воркеров по умолчанию: 2 x число процессоров."""
    return (os.cpu_count() or 1) * 2


def default_models_dir() -> Path:
    """Каталог кеша моделей: ~/.lingua/models, иначе временная директория."""
    home = os.environ.get("HOME")
    if home:
        return Path(home) / ".lingua" / "models"
    return Path(tempfile.gettempdir()) / "lingua_models"


@dataclass(frozen=True)
class LinguaSettings:
    """Настройки одного запуска."""
    work_dir: Path                     # Где лежат lingua_strings.json / lingua_translations.json
    models_dir: Path                   # Кеш моделей
    backend: str = "nllb"              # nllb | ollama | identity
    model_name: str = DEFAULT_MODEL_NAME
    model_repo: str = DEFAULT_MODEL_REPO
    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "llama3"
    max_workers: int = 0               # 0 -> default_max_workers()
    source_lang: str = "en"
    log_level: str = "INFO"

    @property
    def workers(self) -> int:
        return self.max_workers if self.max_workers > 0 else default_max_workers()

    @property
    def strings_file(self) -> Path:
        return self.work_dir / "lingua_strings.json"

    @property
    def translations_file(self) -> Path:
        return self.work_dir / "lingua_translations.json"


def _coerce(name: str, value: Any) -> Any:
    """Приводит сырое значение (из YAML или env) к типу поля."""
    if name in ("work_dir", "models_dir"):
        return Path(value).expanduser()
    if name == "max_workers":
        try:
            workers = int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"max_workers должен быть целым числом, получено: {value!r}")
        if workers < 0:
            raise ConfigurationError(f"max_workers не может быть отрицательным: {workers}")
        return workers
    if name == "log_level":
        level = str(value).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"Неизвестный уровень логирования: {value!r}")
        return level
    return str(value)


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Читает YAML-конфиг. Отсутствующий файл - пустой конфиг."""
    if not path.exists():
        logger.debug("Конфиг %s не найден, используются значения по умолчанию", path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Ошибка разбора {path}: {exc}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: ожидается словарь верхнего уровня")

    known = {f.name for f in fields(LinguaSettings)}
    unknown = set(data) - known
    if unknown:
        logger.warning("Неизвестные ключи в %s: %s", path, ", ".join(sorted(unknown)))

    logger.info("Конфигурация загружена из %s", path)
    return {k: v for k, v in data.items() if k in known}


def load_settings(config_path: Optional[str] = None, **overrides: Any) -> LinguaSettings:
    """
    Собирает настройки из всех источников.

    Args:
        config_path: Путь к YAML-конфигу (по умолчанию ./lingua.yaml)
        **overrides: Явные значения (из CLI); None игнорируется

    Returns:
        LinguaSettings
    """
    load_dotenv()

    raw: Dict[str, Any] = {
        "work_dir": tempfile.gettempdir(),
        "models_dir": default_models_dir(),
    }

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Конфиг не найден: {config_path}")
    else:
        path = Path.cwd() / DEFAULT_CONFIG_FILE
    raw.update(_load_yaml(path))

    for env_name, field_name in ENV_MAP.items():
        value = os.environ.get(env_name)
        if value:
            raw[field_name] = value

    raw.update({k: v for k, v in overrides.items() if v is not None})

    return LinguaSettings(**{k: _coerce(k, v) for k, v in raw.items()})
