"""
ModelCache - скачивание и кеширование моделей перевода.

Модель скачивается один раз с HuggingFace Hub в директорию кеша:
    ~/.lingua/models/
        nllb-200-distilled-600M/
            lingua_manifest.json   - признак полной загрузки
            config.json, ...

Наличие модели определяется только по манифесту: директория без манифеста
считается недокачанной.
"""

import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from . import version
from .catalog import utc_now, write_json_atomic
from .config import DEFAULT_MODEL_NAME, DEFAULT_MODEL_REPO
from .errors import ModelDownloadError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "lingua_manifest.json"


@dataclass(frozen=True)
class ModelSpec:
    name: str
    repo: str
    description: str = ""
    size_mb: int = 0


DEFAULT_MODELS: Dict[str, ModelSpec] = {
    DEFAULT_MODEL_NAME: ModelSpec(
        name=DEFAULT_MODEL_NAME,
        repo=DEFAULT_MODEL_REPO,
        description="Facebook NLLB translation model (200 languages)",
        size_mb=1200,
    ),
}


def hf_snapshot_download(repo: str, target_dir: Path) -> None:
    """Скачивает репозиторий модели с HuggingFace Hub."""
    from huggingface_hub import snapshot_download

    snapshot_download(repo_id=repo, local_dir=str(target_dir))


class ModelCache:
    """Кеш моделей в файловой системе."""

    def __init__(self, models_dir: Path,
                 fetcher: Optional[Callable[[str, Path], None]] = None,
                 models: Optional[Dict[str, ModelSpec]] = None):
        self.models_dir = Path(models_dir)
        self._fetch = fetcher or hf_snapshot_download
        self.models = models or DEFAULT_MODELS

    def model_path(self, model_name: str) -> Path:
        return self.models_dir / model_name

    def model_exists(self, model_name: str) -> bool:
        return (self.model_path(model_name) / MANIFEST_NAME).exists()

    def download(self, model_names: Optional[List[str]] = None) -> List[Path]:
        """
        Скачивает модели, которых ещё нет в кеше.

        Args:
            model_names: Какие модели скачать (по умолчанию все известные)

        Returns:
            Пути к директориям моделей

        Raises:
            ModelDownloadError: если загрузка не удалась (недокачанное удаляется)
        """
        logger.info("Подготовка моделей перевода...")
        self.models_dir.mkdir(parents=True, exist_ok=True)

        paths = []
        for name in model_names or list(self.models):
            spec = self.models.get(name)
            if spec is None:
                raise ModelDownloadError(f"Неизвестная модель: {name}")
            paths.append(self._download_model(spec))

        logger.info("Модели готовы, кеш: %s", self.models_dir)
        return paths

    def _download_model(self, spec: ModelSpec) -> Path:
        model_path = self.model_path(spec.name)

        if self.model_exists(spec.name):
            logger.info("Модель %s уже в кеше: %s", spec.name, model_path)
            return model_path

        logger.info("Скачивание %s (~%dMB) из %s", spec.description or spec.name, spec.size_mb, spec.repo)
        logger.info("Первая загрузка может занять несколько минут...")

        # Остатки прошлой неудачной загрузки
        if model_path.exists():
            shutil.rmtree(model_path)
        model_path.mkdir(parents=True)

        try:
            self._fetch(spec.repo, model_path)
        except Exception as exc:
            logger.error("Не удалось скачать %s: %s", spec.name, exc)
            shutil.rmtree(model_path, ignore_errors=True)
            raise ModelDownloadError(f"Не удалось скачать {spec.name}: {exc}") from exc

        write_json_atomic(model_path / MANIFEST_NAME, {
            "model_name": spec.name,
            "repo": spec.repo,
            "downloaded_at": utc_now(),
            "tool_version": version(),
        })
        logger.info("Модель %s скачана", spec.name)
        return model_path

    def list_models(self) -> List[Dict]:
        """Модели с манифестом в кеше."""
        if not self.models_dir.exists():
            return []

        models = []
        for path in sorted(self.models_dir.iterdir()):
            manifest_path = path / MANIFEST_NAME
            if not (path.is_dir() and manifest_path.exists()):
                continue
            with open(manifest_path, "r", encoding="utf-8") as f:
                manifest = json.load(f)
            models.append({
                "name": path.name,
                "repo": manifest.get("repo", ""),
                "downloaded_at": manifest.get("downloaded_at", ""),
                "tool_version": manifest.get("tool_version", ""),
                "path": str(path),
            })
        return models

    def clean_models(self) -> bool:
        """Удаляет весь кеш. Возвращает False, если кеша не было."""
        if not self.models_dir.exists():
            logger.info("Кеш моделей не найден")
            return False
        logger.info("Очистка кеша моделей: %s", self.models_dir)
        shutil.rmtree(self.models_dir)
        return True

    def cache_info(self) -> Dict:
        models = self.list_models()
        total_size = _directory_size(self.models_dir) if self.models_dir.exists() else 0
        return {
            "cache_directory": str(self.models_dir),
            "models_count": len(models),
            "total_size_mb": total_size // (1024 * 1024),
            "models": models,
        }


def _directory_size(directory: Path) -> int:
    total = 0
    for path in directory.rglob("*"):
        try:
            if path.is_file():
                total += path.stat().st_size
        except OSError as exc:
            logger.warning("Не удалось получить размер %s: %s", path, exc)
    return total
