"""
Backend'ы перевода.

- nllb: локальная модель NLLB-200 (transformers), по умолчанию
- ollama: локальный LLM через HTTP API Ollama
- identity: без перевода (сухой прогон)
"""

from ..config import LinguaSettings
from ..errors import ConfigurationError
from ..model_cache import ModelCache, ModelSpec
from .base import TranslationBackend
from .identity import IdentityBackend
from .nllb import NLLBBackend
from .ollama import OllamaBackend

BACKENDS = ("nllb", "ollama", "identity")


def model_cache_for(settings: LinguaSettings) -> ModelCache:
    """Кеш моделей с моделью из настроек."""
    spec = ModelSpec(name=settings.model_name, repo=settings.model_repo)
    return ModelCache(settings.models_dir, models={spec.name: spec})


def create_backend(settings: LinguaSettings) -> TranslationBackend:
    """Создаёт (но не загружает) backend по имени из настроек."""
    if settings.backend == "nllb":
        return NLLBBackend(model_cache_for(settings), settings.model_name)
    if settings.backend == "ollama":
        return OllamaBackend(base_url=settings.ollama_url, model=settings.ollama_model)
    if settings.backend == "identity":
        return IdentityBackend()
    raise ConfigurationError(
        f"Неизвестный backend: {settings.backend!r}. Доступные: {', '.join(BACKENDS)}"
    )


__all__ = [
    "BACKENDS",
    "IdentityBackend",
    "NLLBBackend",
    "OllamaBackend",
    "TranslationBackend",
    "create_backend",
    "model_cache_for",
]
