"""
NLLB backend - локальная модель facebook/nllb-200 через transformers.

Модель берётся из кеша ModelCache; если её нет - сначала скачивается.
Требует extra-зависимости: pip install "lingua[nllb]".
"""

import logging
import threading
from typing import Any, Optional

from ..errors import BackendError
from ..model_cache import ModelCache
from .base import TranslationBackend

logger = logging.getLogger(__name__)


class NLLBBackend(TranslationBackend):
    name = "nllb"

    def __init__(self, cache: ModelCache, model_name: str, max_length: int = 512):
        self.cache = cache
        self.model_name = model_name
        self.max_length = max_length
        self._pipeline: Optional[Any] = None
        # Токенизатор HF не потокобезопасен
        self._lock = threading.Lock()

    def load(self) -> None:
        if not self.cache.model_exists(self.model_name):
            logger.info("Модель не найдена в кеше, скачивание...")
            self.cache.download([self.model_name])

        model_path = self.cache.model_path(self.model_name)
        logger.info("Загрузка модели перевода из %s", model_path)

        try:
            from transformers import AutoModelForSeq2SeqLM, AutoTokenizer, pipeline
        except ImportError as exc:
            raise BackendError(
                f"Для backend 'nllb' нужен transformers: pip install 'lingua[nllb]' ({exc})"
            ) from exc

        try:
            tokenizer = AutoTokenizer.from_pretrained(str(model_path))
            model = AutoModelForSeq2SeqLM.from_pretrained(str(model_path))
            self._pipeline = pipeline(
                "translation", model=model, tokenizer=tokenizer, max_length=self.max_length,
            )
        except Exception as exc:
            raise BackendError(f"Не удалось загрузить модель перевода: {exc}") from exc

        logger.info("Модель перевода загружена")

    def translate(self, text: str, source_tag: str, target_tag: str) -> str:
        if self._pipeline is None:
            raise BackendError("Модель не загружена: вызовите load()")

        try:
            with self._lock:
                result = self._pipeline(text, src_lang=source_tag, tgt_lang=target_tag)
        except Exception as exc:
            raise BackendError(str(exc)) from exc

        return result[0]["translation_text"].strip()

    def close(self) -> None:
        self._pipeline = None
