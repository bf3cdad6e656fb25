"""
Ollama backend - перевод через локальный LLM-сервер Ollama (HTTP API).

Теги NLLB переводятся обратно в названия языков для промпта.
Поддерживает retry с экспоненциальной задержкой.
"""

import logging
import time
from typing import List, Optional

import httpx

from ..errors import BackendError
from ..languages import language_for_tag
from .base import TranslationBackend

logger = logging.getLogger(__name__)

RETRY_DELAYS = [1.0, 2.0, 4.0]

PROMPT_TEMPLATE = """Translate the following UI string from {source} to {target}.
Keep placeholders such as {{name}}, {{{{name}}}}, %s, %{{name}} and HTML tags unchanged.
Keep leading/trailing whitespace and final punctuation.
Return ONLY the translation, without quotes or explanations.

Text: {text}"""


def _tag_name(tag: str) -> str:
    lang = language_for_tag(tag)
    return lang.name if lang else tag


class OllamaBackend(TranslationBackend):
    """Backend поверх POST /api/generate."""

    name = "ollama"

    def __init__(self, base_url: str = "http://localhost:11434", model: str = "llama3",
                 timeout: float = 300.0, client: Optional[httpx.Client] = None,
                 retry_delays: Optional[List[float]] = None):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)
        self._retry_delays = RETRY_DELAYS if retry_delays is None else retry_delays

    def load(self) -> None:
        """Проверяет, что сервер доступен и модель загружена."""
        try:
            response = self._client.get("/api/tags")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise BackendError(f"Ollama недоступен по адресу {self.base_url}: {exc}")

        try:
            models = {m.get("name", "") for m in response.json().get("models", [])}
        except (ValueError, AttributeError, TypeError) as exc:
            raise BackendError(f"Некорректный ответ Ollama /api/tags от {self.base_url}: {exc}")
        if models and not any(name.split(":")[0] == self.model.split(":")[0] for name in models):
            raise BackendError(
                f"Модель {self.model!r} не найдена в Ollama. Выполните: ollama pull {self.model}"
            )
        logger.info("Ollama backend готов: %s (%s)", self.base_url, self.model)

    def translate(self, text: str, source_tag: str, target_tag: str) -> str:
        prompt = PROMPT_TEMPLATE.format(
            source=_tag_name(source_tag), target=_tag_name(target_tag), text=text,
        )
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": 0.2},
        }

        last_error: Optional[Exception] = None
        attempts = len(self._retry_delays) + 1
        for attempt in range(attempts):
            try:
                response = self._client.post("/api/generate", json=payload)
                response.raise_for_status()
                return self._clean(response.json().get("response", ""))
            except (httpx.HTTPError, ValueError) as exc:
                last_error = exc
                if attempt < attempts - 1:
                    delay = self._retry_delays[attempt]
                    logger.warning(
                        "Попытка %d/%d не удалась: %s. Повтор через %.1fс",
                        attempt + 1, attempts, exc, delay,
                    )
                    time.sleep(delay)

        raise BackendError(f"Ollama: все {attempts} попытки исчерпаны: {last_error}")

    @staticmethod
    def _clean(response: str) -> str:
        """Убирает кавычки, которыми LLM любит оборачивать ответ."""
        cleaned = response.strip()
        if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'":
            cleaned = cleaned[1:-1]
        return cleaned

    def close(self) -> None:
        self._client.close()
