"""Базовый интерфейс backend'ов перевода."""

from abc import ABC, abstractmethod


class TranslationBackend(ABC):
    """
    Backend перевода.

    load() вызывается один раз до начала fan-out'а; translate() вызывается
    конкурентно из нескольких потоков (внутри одной задачи - последовательно).
    Ошибки backend'а поднимаются как BackendError.
    """

    name: str = "base"

    def load(self) -> None:
        """Подготавливает backend (загрузка модели, проверка сервера)."""

    @abstractmethod
    def translate(self, text: str, source_tag: str, target_tag: str) -> str:
        """
        Переводит одну строку.

        Args:
            text: Исходный текст
            source_tag: Тег исходного языка (eng_Latn)
            target_tag: Тег целевого языка (spa_Latn)

        Returns:
            Перевод
        """
        ...

    def close(self) -> None:
        """Освобождает ресурсы."""
