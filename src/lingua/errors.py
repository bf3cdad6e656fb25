"""
Иерархия ошибок lingua.

Фатальные ошибки стадии (конфигурация, отсутствующие артефакты, backend)
пробрасываются до CLI и завершают процесс с ненулевым кодом.
Восстановимые ошибки (один файл, одна строка) обрабатываются внутри задачи
и сюда не попадают.
"""

from typing import Iterable


class LinguaError(Exception):
    """Базовая ошибка инструмента."""


class ConfigurationError(LinguaError):
    """Некорректная конфигурация запуска."""


class NoValidTargetLanguages(ConfigurationError):
    """После фильтрации не осталось ни одного поддерживаемого языка."""

    def __init__(self, requested: Iterable[str]):
        self.requested = list(requested)
        super().__init__(
            f"Нет допустимых целевых языков (запрошено: {', '.join(self.requested) or '-'})"
        )


class UnsupportedFormatError(ConfigurationError):
    """Неизвестный формат выходных файлов."""

    def __init__(self, fmt: str, supported: Iterable[str]):
        self.format = fmt
        super().__init__(
            f"Неподдерживаемый формат: {fmt!r}. Доступные: {', '.join(supported)}"
        )


class OutputCollisionError(ConfigurationError):
    """Две пары (файл, язык) указывают на один выходной путь."""

    def __init__(self, path: str, first: tuple, second: tuple):
        self.path = path
        self.pairs = (first, second)
        super().__init__(
            f"Конфликт выходных путей: {first[0]} ({first[1]}) и "
            f"{second[0]} ({second[1]}) -> {path}"
        )


class MissingArtifactError(LinguaError):
    """Промежуточный артефакт предыдущей стадии не найден."""

    def __init__(self, path: str, stage: str):
        self.path = path
        self.stage = stage
        super().__init__(
            f"Файл {path} не найден. Сначала выполните 'lingua {stage}'."
        )


class BackendError(LinguaError):
    """Ошибка backend'а перевода (загрузка модели, вызов)."""


class ModelDownloadError(BackendError):
    """Не удалось скачать модель в кеш."""
