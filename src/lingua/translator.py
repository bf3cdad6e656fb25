#!/usr/bin/env python3
"""
Translator - конкурентный перевод извлечённых строк.

Схема:
- задачи = декартово произведение (файл x целевой язык)
- каждая задача переводит уникальные строки своего файла через backend
- ошибка перевода одной строки -> подставляется оригинал, задача продолжается
- результаты группируются по языку после завершения всех задач

Дедупликация - внутри файла, а не глобально: строка из двух файлов
переводится дважды (по разу на пару файл-язык).
"""

import logging
import os
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .backends.base import TranslationBackend
from .catalog import StringCatalog, TranslationCatalog, TranslationUnit, unique, utc_now
from .concurrency import run_concurrently
from .errors import NoValidTargetLanguages
from .languages import backend_tag, is_supported, language_name
from .quality import QualityChecker

logger = logging.getLogger(__name__)

# (путь файла, код языка, строки файла)
Task = Tuple[str, str, Tuple[str, ...]]


def parse_target_languages(languages: Union[str, Iterable[str], None]) -> List[str]:
    """
    Разбирает и валидирует список целевых языков.

    Args:
        languages: "es,fr,de" или список кодов

    Returns:
        Поддерживаемые коды в исходном порядке, без повторов

    Raises:
        NoValidTargetLanguages: если не осталось ни одного языка
    """
    if languages is None:
        raw: List[str] = []
    elif isinstance(languages, str):
        raw = languages.split(",")
    else:
        raw = list(languages)

    requested = [code.strip() for code in raw if code and code.strip()]
    valid = []
    for code in unique(requested):
        if is_supported(code):
            valid.append(code)
        else:
            logger.warning("Неподдерживаемый код языка: %s", code)

    if not valid:
        raise NoValidTargetLanguages(requested)
    return valid


class Translator:
    """
    Переводчик каталога строк.

    Backend должен быть загружен (load()) до вызова translate().
    """

    def __init__(self, backend: TranslationBackend,
                 checker: Optional[QualityChecker] = None,
                 max_workers: Optional[int] = None,
                 source_lang: str = "en"):
        self.backend = backend
        self.checker = checker or QualityChecker()
        self.max_workers = max_workers
        self.source_lang = source_lang

    def translate(self, catalog: StringCatalog,
                  target_languages: Union[str, Iterable[str]],
                  quality_check: bool = False) -> TranslationCatalog:
        """
        Переводит все файлы каталога на все целевые языки.

        Args:
            catalog: Результат стадии extract
            target_languages: Коды целевых языков
            quality_check: Оценивать каждую пару через QualityChecker

        Returns:
            TranslationCatalog
        """
        languages = parse_target_languages(target_languages)

        tasks: List[Task] = [
            (file_path, lang, file_strings)
            for file_path, file_strings in catalog.file_mapping.items()
            for lang in languages
        ]

        logger.info(
            "Перевод %d строк на %d языков", len(catalog.strings), len(languages),
        )
        logger.info(
            "Параллельные задачи: %d файлов x %d языков = %d",
            len(catalog.file_mapping), len(languages), len(tasks),
        )

        results = run_concurrently(
            lambda task: self.translate_file_to_language(*task, quality_check=quality_check),
            tasks, max_workers=self.max_workers, label="translate",
        )

        # Порядок завершения задач произвольный - группируем по полю language
        grouped: Dict[str, List[TranslationUnit]] = defaultdict(list)
        for units in results:
            for unit in units:
                grouped[unit.language].append(unit)

        return TranslationCatalog(
            translated_at=utc_now(),
            source_strings=len(catalog.strings),
            target_languages=tuple(languages),
            translations={lang: tuple(grouped.get(lang, ())) for lang in languages},
        )

    def translate_file_to_language(self, file_path: str, lang_code: str,
                                   file_strings: Iterable[str],
                                   quality_check: bool = False) -> List[TranslationUnit]:
        """Одна задача fan-out'а: уникальные строки файла -> один язык."""
        unique_strings = unique(file_strings)
        name = os.path.basename(file_path)
        logger.info(
            "Перевод %s -> %s (%s): %d строк",
            name, language_name(lang_code), lang_code, len(unique_strings),
        )

        units = []
        for index, string in enumerate(unique_strings, 1):
            logger.debug("%s -> %s: %d/%d: %.30s", name, lang_code, index, len(unique_strings), string)

            translation = self.translate_string(string, lang_code)

            if quality_check:
                result = self.checker.check(string, translation, lang_code)
                logger.debug("Оценка качества: %.2f", result.overall_score)

            units.append(TranslationUnit(original=string, translation=translation, language=lang_code))

        logger.info("Готово: %s -> %s", name, lang_code)
        return units

    def translate_string(self, text: str, lang_code: str) -> str:
        """Переводит строку; при ошибке backend'а возвращает оригинал."""
        try:
            return self.backend.translate(
                text, backend_tag(self.source_lang), backend_tag(lang_code),
            )
        except Exception as e:
            logger.error("Ошибка перевода '%s' (%s): %s", text, lang_code, e)
            return text
