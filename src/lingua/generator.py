#!/usr/bin/env python3
"""
Generator - выходные файлы переводов с отображением 1:1 на исходные файлы.

Сначала пишутся файлы исходного языка (ключ = значение), затем
параллельно по целевым языкам - переведённые файлы. Для строки без
перевода подставляется оригинал.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .catalog import StringCatalog, TranslationCatalog
from .concurrency import run_concurrently
from .formats import get_renderer
from .paths import OutputConfig, plan_output_paths

logger = logging.getLogger(__name__)


class Generator:
    """Пишет файлы переводов в выбранном формате."""

    def __init__(self, max_workers: Optional[int] = None):
        self.max_workers = max_workers

    def generate(self, string_catalog: StringCatalog,
                 translation_catalog: TranslationCatalog,
                 fmt: str, source_lang: str,
                 config: OutputConfig) -> List[str]:
        """
        Генерирует файлы для исходного и всех целевых языков.

        Args:
            string_catalog: Результат extract
            translation_catalog: Результат translate
            fmt: json | po | yaml
            source_lang: Код исходного языка
            config: Стратегия путей

        Returns:
            Список записанных файлов
        """
        render = get_renderer(fmt)
        source_directory = string_catalog.source_directory
        files = list(string_catalog.file_mapping)
        languages = list(translation_catalog.translations)

        if source_lang in translation_catalog.translations:
            logger.warning(
                "Исходный язык %s есть среди переводов - его файлы будут перезаписаны переводом",
                source_lang,
            )

        # Проверка коллизий до записи первого файла
        planned = plan_output_paths(files, [source_lang] + languages, fmt, source_directory, config)

        logger.info(
            "Генерация %s файлов: %d языков + исходный, стратегия %s",
            fmt, len(languages), config.strategy,
        )

        written = run_concurrently(
            lambda file_path: self._write(
                planned[(file_path, source_lang)], self.source_mapping(string_catalog, file_path),
                source_lang, render,
            ),
            files, max_workers=self.max_workers, label="generate-source",
        )
        for path in written:
            logger.info("Исходный файл: %s", path)

        for lang_code, paths in run_concurrently(
            lambda lang: (lang, self._generate_language(string_catalog, translation_catalog, lang, planned, render)),
            languages, max_workers=self.max_workers, label="generate",
        ):
            logger.info("Сгенерированы переводы для %s (%d файлов)", lang_code, len(paths))
            written.extend(paths)

        logger.info("Файлы переводов сгенерированы: %d", len(written))
        return written

    @staticmethod
    def source_mapping(string_catalog: StringCatalog, file_path: str) -> Dict[str, str]:
        """Файл исходного языка: каждая строка переводится сама в себя."""
        return {s: s for s in string_catalog.unique_strings_for(file_path)}

    @staticmethod
    def translated_mapping(string_catalog: StringCatalog, file_path: str,
                           lookup: Dict[str, str]) -> Dict[str, str]:
        """Строки файла -> перевод (оригинал, если перевода нет)."""
        return {s: lookup.get(s, s) for s in string_catalog.unique_strings_for(file_path)}

    def _generate_language(self, string_catalog: StringCatalog,
                           translation_catalog: TranslationCatalog, lang_code: str,
                           planned: Dict[Tuple[str, str], str], render) -> List[str]:
        lookup = translation_catalog.lookup(lang_code)
        paths = []
        for file_path in string_catalog.file_mapping:
            mapping = self.translated_mapping(string_catalog, file_path, lookup)
            path = self._write(planned[(file_path, lang_code)], mapping, lang_code, render)
            logger.debug("Переведённый файл: %s", path)
            paths.append(path)
        return paths

    @staticmethod
    def _write(output_path: str, mapping: Dict[str, str], lang_code: str, render) -> str:
        Path(os.path.dirname(output_path) or ".").mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(render(mapping, lang_code))
        return output_path
