#!/usr/bin/env python3
"""
Extractor - извлекает переводимые строки из исходного кода проекта.

Стратегия:
1. Рекурсивный обход директории (скрытые директории пропускаются)
2. Фильтр файлов по расширениям набора паттернов
3. Параллельное применение всех паттернов к каждому файлу
4. Сборка StringCatalog: отсортированные уникальные строки + файл -> строки

Без LLM - чисто регулярные выражения.
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

from .catalog import StringCatalog
from .concurrency import run_concurrently
from .patterns import PatternSet, PatternType, extract_from_text, get_pattern_set, parse_pattern_type

logger = logging.getLogger(__name__)


class Extractor:
    """
    Сканер исходников для одного диалекта разметки.

    Ошибки отдельных файлов и директорий не прерывают обход:
    они логируются, файл получает пустой результат.
    """

    def __init__(self, pattern_type=PatternType.GETTEXT, max_workers: Optional[int] = None):
        self.pattern_type = parse_pattern_type(pattern_type)
        self.pattern_set: PatternSet = get_pattern_set(self.pattern_type)
        self.max_workers = max_workers

    def extract(self, root_dir: str) -> StringCatalog:
        """
        Сканирует root_dir и возвращает каталог строк.

        Args:
            root_dir: Корень исходников

        Returns:
            StringCatalog
        """
        logger.info("Извлечение строк из %s (паттерны: %s)", root_dir, self.pattern_type.value)

        files = self.find_source_files(root_dir)
        logger.info("Обработка %d файлов параллельно...", len(files))

        results = run_concurrently(
            self.extract_from_file, files,
            max_workers=self.max_workers, label="extract",
        )

        file_mapping: Dict[str, List[str]] = {path: strings for path, strings in results}
        catalog = StringCatalog.build(root_dir, self.pattern_type, file_mapping)

        logger.info(
            "Найдено %d уникальных строк в %d файлах",
            len(catalog.strings), len(catalog.file_mapping),
        )
        return catalog

    def find_source_files(self, directory: str) -> List[str]:
        """Находит все файлы с подходящими расширениями."""
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning("Не удалось прочитать директорию %s: %s", directory, e)
            return []

        files: List[str] = []
        for entry in entries:
            path = os.path.join(directory, entry.name)
            try:
                if entry.is_dir():
                    # .git, .venv, .cache и т.п.
                    if not entry.name.startswith("."):
                        files.extend(self.find_source_files(path))
                elif entry.is_file() and self.pattern_set.matches_file(entry.name):
                    files.append(path)
            except OSError as e:
                logger.warning("Не удалось проверить %s: %s", path, e)
        return files

    def extract_from_file(self, file_path: str) -> Tuple[str, List[str]]:
        """Извлекает строки из одного файла; ошибка чтения - пустой результат."""
        logger.debug("Сканирование файла: %s", file_path)
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Не удалось прочитать файл %s: %s", file_path, e)
            return file_path, []

        return file_path, extract_from_text(content, self.pattern_set)

    @staticmethod
    def generate_report(catalog: StringCatalog) -> Dict:
        """
        Статистика извлечения для вывода в CLI.

        Returns:
            Dict со статистикой по файлам
        """
        by_file = {path: len(strings) for path, strings in catalog.file_mapping.items()}
        return {
            "total_strings": len(catalog.strings),
            "total_occurrences": sum(by_file.values()),
            "files": len(by_file),
            "by_file": by_file,
        }
