"""
Стадии pipeline: setup -> extract -> translate -> generate.

Стадии общаются только через артефакты в рабочей директории
(lingua_strings.json, lingua_translations.json). Каждая стадия получает
настройки явно.
"""

import logging
import os
from typing import Iterable, List, Optional, Union

from .backends import TranslationBackend, create_backend, model_cache_for
from .catalog import (
    StringCatalog,
    TranslationCatalog,
    load_string_catalog,
    load_translation_catalog,
    save_string_catalog,
    save_translation_catalog,
)
from .config import LinguaSettings
from .errors import ConfigurationError
from .extractor import Extractor
from .generator import Generator
from .patterns import parse_pattern_type
from .paths import determine_output_config
from .quality import QualityChecker
from .translator import Translator, parse_target_languages

logger = logging.getLogger(__name__)


def setup_stage(settings: LinguaSettings) -> List[str]:
    """Заполняет кеш моделей. Для backend'ов без модели ничего не делает."""
    if settings.backend != "nllb":
        logger.info("Backend %s не требует загрузки моделей", settings.backend)
        return []
    paths = model_cache_for(settings).download([settings.model_name])
    return [str(p) for p in paths]


def extract_stage(settings: LinguaSettings, input_dir: str,
                  pattern_type="gettext") -> StringCatalog:
    """Извлекает строки из input_dir и сохраняет lingua_strings.json."""
    if not os.path.isdir(input_dir):
        raise ConfigurationError(f"Директория не найдена: {input_dir}")

    extractor = Extractor(parse_pattern_type(pattern_type), max_workers=settings.workers)
    catalog = extractor.extract(input_dir)
    save_string_catalog(catalog, settings.strings_file)
    logger.info("Каталог строк сохранён: %s", settings.strings_file)
    return catalog


def translate_stage(settings: LinguaSettings,
                    languages: Union[str, Iterable[str]],
                    quality_check: bool = False,
                    backend: Optional[TranslationBackend] = None) -> TranslationCatalog:
    """
    Переводит каталог строк и сохраняет lingua_translations.json.

    Args:
        settings: Настройки запуска
        languages: Целевые языки ("es,fr" или список)
        quality_check: Включить QualityChecker
        backend: Готовый backend (по умолчанию создаётся по настройкам)

    Returns:
        TranslationCatalog
    """
    catalog = load_string_catalog(settings.strings_file)
    # Языки проверяются до загрузки модели
    target_languages = parse_target_languages(languages)

    backend = backend or create_backend(settings)
    logger.info("Загрузка backend'а %s...", backend.name)
    backend.load()
    try:
        translator = Translator(
            backend,
            checker=QualityChecker(),
            max_workers=settings.workers,
            source_lang=settings.source_lang,
        )
        result = translator.translate(catalog, target_languages, quality_check=quality_check)
    finally:
        backend.close()

    save_translation_catalog(result, settings.translations_file)
    logger.info("Переводы сохранены: %s", settings.translations_file)
    return result


def generate_stage(settings: LinguaSettings, fmt: str = "json",
                   output: Optional[str] = None,
                   output_template: Optional[str] = None,
                   flat_structure: bool = False,
                   namespace_by_file: bool = False,
                   source_lang: Optional[str] = None) -> List[str]:
    """Генерирует файлы переводов из обоих артефактов."""
    string_catalog = load_string_catalog(settings.strings_file)
    translation_catalog = load_translation_catalog(settings.translations_file)

    config = determine_output_config(
        string_catalog.source_directory,
        output=output,
        output_template=output_template,
        flat_structure=flat_structure,
        namespace_by_file=namespace_by_file,
    )
    generator = Generator(max_workers=settings.workers)
    return generator.generate(
        string_catalog, translation_catalog, fmt,
        source_lang or settings.source_lang, config,
    )
