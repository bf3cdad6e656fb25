#!/usr/bin/env python3
"""
lingua - CLI инструмента перевода на этапе сборки.

Команды:
  setup      Скачивает и кеширует модель перевода
  extract    Извлекает переводимые строки из исходников
  translate  Переводит извлечённые строки на целевые языки
  generate   Пишет файлы переводов (json, po, yaml)
  models     Управление кешем моделей (list, info, clean)

Использование:
  lingua setup
  lingua extract --input lib/ --patterns gettext
  lingua translate --to es,fr,de --quality
  lingua generate --format po
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from . import TOOL_NAME, __version__
from .backends import BACKENDS, model_cache_for
from .config import LinguaSettings, load_settings
from .errors import LinguaError
from .extractor import Extractor
from .formats import SUPPORTED_FORMATS
from .languages import SUPPORTED_LANGUAGES
from .pipeline import extract_stage, generate_stage, setup_stage, translate_stage

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def cmd_setup(args, settings: LinguaSettings):
    print(f"\n📦 Подготовка моделей перевода")
    print(f"   Backend: {settings.backend}")
    print(f"   Кеш: {settings.models_dir}")

    paths = setup_stage(settings)

    print(f"\n{'='*60}")
    if paths:
        for path in paths:
            print(f"  Модель готова: {path}")
    else:
        print(f"  Загрузка моделей не требуется")
    print(f"{'='*60}\n")


def cmd_extract(args, settings: LinguaSettings):
    print(f"\n🔍 Извлечение строк: {args.input}")
    print(f"   Паттерны: {args.patterns}")

    start = time.time()
    catalog = extract_stage(settings, args.input, args.patterns)
    report = Extractor.generate_report(catalog)
    elapsed = time.time() - start

    print(f"\n{'='*60}")
    print(f"  Найдено уникальных строк: {report['total_strings']} ({elapsed:.1f}с)")
    print(f"  Вхождений: {report['total_occurrences']}, файлов: {report['files']}")
    print(f"{'='*60}")

    if report["by_file"]:
        print(f"\n  По файлам:")
        for path, count in report["by_file"].items():
            print(f"    {path:<50} {count}")

    print(f"\n  Сохранено: {settings.strings_file}\n")


def cmd_translate(args, settings: LinguaSettings):
    print(f"\n🌐 Перевод: {settings.source_lang} -> {args.to}")
    print(f"   Backend: {settings.backend}")
    print(f"   Проверка качества: {'да' if args.quality else 'нет'}")

    start = time.time()
    catalog = translate_stage(settings, args.to, quality_check=args.quality)
    elapsed = time.time() - start

    print(f"\n{'='*60}")
    print(f"  Результат перевода ({elapsed:.1f}с):")
    print(f"    Исходных строк:   {catalog.source_strings}")
    print(f"    Языков:           {', '.join(catalog.target_languages)}")
    print(f"    Переводов:        {catalog.unit_count}")
    print(f"{'='*60}")
    print(f"\n  Сохранено: {settings.translations_file}\n")


def cmd_generate(args, settings: LinguaSettings):
    print(f"\n📝 Генерация файлов переводов: {args.format}")

    written = generate_stage(
        settings,
        fmt=args.format,
        output=args.output,
        output_template=args.output_template,
        flat_structure=args.flat_structure,
        namespace_by_file=args.namespace_by_file,
        source_lang=args.source_lang,
    )

    print(f"\n{'='*60}")
    print(f"  Записано файлов: {len(written)}")
    print(f"{'='*60}")
    for path in sorted(written):
        print(f"    {path}")
    print()


def cmd_models(args, settings: LinguaSettings):
    cache = model_cache_for(settings)

    if args.models_command == "list":
        models = cache.list_models()
        if not models:
            print(f"\n  Моделей в кеше нет: {cache.models_dir}\n")
            return
        print(f"\n📚 Модели в кеше: {cache.models_dir}\n")
        for model in models:
            print(f"  {model['name']:<30} {model['repo']:<40} {model['downloaded_at']}")
        print()

    elif args.models_command == "info":
        info = cache.cache_info()
        print(f"\n📊 Кеш моделей")
        print(f"   Директория: {info['cache_directory']}")
        print(f"   Моделей:    {info['models_count']}")
        print(f"   Размер:     {info['total_size_mb']} MB\n")

    elif args.models_command == "clean":
        if cache.clean_models():
            print(f"\n  Кеш моделей очищен: {cache.models_dir}\n")
        else:
            print(f"\n  Кеш моделей не найден: {cache.models_dir}\n")


def build_parser() -> argparse.ArgumentParser:
    """Строит парсер аргументов."""
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Перевод интерфейса на этапе сборки: extract -> translate -> generate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Поддерживаемые языки: {', '.join(SUPPORTED_LANGUAGES)}

Примеры:
  # Однократная загрузка модели
  lingua setup

  # Извлечение строк из lib/
  lingua extract --input lib/

  # Перевод на испанский, французский, немецкий
  lingua translate --to es,fr,de

  # Файлы переводов в формате po
  lingua generate --format po

  # CI/CD
  lingua setup && lingua extract && lingua translate --to es,fr,de && lingua generate
        """
    )
    parser.add_argument("--version", action="version", version=f"{TOOL_NAME} {__version__}")
    parser.add_argument("--work-dir", default=None,
                        help="Директория промежуточных артефактов")
    parser.add_argument("--workers", type=int, default=None,
                        help="Число параллельных воркеров")
    parser.add_argument("--config", default=None, help="Путь к lingua.yaml")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Уровень логирования")

    subparsers = parser.add_subparsers(dest="command", help="Команда")

    # === setup ===
    p_setup = subparsers.add_parser("setup", help="Скачать и закешировать модель")
    p_setup.add_argument("--backend", default=None, choices=BACKENDS, help="Backend перевода")

    # === extract ===
    p_extract = subparsers.add_parser("extract", help="Извлечь строки из исходников")
    p_extract.add_argument("--input", "-i", default="lib/", help="Директория исходников")
    p_extract.add_argument("--patterns", default="gettext", choices=["gettext", "i18n"],
                           help="Набор паттернов")

    # === translate ===
    p_trans = subparsers.add_parser("translate", help="Перевести извлечённые строки")
    p_trans.add_argument("--to", "-t", required=True,
                         help="Целевые языки через запятую: es,fr,de")
    p_trans.add_argument("--quality", "-q", action="store_true",
                         help="Оценивать качество переводов")
    p_trans.add_argument("--source-lang", default=None, help="Исходный язык")
    p_trans.add_argument("--backend", default=None, choices=BACKENDS, help="Backend перевода")

    # === generate ===
    p_gen = subparsers.add_parser("generate", help="Сгенерировать файлы переводов")
    p_gen.add_argument("--format", "-f", default="json", help="Формат: " + ", ".join(SUPPORTED_FORMATS))
    p_gen.add_argument("--output", "-o", default=None, help="Директория для файлов")
    p_gen.add_argument("--output-template", default=None,
                       help="Шаблон пути: {lang}, {relative_path}, {filename}, {format}")
    p_gen.add_argument("--flat-structure", action="store_true",
                       help="Все файлы в одной директории: {filename}.{lang}.{format}")
    p_gen.add_argument("--namespace-by-file", action="store_true",
                       help="{relative_path}.{lang}.{format}")
    p_gen.add_argument("--source-lang", default=None, help="Исходный язык")

    # === models ===
    p_models = subparsers.add_parser("models", help="Кеш моделей")
    p_models.add_argument("models_command", choices=["list", "info", "clean"],
                          help="Действие")

    return parser


def main(argv: Optional[List[str]] = None):
    """Точка входа CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(level=args.log_level or "INFO", format=LOG_FORMAT)

    commands = {
        "setup": cmd_setup,
        "extract": cmd_extract,
        "translate": cmd_translate,
        "generate": cmd_generate,
        "models": cmd_models,
    }

    try:
        settings = load_settings(
            args.config,
            work_dir=args.work_dir,
            max_workers=args.workers,
            log_level=args.log_level,
            backend=getattr(args, "backend", None),
            source_lang=getattr(args, "source_lang", None),
        )
        logging.getLogger().setLevel(settings.log_level.upper())
        commands[args.command](args, settings)
    except LinguaError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
