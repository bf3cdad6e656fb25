"""
lingua - build-time pipeline локализации.

Модули:
- patterns: наборы правил поиска переводимых строк (gettext / i18n)
- extractor: обход исходников и извлечение строк -> StringCatalog
- translator: конкурентный перевод (файл x язык) -> TranslationCatalog
- quality: эвристики качества перевода
- paths: стратегии путей выходных файлов
- generator: генерация json / po / yaml файлов
- cli: команды setup / extract / translate / generate / models
"""

__version__ = "0.1.0"

TOOL_NAME = "lingua"


def version() -> str:
    """Возвращает версию инструмента."""
    return __version__
