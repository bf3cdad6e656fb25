"""
Наборы паттернов для поиска переводимых строк.

Каждый паттерн захватывает ровно один литерал (group 1).
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .errors import ConfigurationError


class PatternType(Enum):
    """Диалект разметки переводимых строк."""
    GETTEXT = "gettext"     # gettext(), dgettext(), ngettext(), _()
    I18N = "i18n"           # t(), i18next.t(), {t()}


@dataclass(frozen=True)
class PatternSet:
    """Именованный набор правил для одного диалекта."""
    name: str
    extensions: Tuple[str, ...]
    patterns: Tuple[re.Pattern, ...]

    def matches_file(self, filename: str) -> bool:
        return filename.endswith(self.extensions)


GETTEXT_PATTERNS = PatternSet(
    name=PatternType.GETTEXT.value,
    extensions=(".ex", ".exs", ".eex", ".leex", ".heex", ".py"),
    patterns=tuple(re.compile(p) for p in (
        # gettext("...")
        r'gettext\(\s*"([^"]+)"\s*\)',
        r"gettext\(\s*'([^']+)'\s*\)",
        # dgettext("domain", "...")
        r'dgettext\(\s*"[^"]+"\s*,\s*"([^"]+)"\s*\)',
        r"dgettext\(\s*'[^']+'\s*,\s*'([^']+)'\s*\)",
        # ngettext("one", "many", n) - только единственное число
        r'ngettext\(\s*"([^"]+)"\s*,\s*"[^"]+"\s*,\s*\d+\s*\)',
        r"ngettext\(\s*'([^']+)'\s*,\s*'[^']+'\s*,\s*\d+\s*\)",
        # _("...")
        r'_\(\s*"([^"]+)"\s*\)',
        r"_\(\s*'([^']+)'\s*\)",
    )),
)

I18N_PATTERNS = PatternSet(
    name=PatternType.I18N.value,
    extensions=(".js", ".jsx", ".ts", ".tsx", ".vue"),
    patterns=tuple(re.compile(p) for p in (
        # t("...") (react-i18next, vue-i18n)
        r'\bt\(\s*"([^"]+)"\s*\)',
        r"\bt\(\s*'([^']+)'\s*\)",
        # i18next.t("...")
        r'i18next\.t\(\s*"([^"]+)"\s*\)',
        r"i18next\.t\(\s*'([^']+)'\s*\)",
        # {t("...")} в JSX
        r'\{\s*t\(\s*"([^"]+)"\s*\)\s*\}',
        r"\{\s*t\(\s*'([^']+)'\s*\)\s*\}",
    )),
)

_PATTERN_SETS = {
    PatternType.GETTEXT: GETTEXT_PATTERNS,
    PatternType.I18N: I18N_PATTERNS,
}


def parse_pattern_type(value) -> PatternType:
    """Строка или PatternType -> PatternType."""
    if isinstance(value, PatternType):
        return value
    try:
        return PatternType(value)
    except ValueError:
        available = ", ".join(t.value for t in PatternType)
        raise ConfigurationError(f"Неизвестный тип паттернов: {value!r}. Доступные: {available}")


def get_pattern_set(pattern_type) -> PatternSet:
    return _PATTERN_SETS[parse_pattern_type(pattern_type)]


def extract_from_text(content: str, pattern_set: PatternSet) -> List[str]:
    """Применяет все паттерны к тексту; результаты в порядке паттернов, без дедупликации."""
    found: List[str] = []
    for pattern in pattern_set.patterns:
        found.extend(match.group(1) for match in pattern.finditer(content))
    return found
