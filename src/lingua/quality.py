"""
QualityChecker - эвристики качества перевода.

Четыре независимые проверки, каждая даёт оценку 0.0-1.0:
- length_ratio: соотношение длин перевода и оригинала
- placeholders_preserved: сохранность плейсхолдеров {x}, {{x}}, %s, %{x}, <tag>
- basic_formatting: пробелы по краям и финальная пунктуация
- not_empty: перевод не пустой и отличается от оригинала

Оценка только информативная: низкий балл логируется, но pipeline не блокирует.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Set

logger = logging.getLogger(__name__)

# Порог, ниже которого проверка попадает в issues
ISSUE_THRESHOLD = 0.8
# Порог общей оценки для предупреждения в лог
WARN_THRESHOLD = 0.6

PLACEHOLDER_PATTERNS = [
    re.compile(r"\{\{[^}]+\}\}"),   # {{variable}}
    re.compile(r"\{[^}]+\}"),       # {variable}
    re.compile(r"%[sdf]"),          # %s, %d, %f
    re.compile(r"%\{[^}]+\}"),      # %{variable}
    re.compile(r"<[^>]+>"),         # <tag>
]


@dataclass(frozen=True)
class QualityCheck:
    name: str
    score: float
    message: str


@dataclass
class QualityResult:
    """Результат проверки одной пары (оригинал, перевод)."""
    overall_score: float
    checks: List[QualityCheck] = field(default_factory=list)
    issues: List[QualityCheck] = field(default_factory=list)



def extract_placeholders(text: str) -> Set[str]:
    """Все плейсхолдеры строки (как множество)."""
    found: Set[str] = set()
    for pattern in PLACEHOLDER_PATTERNS:
        found.update(pattern.findall(text))
    return found


def check_length_ratio(original: str, translation: str) -> QualityCheck:
    ratio = len(translation) / len(original) if original else 1.0

    # Допустимый диапазон 0.5x - 3.0x
    if 0.5 <= ratio <= 3.0:
        score = 1.0
    elif 0.3 <= ratio < 0.5 or 3.0 < ratio <= 5.0:
        score = 0.7
    else:
        score = 0.3

    return QualityCheck("length_ratio", score, f"Соотношение длин: {ratio:.2f}x")


def check_placeholders_preserved(original: str, translation: str) -> QualityCheck:
    original_ph = extract_placeholders(original)
    translation_ph = extract_placeholders(translation)

    missing = sorted(original_ph - translation_ph)
    extra = sorted(translation_ph - original_ph)

    if not missing and not extra:
        score = 1.0
    elif len(missing) <= 1 and not extra:
        score = 0.8
    elif len(missing) + len(extra) <= 2:
        score = 0.6
    else:
        score = 0.2

    parts = []
    if extra:
        parts.append(f"лишние: {extra}")
    if missing:
        parts.append(f"потеряны: {missing}")
    message = ", ".join(parts) if parts else "Все плейсхолдеры сохранены"

    return QualityCheck("placeholders_preserved", score, message)


def check_basic_formatting(original: str, translation: str) -> QualityCheck:
    pairs = [
        (original.startswith(" "), translation.startswith(" ")),
        (original.endswith(" "), translation.endswith(" ")),
        (original.endswith("."), translation.endswith(".")),
        (original.endswith("!"), translation.endswith("!")),
        (original.endswith("?"), translation.endswith("?")),
    ]
    matching = sum(1 for orig, trans in pairs if orig == trans)
    return QualityCheck(
        "basic_formatting",
        matching / len(pairs),
        f"Форматирование: совпало {matching}/{len(pairs)}",
    )


def check_not_empty(original: str, translation: str) -> QualityCheck:
    stripped_orig = original.strip()
    stripped_trans = translation.strip()

    if not stripped_trans and stripped_orig:
        return QualityCheck("not_empty", 0.0, "Перевод пустой")
    if stripped_trans == stripped_orig:
        # Может быть и легитимно (имена собственные, заимствования)
        return QualityCheck("not_empty", 0.5, "Перевод совпадает с оригиналом")
    return QualityCheck("not_empty", 1.0, "Перевод не пустой")


class QualityChecker:
    """Оценивает пару (оригинал, перевод). Без состояния, потокобезопасен."""

    def __init__(self, warn_threshold: float = WARN_THRESHOLD):
        self.warn_threshold = warn_threshold

    def check(self, original: str, translation: str,
              language_code: Optional[str] = None) -> QualityResult:
        """
        Прогоняет все четыре проверки.

        Args:
            original: Исходная строка
            translation: Перевод
            language_code: Код целевого языка (только для логов)

        Returns:
            QualityResult
        """
        checks = [
            check_length_ratio(original, translation),
            check_placeholders_preserved(original, translation),
            check_basic_formatting(original, translation),
            check_not_empty(original, translation),
        ]
        overall = sum(c.score for c in checks) / len(checks)
        result = QualityResult(
            overall_score=overall,
            checks=checks,
            issues=[c for c in checks if c.score < ISSUE_THRESHOLD],
        )

        if overall < self.warn_threshold:
            logger.warning("Низкое качество перевода (%s):", language_code or "?")
            logger.warning("  Оригинал: %s", original)
            logger.warning("  Перевод: %s", translation)
            logger.warning("  Оценка: %.2f", overall)
            for issue in result.issues:
                logger.warning("  Проблема: %s - %s", issue.name, issue.message)

        return result
