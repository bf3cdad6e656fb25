"""
Таблица поддерживаемых языков: ISO 639-1 -> название -> тег backend'а (NLLB).
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Language:
    code: str       # ISO 639-1
    name: str
    tag: str        # Тег модели NLLB (Flores-200)


SUPPORTED_LANGUAGES: Dict[str, Language] = {
    lang.code: lang for lang in (
        Language("en", "English", "eng_Latn"),
        Language("es", "Spanish", "spa_Latn"),
        Language("fr", "French", "fra_Latn"),
        Language("de", "German", "deu_Latn"),
        Language("pt", "Portuguese", "por_Latn"),
        Language("it", "Italian", "ita_Latn"),
        Language("ja", "Japanese", "jpn_Jpan"),
        Language("zh", "Chinese", "zho_Hans"),
        Language("ko", "Korean", "kor_Hang"),
        Language("ru", "Russian", "rus_Cyrl"),
        Language("ar", "Arabic", "arb_Arab"),
    )
}

# Тег для кодов, которых нет в таблице
DEFAULT_TAG = "spa_Latn"

_BY_TAG: Dict[str, Language] = {lang.tag: lang for lang in SUPPORTED_LANGUAGES.values()}


def is_supported(code: str) -> bool:
    return code in SUPPORTED_LANGUAGES


def language_name(code: str) -> str:
    """Название языка по коду (сам код, если язык неизвестен)."""
    lang = SUPPORTED_LANGUAGES.get(code)
    return lang.name if lang else code


def backend_tag(code: str) -> str:
    """ISO-код -> тег backend'а; неизвестные коды получают DEFAULT_TAG."""
    lang = SUPPORTED_LANGUAGES.get(code)
    return lang.tag if lang else DEFAULT_TAG


def language_for_tag(tag: str) -> Optional[Language]:
    return _BY_TAG.get(tag)
