#!/usr/bin/env python3
"""
Catalog - промежуточные артефакты pipeline.

Стадии обмениваются только через два JSON-файла:
    lingua_strings.json       - StringCatalog (результат extract)
    lingua_translations.json  - TranslationCatalog (результат translate)

Оба файла перезаписываются целиком при каждом запуске стадии.
Запись атомарная: временный файл в той же директории + os.replace.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Tuple

from .errors import LinguaError, MissingArtifactError
from .patterns import PatternType, parse_pattern_type

logger = logging.getLogger(__name__)


def utc_now() -> str:
    """Текущее время в ISO-8601 (UTC)."""
    return datetime.now(timezone.utc).isoformat()


def unique(items) -> List[str]:
    """Дедупликация с сохранением порядка первого вхождения."""
    return list(dict.fromkeys(items))


@dataclass(frozen=True)
class StringCatalog:
    """Результат извлечения: уникальные строки + соответствие файл -> строки."""
    extracted_at: str
    source_directory: str
    pattern_type: PatternType
    strings: Tuple[str, ...]
    file_mapping: Dict[str, Tuple[str, ...]]

    @classmethod
    def build(cls, source_directory: str, pattern_type: PatternType,
              file_mapping: Dict[str, List[str]]) -> "StringCatalog":
        """Строит каталог из сырых результатов; файлы без строк отбрасываются."""
        mapping = {
            path: tuple(strings)
            for path, strings in sorted(file_mapping.items())
            if strings
        }
        all_strings = sorted({s for strings in mapping.values() for s in strings})
        return cls(
            extracted_at=utc_now(),
            source_directory=source_directory,
            pattern_type=pattern_type,
            strings=tuple(all_strings),
            file_mapping=mapping,
        )

    def unique_strings_for(self, file_path: str) -> List[str]:
        return unique(self.file_mapping.get(file_path, ()))

    def to_dict(self) -> Dict:
        return {
            "extracted_at": self.extracted_at,
            "source_directory": self.source_directory,
            "pattern_type": self.pattern_type.value,
            "strings": list(self.strings),
            "file_mapping": {k: list(v) for k, v in sorted(self.file_mapping.items())},
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "StringCatalog":
        return cls(
            extracted_at=data.get("extracted_at", ""),
            source_directory=data["source_directory"],
            pattern_type=parse_pattern_type(data.get("pattern_type", "gettext")),
            strings=tuple(data.get("strings", [])),
            file_mapping={k: tuple(v) for k, v in (data.get("file_mapping") or {}).items()},
        )


@dataclass(frozen=True)
class TranslationUnit:
    """Перевод одной строки на один язык."""
    original: str
    translation: str
    language: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "original": self.original,
            "translation": self.translation,
            "language": self.language,
        }


@dataclass(frozen=True)
class TranslationCatalog:
    """Результат перевода, сгруппированный по языкам."""
    translated_at: str
    source_strings: int
    target_languages: Tuple[str, ...]
    translations: Dict[str, Tuple[TranslationUnit, ...]] = field(default_factory=dict)

    @property
    def unit_count(self) -> int:
        return sum(len(units) for units in self.translations.values())

    def lookup(self, language: str) -> Dict[str, str]:
        """original -> translation для одного языка."""
        return {u.original: u.translation for u in self.translations.get(language, ())}

    def to_dict(self) -> Dict:
        return {
            "translated_at": self.translated_at,
            "source_strings": self.source_strings,
            "target_languages": list(self.target_languages),
            "translations": {
                lang: [u.to_dict() for u in units]
                for lang, units in sorted(self.translations.items())
            },
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "TranslationCatalog":
        translations = {}
        for lang, units in (data.get("translations") or {}).items():
            translations[lang] = tuple(
                TranslationUnit(
                    original=u["original"],
                    translation=u.get("translation", u["original"]),
                    language=u.get("language", lang),
                )
                for u in units
            )
        return cls(
            translated_at=data.get("translated_at", ""),
            source_strings=data.get("source_strings", 0),
            target_languages=tuple(data.get("target_languages", [])),
            translations=translations,
        )


# ── Файловый ввод/вывод ──

def write_json_atomic(path: Path, data: Dict) -> None:
    """Пишет JSON через временный файл и os.replace."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def _read_json(path: Path, stage: str) -> Dict:
    if not path.exists():
        raise MissingArtifactError(str(path), stage)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise LinguaError(
            f"Файл {path} повреждён ({exc}). Перезапустите 'lingua {stage}'."
        )


def save_string_catalog(catalog: StringCatalog, path: Path) -> None:
    write_json_atomic(path, catalog.to_dict())
    logger.info("Извлечённые строки сохранены в %s", path)


def load_string_catalog(path: Path) -> StringCatalog:
    """Загружает lingua_strings.json; отсутствие файла - фатальная ошибка."""
    return StringCatalog.from_dict(_read_json(Path(path), "extract"))


def save_translation_catalog(catalog: TranslationCatalog, path: Path) -> None:
    write_json_atomic(path, catalog.to_dict())
    logger.info("Переводы сохранены в %s", path)


def load_translation_catalog(path: Path) -> TranslationCatalog:
    """Загружает lingua_translations.json; отсутствие файла - фатальная ошибка."""
    return TranslationCatalog.from_dict(_read_json(Path(path), "translate"))
