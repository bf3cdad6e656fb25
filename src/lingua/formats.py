"""
Сериализаторы выходных файлов: json, po (GNU gettext), yaml.
"""

import json
from typing import Callable, Dict

import yaml

from . import TOOL_NAME, version
from .catalog import utc_now
from .errors import UnsupportedFormatError

_ESCAPES = [
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
]


def escape_string(value: str) -> str:
    """Экранирует \\, ", перевод строки, возврат каретки и табуляцию (строки PO)."""
    for char, replacement in _ESCAPES:
        value = value.replace(char, replacement)
    return value


def render_json(translations: Dict[str, str], lang_code: str) -> str:
    return json.dumps(translations, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def po_header(lang_code: str) -> str:
    return (
        f"# Translation file generated by {TOOL_NAME}\n"
        f"# Language: {lang_code}\n"
        f"# Generated: {utc_now()}\n"
        "\n"
        'msgid ""\n'
        'msgstr ""\n'
        '"Content-Type: text/plain; charset=UTF-8\\n"\n'
        f'"Language: {lang_code}\\n"\n'
        f'"Generated-By: {TOOL_NAME} {version()}\\n"\n'
    )


def render_po(translations: Dict[str, str], lang_code: str) -> str:
    entries = [
        f'msgid "{escape_string(original)}"\nmsgstr "{escape_string(translation)}"\n'
        for original, translation in translations.items()
    ]
    return po_header(lang_code) + "\n" + "\n".join(entries)


def render_yaml(translations: Dict[str, str], lang_code: str) -> str:
    """YAML: язык -> плоский словарь строк в двойных кавычках, порядок записей сохраняется."""
    return yaml.safe_dump(
        {lang_code: dict(translations)},
        default_style='"',
        allow_unicode=True,
        sort_keys=False,
        width=float("inf"),
    )


RENDERERS: Dict[str, Callable[[Dict[str, str], str], str]] = {
    "json": render_json,
    "po": render_po,
    "yaml": render_yaml,
}

SUPPORTED_FORMATS = tuple(RENDERERS)


def get_renderer(fmt: str) -> Callable[[Dict[str, str], str], str]:
    """Сериализатор по имени формата; неизвестный формат - фатальная ошибка."""
    try:
        return RENDERERS[fmt]
    except KeyError:
        raise UnsupportedFormatError(fmt, SUPPORTED_FORMATS)
