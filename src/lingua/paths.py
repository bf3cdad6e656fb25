"""
PathResolver - вычисление путей выходных файлов.

Стратегии (выбираются по переданным опциям, в порядке приоритета):
    template    - пользовательский шаблон, например "public/locales/{lang}/{filename}.{format}"
    flat        - {output_dir}/{filename}.{lang}.{format}
    namespaced  - {output_dir}/{relative_stem}.{lang}.{format}
    default     - {output_dir}/{lang}/{relative_stem}.{format}

Переменные шаблона: {lang}, {relative_path}, {filename}, {format}.
Результат шаблона всегда относителен директории исходников.
"""

import os
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple, Union

from .errors import OutputCollisionError


@dataclass(frozen=True)
class DefaultOutput:
    output_dir: str
    strategy = "default"


@dataclass(frozen=True)
class FlatOutput:
    output_dir: str
    strategy = "flat"


@dataclass(frozen=True)
class NamespacedOutput:
    output_dir: str
    strategy = "namespaced"


@dataclass(frozen=True)
class TemplateOutput:
    pattern: str
    strategy = "template"


OutputConfig = Union[DefaultOutput, FlatOutput, NamespacedOutput, TemplateOutput]


def _under_source(path: str, source_directory: str) -> str:
    """Относительные пути считаются от директории исходников."""
    return path if os.path.isabs(path) else os.path.join(source_directory, path)


def determine_output_config(source_directory: str,
                            output: Optional[str] = None,
                            output_template: Optional[str] = None,
                            flat_structure: bool = False,
                            namespace_by_file: bool = False) -> OutputConfig:
    """
    Выбирает стратегию по опциям генерации.

    Args:
        source_directory: Директория исходников из StringCatalog
        output: --output
        output_template: --output-template
        flat_structure: --flat-structure
        namespace_by_file: --namespace-by-file

    Returns:
        OutputConfig
    """
    if output_template:
        return TemplateOutput(pattern=output_template)
    if flat_structure:
        return FlatOutput(output_dir=_under_source(output or "locales", source_directory))
    if namespace_by_file:
        return NamespacedOutput(output_dir=_under_source(output or "translations", source_directory))
    return DefaultOutput(output_dir=output or os.path.join(source_directory, "translations"))


def _relative_stem(file_path: str, source_directory: str) -> str:
    return os.path.splitext(os.path.relpath(file_path, source_directory))[0]


def _filename(file_path: str) -> str:
    return os.path.splitext(os.path.basename(file_path))[0]


def resolve_template(pattern: str, file_path: str, lang_code: str,
                     fmt: str, source_directory: str) -> str:
    resolved = (
        pattern
        .replace("{lang}", lang_code)
        .replace("{relative_path}", f"{_relative_stem(file_path, source_directory)}.{fmt}")
        .replace("{filename}", _filename(file_path))
        .replace("{format}", fmt)
    )
    # абсолютный шаблон тоже остаётся внутри директории исходников
    return os.path.join(source_directory, resolved.lstrip("/\\"))


def resolve_output_path(file_path: str, lang_code: str, fmt: str,
                        source_directory: str, config: OutputConfig) -> str:
    """Путь выходного файла для пары (файл, язык)."""
    if isinstance(config, TemplateOutput):
        return resolve_template(config.pattern, file_path, lang_code, fmt, source_directory)

    if isinstance(config, FlatOutput):
        return os.path.join(config.output_dir, f"{_filename(file_path)}.{lang_code}.{fmt}")

    if isinstance(config, NamespacedOutput):
        stem = _relative_stem(file_path, source_directory)
        return os.path.join(config.output_dir, f"{stem}.{lang_code}.{fmt}")

    if isinstance(config, DefaultOutput):
        stem = _relative_stem(file_path, source_directory)
        return os.path.join(config.output_dir, lang_code, f"{stem}.{fmt}")

    raise TypeError(f"Неизвестная конфигурация вывода: {config!r}")


def plan_output_paths(files: Iterable[str], languages: Iterable[str], fmt: str,
                      source_directory: str, config: OutputConfig) -> Dict[Tuple[str, str], str]:
    """
    Пути для всех пар (файл, язык) с проверкой уникальности.

    Raises:
        OutputCollisionError: две разные пары дают один путь
    """
    planned: Dict[Tuple[str, str], str] = {}
    owners: Dict[str, Tuple[str, str]] = {}
    files = list(files)

    for lang in languages:
        for file_path in files:
            pair = (file_path, lang)
            if pair in planned:
                continue
            path = os.path.normpath(resolve_output_path(file_path, lang, fmt, source_directory, config))
            if path in owners:
                raise OutputCollisionError(path, owners[path], pair)
            owners[path] = pair
            planned[pair] = path

    return planned
