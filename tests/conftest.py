"""
Общие фикстуры тестов lingua.

- дерево исходников во временной директории (gettext и i18n)
- настройки с временными work_dir / models_dir
- фейковый backend перевода, записывающий вызовы
"""

import threading
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest

from lingua.backends.base import TranslationBackend
from lingua.config import LinguaSettings


class FakeBackend(TranslationBackend):
    """Backend для тестов: "[tag] text", падает на строках из fail_on."""

    name = "fake"

    def __init__(self, fail_on: Optional[Set[str]] = None):
        self.fail_on = set(fail_on or ())
        self.calls: List[Tuple[str, str, str]] = []
        self.loaded = False
        self.closed = False
        self._lock = threading.Lock()

    def load(self) -> None:
        self.loaded = True

    def translate(self, text: str, source_tag: str, target_tag: str) -> str:
        with self._lock:
            self.calls.append((text, source_tag, target_tag))
        if text in self.fail_on:
            raise RuntimeError(f"backend failure: {text}")
        return f"[{target_tag}] {text}"

    def close(self) -> None:
        self.closed = True


def write_files(root: Path, files: Dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def settings(tmp_path: Path) -> LinguaSettings:
    """Настройки с изолированными директориями и identity backend'ом."""
    return LinguaSettings(
        work_dir=tmp_path / "work",
        models_dir=tmp_path / "models",
        backend="identity",
        max_workers=4,
    )


@pytest.fixture
def gettext_tree(tmp_path: Path) -> Path:
    """Небольшой проект с gettext-вызовами."""
    return write_files(tmp_path / "lib", {
        "app.ex": (
            'defmodule App do\n'
            '  def hello, do: gettext("Hello")\n'
            '  def bye, do: gettext("Goodbye")\n'
            '  def again, do: gettext("Hello")\n'
            'end\n'
        ),
        "web/page.eex": '<h1><%= gettext("Welcome") %></h1>\n<p><%= _("Hello") %></p>\n',
        "views/user.py": 'print(_("Sign in"))\nprint(ngettext("One file", "Many files", 2))\n',
        "README.md": 'gettext("Not scanned")\n',
        "empty.ex": "defmodule Empty do\nend\n",
        ".hidden/secret.ex": 'gettext("Hidden")\n',
    })


@pytest.fixture
def i18n_tree(tmp_path: Path) -> Path:
    """Фронтенд-проект с вызовами t()."""
    return write_files(tmp_path / "src", {
        "App.tsx": 'export const App = () => <h1>{t("Welcome")}</h1>;\n',
        "components/Header.jsx": "const title = t('Home');\nconst about = i18next.t(\"About\");\n",
        "components/Footer.vue": '<template>{{ t("Contact") }}</template>\n',
        "styles.css": 'content: t("Ignored");\n',
    })


@pytest.fixture
def failing_backend():
    """Фабрика backend'ов, падающих на заданных строках."""
    return lambda fail_on: FakeBackend(fail_on=fail_on)
