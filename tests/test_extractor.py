"""Тесты Extractor."""

import os

from lingua.catalog import load_string_catalog, save_string_catalog
from lingua.extractor import Extractor
from lingua.patterns import PatternType


class TestExtractor:
    """Обход дерева и сборка StringCatalog."""

    def test_collects_matching_files(self, gettext_tree):
        catalog = Extractor(max_workers=2).extract(str(gettext_tree))

        assert set(catalog.file_mapping) == {
            os.path.join(str(gettext_tree), "app.ex"),
            os.path.join(str(gettext_tree), "web", "page.eex"),
            os.path.join(str(gettext_tree), "views", "user.py"),
        }

    def test_per_file_strings_keep_pattern_order(self, gettext_tree):
        catalog = Extractor().extract(str(gettext_tree))

        app = os.path.join(str(gettext_tree), "app.ex")
        page = os.path.join(str(gettext_tree), "web", "page.eex")
        assert catalog.file_mapping[app] == ("Hello", "Goodbye", "Hello")
        assert catalog.file_mapping[page] == ("Welcome", "Hello")

    def test_strings_sorted_unique_union(self, gettext_tree):
        catalog = Extractor().extract(str(gettext_tree))

        assert list(catalog.strings) == ["Goodbye", "Hello", "One file", "Sign in", "Welcome"]
        union = {s for strings in catalog.file_mapping.values() for s in strings}
        assert set(catalog.strings) == union

    def test_hidden_dirs_and_other_extensions_skipped(self, gettext_tree):
        catalog = Extractor().extract(str(gettext_tree))

        assert "Hidden" not in catalog.strings
        assert "Not scanned" not in catalog.strings
        assert not any(path.endswith("empty.ex") for path in catalog.file_mapping)

    def test_idempotent(self, gettext_tree, tmp_path):
        extractor = Extractor(max_workers=4)
        first = extractor.extract(str(gettext_tree))
        second = extractor.extract(str(gettext_tree))

        assert first.strings == second.strings
        assert first.file_mapping == second.file_mapping

        first_path, second_path = tmp_path / "a.json", tmp_path / "b.json"
        save_string_catalog(first, first_path)
        save_string_catalog(second, second_path)
        first_text = first_path.read_text(encoding="utf-8").replace(first.extracted_at, "")
        second_text = second_path.read_text(encoding="utf-8").replace(second.extracted_at, "")
        assert first_text == second_text

    def test_i18n_dialect(self, i18n_tree):
        catalog = Extractor(PatternType.I18N).extract(str(i18n_tree))

        assert set(catalog.strings) == {"Welcome", "Home", "About", "Contact"}
        assert not any(path.endswith(".css") for path in catalog.file_mapping)

    def test_undecodable_file_is_skipped(self, tmp_path):
        root = tmp_path / "lib"
        root.mkdir()
        (root / "bad.ex").write_bytes(b'gettext("\xff\xfe")')
        (root / "good.ex").write_text('gettext("Ok")', encoding="utf-8")

        catalog = Extractor().extract(str(root))

        assert list(catalog.strings) == ["Ok"]
        assert list(catalog.file_mapping) == [str(root / "good.ex")]

    def test_empty_directory(self, tmp_path):
        catalog = Extractor().extract(str(tmp_path))

        assert catalog.strings == ()
        assert catalog.file_mapping == {}

    def test_artifact_roundtrip(self, gettext_tree, tmp_path):
        catalog = Extractor().extract(str(gettext_tree))
        path = tmp_path / "work" / "lingua_strings.json"

        save_string_catalog(catalog, path)
        loaded = load_string_catalog(path)

        assert loaded == catalog

    def test_report(self, gettext_tree):
        catalog = Extractor().extract(str(gettext_tree))
        report = Extractor.generate_report(catalog)

        assert report["total_strings"] == 5
        assert report["files"] == 3
        assert report["total_occurrences"] == 7

    def test_unreadable_directory_is_skipped(self, gettext_tree, monkeypatch, caplog):
        """Директория без прав на чтение пропускается, соседи сканируются."""
        blocked = os.path.join(str(gettext_tree), "web")
        real_scandir = os.scandir

        def scandir(path):
            if os.fspath(path) == blocked:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr("lingua.extractor.os.scandir", scandir)

        catalog = Extractor(max_workers=2).extract(str(gettext_tree))

        assert set(catalog.file_mapping) == {
            os.path.join(str(gettext_tree), "app.ex"),
            os.path.join(str(gettext_tree), "views", "user.py"),
        }
        assert "Welcome" not in catalog.strings
        assert "Sign in" in catalog.strings
        assert "Не удалось прочитать директорию" in caplog.text
        assert blocked in caplog.text
