"""Тесты Translator и разбора целевых языков."""

import logging

import pytest

from lingua.catalog import StringCatalog
from lingua.errors import NoValidTargetLanguages
from lingua.patterns import PatternType
from lingua.translator import Translator, parse_target_languages


def make_catalog(file_mapping):
    return StringCatalog.build("/project/lib", PatternType.GETTEXT, file_mapping)


class TestParseTargetLanguages:
    def test_comma_separated(self):
        assert parse_target_languages(" es, fr ,de") == ["es", "fr", "de"]

    def test_duplicates_and_empty_entries_dropped(self):
        assert parse_target_languages("es,,es,fr,") == ["es", "fr"]

    def test_unsupported_dropped_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_target_languages(["es", "xx"]) == ["es"]
        assert "xx" in caplog.text

    def test_nothing_valid(self):
        with pytest.raises(NoValidTargetLanguages) as exc_info:
            parse_target_languages("xx,yy")
        assert exc_info.value.requested == ["xx", "yy"]

    def test_none(self):
        with pytest.raises(NoValidTargetLanguages):
            parse_target_languages(None)


class TestTranslator:
    """Fan-out (файл x язык) и сборка TranslationCatalog."""

    def test_single_file_es_and_unsupported(self, fake_backend):
        catalog = make_catalog({"/project/lib/a.ex": ["Hello", "Bye"]})

        result = Translator(fake_backend, max_workers=2).translate(catalog, ["es", "xx"])

        assert result.target_languages == ("es",)
        assert list(result.translations) == ["es"]
        units = result.translations["es"]
        assert len(units) == 2
        assert {u.original for u in units} == {"Hello", "Bye"}
        assert all(u.language == "es" for u in units)
        assert result.lookup("es")["Hello"] == "[spa_Latn] Hello"
        assert result.source_strings == 2

    def test_fan_out_completeness(self, fake_backend):
        catalog = make_catalog({
            "/project/lib/a.ex": ["Hello", "Bye", "Hello"],
            "/project/lib/b.ex": ["Hello", "Welcome"],
            "/project/lib/c.ex": ["Save"],
        })

        result = Translator(fake_backend, max_workers=8).translate(catalog, "es,fr,de")

        # уникальные по файлам: 2 + 2 + 1
        assert result.unit_count == 5 * 3
        for lang in ("es", "fr", "de"):
            assert len(result.translations[lang]) == 5
            assert set(result.lookup(lang)) == {"Hello", "Bye", "Welcome", "Save"}

    def test_dedup_is_per_file(self, fake_backend):
        catalog = make_catalog({
            "/project/lib/a.ex": ["Hello"],
            "/project/lib/b.ex": ["Hello"],
        })

        Translator(fake_backend).translate(catalog, "fr")

        assert [call[0] for call in fake_backend.calls] == ["Hello", "Hello"]

    def test_backend_tags(self, fake_backend):
        catalog = make_catalog({"/project/lib/a.ex": ["Hello"]})

        Translator(fake_backend, source_lang="en").translate(catalog, "ja")

        assert fake_backend.calls == [("Hello", "eng_Latn", "jpn_Jpan")]

    def test_failed_string_falls_back_to_original(self, failing_backend, caplog):
        backend = failing_backend({"Broken"})
        catalog = make_catalog({"/project/lib/a.ex": ["Hello", "Broken", "Bye"]})

        with caplog.at_level(logging.ERROR):
            result = Translator(backend).translate(catalog, "es")

        lookup = result.lookup("es")
        assert lookup["Broken"] == "Broken"
        assert lookup["Hello"] == "[spa_Latn] Hello"
        assert lookup["Bye"] == "[spa_Latn] Bye"
        assert "Broken" in caplog.text

    def test_quality_check_runs_per_pair(self, fake_backend):
        checked = []

        class RecordingChecker:
            def check(self, original, translation, language_code=None):
                checked.append((original, language_code))

                class Result:
                    overall_score = 1.0
                return Result()

        catalog = make_catalog({"/project/lib/a.ex": ["Hello", "Bye"]})
        translator = Translator(fake_backend, checker=RecordingChecker())

        translator.translate(catalog, "es,fr", quality_check=True)
        assert sorted(checked) == [("Bye", "es"), ("Bye", "fr"), ("Hello", "es"), ("Hello", "fr")]

        checked.clear()
        translator.translate(catalog, "es", quality_check=False)
        assert checked == []

    def test_empty_catalog(self, fake_backend):
        result = Translator(fake_backend).translate(make_catalog({}), "es")

        assert result.translations == {"es": ()}
        assert result.unit_count == 0
