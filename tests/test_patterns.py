"""Тесты наборов паттернов извлечения."""

import pytest

from lingua.errors import ConfigurationError
from lingua.patterns import (
    GETTEXT_PATTERNS,
    I18N_PATTERNS,
    PatternType,
    extract_from_text,
    get_pattern_set,
    parse_pattern_type,
)


class TestGettextPatterns:
    """Диалект gettext."""

    @pytest.mark.parametrize("source, expected", [
        ('gettext("Hello")', ["Hello"]),
        ("gettext('Hello')", ["Hello"]),
        ('dgettext("errors", "Not found")', ["Not found"]),
        ("dgettext('errors', 'Not found')", ["Not found"]),
        ('ngettext("One item", "%d items", 3)', ["One item"]),
        ("ngettext('One item', '%d items', 3)", ["One item"]),
        ('_("Save")', ["Save"]),
        ("_('Save')", ["Save"]),
    ])
    def test_single_call(self, source, expected):
        assert extract_from_text(source, GETTEXT_PATTERNS) == expected

    def test_results_in_pattern_order_without_dedup(self):
        content = '_("B")\ngettext("A")\ngettext("A")\n'
        assert extract_from_text(content, GETTEXT_PATTERNS) == ["A", "A", "B"]

    def test_non_literal_argument_ignored(self):
        assert extract_from_text("gettext(message)", GETTEXT_PATTERNS) == []

    def test_extensions(self):
        assert GETTEXT_PATTERNS.matches_file("page.html.heex")
        assert GETTEXT_PATTERNS.matches_file("views.py")
        assert not GETTEXT_PATTERNS.matches_file("app.js")


class TestI18nPatterns:
    """Диалект i18n (react-i18next, vue-i18n)."""

    def test_t_call(self):
        assert extract_from_text("t('Home')", I18N_PATTERNS) == ["Home"]

    def test_i18next_call(self):
        strings = extract_from_text('i18next.t("About")', I18N_PATTERNS)
        assert set(strings) == {"About"}

    def test_jsx_expression(self):
        strings = extract_from_text('<h1>{t("Welcome")}</h1>', I18N_PATTERNS)
        assert "Welcome" in strings

    def test_word_boundary(self):
        assert extract_from_text('format("x")', I18N_PATTERNS) == []

    def test_extensions(self):
        assert I18N_PATTERNS.matches_file("App.tsx")
        assert I18N_PATTERNS.matches_file("Footer.vue")
        assert not I18N_PATTERNS.matches_file("styles.css")


class TestPatternType:
    def test_parse_string(self):
        assert parse_pattern_type("i18n") is PatternType.I18N
        assert get_pattern_set("gettext") is GETTEXT_PATTERNS

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError):
            parse_pattern_type("angular")
