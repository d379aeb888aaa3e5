"""Tests for the selection matrix."""

import itertools

import pytest

from cms_translate.locales import get_locale
from cms_translate.models import ContentSummary, TranslationRecord, UnitStatus
from cms_translate.services.selection import SelectionMatrix


def content(content_id: str, type: str = "attraction") -> ContentSummary:
    return ContentSummary(id=content_id, title=content_id.upper(), type=type, status="published")


def record(content_id: str, locale: str, status: str = "completed") -> TranslationRecord:
    return TranslationRecord(content_id=content_id, locale=locale, status=status)


@pytest.fixture
def matrix() -> SelectionMatrix:
    contents = [content("a"), content("b", "hotel"), content("c", "hotel")]
    translations = [
        record("b", "ar"),
        record("c", "ar"),
        record("c", "fr"),
        record("a", "fr", "pending"),
    ]
    locales = [get_locale("ar"), get_locale("fr")]
    return SelectionMatrix(contents, translations, locales=locales)


def test_status_defaults_to_missing(matrix):
    assert matrix.status_of("a", "ar") is UnitStatus.MISSING
    assert matrix.status_of("a", "fr") is UnitStatus.PENDING
    assert matrix.status_of("unknown", "ar") is UnitStatus.MISSING


def test_toggle_is_symmetric(matrix):
    matrix.toggle_content("a")
    matrix.toggle_locale("ar")
    assert matrix.selected_content_ids == ["a"]
    assert matrix.selected_locales == ["ar"]

    matrix.toggle_content("a")
    matrix.toggle_locale("ar")
    assert matrix.selected_content_ids == []
    assert matrix.selected_locales == []


def test_work_list_excludes_completed_units(matrix):
    for content_id in ("a", "b", "c"):
        matrix.toggle_content(content_id)
    matrix.select_all_locales()

    pairs = {(u.content_id, u.locale) for u in matrix.compute_work_list()}

    expected = {
        (cid, code)
        for cid, code in itertools.product(["a", "b", "c"], ["ar", "fr"])
        if not matrix.status_of(cid, code).is_completed
    }
    assert pairs == expected == {("a", "ar"), ("a", "fr"), ("b", "fr")}


def test_work_list_keeps_selection_order(matrix):
    matrix.toggle_content("b")
    matrix.toggle_content("a")
    matrix.toggle_locale("fr")

    assert [u.content_id for u in matrix.compute_work_list()] == ["b", "a"]


def test_work_list_is_empty_without_locales(matrix):
    matrix.select_all_content()
    assert matrix.compute_work_list() == []


def test_select_all_content_twice_clears(matrix):
    matrix.select_all_content()
    assert matrix.selected_content_ids == ["a", "b", "c"]

    matrix.select_all_content()
    assert matrix.selected_content_ids == []


def test_select_all_content_completes_partial_selection(matrix):
    matrix.toggle_content("b")
    matrix.select_all_content()
    assert set(matrix.selected_content_ids) == {"a", "b", "c"}


def test_select_all_content_is_filter_scoped(matrix):
    matrix.content_type_filter = "hotel"

    matrix.select_all_content()

    assert matrix.selected_content_ids == ["b", "c"]


def test_select_all_locales_toggles(matrix):
    matrix.select_all_locales()
    assert matrix.selected_locales == ["ar", "fr"]
    matrix.select_all_locales()
    assert matrix.selected_locales == []


def test_select_missing_only_overwrites_prior_selection(matrix):
    matrix.content_type_filter = "hotel"
    matrix.toggle_content("a")
    matrix.toggle_content("c")
    matrix.toggle_locale("ar")

    matrix.select_missing_only()

    # only b/fr is missing in the hotel view; c is fully translated
    assert matrix.selected_content_ids == ["b"]
    assert matrix.selected_locales == ["fr"]


def test_select_missing_only_with_nothing_missing():
    matrix = SelectionMatrix(
        [content("x")],
        [record("x", "ar")],
        locales=[get_locale("ar")],
    )
    matrix.toggle_content("x")

    matrix.select_missing_only()

    assert not matrix.has_selection


def test_locales_to_translate(matrix):
    matrix.select_all_locales()
    assert matrix.locales_to_translate("a") == ["ar", "fr"]
    assert matrix.locales_to_translate("b") == ["fr"]
    assert matrix.locales_to_translate("c") == []


def test_stats_follow_filter(matrix):
    stats = matrix.stats()
    assert (stats.total, stats.translated, stats.missing) == (6, 3, 3)
    assert stats.percentage == 50

    matrix.content_type_filter = "hotel"
    stats = matrix.stats()
    assert (stats.total, stats.translated, stats.missing, stats.percentage) == (4, 3, 1, 75)


def test_stats_on_empty_matrix():
    stats = SelectionMatrix([]).stats()
    assert stats.total == 0
    assert stats.percentage == 0


def test_default_locales_exclude_english():
    matrix = SelectionMatrix([content("a")])
    assert "en" not in matrix.locale_codes
    assert len(matrix.locale_codes) == 16


def test_load_translations_replaces_snapshot(matrix):
    matrix.load_translations([record("a", "ar")])
    assert matrix.status_of("a", "ar") is UnitStatus.COMPLETED
    assert matrix.status_of("b", "ar") is UnitStatus.MISSING
