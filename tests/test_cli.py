"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from cms_translate import cli as cli_module
from cms_translate.cli import cli

from .conftest import make_client

runner = CliRunner()


@pytest.fixture(autouse=True)
def fake_backend(monkeypatch, fake_cms):
    monkeypatch.setattr(cli_module, "_make_client", lambda: make_client(fake_cms))
    monkeypatch.setattr(cli_module.config, "api_url", "http://cms.test")
    monkeypatch.setattr(cli_module.config, "poll_initial_delay", 0.01)
    monkeypatch.setattr(cli_module.config, "poll_interval", 0.01)
    return fake_cms


def test_locales_lists_tiers():
    result = runner.invoke(cli, ["locales"])

    assert result.exit_code == 0, result.output
    assert "Filipino" in result.output
    assert "High ROI" in result.output


def test_matrix_shows_coverage(fake_cms):
    fake_cms.set_translation("a", "ar")

    result = runner.invoke(cli, ["matrix"])

    assert result.exit_code == 0, result.output
    assert "Coverage" in result.output
    assert "1 completed" in result.output
    assert "47 missing" in result.output


def test_bulk_translates_everything(fake_cms):
    result = runner.invoke(cli, ["bulk", "--all-content", "--all-locales", "--yes"])

    assert result.exit_code == 0, result.output
    assert "Translate 48 items" in result.output
    assert "48 translations created, 0 failed" in result.output
    assert [cid for cid, _ in fake_cms.translate_requests] == ["a", "b", "c"]


def test_bulk_reports_failures(fake_cms):
    fake_cms.fail_content_ids.add("b")

    result = runner.invoke(cli, ["bulk", "--missing-only", "--type", "hotel", "--yes"])

    assert result.exit_code == 0, result.output
    assert "0 translations created, 16 failed" in result.output


def test_bulk_with_explicit_selection(fake_cms):
    result = runner.invoke(cli, ["bulk", "-c", "a", "-c", "c", "-l", "fr", "-y"])

    assert result.exit_code == 0, result.output
    assert fake_cms.translate_requests == [("a", ["fr"]), ("c", ["fr"])]


def test_bulk_can_be_declined(fake_cms):
    result = runner.invoke(cli, ["bulk", "--all-content", "--locale", "ar"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Cancelled" in result.output
    assert fake_cms.translate_requests == []


def test_bulk_with_nothing_selected(fake_cms):
    result = runner.invoke(cli, ["bulk", "--yes"])

    assert result.exit_code == 0, result.output
    assert "Nothing to translate" in result.output


def test_bulk_rejects_unknown_locale():
    result = runner.invoke(cli, ["bulk", "--locale", "xx"])

    assert result.exit_code == 2
    assert "Unsupported locale" in result.output


def test_status(fake_cms):
    fake_cms.set_translation("a", "ar")

    result = runner.invoke(cli, ["status", "a"])

    assert result.exit_code == 0, result.output
    assert "1 / 17 languages (6%)" in result.output


def test_status_for_unknown_content_aborts():
    result = runner.invoke(cli, ["status", "nope"])

    assert result.exit_code == 1
    assert "404" in result.output


def test_translate_waits_for_completion(fake_cms):
    result = runner.invoke(cli, ["translate", "a", "--all-tiers"])

    assert result.exit_code == 0, result.output
    assert "Translation started" in result.output
    assert "Translation complete" in result.output


def test_translate_failure_exits_non_zero(fake_cms):
    fake_cms.fail_translate_all = True

    result = runner.invoke(cli, ["translate", "a", "--tier", "1", "--no-wait"])

    assert result.exit_code == 1
    assert "Translation failed" in result.output


def test_translate_without_waiting(fake_cms):
    result = runner.invoke(cli, ["translate", "a", "-t", "1", "--no-wait"])

    assert result.exit_code == 0, result.output
    assert "Selected: 3 languages" in result.output
    assert "Translation complete" not in result.output


def test_cancel(fake_cms):
    fake_cms.set_translation("a", "ar", "pending")

    result = runner.invoke(cli, ["cancel", "a"])

    assert result.exit_code == 0, result.output
    assert "Translation cancelled" in result.output
    assert "(1 pending)" in result.output


def test_preview(fake_cms):
    fake_cms.set_translation("a", "fr")

    found = runner.invoke(cli, ["preview", "a", "fr"])
    missing = runner.invoke(cli, ["preview", "a", "ja"])

    assert found.exit_code == 0, found.output
    assert "a (fr)" in found.output
    assert "Meta fr" in found.output
    assert "No ja translation for a" in missing.output


def test_configuration_errors_abort(monkeypatch):
    monkeypatch.setattr(cli_module.config, "api_url", "not-a-url")

    result = runner.invoke(cli, ["status", "a"])

    assert result.exit_code == 1
    assert "Configuration errors" in result.output


def test_bulk_targets_follow_source_locale(monkeypatch, fake_cms):
    monkeypatch.setattr(cli_module.config, "source_locale", "ar")

    result = runner.invoke(cli, ["bulk", "-c", "a", "--all-locales", "-y"])

    assert result.exit_code == 0, result.output
    [(content_id, locales)] = fake_cms.translate_requests
    assert content_id == "a"
    assert "en" in locales
    assert "ar" not in locales
    assert len(locales) == 16


def test_unsupported_source_locale_aborts(monkeypatch):
    monkeypatch.setattr(cli_module.config, "source_locale", "xx")

    result = runner.invoke(cli, ["matrix"])

    assert result.exit_code == 1
    assert "CMS_SOURCE_LOCALE" in result.output


def test_preview_with_null_blocks(fake_cms):
    fake_cms.set_translation("a", "fr")
    fake_cms.translations[("a", "fr")]["blocks"] = None

    result = runner.invoke(cli, ["preview", "a", "fr"])

    assert result.exit_code == 0, result.output
    assert "Blocks: 0" in result.output
