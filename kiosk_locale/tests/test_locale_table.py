"""Tests for LocaleTable."""

from kiosk_locale.localization.languages import Language
from kiosk_locale.localization.locale_table import LocaleTable


def test_get_returns_value():
    table = LocaleTable(Language.ENGLISH)
    table.set("k", "value")
    assert table.get("k") == "value"


def test_missing_key_returns_key():
    table = LocaleTable(Language.ENGLISH)
    assert table.get("missing.key") == "missing.key"


def test_empty_value_returns_key():
    table = LocaleTable(Language.ENGLISH)
    table.set("k", "")
    assert table.get("k") == "k"
    assert table.raw("k") == ""


def test_set_overwrites():
    table = LocaleTable(Language.ENGLISH)
    table.set("k", "one")
    table.set("k", "two")
    assert table.get("k") == "two"
    assert len(table) == 1


def test_merge_adds_and_overwrites():
    base = LocaleTable(Language.ENGLISH)
    base.set("k1", "v1")
    base.set("k2", "old")
    update = LocaleTable(Language.ENGLISH)
    update.set("k2", "new")
    update.set("k3", "v3")

    base.merge(update)

    assert base.get("k1") == "v1"
    assert base.get("k2") == "new"
    assert base.get("k3") == "v3"
    assert sorted(base) == ["k1", "k2", "k3"]


def test_container_protocol():
    table = LocaleTable(Language.RUSSIAN)
    table.set("k", "v")
    assert "k" in table
    assert "other" not in table
    assert table.language is Language.RUSSIAN
    assert repr(table) == "LocaleTable(RUSSIAN, 1 entries)"
    table.clear()
    assert len(table) == 0
