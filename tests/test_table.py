"""
Tests for the table data model.

Core principle: languages and row values stay aligned, and rows and
languages are only ever added.
"""

import pytest
from pydantic import ValidationError

from loctable.core.table import LocalizationTable, Row


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def table():
    """English/Romanian table with one row."""
    t = LocalizationTable.create(["en", "ro"])
    t.set_cell("menu.title", "en", "Settings")
    t.set_cell("menu.title", "ro", "Setări")
    return t


# =============================================================================
# Languages
# =============================================================================


class TestLanguages:
    def test_default_table_has_english(self):
        assert LocalizationTable().languages == ["en"]

    def test_ensure_language_appends_and_pads(self, table):
        index = table.ensure_language("fr")

        assert index == 2
        assert table.languages == ["en", "ro", "fr"]
        assert table.find_row("menu.title").values == ["Settings", "Setări", ""]

    def test_ensure_language_is_case_insensitive_and_idempotent(self, table):
        assert table.ensure_language("RO") == 1
        table.ensure_language("ro")

        assert table.languages == ["en", "ro"]
        assert len(table.find_row("menu.title").values) == 2

    def test_index_of_language(self, table):
        assert table.index_of_language("EN") == 0
        assert table.index_of_language("ro") == 1
        assert table.index_of_language("de") == -1

    def test_duplicate_languages_rejected_on_load(self):
        with pytest.raises(ValidationError):
            LocalizationTable(languages=["en", "EN"])


# =============================================================================
# Get / Upsert / SetCell
# =============================================================================


class TestCells:
    def test_get(self, table):
        assert table.get("menu.title", "ro") == "Setări"
        assert table.get("MENU.TITLE", "RO") == "Setări"

    def test_get_missing(self, table):
        assert table.get("nope", "en") is None
        assert table.get("menu.title", "de") is None

    def test_get_short_row(self):
        t = LocalizationTable(languages=["en"], rows=[Row(key="k", values=["a"])])
        t.languages.append("ro")  # bypasses ensure_language on purpose

        assert t.get("k", "ro") is None

    def test_upsert_creates_row(self):
        t = LocalizationTable.create(["en", "ro"])
        t.upsert("k", "Hello", "en")

        assert t.get("k", "en") == "Hello"
        assert t.get("k", "ro") == ""

    def test_upsert_does_not_clobber(self):
        t = LocalizationTable.create(["en"])
        t.upsert("k", "Hello", "en")
        t.upsert("k", "World", "en")

        assert t.get("k", "en") == "Hello"

    def test_upsert_fills_empty_cell(self):
        t = LocalizationTable.create(["en", "ro"])
        t.set_cell("k", "ro", "Salut")
        t.upsert("k", "Hello", "en")

        assert t.get("k", "en") == "Hello"
        assert t.get("k", "ro") == "Salut"

    def test_upsert_adds_language(self):
        t = LocalizationTable.create(["ro"])
        t.upsert("k", "Hello", "en")

        assert t.languages == ["ro", "en"]
        assert t.find_row("k").values == ["", "Hello"]

    def test_upsert_same_key_different_case_merges(self):
        t = LocalizationTable.create(["en"])
        t.upsert("Menu.Title", "Settings", "en")
        t.upsert("menu.title", "Other", "en")

        assert len(t) == 1
        assert t.keys() == ["Menu.Title"]

    def test_set_cell_overwrites_with_empty(self, table):
        table.set_cell("menu.title", "ro", "")

        assert table.get("menu.title", "ro") == ""

    def test_set_cell_without_overwrite(self, table):
        table.set_cell("menu.title", "ro", "Altceva", overwrite=False)

        assert table.get("menu.title", "ro") == "Setări"


# =============================================================================
# Rows
# =============================================================================


class TestRows:
    def test_rows_keep_insertion_order(self):
        t = LocalizationTable.create(["en"])
        for key in ["b", "a", "c"]:
            t.upsert(key, key.upper(), "en")

        assert t.keys() == ["b", "a", "c"]

    def test_sorted_rows_ignore_case(self):
        t = LocalizationTable.create(["en"])
        for key in ["b", "A", "c"]:
            t.upsert(key, "x", "en")

        assert [r.key for r in t.sorted_rows()] == ["A", "b", "c"]

    def test_short_rows_padded_on_load(self):
        t = LocalizationTable(languages=["en", "ro"], rows=[Row(key="k", values=["Hi"])])

        assert t.find_row("k").values == ["Hi", ""]

    def test_duplicate_keys_rejected_on_load(self):
        with pytest.raises(ValidationError):
            LocalizationTable(rows=[Row(key="k"), Row(key="K")])

    def test_contains(self, table):
        assert "menu.title" in table
        assert "MENU.TITLE" in table
        assert "other" not in table


# =============================================================================
# Copy & persistence
# =============================================================================


class TestPersistence:
    def test_clone_is_independent(self, table):
        copy = table.clone()
        copy.set_cell("menu.title", "ro", "")
        copy.ensure_language("fr")

        assert table.get("menu.title", "ro") == "Setări"
        assert table.languages == ["en", "ro"]

    def test_yaml_round_trip(self, table):
        table.set_cell("menu.hint", "en", 'Say "hi",\nthen wait')

        restored = LocalizationTable.from_yaml_text(table.to_yaml_text())

        assert restored.languages == table.languages
        assert restored.to_dict() == table.to_dict()

    def test_yaml_file(self, table, tmp_path):
        path = tmp_path / "table.yaml"
        table.to_yaml(path)

        assert LocalizationTable.from_yaml(path).get("menu.title", "ro") == "Setări"
