"""
Tests for the import merge.

Core principle: an import adds and overwrites, it never removes.
"""

import pytest

from loctable.codecs.csv_codec import export_csv, parse_csv
from loctable.core.errors import EmptyDocumentError, MalformedHeaderError, MissingSourceLanguageError
from loctable.core.table import LocalizationTable
from loctable.services.importer import import_csv_bytes, import_csv_text, merge_import


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def table():
    t = LocalizationTable.create(["en", "ro"])
    t.set_cell("k", "en", "Hello")
    t.set_cell("k", "ro", "Salut")
    t.set_cell("other", "en", "Untouched")
    return t


# =============================================================================
# merge_import
# =============================================================================


class TestMergeImport:
    def test_blank_cell_clears_value(self, table):
        merge_import(table, parse_csv("key,en,ro\nk,Hello,\n"))

        assert table.get("k", "ro") == ""
        assert table.get("k", "en") == "Hello"

    def test_values_taken_verbatim(self, table):
        merge_import(table, parse_csv('key,ro\nk,"  Salut, lume  "\n'))

        assert table.get("k", "ro") == "  Salut, lume  "

    def test_new_language_and_key(self, table):
        report = merge_import(table, parse_csv("key,fr\nk,Bonjour\nnew,Nouveau\n"))

        assert table.languages == ["en", "ro", "fr"]
        assert table.get("k", "fr") == "Bonjour"
        assert table.get("new", "fr") == "Nouveau"
        assert table.get("new", "en") == ""
        assert report.languages_added == ["fr"]
        assert report.created == 1
        assert report.updated == 1
        assert report.touched == 2

    def test_absent_rows_and_languages_untouched(self, table):
        merge_import(table, parse_csv("key,ro\nk,Bună\n"))

        assert table.get("other", "en") == "Untouched"
        assert table.get("k", "en") == "Hello"
        assert table.languages == ["en", "ro"]

    def test_header_case_maps_to_existing_language(self, table):
        merge_import(table, parse_csv("KEY,RO\nK,Bună\n"))

        assert table.languages == ["en", "ro"]
        assert table.get("k", "ro") == "Bună"
        assert len(table) == 2

    def test_reordered_columns(self, table):
        merge_import(table, parse_csv("key,ro,en\nk,Bună,Hi\n"))

        assert table.get("k", "en") == "Hi"
        assert table.get("k", "ro") == "Bună"

    def test_blank_keys_skipped(self, table):
        report = merge_import(table, parse_csv("key,en\n,orphan\n   ,x\n\nk,Hey\n"))

        assert report.skipped_rows == 3
        assert report.touched == 1
        assert len(table) == 2

    def test_short_row_clears_missing_cells(self, table):
        merge_import(table, parse_csv("key,en,ro\nk,Hi\n"))

        assert table.get("k", "en") == "Hi"
        assert table.get("k", "ro") == ""

    def test_rows_stay_aligned(self, table):
        merge_import(table, parse_csv("key,fr,de\nz,a,b\n"))

        for row in table.rows:
            assert len(row.values) == len(table.languages)


# =============================================================================
# import_csv_text
# =============================================================================


class TestImportCsvText:
    def test_malformed_header_leaves_table_alone(self, table):
        before = table.to_dict()

        with pytest.raises(MalformedHeaderError):
            import_csv_text(table, "name,en\nk,Changed\n")

        assert table.to_dict() == before

    def test_source_language_requirement(self, table):
        before = table.to_dict()

        with pytest.raises(MissingSourceLanguageError):
            import_csv_text(table, "key,ro\nk,X\n", require_source_language="en")

        assert table.to_dict() == before

    def test_source_language_requirement_met(self, table):
        report = import_csv_text(table, "key,EN,ro\nk,Hi,X\n", require_source_language="en")

        assert report.touched == 1

    def test_bytes_must_be_utf8(self, table):
        before = table.to_dict()

        with pytest.raises(EmptyDocumentError):
            import_csv_bytes(table, b"key,ro\nk,Bun\xe3\n", source="ro.csv")

        assert table.to_dict() == before

    def test_bytes(self, table):
        report = import_csv_bytes(table, "key,ro\nk,Bună\n".encode("utf-8"))

        assert report.touched == 1
        assert table.get("k", "ro") == "Bună"

    def test_import_clears_after_round_trip(self, table):
        """Export, blank the Romanian cell, import: the value is gone."""
        text = export_csv(table)
        assert "k,Hello,Salut" in text

        import_csv_text(table, text.replace("k,Hello,Salut", "k,Hello,"))

        assert table.get("k", "ro") == ""


# =============================================================================
# Round trip
# =============================================================================


def test_export_parse_import_reproduces_table():
    original = LocalizationTable.create(["en", "ro", "fr"])
    original.set_cell("b.quote", "en", 'He said "hi", once')
    original.set_cell("b.quote", "ro", "A zis „salut”")
    original.set_cell("a.multi", "en", "one\ntwo")
    original.set_cell("a.multi", "fr", "")
    original.set_cell("c.plain", "fr", "seulement")

    copy = original.clone()
    merge_import(copy, parse_csv(export_csv(original)))

    assert copy.languages == original.languages
    for row in original.rows:
        for lang in original.languages:
            assert copy.get(row.key, lang) == original.get(row.key, lang)
    assert copy.keys() == original.keys()
