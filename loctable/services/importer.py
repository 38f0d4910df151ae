"""
Import merge: fold a translator CSV back into the table.

The merge only adds and overwrites. Languages and keys the CSV doesn't
mention are left untouched; every cell the CSV does carry is written
verbatim, so a cell left blank in the spreadsheet clears the translation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from loctable.codecs.csv_codec import CsvDocument, parse_csv, parse_csv_bytes
from loctable.core.errors import MissingSourceLanguageError
from loctable.core.table import LocalizationTable

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    """Outcome of one import merge."""

    touched: int = 0
    created: int = 0
    updated: int = 0
    skipped_rows: int = 0  # data rows with a blank key
    unknown_columns: list[str] = field(default_factory=list)
    languages_added: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "touched": self.touched,
            "created": self.created,
            "updated": self.updated,
            "skipped_rows": self.skipped_rows,
            "unknown_columns": list(self.unknown_columns),
            "languages_added": list(self.languages_added),
        }


def merge_import(table: LocalizationTable, document: CsvDocument) -> ImportReport:
    """
    Merge parsed CSV rows into ``table``.

    Returns how many rows were created or updated, plus the rows and columns
    that had to be skipped.
    """
    report = ImportReport()
    languages = document.languages

    for lang in languages:
        if not table.has_language(lang):
            report.languages_added.append(lang)
        table.ensure_language(lang)

    # Column position in the CSV -> language index in the table
    column_map: list[tuple[int, int]] = []
    for column, lang in enumerate(languages, start=1):
        index = table.index_of_language(lang)
        if index < 0:
            report.unknown_columns.append(lang)
            continue
        column_map.append((column, index))

    for position, cols in enumerate(document.rows):
        key = cols[0] if cols else ""
        if not key.strip():
            report.skipped_rows += 1
            logger.debug(f"Skipping row without key at {document.source}:{document.line_of(position)}")
            continue

        existed = table.has_key(key)
        row = table.get_or_create_row(key)

        for column, index in column_map:
            row.values[index] = cols[column] if column < len(cols) else ""

        report.touched += 1
        if existed:
            report.updated += 1
        else:
            report.created += 1

    logger.info(
        f"Import from {document.source}: {report.touched} keys touched "
        f"({report.created} new), {report.skipped_rows} rows skipped"
    )
    return report


def import_csv_document(
    table: LocalizationTable,
    document: CsvDocument,
    require_source_language: str | None = None,
) -> ImportReport:
    """
    Merge an already parsed CSV into ``table``.

    With ``require_source_language`` the header must also carry that
    language column; the check runs before any mutation.
    """
    if require_source_language is not None:
        wanted = require_source_language.casefold()
        if not any(lang.casefold() == wanted for lang in document.languages):
            raise MissingSourceLanguageError(
                f"CSV header has no '{require_source_language}' column",
                source=document.source,
                line=1,
            )

    return merge_import(table, document)


def import_csv_text(
    table: LocalizationTable,
    text: str,
    source: str = "<string>",
    require_source_language: str | None = None,
) -> ImportReport:
    """
    Parse CSV text and merge it into ``table``.

    Parsing happens before any mutation, so a malformed header leaves the
    table as it was.
    """
    document = parse_csv(text, source=source)
    return import_csv_document(table, document, require_source_language)


def import_csv_bytes(
    table: LocalizationTable,
    data: bytes,
    source: str = "<bytes>",
    require_source_language: str | None = None,
) -> ImportReport:
    """Decode a UTF-8 CSV file and merge it into ``table``."""
    document = parse_csv_bytes(data, source=source)
    return import_csv_document(table, document, require_source_language)
