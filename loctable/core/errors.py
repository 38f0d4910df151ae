"""
Error types for the localization table.

Structural problems with an exchange document abort the whole operation and
are raised to the caller. Per-row anomalies never raise; they are tallied in
the scan/import reports instead.
"""

from __future__ import annotations


class LocalizationError(Exception):
    """Base class for all loctable errors."""
    pass


class CsvFormatError(LocalizationError):
    """
    A CSV document could not be used.

    Carries the document source (file name or "<string>") and, when it can
    be determined, the 1-based line number of the offending row so a human
    can find it in the file.
    """

    def __init__(self, message: str, source: str = "<string>", line: int | None = None):
        self.message = message
        self.source = source
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        where = self.source if self.line is None else f"{self.source}:{self.line}"
        return f"{where}: {self.message}"


class EmptyDocumentError(CsvFormatError):
    """The CSV input was empty or could not be decoded."""
    pass


class MalformedHeaderError(CsvFormatError):
    """The CSV header row is missing, too short, or does not start with 'key'."""
    pass


class MissingSourceLanguageError(CsvFormatError):
    """An import was required to carry the source language column but did not."""
    pass


class ContentMutationError(LocalizationError):
    """A content mutator failed to attach a key to a content item."""
    pass
