"""
CSV exchange format for translators.

Layout:

    key,en,ro
    menu.panel_title,Settings,Setări
    menu.panel_hint,"Press ""Start"", then wait",

A field is quoted only when it contains a comma, a double quote or a line
break; quotes inside a quoted field are doubled. Reading is done by one
streaming state machine so quoted fields may span several lines.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loctable.core.errors import EmptyDocumentError, MalformedHeaderError
from loctable.core.table import LocalizationTable

KEY_COLUMN = "key"
BOM = "\ufeff"

_NEEDS_QUOTES = (",", '"', "\n", "\r")


# =============================================================================
# Writing
# =============================================================================


def quote_field(value: str | None) -> str:
    """Quote a field if it contains a comma, a quote or a line break."""
    value = value or ""
    if any(ch in value for ch in _NEEDS_QUOTES):
        return '"' + value.replace('"', '""') + '"'
    return value


def format_row(fields: list[str]) -> str:
    return ",".join(quote_field(f) for f in fields)


def export_csv(table: LocalizationTable) -> str:
    """
    Serialize a table to CSV text.

    Columns follow ``table.languages``; rows are sorted by key ignoring case
    and always carry one value per language.
    """
    count = len(table.languages)
    lines = [format_row([KEY_COLUMN, *table.languages])]
    for row in table.sorted_rows():
        values = [row.values[i] if i < len(row.values) else "" for i in range(count)]
        lines.append(format_row([row.key, *values]))
    return "\n".join(lines) + "\n"


# =============================================================================
# Reading
# =============================================================================


@dataclass
class CsvDocument:
    """A parsed CSV document: the header plus data rows."""

    header: list[str]
    rows: list[list[str]] = field(default_factory=list)

    # 1-based line on which each data row started
    row_lines: list[int] = field(default_factory=list)

    source: str = "<string>"

    @property
    def languages(self) -> list[str]:
        """Language columns exactly as they appear in the header."""
        return self.header[1:]

    def line_of(self, index: int) -> int | None:
        """Source line of data row ``index``, if known."""
        if 0 <= index < len(self.row_lines):
            return self.row_lines[index]
        return None


def read_csv_rows_with_lines(text: str) -> tuple[list[list[str]], list[int]]:
    """
    Split CSV text into rows of fields.

    Two states: outside quotes a '"' opens a quoted field, ',' ends a field,
    and CR, CRLF or LF ends the row. Inside quotes '""' is a literal quote, a
    lone '"' closes the quotes, and anything else (line breaks included) is
    kept verbatim.

    Returns the rows and the 1-based line each row started on.
    """
    rows: list[list[str]] = []
    starts: list[int] = []

    current_row: list[str] = []
    buffer: list[str] = []
    in_quotes = False
    pending = False  # anything seen since the last row break
    line = 1
    row_start = 1

    i = 0
    length = len(text)
    while i < length:
        ch = text[i]

        if in_quotes:
            if ch == '"':
                if i + 1 < length and text[i + 1] == '"':
                    buffer.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                if ch == "\n" or (ch == "\r" and not (i + 1 < length and text[i + 1] == "\n")):
                    line += 1
                buffer.append(ch)
        elif ch == '"':
            in_quotes = True
            pending = True
        elif ch == ",":
            current_row.append("".join(buffer))
            buffer.clear()
            pending = True
        elif ch == "\r" or ch == "\n":
            if ch == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
            current_row.append("".join(buffer))
            rows.append(current_row)
            starts.append(row_start)
            current_row = []
            buffer.clear()
            pending = False
            line += 1
            row_start = line
        else:
            buffer.append(ch)
            pending = True

        i += 1

    # Flush the last row when the text doesn't end with a line break
    if pending or buffer or current_row:
        current_row.append("".join(buffer))
        rows.append(current_row)
        starts.append(row_start)

    return rows, starts


def read_csv_rows(text: str) -> list[list[str]]:
    """Split CSV text into rows of fields (see read_csv_rows_with_lines)."""
    rows, _ = read_csv_rows_with_lines(text)
    return rows


def parse_csv(text: str, source: str = "<string>") -> CsvDocument:
    """
    Parse and validate a translator CSV.

    The header must have at least two columns and start with "key"
    (any case). Language columns are kept verbatim and in order.

    Raises:
        EmptyDocumentError: The text holds no rows at all
        MalformedHeaderError: The header is too short or doesn't start with "key"
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    rows, starts = read_csv_rows_with_lines(text)
    if not rows:
        raise EmptyDocumentError("CSV document is empty", source=source)

    header = rows[0]
    if len(header) < 2:
        raise MalformedHeaderError(
            f"CSV header needs 'key' plus at least one language column, got {header!r}",
            source=source,
            line=starts[0],
        )
    if header[0].casefold() != KEY_COLUMN:
        raise MalformedHeaderError(
            f"CSV header must start with 'key', got {header[0]!r}",
            source=source,
            line=starts[0],
        )

    return CsvDocument(header=header, rows=rows[1:], row_lines=starts[1:], source=source)


def parse_csv_bytes(data: bytes, source: str = "<bytes>") -> CsvDocument:
    """Decode UTF-8 bytes and parse them (see parse_csv)."""
    if not data:
        raise EmptyDocumentError("CSV document is empty", source=source)
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EmptyDocumentError(f"CSV document is not valid UTF-8 ({e.reason})", source=source) from e
    return parse_csv(text, source=source)
