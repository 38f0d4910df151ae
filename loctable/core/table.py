"""
The localization table data model.

A table holds an ordered list of language codes (the first one is the
source language) and an ordered list of rows. Each row carries a key and one
value per language, positionally aligned with ``languages``.

Rows are kept in insertion order; a private case-folded index maps keys to
row positions so lookups don't depend on any dict iteration order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, PrivateAttr, field_validator


def fold(text: str) -> str:
    """Normalize a key or language code for case-insensitive comparison."""
    return text.casefold()


# =============================================================================
# Row
# =============================================================================


class Row(BaseModel):
    """One translatable string across all languages."""

    key: str
    values: list[str] = Field(default_factory=list)

    def pad(self, count: int) -> None:
        """Grow ``values`` with empty strings until it has ``count`` entries."""
        missing = count - len(self.values)
        if missing > 0:
            self.values.extend([""] * missing)


# =============================================================================
# Table
# =============================================================================


class LocalizationTable(BaseModel):
    """
    Key -> per-language values.

    Invariants:
    - ``languages`` has no case-insensitive duplicates
    - every row has exactly ``len(languages)`` values
    - keys are unique under case-insensitive comparison

    Rows and languages are only ever appended. Nothing here removes them.
    """

    languages: list[str] = Field(default_factory=lambda: ["en"])
    rows: list[Row] = Field(default_factory=list)

    _index: dict[str, int] = PrivateAttr(default_factory=dict)

    @field_validator("languages")
    @classmethod
    def _no_duplicate_languages(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        for lang in value:
            if fold(lang) in seen:
                raise ValueError(f"Duplicate language '{lang}'")
            seen.add(fold(lang))
        return value

    @field_validator("rows")
    @classmethod
    def _no_duplicate_keys(cls, value: list[Row]) -> list[Row]:
        seen: set[str] = set()
        for row in value:
            if fold(row.key) in seen:
                raise ValueError(f"Duplicate key '{row.key}'")
            seen.add(fold(row.key))
        return value

    def model_post_init(self, __context: Any) -> None:
        count = len(self.languages)
        for row in self.rows:
            row.pad(count)
        self._reindex()

    @classmethod
    def create(cls, languages: list[str] | None = None) -> LocalizationTable:
        """Create an empty table with the given languages (first is the source)."""
        table = cls(languages=[])
        for lang in languages or ["en"]:
            table.ensure_language(lang)
        return table

    # =========================================================================
    # Languages
    # =========================================================================

    @property
    def source_language(self) -> str | None:
        return self.languages[0] if self.languages else None

    def index_of_language(self, lang: str) -> int:
        """Position of ``lang`` in ``languages`` (case-insensitive), or -1."""
        wanted = fold(lang)
        for i, existing in enumerate(self.languages):
            if fold(existing) == wanted:
                return i
        return -1

    def has_language(self, lang: str) -> bool:
        return self.index_of_language(lang) >= 0

    def ensure_language(self, lang: str) -> int:
        """
        Make sure ``lang`` is a column of the table.

        Appends it and pads every row with an empty value if it is new.
        Returns the language's index either way.
        """
        index = self.index_of_language(lang)
        if index >= 0:
            return index
        self.languages.append(lang)
        for row in self.rows:
            row.values.append("")
        return len(self.languages) - 1

    # =========================================================================
    # Rows
    # =========================================================================

    def _reindex(self) -> None:
        self._index = {fold(row.key): i for i, row in enumerate(self.rows)}

    def find_row(self, key: str) -> Row | None:
        """Find the row for ``key`` (case-insensitive)."""
        if len(self._index) != len(self.rows):
            self._reindex()
        position = self._index.get(fold(key))
        if position is None:
            return None
        return self.rows[position]

    def get_or_create_row(self, key: str) -> Row:
        """Find the row for ``key`` or append a new one, padded to the language count."""
        row = self.find_row(key)
        if row is None:
            row = Row(key=key, values=[""] * len(self.languages))
            self.rows.append(row)
            self._index[fold(key)] = len(self.rows) - 1
        else:
            row.pad(len(self.languages))
        return row

    def has_key(self, key: str) -> bool:
        return self.find_row(key) is not None

    def keys(self) -> list[str]:
        """All keys in table (insertion) order."""
        return [row.key for row in self.rows]

    def sorted_rows(self) -> list[Row]:
        """Rows ordered by key, ignoring case (ordinal on the upper-cased key)."""
        return sorted(self.rows, key=lambda row: row.key.upper())

    def __len__(self) -> int:
        return len(self.rows)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has_key(key)

    # =========================================================================
    # Cells
    # =========================================================================

    def get(self, key: str, lang: str) -> str | None:
        """
        Stored value for ``key`` in ``lang``.

        Returns None if the key or language is unknown, or if the row is
        shorter than expected.
        """
        index = self.index_of_language(lang)
        if index < 0:
            return None
        row = self.find_row(key)
        if row is None or len(row.values) <= index:
            return None
        return row.values[index]

    def upsert(self, key: str, text: str | None, lang: str) -> Row:
        """
        Record source text captured from content.

        Only fills the cell when it is empty, so text that was fixed by hand
        in the table survives a re-scan.
        """
        index = self.ensure_language(lang)
        row = self.get_or_create_row(key)
        if not row.values[index]:
            row.values[index] = text or ""
        return row

    def set_cell(self, key: str, lang: str, value: str | None, overwrite: bool = True) -> Row:
        """
        Set one cell, creating the language and row if needed.

        With ``overwrite`` the value is written unconditionally, including an
        empty string (an import must be able to clear a translation).
        """
        index = self.ensure_language(lang)
        row = self.get_or_create_row(key)
        if overwrite or not row.values[index]:
            row.values[index] = value or ""
        return row

    # =========================================================================
    # Copying & persistence
    # =========================================================================

    def clone(self) -> LocalizationTable:
        """Deep copy, for callers that want to mutate and swap in on success."""
        return LocalizationTable(
            languages=list(self.languages),
            rows=[Row(key=row.key, values=list(row.values)) for row in self.rows],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "languages": list(self.languages),
            "rows": [{"key": row.key, "values": list(row.values)} for row in self.rows],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> LocalizationTable:
        data = data or {}
        return cls(
            languages=list(data.get("languages", ["en"]) or []),
            rows=[
                Row(key=str(r["key"]), values=[v if v is not None else "" for v in r.get("values") or []])
                for r in data.get("rows") or []
            ],
        )

    def to_yaml_text(self) -> str:
        return yaml.safe_dump(
            self.to_dict(),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    @classmethod
    def from_yaml_text(cls, text: str) -> LocalizationTable:
        return cls.from_dict(yaml.safe_load(text))

    @classmethod
    def from_yaml(cls, path: Path | str) -> LocalizationTable:
        """Load a table from a YAML file."""
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            return cls.from_yaml_text(f.read())

    def to_yaml(self, path: Path | str) -> None:
        """Save to a YAML file."""
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_yaml_text())
