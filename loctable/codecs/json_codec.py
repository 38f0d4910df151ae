"""
Per-language JSON files for runtime use.

One file per language, named after the language code:

    {
      "items": [
        {"key": "menu.panel_title", "value": "Setări"},
        ...
      ]
    }

Values are taken from the table as-is; a missing cell becomes "". A
"value" of null in a hand-edited file reads back as "".
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, field_validator

from loctable.core.table import LocalizationTable, fold


class KeyValue(BaseModel):
    """One entry of a language file."""

    key: str
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class LanguageDocument(BaseModel):
    """The runtime document for a single language."""

    items: list[KeyValue] = Field(default_factory=list)

    def to_lookup(self) -> dict[str, str]:
        """Case-insensitive key -> value lookup; later duplicates win."""
        return {fold(item.key): item.value for item in self.items}


def build_language_document(table: LocalizationTable, lang: str) -> LanguageDocument:
    """Collect one language's values, one item per row in table order."""
    index = table.index_of_language(lang)
    items = []
    for row in table.rows:
        value = row.values[index] if 0 <= index < len(row.values) else ""
        items.append(KeyValue(key=row.key, value=value or ""))
    return LanguageDocument(items=items)


def export_language_json(table: LocalizationTable, lang: str, pretty: bool = True) -> str:
    """Serialize one language of the table to JSON text."""
    document = build_language_document(table, lang)
    return json.dumps(
        document.model_dump(),
        indent=2 if pretty else None,
        ensure_ascii=False,
    )


def export_all_languages(table: LocalizationTable, pretty: bool = True) -> dict[str, str]:
    """JSON text for every language of the table, keyed by language code."""
    return {lang: export_language_json(table, lang, pretty) for lang in table.languages}


def parse_language_json(text: str) -> LanguageDocument:
    """Parse a language file back into a LanguageDocument."""
    return LanguageDocument.model_validate(json.loads(text))


def load_language_json(text: str) -> dict[str, str]:
    """Parse a language file straight into a lookup table."""
    return parse_language_json(text).to_lookup()
