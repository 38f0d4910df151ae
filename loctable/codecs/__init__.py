"""
Exchange formats.

- csv_codec: the translator spreadsheet (all languages, one row per key)
- json_codec: per-language runtime files
"""

from loctable.codecs.csv_codec import (
    CsvDocument,
    quote_field,
    export_csv,
    read_csv_rows,
    parse_csv,
    parse_csv_bytes,
)
from loctable.codecs.json_codec import (
    KeyValue,
    LanguageDocument,
    build_language_document,
    export_language_json,
    export_all_languages,
    parse_language_json,
    load_language_json,
)

__all__ = [
    # CSV
    "CsvDocument",
    "quote_field",
    "export_csv",
    "read_csv_rows",
    "parse_csv",
    "parse_csv_bytes",
    # JSON
    "KeyValue",
    "LanguageDocument",
    "build_language_document",
    "export_language_json",
    "export_all_languages",
    "parse_language_json",
    "load_language_json",
]
