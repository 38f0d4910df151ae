"""
loctable - localization table manager.

Keeps a key -> per-language string table in sync with text found in scenes
and prefabs, and round-trips it through a translator CSV and per-language
runtime JSON files.
"""

from loctable.core import (
    LocalizationTable,
    Row,
    make_key,
    LocalizationError,
    EmptyDocumentError,
    MalformedHeaderError,
)
from loctable.codecs import export_csv, parse_csv, export_language_json, load_language_json
from loctable.services import (
    ContentItem,
    ContentKind,
    ContentMutator,
    ScanService,
    merge_import,
    import_csv_text,
    LocalizationPipeline,
)
from loctable.runtime import LocalizationContext, LocalizedText

__version__ = "0.1.0"

__all__ = [
    "LocalizationTable",
    "Row",
    "make_key",
    "LocalizationError",
    "EmptyDocumentError",
    "MalformedHeaderError",
    "export_csv",
    "parse_csv",
    "export_language_json",
    "load_language_json",
    "ContentItem",
    "ContentKind",
    "ContentMutator",
    "ScanService",
    "merge_import",
    "import_csv_text",
    "LocalizationPipeline",
    "LocalizationContext",
    "LocalizedText",
]
