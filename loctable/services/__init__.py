"""
Services that work on a table: scanning content, importing translations,
and the end-to-end pipeline that persists the results.
"""

from loctable.services.scanner import (
    ContentItem,
    ContentKind,
    ContentMutator,
    RecordingContentMutator,
    ScanReport,
    ScanService,
    scan_content,
)
from loctable.services.importer import (
    ImportReport,
    merge_import,
    import_csv_document,
    import_csv_text,
    import_csv_bytes,
)
from loctable.services.pipeline import LocalizationPipeline

__all__ = [
    "ContentItem",
    "ContentKind",
    "ContentMutator",
    "RecordingContentMutator",
    "ScanReport",
    "ScanService",
    "scan_content",
    "ImportReport",
    "merge_import",
    "import_csv_document",
    "import_csv_text",
    "import_csv_bytes",
    "LocalizationPipeline",
]
