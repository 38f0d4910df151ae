"""
Core module - the table data model and shared infrastructure.

This module contains:
- table: LocalizationTable and Row
- keys: Key generation from content hierarchy paths
- events: Event bus for pub/sub notifications
- errors: Error types
"""

from loctable.core.table import LocalizationTable, Row

from loctable.core.keys import make_key, clean_path, display_path

from loctable.core.events import (
    Event,
    EventBus,
    Subscription,
    get_event_bus,
    reset_event_bus,
)

from loctable.core.errors import (
    LocalizationError,
    CsvFormatError,
    EmptyDocumentError,
    MalformedHeaderError,
    MissingSourceLanguageError,
    ContentMutationError,
)

__all__ = [
    # Table
    "LocalizationTable",
    "Row",
    # Keys
    "make_key",
    "clean_path",
    "display_path",
    # Events
    "Event",
    "EventBus",
    "Subscription",
    "get_event_bus",
    "reset_event_bus",
    # Errors
    "LocalizationError",
    "CsvFormatError",
    "EmptyDocumentError",
    "MalformedHeaderError",
    "MissingSourceLanguageError",
    "ContentMutationError",
]
