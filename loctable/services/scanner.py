"""
Scan & assign: pull text from content items into the table.

For every content item with visible text the scanner derives a key from the
item's place in its hierarchy, asks the content mutator to stamp that key on
the item, and records the text as the source-language value.

Content discovery and the mutator live outside this package; the scanner
only sees ContentItem records and the ContentMutator interface.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field

from loctable.core.errors import ContentMutationError
from loctable.core.keys import display_path, make_key
from loctable.core.table import LocalizationTable

logger = logging.getLogger(__name__)


# =============================================================================
# Content items
# =============================================================================


class ContentKind(str, Enum):
    """Where a content item was found."""

    SCENE = "scene"
    PREFAB = "prefab"


class ContentItem(BaseModel):
    """A text element discovered in a scene or prefab."""

    context: str  # Container label, e.g. the scene name
    hierarchy_path: list[str] = Field(default_factory=list)  # item -> root
    raw_text: str = ""
    kind: ContentKind = ContentKind.SCENE

    # Opaque handle the mutator can use to find the item again
    item_id: str | None = None

    @property
    def is_blank(self) -> bool:
        return not self.raw_text or not self.raw_text.strip()

    @property
    def ref(self) -> str:
        """Stable reference for reports and logs."""
        return self.item_id or f"{self.context}:{display_path(self.hierarchy_path)}"


# =============================================================================
# Content mutator
# =============================================================================


class ContentMutator(ABC):
    """
    Writes assigned keys back onto content.

    Implementations attach ``key`` to the item's persisted representation
    (overwriting any previous key) and keep ``fallback_text`` as the text to
    show when a language has no entry. Raise to report a failure.
    """

    @abstractmethod
    def assign_key(self, item: ContentItem, key: str, fallback_text: str) -> None:
        pass


@dataclass
class KeyAssignment:
    key: str
    fallback_text: str


class RecordingContentMutator(ContentMutator):
    """Keeps assignments in memory, keyed by item reference."""

    def __init__(self):
        self.assignments: dict[str, KeyAssignment] = {}

    def assign_key(self, item: ContentItem, key: str, fallback_text: str) -> None:
        self.assignments[item.ref] = KeyAssignment(key=key, fallback_text=fallback_text)

    def key_for(self, item: ContentItem) -> str | None:
        assignment = self.assignments.get(item.ref)
        return assignment.key if assignment else None


# =============================================================================
# Scan
# =============================================================================


@dataclass
class ScanFailure:
    item: ContentItem
    error: Exception


@dataclass
class ScanReport:
    """Outcome of one scan pass."""

    processed: int = 0
    skipped_blank: int = 0
    skipped_kind: int = 0
    keys: list[str] = field(default_factory=list)
    failures: list[ScanFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def to_dict(self) -> dict:
        return {
            "processed": self.processed,
            "skipped_blank": self.skipped_blank,
            "skipped_kind": self.skipped_kind,
            "keys": list(self.keys),
            "failures": [
                {"item": f.item.ref, "error": str(f.error)} for f in self.failures
            ],
        }


class ScanService:
    """
    Assigns keys to content items and upserts their text into a table.

    Re-running a scan over unchanged content yields the same keys and leaves
    existing source-language text alone. A mutator failure only fails that
    item; the rest of the pass continues.
    """

    def __init__(
        self,
        table: LocalizationTable,
        source_language: str,
        mutator: ContentMutator | None = None,
        include_scenes: bool = True,
        include_prefabs: bool = True,
    ):
        self.table = table
        self.source_language = source_language
        self.mutator = mutator
        self.enabled_kinds: set[ContentKind] = set()
        if include_scenes:
            self.enabled_kinds.add(ContentKind.SCENE)
        if include_prefabs:
            self.enabled_kinds.add(ContentKind.PREFAB)

    def scan(self, items: Iterable[ContentItem]) -> ScanReport:
        report = ScanReport()
        self.table.ensure_language(self.source_language)

        for item in items:
            if item.kind not in self.enabled_kinds:
                report.skipped_kind += 1
                continue
            if item.is_blank:
                report.skipped_blank += 1
                continue

            key = make_key(item.context, item.hierarchy_path)

            if self.mutator is not None:
                try:
                    self.mutator.assign_key(item, key, item.raw_text)
                except Exception as e:
                    error = e if isinstance(e, ContentMutationError) else ContentMutationError(str(e))
                    logger.warning(f"Could not assign key '{key}' to {item.ref}: {e}")
                    report.failures.append(ScanFailure(item=item, error=error))
                    continue

            self.table.upsert(key, item.raw_text, self.source_language)
            report.processed += 1
            report.keys.append(key)

        logger.info(
            f"Scan complete: {report.processed} assigned, {report.failed} failed, "
            f"{report.skipped_blank} blank, {report.skipped_kind} excluded by kind"
        )
        return report


def scan_content(
    table: LocalizationTable,
    items: Iterable[ContentItem],
    source_language: str,
    mutator: ContentMutator | None = None,
) -> int:
    """Scan ``items`` into ``table`` and return how many were processed."""
    return ScanService(table, source_language, mutator).scan(items).processed
