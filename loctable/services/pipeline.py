"""
The localization workflow.

    1. Scan & assign keys (scenes/prefabs)
    2. Export CSV → send to translators
    3. Import CSV when updated
    4. Export JSON per language for runtime

The pipeline owns the loaded table and saves it through storage after each
step that changes it.
"""

from __future__ import annotations

import logging
from typing import Iterable

from loctable.codecs.csv_codec import export_csv
from loctable.codecs.json_codec import export_language_json
from loctable.config import Settings, get_settings
from loctable.core.events import EventBus, table_imported, table_scanned
from loctable.core.table import LocalizationTable
from loctable.services.importer import ImportReport, import_csv_bytes, import_csv_text
from loctable.services.scanner import ContentItem, ContentMutator, ScanReport, ScanService
from loctable.storage.base import ContentStorage
from loctable.storage.table_store import TableStore

logger = logging.getLogger(__name__)


class LocalizationPipeline:
    """Runs the scan/export/import steps against one table."""

    def __init__(
        self,
        storage: ContentStorage,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
        mutator: ContentMutator | None = None,
    ):
        self.storage = storage
        self.settings = settings or get_settings()
        self.event_bus = event_bus
        self.mutator = mutator
        self.store = TableStore(storage, self.settings.table_key)
        self._table: LocalizationTable | None = None

    @property
    def table(self) -> LocalizationTable:
        if self._table is None:
            raise RuntimeError("Table not loaded; call load_or_create_table() first")
        return self._table

    async def load_or_create_table(self) -> LocalizationTable:
        """Load the table (or create it) and sync in the configured languages."""
        table = await self.store.load_or_create(self.settings.languages_list)
        for lang in self.settings.languages_list:
            table.ensure_language(lang)
        self._table = table
        return table

    async def _ensure_loaded(self) -> LocalizationTable:
        if self._table is None:
            return await self.load_or_create_table()
        return self._table

    async def save(self) -> str:
        return await self.store.save(self.table)

    # =========================================================================
    # 1) Scan & assign
    # =========================================================================

    async def scan_and_assign(self, items: Iterable[ContentItem]) -> ScanReport:
        table = await self._ensure_loaded()
        for lang in self.settings.languages_list:
            table.ensure_language(lang)

        scanner = ScanService(
            table,
            self.settings.source_language,
            mutator=self.mutator,
            include_scenes=self.settings.include_scenes,
            include_prefabs=self.settings.include_prefabs,
        )
        report = scanner.scan(items)
        await self.save()

        if self.event_bus is not None:
            await self.event_bus.publish(table_scanned(report.processed, report.failed))
        return report

    # =========================================================================
    # 2) Export CSV
    # =========================================================================

    async def export_csv(self) -> str:
        """Write the translator CSV; returns where it was written."""
        table = await self._ensure_loaded()
        location = await self.storage.put_text(self.settings.csv_key, export_csv(table))
        logger.info(f"CSV exported → {location}")
        return location

    # =========================================================================
    # 3) Import CSV
    # =========================================================================

    async def import_csv(
        self,
        content: str | bytes | None = None,
        source: str | None = None,
    ) -> ImportReport:
        """
        Merge a translator CSV into the table.

        Reads the stored CSV unless ``content`` is given, either as text or
        as raw UTF-8 bytes. The merge runs on a copy that replaces the live
        table only when the whole import succeeded.
        """
        table = await self._ensure_loaded()

        if content is None:
            source = source or self.settings.csv_key
            if not await self.storage.exists(self.settings.csv_key):
                raise FileNotFoundError(f"CSV not found at {self.settings.csv_key}")
            content = await self.storage.get(self.settings.csv_key)

        required = self.settings.source_language if self.settings.require_source_language_on_import else None

        candidate = table.clone()
        if isinstance(content, bytes):
            report = import_csv_bytes(candidate, content, source=source or "<upload>", require_source_language=required)
        else:
            report = import_csv_text(candidate, content, source=source or "<upload>", require_source_language=required)
        self._table = candidate
        await self.save()

        if self.event_bus is not None:
            await self.event_bus.publish(table_imported(report.touched, list(candidate.languages)))
        return report

    # =========================================================================
    # 4) Export JSON per language
    # =========================================================================

    def json_key(self, lang: str) -> str:
        return f"{self.settings.json_prefix}/{lang}.json"

    async def export_json(self) -> list[str]:
        """Write one runtime JSON file per language; returns their locations."""
        table = await self._ensure_loaded()
        locations = []
        for lang in table.languages:
            locations.append(
                await self.storage.put_text(self.json_key(lang), export_language_json(table, lang))
            )
        logger.info(f"JSON exported for {len(locations)} languages → {self.settings.json_prefix}")
        return locations
