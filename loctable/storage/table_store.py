"""
Persistence of the table itself, as a YAML document in content storage.
"""

from __future__ import annotations

import logging

from loctable.core.table import LocalizationTable
from loctable.storage.base import ContentStorage

logger = logging.getLogger(__name__)


class TableStore:
    """Loads and saves a LocalizationTable under one storage key."""

    def __init__(self, storage: ContentStorage, key: str = "LocalizationTable.yaml"):
        self.storage = storage
        self.key = key

    async def exists(self) -> bool:
        return await self.storage.exists(self.key)

    async def load(self) -> LocalizationTable | None:
        """Load the table, or None if nothing has been saved yet."""
        if not await self.storage.exists(self.key):
            return None
        text = await self.storage.get_text(self.key)
        return LocalizationTable.from_yaml_text(text)

    async def load_or_create(self, languages: list[str] | None = None) -> LocalizationTable:
        """Load the table, creating (and saving) an empty one if missing."""
        table = await self.load()
        if table is None:
            logger.info(f"No table at '{self.key}', creating one")
            table = LocalizationTable.create(languages)
            await self.save(table)
        return table

    async def save(self, table: LocalizationTable) -> str:
        return await self.storage.put_text(self.key, table.to_yaml_text())
