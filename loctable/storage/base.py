"""
Storage abstraction layer.

All file persistence (table asset, translator CSV, runtime JSON files) goes
through these interfaces. The core never touches the filesystem itself:
CSV and JSON text is built fully in memory and handed over here in one put.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator

from pydantic import BaseModel


# =============================================================================
# Storage Interfaces
# =============================================================================


class ContentStorage(ABC):
    """
    Storage for documents addressed by a relative key ("Localization/ro.json").

    Local Implementation: Filesystem
    Test Implementation: In-memory
    """

    @abstractmethod
    async def put(self, key: str, data: bytes) -> str:
        """Store content, return its location."""
        pass

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """Retrieve content by key. Raises FileNotFoundError if missing."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether a key holds content."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete content."""
        pass

    @abstractmethod
    def list_keys(self, prefix: str = "") -> AsyncIterator[str]:
        """List keys with optional prefix."""
        pass

    async def put_text(self, key: str, text: str) -> str:
        """Store UTF-8 text (no byte-order mark)."""
        return await self.put(key, text.encode("utf-8"))

    async def get_text(self, key: str) -> str:
        """Retrieve content as UTF-8 text."""
        return (await self.get(key)).decode("utf-8")


# =============================================================================
# Storage Provider
# =============================================================================


class StorageProvider(BaseModel):
    """
    Container for storage backends.

    Initialize once at startup; services receive this and use the
    interfaces without knowing the underlying implementation.
    """

    model_config = {"arbitrary_types_allowed": True}

    content: ContentStorage
