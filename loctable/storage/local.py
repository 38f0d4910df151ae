"""
Local storage implementations.

Filesystem storage for real projects and an in-memory variant for tests.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import AsyncIterator

from loctable.storage.base import ContentStorage, StorageProvider


# =============================================================================
# Local Filesystem Content Storage
# =============================================================================


class LocalContentStorage(ContentStorage):
    """Store content on local filesystem."""

    def __init__(self, base_path: str | Path = "./data"):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _key_to_path(self, key: str) -> Path:
        return self.base_path / key

    async def put(self, key: str, data: bytes) -> str:
        path = self._key_to_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Write next to the target and swap it in, so readers never see half a file
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        return str(path)

    async def get(self, key: str) -> bytes:
        path = self._key_to_path(key)
        if not path.exists():
            raise FileNotFoundError(f"Content not found: {key}")
        return path.read_bytes()

    async def exists(self, key: str) -> bool:
        return self._key_to_path(key).is_file()

    async def delete(self, key: str) -> bool:
        path = self._key_to_path(key)
        if path.exists():
            path.unlink()
            return True
        return False

    async def list_keys(self, prefix: str = "") -> AsyncIterator[str]:
        search_path = self.base_path / prefix if prefix else self.base_path
        if search_path.exists():
            for path in sorted(search_path.rglob("*")):
                if path.is_file() and not path.name.endswith(".tmp"):
                    yield path.relative_to(self.base_path).as_posix()


# =============================================================================
# In-Memory Content Storage
# =============================================================================


class InMemoryContentStorage(ContentStorage):
    """In-memory document storage for tests."""

    def __init__(self):
        self._data: dict[str, bytes] = {}

    async def put(self, key: str, data: bytes) -> str:
        self._data[key] = bytes(data)
        return f"memory://{key}"

    async def get(self, key: str) -> bytes:
        if key not in self._data:
            raise FileNotFoundError(f"Content not found: {key}")
        return self._data[key]

    async def exists(self, key: str) -> bool:
        return key in self._data

    async def delete(self, key: str) -> bool:
        if key in self._data:
            del self._data[key]
            return True
        return False

    async def list_keys(self, prefix: str = "") -> AsyncIterator[str]:
        for key in sorted(self._data):
            if key.startswith(prefix):
                yield key


# =============================================================================
# Factory
# =============================================================================


def create_local_storage(data_dir: str | Path = "./data") -> StorageProvider:
    """Create a StorageProvider backed by the local filesystem."""
    return StorageProvider(content=LocalContentStorage(data_dir))


def create_memory_storage() -> StorageProvider:
    """Create a StorageProvider that keeps everything in memory."""
    return StorageProvider(content=InMemoryContentStorage())
