"""
Storage abstractions.

- ContentStorage → local filesystem (or in-memory for tests)
- TableStore → the table asset, kept as YAML in content storage
"""

from loctable.storage.base import (
    ContentStorage,
    StorageProvider,
)
from loctable.storage.local import (
    LocalContentStorage,
    InMemoryContentStorage,
    create_local_storage,
    create_memory_storage,
)
from loctable.storage.table_store import TableStore

__all__ = [
    "ContentStorage",
    "StorageProvider",
    "LocalContentStorage",
    "InMemoryContentStorage",
    "create_local_storage",
    "create_memory_storage",
    "TableStore",
]
