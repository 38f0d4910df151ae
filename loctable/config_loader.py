"""
Content manifest loader.

Engines discover text elements themselves; for command-line use the same
information can be described in a YAML manifest:

    scenes:
      MainMenu:
        - path: Canvas/Panel/Title     # root first, "/" separated
          text: Settings
    prefabs:
      Dialog:
        - path: Dialog/Buttons/Ok
          text: OK
          id: dialog-ok                # optional handle for the mutator

An explicit ``items`` list with ``context``, ``kind``, ``hierarchy_path``
(item-to-root) and ``raw_text`` fields is accepted as well.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from loctable.services.scanner import ContentItem, ContentKind


class ManifestError(ValueError):
    """Raised when a content manifest can't be understood."""
    pass


def _item_from_entry(context: str, kind: ContentKind, entry: dict[str, Any]) -> ContentItem:
    if not isinstance(entry, dict):
        raise ManifestError(f"Entry under '{context}' must be a mapping, got {entry!r}")

    if "hierarchy_path" in entry:
        hierarchy = [str(s) for s in entry["hierarchy_path"]]
    else:
        path = entry.get("path", "")
        segments = path if isinstance(path, list) else str(path).split("/")
        hierarchy = [str(s) for s in reversed(segments) if str(s)]

    return ContentItem(
        context=context,
        hierarchy_path=hierarchy,
        raw_text=str(entry.get("text", entry.get("raw_text", "")) or ""),
        kind=kind,
        item_id=entry.get("id"),
    )


def parse_content_manifest(data: dict[str, Any] | None) -> list[ContentItem]:
    """Turn a loaded manifest document into content items, in file order."""
    data = data or {}
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a mapping at the top level")

    items: list[ContentItem] = []

    for section, kind in (("scenes", ContentKind.SCENE), ("prefabs", ContentKind.PREFAB)):
        for context, entries in (data.get(section) or {}).items():
            for entry in entries or []:
                items.append(_item_from_entry(str(context), kind, entry))

    for raw in data.get("items") or []:
        try:
            items.append(ContentItem.model_validate(raw))
        except ValueError as e:
            raise ManifestError(f"Invalid item {raw!r}: {e}") from e

    return items


def load_content_manifest(path: Path | str) -> list[ContentItem]:
    """Load content items from a YAML manifest file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return parse_content_manifest(data)
