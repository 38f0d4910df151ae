"""
Key generation for content items.

Keys are derived from where a text element lives, not from what it says:

    make_key("Menu", ["Label", "Row1", "Panel"])  ->  "menu.panel_row1_label"

The same (context, path) always produces the same key, which is what lets a
re-scan find the row it created last time.
"""

from __future__ import annotations

import re
from typing import Sequence

_UNDERSCORE_RUN = re.compile(r"_{2,}")


def clean_path(path: str) -> str:
    """Replace every non letter/decimal digit with '_' and collapse runs of '_'."""
    clean = "".join(ch if ch.isalpha() or ch.isdecimal() else "_" for ch in path)
    return _UNDERSCORE_RUN.sub("_", clean)


def display_path(hierarchy_path: Sequence[str]) -> str:
    """Join item-to-root segments as a root-first "A/B/C" path."""
    return "/".join(reversed(list(hierarchy_path)))


def make_key(context: str, hierarchy_path: Sequence[str]) -> str:
    """
    Build the table key for a content item.

    Args:
        context: Label of the container (scene or prefab name)
        hierarchy_path: Name segments ordered from the item up to its root

    Returns:
        Lower-cased "context.clean_path"; just the context when the path is empty
    """
    if not hierarchy_path:
        return context.strip(".").lower()
    return f"{context}.{clean_path(display_path(hierarchy_path))}".strip(".").lower()
