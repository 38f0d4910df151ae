"""
Runtime side: resolve keys to text for the active language.
"""

from loctable.runtime.context import (
    LANGUAGE_CHANGED,
    LocalizationContext,
    LocalizedText,
)

__all__ = [
    "LANGUAGE_CHANGED",
    "LocalizationContext",
    "LocalizedText",
]
