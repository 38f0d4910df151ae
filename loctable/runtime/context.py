"""
Runtime string resolution.

A LocalizationContext holds the lookup for the active language and is passed
explicitly to whatever displays text. Switching language replaces the lookup
wholesale and publishes "language.changed" on the context's event bus, so
bound text elements can refresh themselves.

    bus = EventBus()
    ctx = LocalizationContext(storage, bus)
    title = LocalizedText(ctx, "menu.panel_title", fallback="Settings", render=label.set_text)
    title.bind()
    await ctx.load_language("ro")   # label now shows the Romanian text
"""

from __future__ import annotations

import logging
from typing import Callable

from loctable.codecs.json_codec import load_language_json
from loctable.core.events import Event, EventBus, EventHandler, Subscription, language_changed
from loctable.core.table import fold
from loctable.storage.base import ContentStorage

logger = logging.getLogger(__name__)

LANGUAGE_CHANGED = "language.changed"


class LocalizationContext:
    """The active language and its key -> text lookup."""

    def __init__(
        self,
        storage: ContentStorage,
        event_bus: EventBus,
        json_prefix: str = "Resources/Localization",
        language: str = "en",
    ):
        self.storage = storage
        self.event_bus = event_bus
        self.json_prefix = json_prefix
        self.current_language = language
        self._table: dict[str, str] = {}

    def _json_key(self, lang: str) -> str:
        return f"{self.json_prefix}/{lang}.json"

    async def load_language(self, lang: str) -> int:
        """
        Make ``lang`` the active language.

        A missing language file leaves an empty lookup, so every text falls
        back to its cached display value. Returns the number of entries loaded.
        """
        key = self._json_key(lang)
        if await self.storage.exists(key):
            lookup = load_language_json(await self.storage.get_text(key))
        else:
            logger.warning(f"No language file at '{key}', using fallback texts")
            lookup = {}

        self.current_language = lang
        self._table = lookup
        await self.event_bus.publish(language_changed(lang, len(lookup)))
        return len(lookup)

    def try_get(self, key: str) -> str | None:
        return self._table.get(fold(key))

    def resolve(self, key: str | None, fallback: str = "") -> str:
        """Text for ``key``, or ``fallback`` when there is no non-empty entry."""
        value = self.try_get(key) if key else None
        return value if value else fallback

    def on_language_changed(self, handler: EventHandler) -> Subscription:
        """Subscribe to language changes published by this context."""
        return self.event_bus.subscribe(LANGUAGE_CHANGED, handler)

    def off_language_changed(self, subscription: Subscription) -> None:
        self.event_bus.unsubscribe(subscription)


class LocalizedText:
    """
    A piece of on-screen text bound to a key.

    ``render`` receives the resolved string whenever it is applied. The
    fallback is the text captured at scan time.
    """

    def __init__(
        self,
        context: LocalizationContext,
        key: str | None,
        fallback: str = "",
        render: Callable[[str], None] | None = None,
    ):
        self.context = context
        self.key = key
        self.fallback = fallback
        self.render = render
        self.text = fallback
        self._subscription: Subscription | None = None

    @property
    def is_bound(self) -> bool:
        return self._subscription is not None

    def bind(self) -> str:
        """Start following language changes and show the current text."""
        self.unbind()
        self._subscription = self.context.on_language_changed(self._handle_language_changed)
        return self.apply()

    def unbind(self) -> None:
        if self._subscription is not None:
            self.context.off_language_changed(self._subscription)
            self._subscription = None

    def apply(self) -> str:
        self.text = self.context.resolve(self.key, self.fallback)
        if self.render is not None:
            self.render(self.text)
        return self.text

    async def _handle_language_changed(self, event: Event) -> list[Event]:
        self.apply()
        return []
