"""
Tests for runtime resolution and language-change notifications.
"""

import pytest

from loctable.codecs.json_codec import export_language_json
from loctable.core.events import EventBus
from loctable.core.table import LocalizationTable
from loctable.runtime.context import LocalizationContext, LocalizedText
from loctable.storage import InMemoryContentStorage

PREFIX = "Resources/Localization"


@pytest.fixture
def storage():
    return InMemoryContentStorage()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def context(storage, bus):
    return LocalizationContext(storage, bus, json_prefix=PREFIX)


async def write_languages(storage):
    table = LocalizationTable.create(["en", "ro"])
    table.set_cell("menu.title", "en", "Settings")
    table.set_cell("menu.title", "ro", "Setări")
    table.set_cell("menu.start", "en", "Start")
    for lang in table.languages:
        await storage.put_text(f"{PREFIX}/{lang}.json", export_language_json(table, lang))


class TestLocalizationContext:
    @pytest.mark.asyncio
    async def test_load_and_resolve(self, context, storage):
        await write_languages(storage)

        count = await context.load_language("ro")

        assert count == 2
        assert context.current_language == "ro"
        assert context.try_get("MENU.TITLE") == "Setări"

    @pytest.mark.asyncio
    async def test_empty_value_falls_back(self, context, storage):
        await write_languages(storage)
        await context.load_language("ro")

        assert context.resolve("menu.start", "Start") == "Start"
        assert context.resolve("missing", "cached") == "cached"
        assert context.resolve(None, "cached") == "cached"

    @pytest.mark.asyncio
    async def test_missing_file_gives_empty_lookup(self, context):
        assert await context.load_language("de") == 0
        assert context.resolve("menu.title", "Settings") == "Settings"

    @pytest.mark.asyncio
    async def test_null_value_falls_back(self, context, storage):
        await storage.put_text(f"{PREFIX}/ro.json", '{"items": [{"key": "menu.title", "value": null}]}')

        assert await context.load_language("ro") == 1
        assert context.resolve("menu.title", "Settings") == "Settings"

    @pytest.mark.asyncio
    async def test_publishes_language_changed(self, context, storage, bus):
        await write_languages(storage)
        await context.load_language("en")

        event = bus.get_history("language.changed")[-1]
        assert event.payload == {"language": "en", "entries": 2}


class TestLocalizedText:
    @pytest.mark.asyncio
    async def test_follows_language_changes(self, context, storage):
        await write_languages(storage)
        rendered: list[str] = []
        title = LocalizedText(context, "menu.title", fallback="Settings", render=rendered.append)

        title.bind()
        await context.load_language("ro")
        await context.load_language("en")

        assert rendered == ["Settings", "Setări", "Settings"]
        assert title.text == "Settings"

    @pytest.mark.asyncio
    async def test_unbind_stops_updates(self, context, storage, bus):
        await write_languages(storage)
        title = LocalizedText(context, "menu.title", fallback="Settings")

        title.bind()
        title.unbind()
        await context.load_language("ro")

        assert not title.is_bound
        assert title.text == "Settings"
        assert bus.subscription_count == 0

    def test_rebinding_does_not_duplicate(self, context, bus):
        title = LocalizedText(context, "menu.title", fallback="Settings")

        title.bind()
        title.bind()

        assert bus.subscription_count == 1
