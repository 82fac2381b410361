"""
Unit tests for the JsonItemStore.
"""

import json

import pytest

from playground.domain.entities import Item
from playground.infrastructure.persistence import JsonItemStore


@pytest.fixture
def store(tmp_path) -> JsonItemStore:
    return JsonItemStore(tmp_path / "data" / "items.json")


class TestJsonItemStore:

    @pytest.mark.asyncio
    async def test_creates_file_on_first_access(self, store):
        assert not store.path.exists()

        items = await store.load()

        assert items == []
        assert json.loads(store.path.read_text(encoding="utf-8")) == {"items": []}

    @pytest.mark.asyncio
    async def test_save_and_load(self, store):
        items = [
            Item(id="2", title="Second", description="d", created_at="b", updated_at="b"),
            Item(id="1", title="First", description=None, created_at="a", updated_at="a"),
        ]

        await store.save(items)

        assert await store.load() == items

    @pytest.mark.asyncio
    async def test_file_format(self, store):
        await store.save([Item(id="1", title="T", description=None, created_at="c", updated_at="u")])

        document = json.loads(store.path.read_text(encoding="utf-8"))
        assert document == {"items": [{"id": "1", "title": "T", "createdAt": "c", "updatedAt": "u"}]}

    @pytest.mark.asyncio
    async def test_reads_existing_file(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text(
            json.dumps({"items": [{"id": "x", "title": "Existing", "createdAt": "c", "updatedAt": "u"}]}),
            encoding="utf-8",
        )

        items = await JsonItemStore(path).load()

        assert items == [Item(id="x", title="Existing", description=None, created_at="c", updated_at="u")]

    @pytest.mark.asyncio
    async def test_unicode_is_preserved(self, store):
        await store.save([Item(id="1", title="héllo ✓", description=None, created_at="c", updated_at="u")])

        assert (await store.load())[0].title == "héllo ✓"
