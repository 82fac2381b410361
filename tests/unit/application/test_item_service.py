"""
Unit tests for the ItemService.
"""

import asyncio

import pytest

from playground.application.services import ItemService
from playground.domain.entities import Item
from playground.domain.errors import InputError, NotFoundError


@pytest.fixture
def item_service(item_repository) -> ItemService:
    return ItemService(item_repository)


class TestItemService:
    """CRUD semantics of the flat item list."""

    @pytest.mark.asyncio
    async def test_create_prepends(self, item_service, item_repository):
        first = await item_service.create_item("first")
        second = await item_service.create_item("second", "desc")

        assert [item.id for item in item_repository.items] == [second.id, first.id]
        assert second.description == "desc"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, "", 5])
    async def test_create_requires_title(self, item_service, title):
        with pytest.raises(InputError, match="Title is required"):
            await item_service.create_item(title)

    @pytest.mark.asyncio
    async def test_create_ignores_non_string_description(self, item_service):
        item = await item_service.create_item("t", description=123)

        assert item.description is None

    @pytest.mark.asyncio
    async def test_update_applies_fields(self, item_service):
        created = await item_service.create_item("old", "d")

        updated = await item_service.update_item(created.id, title="new")

        assert updated.title == "new"
        assert updated.description == "d"
        assert (await item_service.list_items())[0].title == "new"

    @pytest.mark.asyncio
    async def test_update_unknown(self, item_service):
        with pytest.raises(NotFoundError):
            await item_service.update_item("missing", title="x")

    @pytest.mark.asyncio
    async def test_delete(self, item_service, item_repository):
        keep = await item_service.create_item("keep")
        drop = await item_service.create_item("drop")

        await item_service.delete_item(drop.id)

        assert [item.id for item in item_repository.items] == [keep.id]

    @pytest.mark.asyncio
    async def test_delete_unknown(self, item_service):
        with pytest.raises(NotFoundError):
            await item_service.delete_item("missing")

    @pytest.mark.asyncio
    async def test_concurrent_creates_are_not_lost(self, item_service):
        await asyncio.gather(*(item_service.create_item(f"item {i}") for i in range(20)))

        assert len(await item_service.list_items()) == 20

    @pytest.mark.asyncio
    async def test_list_returns_stored_order(self, item_repository, item_service):
        item_repository.items = [
            Item(id="b", title="B", description=None, created_at="2", updated_at="2"),
            Item(id="a", title="A", description=None, created_at="1", updated_at="1"),
        ]

        assert [item.id for item in await item_service.list_items()] == ["b", "a"]
