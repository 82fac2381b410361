"""
Item Service

CRUD over the flat item list.
"""

import asyncio
from typing import List, Optional

from playground.domain.entities import Item
from playground.domain.errors import InputError, NotFoundError
from playground.domain.ports import IItemRepository
from playground.infrastructure.logging import get_logger

logger = get_logger(__name__)


class ItemService:
    """
    List, create, update and delete items.

    Read-modify-write cycles run under one lock so concurrent requests
    cannot lose each other's writes.
    """

    def __init__(self, repository: IItemRepository):
        self._repository = repository
        self._lock = asyncio.Lock()

    async def list_items(self) -> List[Item]:
        return await self._repository.load()

    async def create_item(self, title: Optional[str], description: Optional[str] = None) -> Item:
        if not isinstance(title, str) or not title:
            raise InputError("Title is required")

        item = Item.create(title=title, description=description if isinstance(description, str) else None)
        async with self._lock:
            items = await self._repository.load()
            items.insert(0, item)
            await self._repository.save(items)

        logger.info("Item created", item_id=item.id)
        return item

    async def update_item(self, item_id: str, title: Optional[str] = None, description: Optional[str] = None) -> Item:
        async with self._lock:
            items = await self._repository.load()
            for index, existing in enumerate(items):
                if existing.id == item_id:
                    items[index] = existing.updated(title=title, description=description)
                    await self._repository.save(items)
                    logger.info("Item updated", item_id=item_id)
                    return items[index]

        raise NotFoundError("Not found", details={"item_id": item_id})

    async def delete_item(self, item_id: str) -> None:
        async with self._lock:
            items = await self._repository.load()
            remaining = [item for item in items if item.id != item_id]
            if len(remaining) == len(items):
                raise NotFoundError("Not found", details={"item_id": item_id})
            await self._repository.save(remaining)

        logger.info("Item deleted", item_id=item_id)
