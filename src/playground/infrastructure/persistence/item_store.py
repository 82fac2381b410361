"""
Flat-file item store.

Keeps every item in one JSON document, ``{"items": [...]}``, newest first.
"""

import asyncio
import json
from pathlib import Path
from typing import List

from playground.domain.entities import Item
from playground.domain.ports import IItemRepository
from playground.infrastructure.logging import get_logger

logger = get_logger(__name__)


class JsonItemStore(IItemRepository):
    """
    JSON file implementation of IItemRepository.

    The file and its directory are created on first access. File I/O runs in
    a worker thread.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_file(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            self._write({"items": []})
            logger.info("Created item store", path=str(self._path))

    def _write(self, document: dict) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self._path)

    def _read_sync(self) -> List[Item]:
        self._ensure_file()
        document = json.loads(self._path.read_text(encoding="utf-8"))
        return [Item.from_dict(raw) for raw in document.get("items") or []]

    def _save_sync(self, items: List[Item]) -> None:
        self._ensure_file()
        self._write({"items": [item.to_dict() for item in items]})

    async def load(self) -> List[Item]:
        return await asyncio.to_thread(self._read_sync)

    async def save(self, items: List[Item]) -> None:
        await asyncio.to_thread(self._save_sync, items)
