"""
Item Repository Port Interface
"""

from abc import ABC, abstractmethod
from typing import List

from playground.domain.entities import Item


class IItemRepository(ABC):
    """Port interface for the flat item list."""

    @abstractmethod
    async def load(self) -> List[Item]:
        """Return all items, newest first."""
        pass

    @abstractmethod
    async def save(self, items: List[Item]) -> None:
        """Replace the stored list."""
        pass
