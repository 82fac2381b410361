"""
Judge language catalog.

Caches the remote ``/languages`` list for a fixed freshness window and maps
the short aliases the playground accepts onto catalog ids.
"""

import asyncio
import time
from typing import Awaitable, Callable, List, Optional, Sequence

from playground.domain.value_objects import LanguageCatalogEntry
from playground.infrastructure.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 6 * 60 * 60

# Alias -> case-insensitive substrings of the catalog name.
# Judge0 CE spells its C++ compilers "C++ (GCC x.y.z)".
_ALIAS_PATTERNS = {
    "c": ("c (gcc",),
    "cpp": ("c++ (g++", "c++ (gcc"),
    "c++": ("c++ (g++", "c++ (gcc"),
    "java": ("java (",),
}


def pick_language_id(entries: Sequence[LanguageCatalogEntry], alias: str) -> Optional[int]:
    """
    Resolve an alias to a catalog id.

    The service lists compiler versions oldest first, so the last matching
    entry is taken.
    """
    patterns = _ALIAS_PATTERNS.get(alias.strip().lower())
    if patterns is None:
        return None

    matches = [entry for entry in entries if any(p in entry.name.lower() for p in patterns)]
    if not matches:
        return None
    return matches[-1].id


class LanguageCatalog:
    """
    Time-bounded cache of the judge language list.

    The list is fetched when nothing is cached or when the cached copy is
    strictly older than ``ttl_seconds``. A failed fetch raises and leaves
    the previous copy untouched but unused. Concurrent refreshes share one
    in-flight fetch.
    """

    def __init__(
        self,
        fetcher: Callable[[], Awaitable[List[LanguageCatalogEntry]]],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetcher = fetcher
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Optional[List[LanguageCatalogEntry]] = None
        self.last_fetched_at: Optional[float] = None
        self._inflight: Optional[asyncio.Task] = None

    def is_fresh(self) -> bool:
        if self._entries is None or self.last_fetched_at is None:
            return False
        return self._clock() - self.last_fetched_at <= self._ttl_seconds

    async def entries(self) -> List[LanguageCatalogEntry]:
        if self.is_fresh():
            return self._entries

        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._refresh())
        return await asyncio.shield(self._inflight)

    async def resolve(self, alias: str) -> Optional[int]:
        return pick_language_id(await self.entries(), alias)

    async def _refresh(self) -> List[LanguageCatalogEntry]:
        fetched_at = self._clock()
        entries = await self._fetcher()
        self._entries = entries
        self.last_fetched_at = fetched_at
        logger.info("Judge language catalog refreshed", languages=len(entries))
        return entries
