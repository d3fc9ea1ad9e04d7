"""In-memory sponsor cache, refreshed lazily once its TTL has elapsed.

One instance per process. The lock is held only while checking and refreshing;
readers take an immutable snapshot, so a refresh swaps the whole tuple instead
of mutating a list someone is iterating.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from sponsors_api.models.schemas import Sponsor

logger = logging.getLogger(__name__)

FetchSponsors = Callable[[], Awaitable[list[Sponsor]]]


class SponsorCache:
    def __init__(
        self,
        fetch: FetchSponsors,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        self._fetch = fetch
        self._clock = clock
        self._lock = asyncio.Lock()
        self.ttl_seconds = ttl_seconds
        self.entries: tuple[Sponsor, ...] = ()
        self.fetched_at: Optional[float] = None

    def is_fresh(self) -> bool:
        if self.fetched_at is None:
            return False
        return self._clock() - self.fetched_at <= self.ttl_seconds

    def snapshot(self) -> tuple[Sponsor, ...]:
        return self.entries

    async def ensure_fresh(self) -> None:
        """Fetch the full sponsor list if the cache is empty or expired.

        Raises whatever the fetch raises; the previous entries and timestamp
        are left untouched in that case.
        """
        async with self._lock:
            if self.is_fresh():
                return

            logger.info("cache miss, fetching sponsors")
            sponsors = await self._fetch()

            self.entries = tuple(sponsors)
            self.fetched_at = self._clock()
            logger.info("cached %d sponsors", len(self.entries))
