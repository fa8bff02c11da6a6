"""Time-bounded cache regions with stale-while-revalidate reads.

An entry younger than the region's ttl is served as-is. An older entry is
still served, and one background refresh per key is started; its result
replaces the entry for later reads. A missing entry is loaded inline.
Entries older than `max_age` (twice the ttl by default) are dropped: a
read treats them as missing, and writes sweep them out.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable

from services.restcountries_service import UpstreamError

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Any]]


class RevalidatingCache:
    def __init__(
        self,
        ttl: int,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
        max_age: int | None = None,
    ):
        self.name = name
        self._ttl = ttl
        self._max_age = max_age or 2 * ttl
        self._clock = clock
        self._store: dict[str, tuple[Any, float]] = {}
        self._refreshing: dict[str, asyncio.Task] = {}
        self._last_sweep = clock()

    def get(self, key: str) -> Any | None:
        """Return the cached value regardless of age, or None."""
        entry = self._store.get(key)
        return entry[0] if entry else None

    def is_fresh(self, key: str) -> bool:
        entry = self._store.get(key)
        return entry is not None and self._clock() - entry[1] < self._ttl

    def set(self, key: str, value: Any) -> None:
        now = self._clock()
        self._store[key] = (value, now)
        # At most one sweep per ttl
        if now - self._last_sweep >= self._ttl:
            self._sweep(now)

    def _sweep(self, now: float) -> None:
        expired = [k for k, (_, ts) in self._store.items() if now - ts >= self._max_age]
        for key in expired:
            del self._store[key]
        self._last_sweep = now
        if expired:
            logger.debug("Dropped %d expired %s entries", len(expired), self.name,
                         extra={"cache": self.name})

    async def get_or_load(self, key: str, loader: Loader) -> Any:
        entry = self._store.get(key)
        if entry is not None and self._clock() - entry[1] >= self._max_age:
            del self._store[key]
            entry = None

        if entry is None:
            value = await loader()
            self.set(key, value)
            return value

        value, stored_at = entry
        if self._clock() - stored_at >= self._ttl:
            self._schedule_refresh(key, loader)
        return value

    def _schedule_refresh(self, key: str, loader: Loader) -> None:
        if key in self._refreshing:
            return
        logger.debug("Revalidating %s:%s", self.name, key, extra={"cache": self.name})
        self._refreshing[key] = asyncio.create_task(self._refresh(key, loader))

    async def _refresh(self, key: str, loader: Loader) -> None:
        try:
            value = await loader()
        except UpstreamError as e:
            logger.warning(
                "Refresh of %s:%s failed, keeping stale entry: %s", self.name, key, e,
                extra={"cache": self.name},
            )
        except Exception:
            logger.warning(
                "Refresh of %s:%s failed, keeping stale entry", self.name, key,
                exc_info=True, extra={"cache": self.name},
            )
        else:
            self.set(key, value)
        finally:
            self._refreshing.pop(key, None)

    async def wait_idle(self) -> None:
        """Wait for in-flight background refreshes to settle."""
        while self._refreshing:
            await asyncio.gather(*self._refreshing.values(), return_exceptions=True)

    def stats(self) -> dict:
        return {
            "entries": len(self._store),
            "fresh": sum(1 for key in self._store if self.is_fresh(key)),
            "refreshing": len(self._refreshing),
            "ttl_seconds": self._ttl,
        }

    def clear(self) -> None:
        self._store.clear()
