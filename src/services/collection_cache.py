"""Collection cache service for the three primary catalog collections.

Holds artists, locations and relations in memory, each behind its own
reader/writer lock so a refresh of one collection never blocks readers of
another.  Readers get the current snapshot (a tuple, replaced wholesale
and never mutated), so handing out a shared reference is safe.

Refresh flow
------------
1. The upstream fetch runs OUTSIDE the write lock; readers keep getting
   the previous snapshot during the network round trip.
2. Artists are enriched with a genre before publication.
3. The new snapshot is swapped in under the write lock.

A failed refresh keeps the previous snapshot, marks the collection
``load_failed`` and records the error.  Callers never see the exception.

Each collection tracks an explicit :class:`CollectionStatus` so that
"never loaded", "loaded but empty" and "load failed" are distinguishable;
:meth:`CollectionCache.needs_refresh` decides from that status whether a
read should trigger a synchronous refresh.  Concurrent refreshes of the
same collection can be collapsed into one upstream fetch through
:class:`~src.utils.concurrency.SingleFlight`.
"""

from __future__ import annotations

import asyncio
import datetime
import time
from dataclasses import dataclass, field
from typing import Callable, Sequence

from src.interfaces.catalog_provider import CatalogItem, ICatalogProvider
from src.models.catalog import (
    Artist,
    CollectionKind,
    CollectionState,
    CollectionStatus,
    LocationRecord,
    RelationRecord,
)
from src.services.normalizer import assign_genres
from src.utils.concurrency import ReadWriteLock, SingleFlight
from src.utils.errors import GroupieHubError
from src.utils.logging import get_logger


@dataclass
class _CollectionEntry:
    """Mutable bookkeeping for one collection; only touched under its lock."""

    kind: CollectionKind
    lock: ReadWriteLock = field(default_factory=ReadWriteLock)
    items: tuple[CatalogItem, ...] = ()
    status: CollectionStatus = CollectionStatus.UNLOADED
    loaded_at: datetime.datetime | None = None
    loaded_monotonic: float | None = None
    attempted_monotonic: float | None = None
    last_error: str | None = None
    refresh_count: int = 0


class CollectionCache:
    """In-memory cache of the artists, locations and relations collections.

    Parameters
    ----------
    catalog:
        The primary catalog provider every refresh reads from.
    single_flight:
        When ``True``, concurrent refreshes of one collection share a
        single upstream fetch.  When ``False`` every caller fetches and
        the swaps are applied one after the other.
    empty_retry_seconds:
        How long a collection that loaded successfully but empty is
        trusted before a read triggers another fetch.
    max_age_seconds:
        Age after which a loaded snapshot is refreshed on read.  ``0``
        disables age-based refresh.
    clock:
        Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        catalog: ICatalogProvider,
        single_flight: bool = True,
        empty_retry_seconds: float = 30.0,
        max_age_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._catalog = catalog
        self._single_flight = single_flight
        self._empty_retry_seconds = empty_retry_seconds
        self._max_age_seconds = max_age_seconds
        self._clock = clock
        self._entries: dict[CollectionKind, _CollectionEntry] = {
            kind: _CollectionEntry(kind=kind) for kind in CollectionKind
        }
        self._flights: SingleFlight[CollectionKind, bool] = SingleFlight()
        self._logger = get_logger(__name__)

    # -- Reads -----------------------------------------------------------------

    async def read(self, kind: CollectionKind) -> Sequence[CatalogItem]:
        """Return the current snapshot of *kind* without touching upstream."""
        entry = self._entries[kind]
        async with entry.lock.read():
            return entry.items

    async def read_or_refresh(self, kind: CollectionKind) -> Sequence[CatalogItem]:
        """Return the snapshot, refreshing it first if :meth:`needs_refresh` says so.

        Never raises for upstream failures: when the refresh fails the
        previous snapshot (possibly empty) is returned.
        """
        entry = self._entries[kind]
        async with entry.lock.read():
            items = entry.items
            stale = self._needs_refresh(entry)
        if not stale:
            return items

        await self.refresh(kind)
        return await self.read(kind)

    async def needs_refresh(self, kind: CollectionKind) -> bool:
        """Return ``True`` if a read of *kind* should refresh it first."""
        entry = self._entries[kind]
        async with entry.lock.read():
            return self._needs_refresh(entry)

    def _needs_refresh(self, entry: _CollectionEntry) -> bool:
        now = self._clock()

        if entry.status is CollectionStatus.UNLOADED:
            return True

        if entry.status is CollectionStatus.LOAD_FAILED:
            if not entry.items:
                return True
            # A stale snapshot survives a failed refresh; retry once it ages out again.
            return self._aged_out(entry.attempted_monotonic, now)

        if not entry.items:
            return self._elapsed(entry.loaded_monotonic, now) >= self._empty_retry_seconds
        return self._aged_out(entry.loaded_monotonic, now)

    def _aged_out(self, since: float | None, now: float) -> bool:
        if self._max_age_seconds <= 0:
            return False
        return self._elapsed(since, now) >= self._max_age_seconds

    @staticmethod
    def _elapsed(since: float | None, now: float) -> float:
        if since is None:
            return float("inf")
        return now - since

    # -- Typed conveniences ------------------------------------------------------

    async def list_artists(self) -> list[Artist]:
        return [item for item in await self.read_or_refresh(CollectionKind.ARTISTS) if isinstance(item, Artist)]

    async def list_locations(self) -> list[LocationRecord]:
        return [
            item
            for item in await self.read_or_refresh(CollectionKind.LOCATIONS)
            if isinstance(item, LocationRecord)
        ]

    async def list_relations(self) -> list[RelationRecord]:
        return [
            item
            for item in await self.read_or_refresh(CollectionKind.RELATIONS)
            if isinstance(item, RelationRecord)
        ]

    # -- Writes ----------------------------------------------------------------

    async def refresh(self, kind: CollectionKind) -> bool:
        """Fetch *kind* from upstream and swap it in.

        Returns ``True`` if the collection was replaced, ``False`` if the
        fetch failed and the previous snapshot was kept.
        """
        if self._single_flight:
            return await self._flights.do(kind, lambda: self._refresh_once(kind))
        return await self._refresh_once(kind)

    async def _refresh_once(self, kind: CollectionKind) -> bool:
        entry = self._entries[kind]
        provider = self._catalog.get_provider_name()
        start = self._clock()

        try:
            items: list[CatalogItem] = await self._catalog.fetch_collection(kind)
            if kind is CollectionKind.ARTISTS:
                items = list(assign_genres(item for item in items if isinstance(item, Artist)))
        except GroupieHubError as exc:
            await self._record_failure(entry, str(exc))
            self._logger.warning(
                "collection_refresh_failed",
                kind=kind.value,
                provider=exc.provider_name or provider,
                operation=f"fetch_{kind.value}",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return False
        except Exception as exc:
            await self._record_failure(entry, str(exc))
            self._logger.error(
                "collection_refresh_failed",
                kind=kind.value,
                provider=provider,
                operation=f"fetch_{kind.value}",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return False

        await self._swap(entry, items)
        self._logger.info(
            "collection_refreshed",
            kind=kind.value,
            count=len(items),
            duration_ms=round((self._clock() - start) * 1000, 1),
        )
        return True

    async def _swap(self, entry: _CollectionEntry, items: Sequence[CatalogItem]) -> None:
        now = self._clock()
        async with entry.lock.write():
            entry.items = tuple(items)
            entry.status = CollectionStatus.LOADED
            entry.loaded_at = datetime.datetime.now(tz=datetime.timezone.utc)
            entry.loaded_monotonic = now
            entry.attempted_monotonic = now
            entry.last_error = None
            entry.refresh_count += 1

    async def _record_failure(self, entry: _CollectionEntry, error: str) -> None:
        async with entry.lock.write():
            entry.status = CollectionStatus.LOAD_FAILED
            entry.attempted_monotonic = self._clock()
            entry.last_error = error

    async def replace(self, kind: CollectionKind, items: Sequence[CatalogItem]) -> None:
        """Publish *items* as the new snapshot of *kind* without fetching.

        Used to seed the cache; artists go through genre enrichment exactly
        as a fetched collection would.
        """
        if kind is CollectionKind.ARTISTS:
            items = assign_genres(item for item in items if isinstance(item, Artist))
        await self._swap(self._entries[kind], items)

    async def warm_up(self) -> None:
        """Refresh all three collections concurrently.

        Scheduled at startup without being awaited; each collection
        succeeds or fails on its own.  A collection an early request has
        already loaded is left alone.
        """
        kinds = [kind for kind in CollectionKind if await self.needs_refresh(kind)]
        self._logger.info("cache_warm_up_started", kinds=[kind.value for kind in kinds])
        results = await asyncio.gather(*(self.refresh(kind) for kind in kinds))
        self._logger.info(
            "cache_warm_up_complete",
            loaded=[kind.value for kind, ok in zip(kinds, results) if ok],
            failed=[kind.value for kind, ok in zip(kinds, results) if not ok],
        )

    # -- Introspection -----------------------------------------------------------

    async def state(self, kind: CollectionKind) -> CollectionState:
        entry = self._entries[kind]
        async with entry.lock.read():
            return CollectionState(
                kind=kind,
                status=entry.status,
                size=len(entry.items),
                loaded_at=entry.loaded_at,
                last_error=entry.last_error,
                refresh_count=entry.refresh_count,
            )

    async def states(self) -> list[CollectionState]:
        return [await self.state(kind) for kind in CollectionKind]
