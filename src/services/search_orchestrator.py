"""Waterfall search across the cached catalog and the fallback providers.

Search order
------------
1. The cached artists collection, matched by case-insensitive substring
   on the display name.  An empty query matches every artist.
2. Only when step 1 yields nothing, each fallback provider in the
   configured order.  The first provider returning at least one result
   ends the search; results of different providers are never merged.

Fallback failures never reach the caller: a provider that raises is
logged and counts as "no results", and a provider that is not configured
is skipped.  Non-empty fallback answers are memoised per
``(provider, query)`` in an :class:`ICacheProvider` so a burst of identical
misses hits the third-party API once.
"""

from __future__ import annotations

from typing import Sequence

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.search_provider import IFallbackSearchProvider
from src.models.catalog import Artist, CollectionKind, RelationRecord
from src.models.search import UnifiedSearchResult
from src.services.collection_cache import CollectionCache
from src.services.normalizer import artist_to_search_result
from src.utils.errors import GroupieHubError
from src.utils.logging import get_logger

_ASCII_UPPER_TO_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def ascii_lower(text: str) -> str:
    """Lower-case A-Z only; every other code point is left untouched."""
    return text.translate(_ASCII_UPPER_TO_LOWER)


def contains_ignore_case(text: str, query: str) -> bool:
    """ASCII case-insensitive substring test.  An empty *query* always matches."""
    return ascii_lower(query) in ascii_lower(text)


class SearchOrchestrator:
    """Runs the cache-first, fallback-second search waterfall.

    Parameters
    ----------
    cache:
        The collection cache holding the primary catalog.
    fallbacks:
        Fallback providers in priority order.
    memo:
        Optional key-value cache memoising fallback answers.
    """

    def __init__(
        self,
        cache: CollectionCache,
        fallbacks: Sequence[IFallbackSearchProvider],
        memo: ICacheProvider | None = None,
    ) -> None:
        self._cache = cache
        self._fallbacks = list(fallbacks)
        self._memo = memo
        self._logger = get_logger(__name__)

    @property
    def fallback_names(self) -> list[str]:
        return [provider.get_provider_name() for provider in self._fallbacks]

    async def local_search(self, query: str) -> list[Artist]:
        """Return cached artists whose name contains *query*; never calls a fallback."""
        artists = await self._cache.read_or_refresh(CollectionKind.ARTISTS)
        return [
            artist
            for artist in artists
            if isinstance(artist, Artist) and contains_ignore_case(artist.name, query)
        ]

    async def search(self, query: str) -> list[UnifiedSearchResult]:
        """Run the waterfall for *query* and return the first non-empty result set."""
        matches = await self.local_search(query)
        if matches:
            relations = await self._relations_by_id()
            self._logger.debug("search_cache_hit", query=query, result_count=len(matches))
            return [artist_to_search_result(a, relations.get(a.id)) for a in matches]

        for provider in self._fallbacks:
            results = await self._search_fallback(provider, query)
            if results:
                self._logger.info(
                    "search_fallback_hit",
                    query=query,
                    provider=provider.get_provider_name(),
                    result_count=len(results),
                )
                return results

        self._logger.info("search_no_results", query=query, tried=self.fallback_names)
        return []

    async def _relations_by_id(self) -> dict[int, RelationRecord]:
        # Enrichment only: a cold relations collection just yields no events.
        records = await self._cache.read(CollectionKind.RELATIONS)
        return {r.id: r for r in records if isinstance(r, RelationRecord)}

    async def _search_fallback(
        self, provider: IFallbackSearchProvider, query: str
    ) -> list[UnifiedSearchResult]:
        if not provider.is_available():
            return []

        name = provider.get_provider_name()
        memo_key = f"search:{name}:{ascii_lower(query)}"
        if self._memo is not None:
            cached = await self._memo.get(memo_key)
            if cached is not None:
                return list(cached)

        try:
            results = await provider.search(query)
        except GroupieHubError as exc:
            self._logger.warning(
                "fallback_search_failed",
                provider=exc.provider_name or name,
                operation="search",
                query=query,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return []

        if results and self._memo is not None:
            await self._memo.set(memo_key, list(results))
        return results
