"""Unit tests for the waterfall SearchOrchestrator."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.catalog_provider import ICatalogProvider
from src.models.catalog import Artist, CollectionKind, RelationRecord
from src.models.search import UnifiedSearchResult
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.services.collection_cache import CollectionCache
from src.services.search_orchestrator import (
    SearchOrchestrator,
    ascii_lower,
    contains_ignore_case,
)
from src.utils.errors import UpstreamStatusError, UpstreamUnreachableError


def _empty_catalog() -> MagicMock:
    catalog = MagicMock(spec=ICatalogProvider)
    catalog.get_provider_name.return_value = "groupie"
    catalog.fetch_collection = AsyncMock(return_value=[])
    return catalog


def _failing_catalog() -> MagicMock:
    catalog = MagicMock(spec=ICatalogProvider)
    catalog.get_provider_name.return_value = "groupie"
    catalog.fetch_collection = AsyncMock(side_effect=UpstreamUnreachableError(provider_name="groupie"))
    return catalog


def _hit(name: str, source: str) -> UnifiedSearchResult:
    return UnifiedSearchResult(name=name, source=source)


# ======================================================================
# Case folding
# ======================================================================


class TestContainsIgnoreCase:
    def test_ascii_folding(self) -> None:
        assert contains_ignore_case("Queen", "QUEEN")
        assert contains_ignore_case("Queen", "uee")
        assert not contains_ignore_case("Queen", "king")

    def test_empty_query_matches(self) -> None:
        assert contains_ignore_case("anything", "")
        assert contains_ignore_case("", "")

    def test_non_ascii_letters_not_folded(self) -> None:
        assert ascii_lower("ÉTÉ Abc") == "ÉTÉ abc"
        assert not contains_ignore_case("Beyoncé", "BEYONCÉ")
        assert contains_ignore_case("Beyoncé", "BEYONCé")


# ======================================================================
# Cache tier
# ======================================================================


class TestCacheTier:
    @pytest.fixture()
    def cache(self, mock_catalog: MagicMock) -> CollectionCache:
        return CollectionCache(mock_catalog)

    @pytest.mark.asyncio
    async def test_empty_query_returns_every_artist(self, cache: CollectionCache, fallback_factory) -> None:
        fallback = fallback_factory("discogs", [_hit("X", "discogs")])
        orchestrator = SearchOrchestrator(cache, [fallback])

        results = await orchestrator.search("")

        assert [r.name for r in results] == ["Queen", "SOJA", "Unlisted Garage Band"]
        fallback.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_case_insensitive_identical_results(self, cache: CollectionCache) -> None:
        orchestrator = SearchOrchestrator(cache, [])
        lower = await orchestrator.search("queen")
        upper = await orchestrator.search("QUEEN")
        assert lower == upper
        assert [r.name for r in lower] == ["Queen"]

    @pytest.mark.asyncio
    async def test_cache_hit_skips_every_fallback(self, cache: CollectionCache, fallback_factory) -> None:
        first = fallback_factory("discogs", [_hit("D", "discogs")])
        second = fallback_factory("ticketmaster", [_hit("T", "ticketmaster")])
        orchestrator = SearchOrchestrator(cache, [first, second])

        results = await orchestrator.search("so")

        assert [r.name for r in results] == ["SOJA"]
        assert first.search.await_count == 0
        assert second.search.await_count == 0

    @pytest.mark.asyncio
    async def test_events_synthesized_from_cached_relations(self, cache: CollectionCache) -> None:
        await cache.refresh(CollectionKind.RELATIONS)
        orchestrator = SearchOrchestrator(cache, [])

        queen = (await orchestrator.search("queen"))[0]

        assert queen.source == "groupie"
        assert len(queen.events) == 3
        assert queen.events[0].name == "Queen Concert"

    @pytest.mark.asyncio
    async def test_cold_relations_yield_no_events(self, cache: CollectionCache, mock_catalog: MagicMock) -> None:
        orchestrator = SearchOrchestrator(cache, [])
        queen = (await orchestrator.search("queen"))[0]

        assert queen.events == []
        mock_catalog.fetch_collection.assert_awaited_once_with(CollectionKind.ARTISTS)

    @pytest.mark.asyncio
    async def test_queen_scenario(self, fallback_factory) -> None:
        cache = CollectionCache(_empty_catalog())
        await cache.replace(CollectionKind.ARTISTS, [Artist(id=1, name="Queen", creation_date=1970)])
        orchestrator = SearchOrchestrator(cache, [fallback_factory("discogs")])

        results = await orchestrator.search("que")
        assert [r.name for r in results] == ["Queen"]

    @pytest.mark.asyncio
    async def test_local_search_returns_artists(self, cache: CollectionCache, fallback_factory) -> None:
        fallback = fallback_factory("discogs", [_hit("D", "discogs")])
        orchestrator = SearchOrchestrator(cache, [fallback])

        assert [a.name for a in await orchestrator.local_search("SOJA")] == ["SOJA"]
        assert await orchestrator.local_search("zz") == []
        fallback.search.assert_not_called()


# ======================================================================
# Fallback tiers
# ======================================================================


class TestFallbackWaterfall:
    @pytest.mark.asyncio
    async def test_empty_everywhere_returns_empty(self, fallback_factory) -> None:
        first = fallback_factory("discogs")
        second = fallback_factory("ticketmaster")
        orchestrator = SearchOrchestrator(CollectionCache(_empty_catalog()), [first, second])

        assert await orchestrator.search("zz") == []
        first.search.assert_awaited_once_with("zz")
        second.search.assert_awaited_once_with("zz")

    @pytest.mark.asyncio
    async def test_first_non_empty_provider_wins(self, fallback_factory) -> None:
        first = fallback_factory("discogs", [_hit("Daft Punk", "discogs")])
        second = fallback_factory("ticketmaster", [_hit("Other", "ticketmaster")])
        orchestrator = SearchOrchestrator(CollectionCache(_empty_catalog()), [first, second])

        results = await orchestrator.search("daft")

        assert [r.source for r in results] == ["discogs"]
        second.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_second_provider_used_when_first_empty(self, fallback_factory) -> None:
        first = fallback_factory("discogs")
        second = fallback_factory("ticketmaster", [_hit("Stromae", "ticketmaster")])
        orchestrator = SearchOrchestrator(CollectionCache(_empty_catalog()), [first, second])

        results = await orchestrator.search("stromae")
        assert [r.name for r in results] == ["Stromae"]

    @pytest.mark.asyncio
    async def test_order_is_data_not_control_flow(self, fallback_factory) -> None:
        discogs = fallback_factory("discogs", [_hit("D", "discogs")])
        ticketmaster = fallback_factory("ticketmaster", [_hit("T", "ticketmaster")])
        orchestrator = SearchOrchestrator(CollectionCache(_empty_catalog()), [ticketmaster, discogs])

        assert orchestrator.fallback_names == ["ticketmaster", "discogs"]
        assert [r.source for r in await orchestrator.search("x")] == ["ticketmaster"]
        discogs.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_failing_provider_counts_as_empty(self, fallback_factory) -> None:
        first = fallback_factory("discogs")
        first.search = AsyncMock(side_effect=UpstreamStatusError(401, provider_name="discogs"))
        second = fallback_factory("ticketmaster", [_hit("Stromae", "ticketmaster")])
        orchestrator = SearchOrchestrator(CollectionCache(_empty_catalog()), [first, second])

        results = await orchestrator.search("stromae")
        assert [r.name for r in results] == ["Stromae"]

    @pytest.mark.asyncio
    async def test_unavailable_provider_skipped(self, fallback_factory) -> None:
        first = fallback_factory("discogs", [_hit("D", "discogs")], available=False)
        second = fallback_factory("ticketmaster")
        orchestrator = SearchOrchestrator(CollectionCache(_empty_catalog()), [first, second])

        assert await orchestrator.search("x") == []
        first.search.assert_not_called()
        second.search.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_catalog_failure_falls_through_to_fallbacks(self, fallback_factory) -> None:
        fallback = fallback_factory("discogs", [_hit("D", "discogs")])
        orchestrator = SearchOrchestrator(CollectionCache(_failing_catalog()), [fallback])

        assert [r.name for r in await orchestrator.search("d")] == ["D"]


# ======================================================================
# Memoisation
# ======================================================================


class TestFallbackMemo:
    @pytest.mark.asyncio
    async def test_non_empty_answers_memoised(self, fallback_factory) -> None:
        fallback = fallback_factory("discogs", [_hit("Daft Punk", "discogs")])
        memo = MemoryCacheProvider(max_size=10, ttl=60)
        orchestrator = SearchOrchestrator(CollectionCache(_empty_catalog()), [fallback], memo=memo)

        first = await orchestrator.search("Daft")
        second = await orchestrator.search("daft")

        assert first == second
        assert fallback.search.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_answers_not_memoised(self, fallback_factory) -> None:
        fallback = fallback_factory("discogs")
        memo = MemoryCacheProvider(max_size=10, ttl=60)
        orchestrator = SearchOrchestrator(CollectionCache(_empty_catalog()), [fallback], memo=memo)

        await orchestrator.search("nothing")
        await orchestrator.search("nothing")

        assert fallback.search.await_count == 2
        assert len(memo) == 0

    @pytest.mark.asyncio
    async def test_relations_lookup_by_artist_id(self, mock_catalog: MagicMock, sample_relations: list[RelationRecord]) -> None:
        cache = CollectionCache(mock_catalog)
        await cache.replace(CollectionKind.RELATIONS, sample_relations[1:])
        orchestrator = SearchOrchestrator(cache, [])

        results = {r.name: r for r in await orchestrator.search("")}
        assert results["Queen"].events == []
        assert [e.venue for e in results["SOJA"].events] == ["playa_del_carmen-mexico"]
