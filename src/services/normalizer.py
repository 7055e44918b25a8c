"""Normalization of provider payloads into groupieHub's unified shapes.

This module handles three distinct normalization concerns:

1. **Genre enrichment** -- The primary catalog carries no genre, so every
   freshly fetched artist is given one: the curated name table first,
   then a creation-year band.  Runs once per fetch, before the artists
   are published to the cache, never on cached reads.

2. **Search candidate mapping** -- Each search source names its fields
   differently (Discogs ``title`` / ``thumb`` / ``resource_url``,
   Ticketmaster attraction ``images[]``, catalog ``image``).  They all end
   up as :class:`UnifiedSearchResult`.  Missing fields produce empty
   values, never an exception.

3. **Concert flattening** -- The venue → dates mapping of an artist's
   relations becomes either one event per (venue, date) for search
   results, or one :class:`ConcertInfo` per venue for the artist detail.
"""

from __future__ import annotations

from typing import Any, Iterable

from src.config.genre_table import (
    CLASSIC_ROCK_BEFORE,
    GENRE_CLASSIC_ROCK,
    GENRE_POP_ROCK,
    GENRE_ROCK,
    ROCK_BEFORE,
    lookup_genre,
)
from src.models.catalog import Artist, ArtistRelations, ConcertInfo
from src.models.search import SearchEvent, SearchImage, UnifiedSearchResult

PROVIDER_GROUPIE = "groupie"
PROVIDER_DISCOGS = "discogs"
PROVIDER_TICKETMASTER = "ticketmaster"


# ---------------------------------------------------------------------------
# Genre enrichment
# ---------------------------------------------------------------------------

def genre_for(name: str, creation_year: int) -> str:
    """Return the genre label for an artist name and creation year.

    Total and deterministic: an unknown name always falls into one of the
    three year bands, and an unknown year (``0``) counts as recent.
    """
    curated = lookup_genre(name)
    if curated:
        return curated
    if 0 < creation_year < CLASSIC_ROCK_BEFORE:
        return GENRE_CLASSIC_ROCK
    if CLASSIC_ROCK_BEFORE <= creation_year < ROCK_BEFORE:
        return GENRE_ROCK
    return GENRE_POP_ROCK


def assign_genre(artist: Artist) -> Artist:
    """Return a copy of *artist* with ``genre`` filled in."""
    return artist.model_copy(update={"genre": genre_for(artist.name, artist.creation_date)})


def assign_genres(artists: Iterable[Artist]) -> list[Artist]:
    """Apply :func:`assign_genre` to every artist, preserving order."""
    return [assign_genre(artist) for artist in artists]


# ---------------------------------------------------------------------------
# Concert flattening
# ---------------------------------------------------------------------------

def flatten_concert_info(relations: ArtistRelations | None) -> list[ConcertInfo]:
    """One ConcertInfo per venue, carrying every date played there."""
    if relations is None:
        return []
    return [
        ConcertInfo(location=venue, dates=list(dates))
        for venue, dates in relations.dates_locations.items()
    ]


def concert_events(artist_name: str, relations: ArtistRelations | None) -> list[SearchEvent]:
    """One SearchEvent per (venue, date) pair, named ``"<artist> Concert"``."""
    if relations is None:
        return []
    return [
        SearchEvent(name=f"{artist_name} Concert", date=date, venue=venue)
        for venue, dates in relations.dates_locations.items()
        for date in dates
    ]


def artist_to_search_result(
    artist: Artist, relations: ArtistRelations | None = None
) -> UnifiedSearchResult:
    """Map a cached catalog artist (plus its relations, if cached) to a search result."""
    return UnifiedSearchResult(
        name=artist.name,
        images=[SearchImage(url=artist.image)] if artist.image else [],
        events=concert_events(artist.name, relations),
        source=PROVIDER_GROUPIE,
    )


# ---------------------------------------------------------------------------
# Search candidate mapping
# ---------------------------------------------------------------------------

def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _images(raw_images: Any) -> list[SearchImage]:
    """Accept a list of ``{"url": ...}`` objects or bare URL strings."""
    if not isinstance(raw_images, list):
        return []
    images: list[SearchImage] = []
    for item in raw_images:
        url = item.get("url") if isinstance(item, dict) else item
        if isinstance(url, str) and url:
            images.append(SearchImage(url=url))
    return images


def _events(raw_events: Any) -> list[SearchEvent]:
    if not isinstance(raw_events, list):
        return []
    return [
        SearchEvent(
            name=_text(item.get("name")),
            url=_text(item.get("url")),
            date=_text(item.get("date")),
            venue=_text(item.get("venue")),
        )
        for item in raw_events
        if isinstance(item, dict)
    ]


def _from_discogs(raw: dict[str, Any]) -> UnifiedSearchResult:
    thumb = _text(raw.get("thumb"))
    return UnifiedSearchResult(
        name=_text(raw.get("title")),
        url=_text(raw.get("resource_url")) or None,
        images=[SearchImage(url=thumb)] if thumb else [],
        events=[],
        source=PROVIDER_DISCOGS,
    )


def _from_ticketmaster(raw: dict[str, Any]) -> UnifiedSearchResult:
    return UnifiedSearchResult(
        name=_text(raw.get("name")),
        url=_text(raw.get("url")) or None,
        images=_images(raw.get("images")),
        events=_events(raw.get("events")),
        source=PROVIDER_TICKETMASTER,
    )


def _from_groupie(raw: dict[str, Any]) -> UnifiedSearchResult:
    image = _text(raw.get("image"))
    return UnifiedSearchResult(
        name=_text(raw.get("name")),
        images=[SearchImage(url=image)] if image else [],
        events=_events(raw.get("events")),
        source=PROVIDER_GROUPIE,
    )


def _generic(provider: str, raw: dict[str, Any]) -> UnifiedSearchResult:
    return UnifiedSearchResult(
        name=_text(raw.get("name")) or _text(raw.get("title")),
        url=_text(raw.get("url")) or None,
        images=_images(raw.get("images")),
        events=_events(raw.get("events")),
        source=provider,
    )


_CANDIDATE_MAPPERS = {
    PROVIDER_DISCOGS: _from_discogs,
    PROVIDER_TICKETMASTER: _from_ticketmaster,
    PROVIDER_GROUPIE: _from_groupie,
}


def normalize_search_candidate(provider: str, raw: dict[str, Any]) -> UnifiedSearchResult:
    """Map one provider-specific search item to a UnifiedSearchResult.

    Args:
        provider: Provider identifier (``groupie``, ``discogs``,
            ``ticketmaster``); unknown providers get a best-effort
            ``name``/``title`` + ``url`` + ``images`` mapping.
        raw: The provider's item as decoded JSON.

    Returns:
        The normalized result.  Absent event data yields ``events == []``.
    """
    mapper = _CANDIDATE_MAPPERS.get(provider)
    if mapper is None:
        return _generic(provider, raw)
    return mapper(raw)
