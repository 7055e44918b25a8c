"""Unified search result shape shared by every search source.

Whichever tier of the waterfall answers a query (the cached catalog,
Discogs, or Ticketmaster), its items are normalized into
:class:`UnifiedSearchResult` so the front-end renders one format.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SearchImage(BaseModel):
    """An image reference attached to a search result."""

    model_config = ConfigDict(frozen=True)

    url: str


class SearchEvent(BaseModel):
    """A concert or event associated with a search result.

    Every field is optional because sources differ: cached catalog events
    carry a venue and a date, Ticketmaster events add a name and a URL.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    url: str = ""
    date: str = ""
    venue: str = ""


class UnifiedSearchResult(BaseModel):
    """One artist-like hit returned by ``SearchOrchestrator.search``."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str | None = None
    images: list[SearchImage] = Field(default_factory=list)
    events: list[SearchEvent] = Field(default_factory=list)
    source: str = ""  # provider that produced the hit: groupie / discogs / ticketmaster
