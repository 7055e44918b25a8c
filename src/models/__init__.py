"""Pydantic models for groupieHub.

- **catalog** -- primary catalog records (Artist, LocationRecord,
  RelationRecord), per-artist relations, the composite ArtistDetail view,
  and the cache bookkeeping enums.
- **search** -- the unified search result shape produced by every tier of
  the search waterfall.
"""

from src.models.catalog import (
    AlbumImage,
    Artist,
    ArtistDetail,
    ArtistRelations,
    CollectionKind,
    CollectionState,
    CollectionStatus,
    ConcertInfo,
    LocationRecord,
    RelationRecord,
)
from src.models.search import SearchEvent, SearchImage, UnifiedSearchResult

__all__ = [
    "AlbumImage",
    "Artist",
    "ArtistDetail",
    "ArtistRelations",
    "CollectionKind",
    "CollectionState",
    "CollectionStatus",
    "ConcertInfo",
    "LocationRecord",
    "RelationRecord",
    "SearchEvent",
    "SearchImage",
    "UnifiedSearchResult",
]
