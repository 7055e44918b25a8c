"""Catalog models for the groupieHub aggregation layer.

Defines enums and Pydantic v2 models for the three cached collections
(artists, locations, relations), the per-artist relations fetched on
demand, and the composite artist view returned by the lookup index.

Field aliases mirror the primary catalog's camelCase wire format
(``creationDate``, ``firstAlbum``, ``datesLocations`` ...) so that models
validate straight from upstream JSON and serialize back to the same shape
for the front-end.  Python code uses the snake_case attribute names.

Key relationships:
    - Artist.locations / concert_dates / relations are opaque URL strings
      pointing into the other collections; they are never dereferenced.
    - RelationRecord.id matches Artist.id and is used to synthesize
      concert events for search results.
    - ArtistDetail = Artist + ConcertInfo list (one entry per venue).
"""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CollectionKind(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """The three collections held by the collection cache."""

    ARTISTS = "artists"
    LOCATIONS = "locations"
    RELATIONS = "relations"


class CollectionStatus(str, Enum):  # noqa: UP042
    """Load state of one cached collection, tracked apart from its size.

    An empty collection can be LOADED (upstream legitimately returned
    nothing) or UNLOADED / LOAD_FAILED (nothing usable fetched yet).
    """

    UNLOADED = "unloaded"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


# ---------------------------------------------------------------------------
# Primary catalog records
# ---------------------------------------------------------------------------

class Artist(BaseModel):
    """A band or solo artist from the primary catalog.

    ``id`` is assigned upstream and never changes.  ``genre`` is filled in
    by the normalizer right after a successful fetch; the model is frozen,
    so enrichment produces a copy via ``model_copy``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = 0
    name: str = ""
    image: str = ""
    members: list[str] = Field(default_factory=list)
    creation_date: int = Field(default=0, alias="creationDate")   # 0 = unknown
    first_album: str = Field(default="", alias="firstAlbum")      # free-form, e.g. "14-12-1973"
    locations: str = ""                                           # URL into /locations
    concert_dates: str = Field(default="", alias="concertDates")  # URL into /dates
    relations: str = ""                                           # URL into /relation
    genre: str = ""

    @field_validator("members", mode="before")
    @classmethod
    def _none_members_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class LocationRecord(BaseModel):
    """One entry of the locations collection.

    Only ``id``, ``locations`` and ``dates`` are typed; any other key the
    provider sends is kept as-is and serialized back unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int = 0
    locations: list[str] = Field(default_factory=list)
    dates: str = ""


class ArtistRelations(BaseModel):
    """Venue → concert dates for a single artist (``GET /relation/{id}``).

    Venues are unique within one response; each maps to its dates in
    upstream order.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = 0
    dates_locations: dict[str, list[str]] = Field(default_factory=dict, alias="datesLocations")


class RelationRecord(ArtistRelations):
    """One entry of the relations collection; extra provider keys survive."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")


# ---------------------------------------------------------------------------
# Composite view
# ---------------------------------------------------------------------------

class ConcertInfo(BaseModel):
    """All concert dates an artist played at one venue."""

    model_config = ConfigDict(frozen=True)

    location: str
    dates: list[str] = Field(default_factory=list)


class ArtistDetail(Artist):
    """Artist plus best-effort concert information, served by ``/artist/{id}``."""

    concert_info: list[ConcertInfo] = Field(default_factory=list, alias="concertInfo")


# ---------------------------------------------------------------------------
# Cache bookkeeping
# ---------------------------------------------------------------------------

class CollectionState(BaseModel):
    """Read-only view of one collection's cache entry, used by ``/health``."""

    model_config = ConfigDict(frozen=True)

    kind: CollectionKind
    status: CollectionStatus
    size: int = 0
    loaded_at: datetime.datetime | None = None
    last_error: str | None = None
    refresh_count: int = 0


class AlbumImage(BaseModel):
    """One carousel image served by ``/album-images``."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str = ""
    photo: str = ""
