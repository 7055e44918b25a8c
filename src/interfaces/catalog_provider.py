"""Abstract base class for the primary catalog provider.

Defines the contract the collection cache and the lookup index use to
reach the primary artist catalog.  Implementations translate the
provider's wire format into the typed models of :mod:`src.models.catalog`
and surface every failure as an :class:`~src.utils.errors.UpstreamError`
subclass.  The adapter pattern keeps the cache independent of the
concrete HTTP API.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.catalog import (
    Artist,
    ArtistRelations,
    CollectionKind,
    LocationRecord,
    RelationRecord,
)

CatalogItem = Artist | LocationRecord | RelationRecord


class ICatalogProvider(ABC):
    """Contract for the primary catalog (artists, locations, relations)."""

    @abstractmethod
    async def fetch_collection(self, kind: CollectionKind) -> list[CatalogItem]:
        """Fetch one whole collection.

        Parameters
        ----------
        kind:
            Which collection to fetch.

        Returns
        -------
        list
            ``Artist`` items for ``ARTISTS``, ``LocationRecord`` for
            ``LOCATIONS``, ``RelationRecord`` for ``RELATIONS``.  An
            envelope without a usable ``index`` array yields ``[]``.

        Raises
        ------
        src.utils.errors.UpstreamUnreachableError
            On transport failure.
        src.utils.errors.UpstreamStatusError
            On a non-200 response.
        src.utils.errors.DecodeError
            If the body is not valid JSON or not the expected shape.
        """

    @abstractmethod
    async def fetch_artist(self, artist_id: int) -> Artist:
        """Fetch a single artist by its positive integer identifier.

        Raises the same errors as :meth:`fetch_collection`.
        """

    @abstractmethod
    async def fetch_relations(self, artist_id: int) -> ArtistRelations:
        """Fetch the venue → dates mapping for one artist.

        Raises the same errors as :meth:`fetch_collection`.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider, e.g. ``"groupie"``."""
