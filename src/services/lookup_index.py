"""Single-artist lookup combining a by-id fetch with best-effort relations.

The artist itself is mandatory: any upstream failure of the by-id fetch
becomes :class:`NotFoundError`, with the upstream detail logged rather
than returned.  The relations are optional: if they cannot be fetched
the composite view is still returned with an empty ``concert_info``.
"""

from __future__ import annotations

from src.interfaces.catalog_provider import ICatalogProvider
from src.models.catalog import ArtistDetail, ArtistRelations
from src.services.normalizer import assign_genre, flatten_concert_info
from src.utils.errors import InvalidIdentifierError, NotFoundError, UpstreamError
from src.utils.logging import get_logger


class LookupIndex:
    """Resolves ``/artist/{id}`` requests against the primary catalog."""

    def __init__(self, catalog: ICatalogProvider) -> None:
        self._catalog = catalog
        self._logger = get_logger(__name__)

    async def get_by_id(self, artist_id: int) -> ArtistDetail:
        """Return the composite view for *artist_id*.

        Raises
        ------
        InvalidIdentifierError
            If *artist_id* is not a positive integer.
        NotFoundError
            If the artist cannot be fetched or upstream answers with a
            different (e.g. zero-valued) record.
        """
        if artist_id <= 0:
            raise InvalidIdentifierError(
                message=f"artist id must be a positive integer, got {artist_id}",
            )

        provider = self._catalog.get_provider_name()
        try:
            artist = await self._catalog.fetch_artist(artist_id)
        except UpstreamError as exc:
            self._logger.warning(
                "artist_lookup_failed",
                artist_id=artist_id,
                provider=exc.provider_name or provider,
                operation="fetch_artist",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise NotFoundError(
                message=f"artist {artist_id} not found",
                provider_name=provider,
            ) from exc

        # The catalog answers unknown ids with an empty object rather than a 404.
        if artist.id != artist_id:
            self._logger.info("artist_lookup_mismatch", artist_id=artist_id, returned_id=artist.id)
            raise NotFoundError(message=f"artist {artist_id} not found", provider_name=provider)

        relations = await self._fetch_relations(artist_id, provider)
        enriched = assign_genre(artist)
        return ArtistDetail(
            **enriched.model_dump(),
            concert_info=flatten_concert_info(relations),
        )

    async def _fetch_relations(self, artist_id: int, provider: str) -> ArtistRelations | None:
        try:
            return await self._catalog.fetch_relations(artist_id)
        except UpstreamError as exc:
            self._logger.warning(
                "artist_relations_failed",
                artist_id=artist_id,
                provider=exc.provider_name or provider,
                operation="fetch_relations",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return None
