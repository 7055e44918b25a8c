"""Groupie Trackers catalog provider implementing ICatalogProvider.

Reads the public Groupie Trackers REST API, the primary source of artist,
location and relation data.  No credentials are needed.

Wire format quirks handled here:
    - ``GET /artists`` returns a bare JSON array.
    - ``GET /locations`` and ``GET /relation`` wrap their array in an
      ``{"index": [...]}`` envelope.  An envelope without an ``index``
      array yields an empty collection, not an error; non-object or
      invalid items inside ``index`` are skipped.
    - ``GET /artists/{id}`` and ``GET /relation/{id}`` return one object.

The ``httpx.AsyncClient`` is injected for testability and connection
pooling.  Failures are raised as UpstreamError subclasses; callers decide
how to log and degrade.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from src.interfaces.catalog_provider import CatalogItem, ICatalogProvider
from src.models.catalog import (
    Artist,
    ArtistRelations,
    CollectionKind,
    LocationRecord,
    RelationRecord,
)
from src.utils.errors import DecodeError, UpstreamStatusError, UpstreamUnreachableError
from src.utils.logging import get_logger

_DEFAULT_BASE_URL = "https://groupietrackers.herokuapp.com/api"
_ENVELOPE_FIELD = "index"

_COLLECTION_PATHS: dict[CollectionKind, str] = {
    CollectionKind.ARTISTS: "/artists",
    CollectionKind.LOCATIONS: "/locations",
    CollectionKind.RELATIONS: "/relation",
}

_ENVELOPE_MODELS: dict[CollectionKind, type[LocationRecord] | type[RelationRecord]] = {
    CollectionKind.LOCATIONS: LocationRecord,
    CollectionKind.RELATIONS: RelationRecord,
}


class GroupieCatalogProvider(ICatalogProvider):
    """Primary catalog provider backed by the Groupie Trackers API.

    Parameters
    ----------
    http_client:
        Shared ``httpx.AsyncClient``.
    base_url:
        API root without trailing slash.
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str = _DEFAULT_BASE_URL) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._logger = get_logger(__name__)

    # -- Private helpers -------------------------------------------------------

    async def _get_json(self, path: str, operation: str) -> Any:
        """GET ``base_url + path`` and return the decoded JSON body."""
        url = f"{self._base_url}{path}"
        try:
            response = await self._http.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise UpstreamUnreachableError(
                message=f"{operation} request to {url} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.status_code != 200:
            raise UpstreamStatusError(
                status_code=response.status_code,
                message=f"{operation} returned HTTP {response.status_code}",
                provider_name=self.get_provider_name(),
            )

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(
                message=f"{operation} returned invalid JSON: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _decode_artists(self, body: Any) -> list[Artist]:
        if not isinstance(body, list):
            raise DecodeError(
                message=f"artists body is a {type(body).__name__}, expected a list",
                provider_name=self.get_provider_name(),
            )
        try:
            return [Artist.model_validate(item) for item in body]
        except ValidationError as exc:
            raise DecodeError(
                message=f"artists body does not match the artist schema: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _unwrap_envelope(self, kind: CollectionKind, body: Any) -> list[CatalogItem]:
        """Extract and validate the ``index`` array of a locations/relations body."""
        if not isinstance(body, dict):
            raise DecodeError(
                message=f"{kind.value} body is a {type(body).__name__}, expected an object",
                provider_name=self.get_provider_name(),
            )

        raw_items = body.get(_ENVELOPE_FIELD)
        if not isinstance(raw_items, list):
            self._logger.warning(
                "groupie_envelope_missing",
                kind=kind.value,
                field=_ENVELOPE_FIELD,
                found=type(raw_items).__name__,
            )
            return []

        model = _ENVELOPE_MODELS[kind]
        items: list[CatalogItem] = []
        for position, raw in enumerate(raw_items):
            if not isinstance(raw, dict):
                continue
            try:
                items.append(model.model_validate(raw))
            except ValidationError as exc:
                self._logger.warning(
                    "groupie_item_skipped",
                    kind=kind.value,
                    position=position,
                    error=str(exc),
                )
        return items

    # -- ICatalogProvider implementation ---------------------------------------

    async def fetch_collection(self, kind: CollectionKind) -> list[CatalogItem]:
        operation = f"fetch_{kind.value}"
        body = await self._get_json(_COLLECTION_PATHS[kind], operation)

        items: list[CatalogItem]
        if kind is CollectionKind.ARTISTS:
            items = list(self._decode_artists(body))
        else:
            items = self._unwrap_envelope(kind, body)

        self._logger.debug("groupie_fetch_complete", kind=kind.value, count=len(items))
        return items

    async def fetch_artist(self, artist_id: int) -> Artist:
        body = await self._get_json(f"/artists/{artist_id}", "fetch_artist")
        if not isinstance(body, dict):
            raise DecodeError(
                message=f"artist {artist_id} body is not an object",
                provider_name=self.get_provider_name(),
            )
        try:
            return Artist.model_validate(body)
        except ValidationError as exc:
            raise DecodeError(
                message=f"artist {artist_id} does not match the artist schema: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def fetch_relations(self, artist_id: int) -> ArtistRelations:
        body = await self._get_json(f"/relation/{artist_id}", "fetch_relations")
        if not isinstance(body, dict):
            raise DecodeError(
                message=f"relations for artist {artist_id} body is not an object",
                provider_name=self.get_provider_name(),
            )
        try:
            return ArtistRelations.model_validate(body)
        except ValidationError as exc:
            raise DecodeError(
                message=f"relations for artist {artist_id} do not match the schema: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def get_provider_name(self) -> str:
        """Return ``'groupie'``."""
        return "groupie"
