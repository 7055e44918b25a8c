"""FastAPI routes for the groupieHub read API.

Thin routing layer over the collection cache, the search orchestrator and
the lookup index.  Service dependencies are resolved from ``app.state``
via FastAPI's ``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP ─────────────────────────────────────────────────────
#
# Endpoint              Method  Description
# ─────────────────────────────────────────────────────────────────────
# /health               GET     Collection status + fallback availability
# /artists              GET     All cached artists (lazy refresh)
# /locations            GET     All cached location records
# /relations            GET     All cached relation records
# /artist/{id}          GET     Artist + concert info (400 / 404)
# /search?q=            GET     Cache-only name search
# /external-search?q=   GET     Cache → Discogs → Ticketmaster waterfall
# /album-images         GET     Carousel images from the local JSON file
#
# Every list endpoint degrades to an empty list when upstream is down;
# only /artist/{id} reports failure, as a 404.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from src.api.schemas import (
    AlbumImagesResponse,
    ErrorResponse,
    ExternalSearchResponse,
    HealthResponse,
    SearchResponse,
)
from src.config.settings import Settings
from src.interfaces.search_provider import IFallbackSearchProvider
from src.models.catalog import (
    Artist,
    ArtistDetail,
    CollectionKind,
    CollectionStatus,
    LocationRecord,
    RelationRecord,
)
from src.services.album_images import read_album_images
from src.services.collection_cache import CollectionCache
from src.services.lookup_index import LookupIndex
from src.services.search_orchestrator import SearchOrchestrator
from src.utils.errors import InvalidIdentifierError, NotFoundError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_VERSION = "0.1.0"

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependency injection helpers — resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_cache(request: Request) -> CollectionCache:
    """Return the collection cache from application state."""
    return request.app.state.collection_cache


def _get_orchestrator(request: Request) -> SearchOrchestrator:
    """Return the search orchestrator from application state."""
    return request.app.state.search_orchestrator


def _get_lookup_index(request: Request) -> LookupIndex:
    """Return the lookup index from application state."""
    return request.app.state.lookup_index


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_fallbacks(request: Request) -> list[IFallbackSearchProvider]:
    return getattr(request.app.state, "fallback_providers", [])


CacheDep = Annotated[CollectionCache, Depends(_get_cache)]
OrchestratorDep = Annotated[SearchOrchestrator, Depends(_get_orchestrator)]
LookupDep = Annotated[LookupIndex, Depends(_get_lookup_index)]
SettingsDep = Annotated[Settings, Depends(_get_settings)]
FallbacksDep = Annotated[list[IFallbackSearchProvider], Depends(_get_fallbacks)]


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(cache: CacheDep, fallbacks: FallbacksDep) -> HealthResponse:
    """Return per-collection cache status and fallback provider availability."""
    collections = await cache.states()
    artists_loaded = any(
        state.kind is CollectionKind.ARTISTS and state.status is CollectionStatus.LOADED
        for state in collections
    )
    return HealthResponse(
        status="healthy" if artists_loaded else "degraded",
        version=_VERSION,
        collections=collections,
        fallbacks={p.get_provider_name(): p.is_available() for p in fallbacks},
    )


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


@router.get("/artists", response_model=list[Artist], summary="List artists")
async def list_artists(cache: CacheDep) -> list[Artist]:
    return await cache.list_artists()


@router.get("/locations", response_model=list[LocationRecord], summary="List locations")
async def list_locations(cache: CacheDep) -> list[LocationRecord]:
    return await cache.list_locations()


@router.get("/relations", response_model=list[RelationRecord], summary="List relations")
async def list_relations(cache: CacheDep) -> list[RelationRecord]:
    return await cache.list_relations()


@router.get(
    "/artist/{artist_id}",
    response_model=ArtistDetail,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get one artist with concert info",
)
async def get_artist(artist_id: str, lookup: LookupDep) -> ArtistDetail:
    """Resolve one artist by id.

    The id is taken as a raw path segment so that a non-numeric value is
    a 400 like a non-positive one, rather than FastAPI's 422.
    """
    # Plain ASCII digits only; int() would also take "+3", " 2" and "1_0".
    if not (artist_id.isascii() and artist_id.isdigit()):
        raise HTTPException(status_code=400, detail="Invalid artist ID")
    numeric_id = int(artist_id)

    try:
        return await lookup.get_by_id(numeric_id)
    except InvalidIdentifierError as exc:
        raise HTTPException(status_code=400, detail="Invalid artist ID") from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Artist not found") from exc


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


@router.get("/search", response_model=SearchResponse, summary="Search cached artists")
async def search_artists(
    orchestrator: OrchestratorDep,
    q: Annotated[str, Query(description="Substring of the artist name")] = "",
) -> SearchResponse:
    results = await orchestrator.local_search(q)
    _logger.debug("local_search", query=q, result_count=len(results))
    return SearchResponse(results=results)


@router.get(
    "/external-search",
    response_model=ExternalSearchResponse,
    summary="Search the catalog, then the fallback providers",
)
async def external_search(
    orchestrator: OrchestratorDep,
    q: Annotated[str, Query(description="Artist or event keyword")] = "",
) -> ExternalSearchResponse:
    return ExternalSearchResponse(artists=await orchestrator.search(q))


# ---------------------------------------------------------------------------
# Front-end support
# ---------------------------------------------------------------------------


@router.get("/album-images", response_model=AlbumImagesResponse, summary="Carousel images")
async def album_images(settings: SettingsDep) -> AlbumImagesResponse:
    return AlbumImagesResponse(images=await read_album_images(settings.album_images_path))
