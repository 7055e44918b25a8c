"""Pydantic response schemas for the groupieHub API.

Defines the public contract of the read endpoints.  Catalog records
(``Artist``, ``LocationRecord`` ...) are returned as-is from
:mod:`src.models`; the schemas here only wrap them in the envelopes the
front-end expects (``{"results": [...]}``, ``{"artists": [...]}``,
``{"images": [...]}``) and describe health and error bodies.

FastAPI serializes ``response_model`` output by alias, so catalog fields
go out in the upstream camelCase form (``creationDate``, ``concertInfo``).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.models.catalog import AlbumImage, Artist, CollectionState
from src.models.search import UnifiedSearchResult


class HealthResponse(BaseModel):
    """Application health check response.

    ``status`` is ``healthy`` once the artists collection has loaded,
    ``degraded`` while it is unloaded or failed (the service still
    answers, with empty lists).
    """

    status: str
    version: str
    collections: list[CollectionState] = Field(default_factory=list)
    fallbacks: dict[str, bool] = Field(
        default_factory=dict,
        description="Fallback provider name -> configured and available",
    )


class SearchResponse(BaseModel):
    """Local cache search (``/search``)."""

    results: list[Artist] = Field(default_factory=list)


class ExternalSearchResponse(BaseModel):
    """Waterfall search (``/external-search``)."""

    artists: list[UnifiedSearchResult] = Field(default_factory=list)


class AlbumImagesResponse(BaseModel):
    """Carousel images (``/album-images``)."""

    images: list[AlbumImage] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
