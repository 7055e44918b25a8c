"""groupieHub API layer — routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router
from src.api.schemas import (
    AlbumImagesResponse,
    ErrorResponse,
    ExternalSearchResponse,
    HealthResponse,
    SearchResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "AlbumImagesResponse",
    "ErrorResponse",
    "ExternalSearchResponse",
    "HealthResponse",
    "SearchResponse",
]
