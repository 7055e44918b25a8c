"""groupieHub FastAPI application entry point.

Wires together providers, services, and routes via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml``, configures
structured logging, schedules the cache warm-up, and mounts the static
front-end when it is present.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.search_provider import IFallbackSearchProvider
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.catalog.groupie_provider import GroupieCatalogProvider
from src.providers.search.discogs_search_provider import DiscogsSearchProvider
from src.providers.search.ticketmaster_provider import TicketmasterSearchProvider
from src.services.collection_cache import CollectionCache
from src.services.lookup_index import LookupIndex
from src.services.search_orchestrator import SearchOrchestrator
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)

_FALLBACK_FACTORIES = {
    "discogs": DiscogsSearchProvider,
    "ticketmaster": TicketmasterSearchProvider,
}


# ---------------------------------------------------------------------------
# Fallback provider selection
# ---------------------------------------------------------------------------


def _build_fallback_providers(
    app_settings: Settings, http_client: httpx.AsyncClient
) -> list[IFallbackSearchProvider]:
    """Build the fallback providers in ``fallback_search_order``.

    Unknown names are logged and skipped.  Providers without credentials
    are still built: they report the missing credential once and then
    answer ``is_available() == False``.
    """
    providers: list[IFallbackSearchProvider] = []
    for name in app_settings.fallback_search_order:
        factory = _FALLBACK_FACTORIES.get(name.strip().lower())
        if factory is None:
            _logger.warning("unknown_fallback_provider", provider=name)
            continue
        providers.append(factory(settings=app_settings, http_client=http_client))
    return providers


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    # -- Shared resources --
    http_client = httpx.AsyncClient(timeout=app_settings.http_timeout_seconds)

    # -- Providers --
    catalog = GroupieCatalogProvider(
        http_client=http_client,
        base_url=app_settings.groupie_api_base_url,
    )
    fallback_providers = _build_fallback_providers(app_settings, http_client)
    search_memo = MemoryCacheProvider(
        max_size=app_settings.search_cache_max_size,
        ttl=app_settings.search_cache_ttl,
    )

    # -- Services --
    collection_cache = CollectionCache(
        catalog=catalog,
        single_flight=app_settings.cache_single_flight,
        empty_retry_seconds=app_settings.empty_retry_seconds,
        max_age_seconds=app_settings.max_age_seconds,
    )
    search_orchestrator = SearchOrchestrator(
        cache=collection_cache,
        fallbacks=fallback_providers,
        memo=search_memo,
    )
    lookup_index = LookupIndex(catalog=catalog)

    return {
        "settings": app_settings,
        "http_client": http_client,
        "catalog": catalog,
        "fallback_providers": fallback_providers,
        "search_memo": search_memo,
        "collection_cache": collection_cache,
        "search_orchestrator": search_orchestrator,
        "lookup_index": lookup_index,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build all components, start the cache warm-up, close the client on shutdown."""
    app_settings: Settings = getattr(application.state, "settings", None) or settings
    components = _build_all(app_settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    # Not awaited: requests that arrive first refresh through read_or_refresh.
    warm_up = asyncio.create_task(components["collection_cache"].warm_up())
    application.state.warm_up_task = warm_up

    _logger.info(
        "app_startup",
        version="0.1.0",
        environment=app_settings.app_env,
        catalog=components["catalog"].get_provider_name(),
        fallbacks=[p.get_provider_name() for p in components["fallback_providers"]],
        configured_fallbacks=app_settings.get_configured_fallbacks(),
        cache_policy=config.get("cache", {}),
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    *app_settings* replaces the module-level settings, which lets tests
    point the app at a temporary static directory or album file.
    """
    app_settings = app_settings or settings
    application = FastAPI(
        title="groupieHub API",
        version="0.1.0",
        description=(
            "Artists, concert locations and dates from the Groupie Trackers "
            "catalog, cached in memory, with Discogs and Ticketmaster as "
            "fallback search sources."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    # -- API routes --
    application.include_router(api_router)

    # -- Frontend static files --
    static_dir = Path(app_settings.static_dir)
    if static_dir.exists():
        application.mount(
            "/static",
            StaticFiles(directory=str(static_dir)),
            name="static",
        )

        @application.get("/", include_in_schema=False)
        async def serve_index() -> FileResponse:
            return FileResponse(str(static_dir / "index.html"))

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
