"""Public interface definitions for all external service providers.

Every upstream API used by groupieHub is accessed exclusively through the
abstract base classes defined in this package.  Concrete adapters
implement these interfaces and are injected at runtime by
``src/main.py``, so unit tests can pass mock providers instead of making
real HTTP calls, and fallback providers can be reordered by configuration.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────────
    ICatalogProvider           →  GroupieCatalogProvider
    IFallbackSearchProvider    →  DiscogsSearchProvider,
                                  TicketmasterSearchProvider
    ICacheProvider             →  MemoryCacheProvider
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.catalog_provider import CatalogItem, ICatalogProvider
from src.interfaces.search_provider import IFallbackSearchProvider

__all__ = [
    "CatalogItem",
    "ICacheProvider",
    "ICatalogProvider",
    "IFallbackSearchProvider",
]
