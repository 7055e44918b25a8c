"""Primary catalog provider.

GroupieCatalogProvider is the single source of the three cached
collections (artists, locations, relations) and of the on-demand
per-artist lookups used by the lookup index.
"""

from src.providers.catalog.groupie_provider import GroupieCatalogProvider

__all__ = ["GroupieCatalogProvider"]
