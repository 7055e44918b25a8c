"""Cache providers.

In-memory TTL-based cache used by the search orchestrator to remember
fallback provider answers for a short time, so a burst of identical
queries that miss the catalog reaches Discogs or Ticketmaster only once.

MemoryCacheProvider is not shared across processes. For multi-worker
deployments, swap in a Redis adapter implementing ICacheProvider without
changing any business logic.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
