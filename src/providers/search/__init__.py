"""Fallback search providers.

Tried in the order given by ``fallback_search_order`` when the cached
catalog has no match for a query:

    1. DiscogsSearchProvider      — Discogs database search (needs DISCOGS_TOKEN).
    2. TicketmasterSearchProvider — Ticketmaster Discovery events, grouped
       by attraction (needs TICKETMASTER_API_KEY).

Both return UnifiedSearchResult items so the orchestrator never sees a
provider-specific schema.
"""

from src.providers.search.discogs_search_provider import DiscogsSearchProvider
from src.providers.search.ticketmaster_provider import TicketmasterSearchProvider

__all__ = ["DiscogsSearchProvider", "TicketmasterSearchProvider"]
