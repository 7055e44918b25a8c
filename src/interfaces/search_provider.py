"""Abstract base class for fallback search providers.

Fallback providers are consulted by the search orchestrator, one after the
other in a fixed priority order, only when the cached catalog has no match
for a query.  Every implementation returns already-normalized
:class:`~src.models.search.UnifiedSearchResult` items.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.search import UnifiedSearchResult


class IFallbackSearchProvider(ABC):
    """Contract for external artist/event search services."""

    @abstractmethod
    async def search(self, query: str) -> list[UnifiedSearchResult]:
        """Search the provider for artists matching *query*.

        Parameters
        ----------
        query:
            Free-text search term.  A blank query returns ``[]`` without
            calling upstream.

        Returns
        -------
        list[UnifiedSearchResult]
            Zero or more normalized candidates, in provider order.

        Raises
        ------
        src.utils.errors.UpstreamError
            If the upstream call fails.  Unconfigured providers never
            raise; they return ``[]``.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier used in ``fallback_search_order``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credentials it needs.

        A provider built without its credential stays unavailable for the
        lifetime of the process.
        """
