"""Discogs database-search provider implementing IFallbackSearchProvider.

First fallback of the search waterfall.  Calls the Discogs
``/database/search`` endpoint with ``type=artist`` and maps each hit to a
UnifiedSearchResult (title → name, resource_url → url, thumb → image).

Authentication uses a personal access token sent as
``Authorization: Discogs token=<token>``.  Without ``DISCOGS_TOKEN`` the
provider logs one ``provider_not_configured`` warning when it is built and
then stays disabled: ``search()`` returns ``[]`` without any HTTP call.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.config.settings import Settings
from src.interfaces.search_provider import IFallbackSearchProvider
from src.models.search import UnifiedSearchResult
from src.services.normalizer import PROVIDER_DISCOGS, normalize_search_candidate
from src.utils.errors import (
    ConfigurationMissingError,
    DecodeError,
    UpstreamStatusError,
    UpstreamUnreachableError,
)
from src.utils.logging import get_logger

_SEARCH_PATH = "/database/search"
_ERROR_BODY_SNIPPET = 200


class DiscogsSearchProvider(IFallbackSearchProvider):
    """Artist search against the Discogs database API.

    Parameters
    ----------
    settings:
        Supplies ``discogs_token``, ``discogs_api_base_url`` and
        ``discogs_user_agent``.
    http_client:
        Shared ``httpx.AsyncClient``.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._token = settings.discogs_token.strip()
        self._base_url = settings.discogs_api_base_url.rstrip("/")
        self._user_agent = settings.discogs_user_agent
        self._logger = get_logger(__name__)

        self._configuration_error: ConfigurationMissingError | None = None
        if not self._token:
            self._configuration_error = ConfigurationMissingError(
                message="DISCOGS_TOKEN is not set; Discogs fallback search is disabled",
                provider_name=self.get_provider_name(),
            )
            self._logger.warning(
                "provider_not_configured",
                provider=self.get_provider_name(),
                error=str(self._configuration_error),
            )

    @property
    def configuration_error(self) -> ConfigurationMissingError | None:
        """The configuration problem reported at startup, if any."""
        return self._configuration_error

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Discogs token={self._token}",
            "User-Agent": self._user_agent,
            "Accept": "application/json",
        }

    # -- IFallbackSearchProvider implementation --------------------------------

    async def search(self, query: str) -> list[UnifiedSearchResult]:
        if not self.is_available() or not query.strip():
            return []

        url = f"{self._base_url}{_SEARCH_PATH}"
        try:
            response = await self._http.get(
                url,
                params={"type": "artist", "q": query},
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            raise UpstreamUnreachableError(
                message=f"Discogs search failed for '{query}': {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.status_code != 200:
            self._logger.warning(
                "discogs_http_error",
                query=query,
                status=response.status_code,
                body=response.text[:_ERROR_BODY_SNIPPET],
            )
            raise UpstreamStatusError(
                status_code=response.status_code,
                message=f"Discogs search returned HTTP {response.status_code}",
                provider_name=self.get_provider_name(),
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise DecodeError(
                message=f"Discogs search returned invalid JSON: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(payload, dict):
            raise DecodeError(
                message="Discogs search body is not an object",
                provider_name=self.get_provider_name(),
            )
        raw_results = payload.get("results", [])
        if not isinstance(raw_results, list):
            raise DecodeError(
                message="Discogs search 'results' is not a list",
                provider_name=self.get_provider_name(),
            )

        results = [
            normalize_search_candidate(PROVIDER_DISCOGS, item)
            for item in raw_results
            if isinstance(item, dict)
        ]
        self._logger.info("discogs_search_complete", query=query, result_count=len(results))
        return results

    def get_provider_name(self) -> str:
        """Return ``'discogs'``."""
        return PROVIDER_DISCOGS

    def is_available(self) -> bool:
        """Return ``True`` if a Discogs token was configured."""
        return self._configuration_error is None
