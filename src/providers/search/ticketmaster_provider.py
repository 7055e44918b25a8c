"""Ticketmaster Discovery provider implementing IFallbackSearchProvider.

Second fallback of the search waterfall.  Queries
``/discovery/v2/events.json`` by keyword and locale, then turns the event
listing inside out: every attraction (artist) found under
``_embedded.events[]._embedded.attractions[]`` becomes one result, with
the events it appears in attached.

The API key travels as the ``apikey`` query parameter.  Without
``TICKETMASTER_API_KEY`` the provider reports itself once and stays
disabled.  Non-200 answers are logged with a body snippet and raised as
UpstreamStatusError; they are never retried.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.config.settings import Settings
from src.interfaces.search_provider import IFallbackSearchProvider
from src.models.search import UnifiedSearchResult
from src.services.normalizer import PROVIDER_TICKETMASTER, normalize_search_candidate
from src.utils.errors import (
    ConfigurationMissingError,
    DecodeError,
    UpstreamStatusError,
    UpstreamUnreachableError,
)
from src.utils.logging import get_logger

_EVENTS_PATH = "/discovery/v2/events.json"
_ERROR_BODY_SNIPPET = 200


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _embedded(node: Any) -> dict[str, Any]:
    if isinstance(node, dict) and isinstance(node.get("_embedded"), dict):
        return node["_embedded"]
    return {}


def _local_date(event: dict[str, Any]) -> str:
    dates = event.get("dates")
    start = dates.get("start") if isinstance(dates, dict) else None
    return _text(start.get("localDate")) if isinstance(start, dict) else ""


def _first_venue_name(event_embedded: dict[str, Any]) -> str:
    venues = event_embedded.get("venues")
    if isinstance(venues, list) and venues and isinstance(venues[0], dict):
        return _text(venues[0].get("name"))
    return ""


def collect_attractions(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Group a Discovery events payload by attraction name.

    Returns raw candidate dicts (``name``, ``url``, ``images``, ``events``)
    in first-seen order, ready for :func:`normalize_search_candidate`.
    """
    attractions: dict[str, dict[str, Any]] = {}

    events = _embedded(payload).get("events")
    for event in events if isinstance(events, list) else []:
        if not isinstance(event, dict):
            continue
        event_embedded = _embedded(event)
        summary = {
            "name": _text(event.get("name")),
            "url": _text(event.get("url")),
            "date": _local_date(event),
            "venue": _first_venue_name(event_embedded),
        }

        raw_attractions = event_embedded.get("attractions")
        for attraction in raw_attractions if isinstance(raw_attractions, list) else []:
            if not isinstance(attraction, dict):
                continue
            name = _text(attraction.get("name"))
            if not name:
                continue
            entry = attractions.get(name)
            if entry is None:
                images = attraction.get("images")
                entry = {
                    "name": name,
                    "url": _text(attraction.get("url")),
                    "images": images if isinstance(images, list) else [],
                    "events": [],
                }
                attractions[name] = entry
            entry["events"].append(dict(summary))

    return list(attractions.values())


class TicketmasterSearchProvider(IFallbackSearchProvider):
    """Artist search through Ticketmaster event listings.

    Parameters
    ----------
    settings:
        Supplies ``ticketmaster_api_key``, ``ticketmaster_api_base_url``,
        ``ticketmaster_locale`` and ``ticketmaster_page_size``.
    http_client:
        Shared ``httpx.AsyncClient``.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._api_key = settings.ticketmaster_api_key.strip()
        self._base_url = settings.ticketmaster_api_base_url.rstrip("/")
        self._locale = settings.ticketmaster_locale
        self._page_size = settings.ticketmaster_page_size
        self._logger = get_logger(__name__)

        self._configuration_error: ConfigurationMissingError | None = None
        if not self._api_key:
            self._configuration_error = ConfigurationMissingError(
                message="TICKETMASTER_API_KEY is not set; Ticketmaster fallback search is disabled",
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

    # -- IFallbackSearchProvider implementation --------------------------------

    async def search(self, query: str) -> list[UnifiedSearchResult]:
        if not self.is_available() or not query.strip():
            return []

        url = f"{self._base_url}{_EVENTS_PATH}"
        params = {
            "keyword": query,
            "locale": self._locale,
            "apikey": self._api_key,
            "size": str(self._page_size),
        }
        try:
            response = await self._http.get(url, params=params, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise UpstreamUnreachableError(
                message=f"Ticketmaster search failed for '{query}': {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.status_code != 200:
            self._logger.warning(
                "ticketmaster_http_error",
                query=query,
                status=response.status_code,
                body=response.text[:_ERROR_BODY_SNIPPET],
            )
            raise UpstreamStatusError(
                status_code=response.status_code,
                message=f"Ticketmaster search returned HTTP {response.status_code}",
                provider_name=self.get_provider_name(),
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise DecodeError(
                message=f"Ticketmaster search returned invalid JSON: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(payload, dict):
            raise DecodeError(
                message="Ticketmaster search body is not an object",
                provider_name=self.get_provider_name(),
            )

        results = [
            normalize_search_candidate(PROVIDER_TICKETMASTER, candidate)
            for candidate in collect_attractions(payload)
        ]
        self._logger.info("ticketmaster_search_complete", query=query, result_count=len(results))
        return results

    def get_provider_name(self) -> str:
        """Return ``'ticketmaster'``."""
        return PROVIDER_TICKETMASTER

    def is_available(self) -> bool:
        """Return ``True`` if an API key was configured."""
        return self._configuration_error is None
