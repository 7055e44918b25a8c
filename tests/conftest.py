"""Shared pytest fixtures for the groupieHub test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.config.settings import Settings
from src.interfaces.catalog_provider import ICatalogProvider
from src.interfaces.search_provider import IFallbackSearchProvider
from src.models.catalog import Artist, CollectionKind, LocationRecord, RelationRecord
from src.models.search import UnifiedSearchResult

# ---------------------------------------------------------------------------
# Raw upstream payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def raw_artists() -> list[dict[str, Any]]:
    """Artists exactly as the Groupie Trackers API sends them."""
    return [
        {
            "id": 1,
            "image": "https://groupietrackers.herokuapp.com/api/images/queen.jpeg",
            "name": "Queen",
            "members": ["Freddie Mercury", "Brian May", "John Daecon", "Roger Meddows-Taylor"],
            "creationDate": 1970,
            "firstAlbum": "14-12-1973",
            "locations": "https://groupietrackers.herokuapp.com/api/locations/1",
            "concertDates": "https://groupietrackers.herokuapp.com/api/dates/1",
            "relations": "https://groupietrackers.herokuapp.com/api/relation/1",
        },
        {
            "id": 2,
            "image": "https://groupietrackers.herokuapp.com/api/images/soja.jpeg",
            "name": "SOJA",
            "members": ["Jacob Hemphill", "Bob Jefferson"],
            "creationDate": 1997,
            "firstAlbum": "05-06-2002",
            "locations": "https://groupietrackers.herokuapp.com/api/locations/2",
            "concertDates": "https://groupietrackers.herokuapp.com/api/dates/2",
            "relations": "https://groupietrackers.herokuapp.com/api/relation/2",
        },
        {
            "id": 3,
            "image": "",
            "name": "Unlisted Garage Band",
            "members": None,
            "creationDate": 1985,
            "firstAlbum": "01-01-1986",
            "locations": "",
            "concertDates": "",
            "relations": "",
        },
    ]


@pytest.fixture
def raw_relations_envelope() -> dict[str, Any]:
    return {
        "index": [
            {
                "id": 1,
                "datesLocations": {
                    "london-uk": ["14-06-2020", "15-06-2020"],
                    "paris-france": ["20-06-2020"],
                },
            },
            {"id": 2, "datesLocations": {"playa_del_carmen-mexico": ["05-12-2019"]}},
        ]
    }


@pytest.fixture
def raw_locations_envelope() -> dict[str, Any]:
    return {
        "index": [
            {
                "id": 1,
                "locations": ["london-uk", "paris-france"],
                "dates": "https://groupietrackers.herokuapp.com/api/dates/1",
            },
        ]
    }


# ---------------------------------------------------------------------------
# Typed records
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_artists(raw_artists: list[dict[str, Any]]) -> list[Artist]:
    return [Artist.model_validate(item) for item in raw_artists]


@pytest.fixture
def sample_relations(raw_relations_envelope: dict[str, Any]) -> list[RelationRecord]:
    return [RelationRecord.model_validate(item) for item in raw_relations_envelope["index"]]


@pytest.fixture
def sample_locations(raw_locations_envelope: dict[str, Any]) -> list[LocationRecord]:
    return [LocationRecord.model_validate(item) for item in raw_locations_envelope["index"]]


# ---------------------------------------------------------------------------
# Mock providers
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_catalog(
    sample_artists: list[Artist],
    sample_locations: list[LocationRecord],
    sample_relations: list[RelationRecord],
) -> MagicMock:
    """A catalog provider answering every collection from the sample data."""
    collections = {
        CollectionKind.ARTISTS: sample_artists,
        CollectionKind.LOCATIONS: sample_locations,
        CollectionKind.RELATIONS: sample_relations,
    }

    async def _fetch(kind: CollectionKind) -> list:
        return list(collections[kind])

    catalog = MagicMock(spec=ICatalogProvider)
    catalog.get_provider_name.return_value = "groupie"
    catalog.fetch_collection = AsyncMock(side_effect=_fetch)
    catalog.fetch_artist = AsyncMock(return_value=sample_artists[0])
    catalog.fetch_relations = AsyncMock(return_value=sample_relations[0])
    return catalog


def make_fallback(
    name: str,
    results: list[UnifiedSearchResult] | None = None,
    available: bool = True,
) -> MagicMock:
    """Build a mock fallback provider whose ``search`` call count can be asserted."""
    provider = MagicMock(spec=IFallbackSearchProvider)
    provider.get_provider_name.return_value = name
    provider.is_available.return_value = available
    provider.search = AsyncMock(return_value=list(results or []))
    return provider


@pytest.fixture
def fallback_factory():
    return make_fallback


@pytest.fixture
def settings_factory():
    """Build Settings with no credentials and no reliance on a local .env file."""

    def _make(**overrides: Any) -> Settings:
        defaults: dict[str, Any] = {
            "discogs_token": "",
            "ticketmaster_api_key": "",
            "app_env": "test",
            "log_level": "WARNING",
        }
        defaults.update(overrides)
        return Settings(_env_file=None, **defaults)

    return _make
