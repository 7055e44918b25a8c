"""Unit tests for the Groupie Trackers catalog provider."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.models.catalog import Artist, CollectionKind, LocationRecord, RelationRecord
from src.providers.catalog.groupie_provider import GroupieCatalogProvider
from src.utils.errors import DecodeError, UpstreamStatusError, UpstreamUnreachableError

_BASE = "https://groupie.test/api"


def _response(status_code: int = 200, payload: Any = None, json_error: bool = False) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = "" if payload is None else str(payload)
    if json_error:
        response.json = MagicMock(side_effect=ValueError("Expecting value"))
    else:
        response.json = MagicMock(return_value=payload)
    return response


def _provider(response: MagicMock | None = None, side_effect: Any = None) -> tuple[GroupieCatalogProvider, AsyncMock]:
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=response, side_effect=side_effect)
    return GroupieCatalogProvider(http_client=mock_client, base_url=_BASE + "/"), mock_client


# ======================================================================
# Collections
# ======================================================================


class TestFetchCollection:
    @pytest.mark.asyncio
    async def test_artists_bare_array(self, raw_artists: list[dict[str, Any]]) -> None:
        provider, client = _provider(_response(payload=raw_artists))
        items = await provider.fetch_collection(CollectionKind.ARTISTS)

        assert [a.name for a in items] == ["Queen", "SOJA", "Unlisted Garage Band"]
        assert all(isinstance(a, Artist) for a in items)
        assert client.get.call_args.args[0] == f"{_BASE}/artists"

    @pytest.mark.asyncio
    async def test_artists_non_array_is_decode_error(self) -> None:
        provider, _ = _provider(_response(payload={"index": []}))
        with pytest.raises(DecodeError):
            await provider.fetch_collection(CollectionKind.ARTISTS)

    @pytest.mark.asyncio
    async def test_artists_schema_mismatch_is_decode_error(self) -> None:
        provider, _ = _provider(_response(payload=[{"id": "abc"}]))
        with pytest.raises(DecodeError):
            await provider.fetch_collection(CollectionKind.ARTISTS)

    @pytest.mark.asyncio
    async def test_locations_envelope_unwrapped(self, raw_locations_envelope: dict[str, Any]) -> None:
        provider, client = _provider(_response(payload=raw_locations_envelope))
        items = await provider.fetch_collection(CollectionKind.LOCATIONS)

        assert len(items) == 1
        assert isinstance(items[0], LocationRecord)
        assert items[0].locations == ["london-uk", "paris-france"]
        assert client.get.call_args.args[0] == f"{_BASE}/locations"

    @pytest.mark.asyncio
    async def test_relations_use_relation_path(self, raw_relations_envelope: dict[str, Any]) -> None:
        provider, client = _provider(_response(payload=raw_relations_envelope))
        items = await provider.fetch_collection(CollectionKind.RELATIONS)

        assert [r.id for r in items] == [1, 2]
        assert all(isinstance(r, RelationRecord) for r in items)
        assert client.get.call_args.args[0] == f"{_BASE}/relation"

    @pytest.mark.asyncio
    async def test_string_id_in_envelope_is_one_record(self) -> None:
        provider, _ = _provider(_response(payload={"index": [{"id": "1"}]}))
        items = await provider.fetch_collection(CollectionKind.LOCATIONS)
        assert len(items) == 1
        assert items[0].id == 1

    @pytest.mark.asyncio
    async def test_missing_envelope_field_yields_empty(self) -> None:
        provider, _ = _provider(_response(payload={"notindex": [{"id": 1}]}))
        assert await provider.fetch_collection(CollectionKind.LOCATIONS) == []

    @pytest.mark.asyncio
    async def test_wrongly_typed_envelope_field_yields_empty(self) -> None:
        provider, _ = _provider(_response(payload={"index": "oops"}))
        assert await provider.fetch_collection(CollectionKind.RELATIONS) == []

    @pytest.mark.asyncio
    async def test_invalid_items_skipped(self) -> None:
        payload = {"index": [{"id": 1}, "junk", {"id": "x"}, {"id": 4}]}
        provider, _ = _provider(_response(payload=payload))
        items = await provider.fetch_collection(CollectionKind.LOCATIONS)
        assert [i.id for i in items] == [1, 4]

    @pytest.mark.asyncio
    async def test_envelope_body_not_object_is_decode_error(self) -> None:
        provider, _ = _provider(_response(payload=[1, 2]))
        with pytest.raises(DecodeError):
            await provider.fetch_collection(CollectionKind.LOCATIONS)


# ======================================================================
# Failure mapping
# ======================================================================


class TestFailureMapping:
    @pytest.mark.asyncio
    async def test_transport_error_is_unreachable(self) -> None:
        provider, _ = _provider(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(UpstreamUnreachableError) as exc_info:
            await provider.fetch_collection(CollectionKind.ARTISTS)
        assert exc_info.value.provider_name == "groupie"

    @pytest.mark.asyncio
    async def test_timeout_is_unreachable(self) -> None:
        provider, _ = _provider(side_effect=httpx.TimeoutException("Timed out"))
        with pytest.raises(UpstreamUnreachableError):
            await provider.fetch_artist(1)

    @pytest.mark.asyncio
    async def test_non_200_is_status_error(self) -> None:
        provider, _ = _provider(_response(status_code=502))
        with pytest.raises(UpstreamStatusError) as exc_info:
            await provider.fetch_collection(CollectionKind.RELATIONS)
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_invalid_json_is_decode_error(self) -> None:
        provider, _ = _provider(_response(json_error=True))
        with pytest.raises(DecodeError):
            await provider.fetch_collection(CollectionKind.ARTISTS)


# ======================================================================
# By-id lookups
# ======================================================================


class TestFetchById:
    @pytest.mark.asyncio
    async def test_fetch_artist(self, raw_artists: list[dict[str, Any]]) -> None:
        provider, client = _provider(_response(payload=raw_artists[0]))
        artist = await provider.fetch_artist(1)
        assert artist.name == "Queen"
        assert client.get.call_args.args[0] == f"{_BASE}/artists/1"

    @pytest.mark.asyncio
    async def test_fetch_artist_non_object_is_decode_error(self) -> None:
        provider, _ = _provider(_response(payload=[]))
        with pytest.raises(DecodeError):
            await provider.fetch_artist(1)

    @pytest.mark.asyncio
    async def test_fetch_relations(self, raw_relations_envelope: dict[str, Any]) -> None:
        provider, client = _provider(_response(payload=raw_relations_envelope["index"][0]))
        relations = await provider.fetch_relations(1)
        assert relations.dates_locations["london-uk"] == ["14-06-2020", "15-06-2020"]
        assert client.get.call_args.args[0] == f"{_BASE}/relation/1"

    @pytest.mark.asyncio
    async def test_fetch_relations_bad_schema(self) -> None:
        provider, _ = _provider(_response(payload={"id": 1, "datesLocations": ["not", "a", "map"]}))
        with pytest.raises(DecodeError):
            await provider.fetch_relations(1)

    def test_provider_name(self) -> None:
        provider, _ = _provider(_response())
        assert provider.get_provider_name() == "groupie"
