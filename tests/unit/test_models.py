"""Unit tests for the catalog and search Pydantic models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from src.models.catalog import (
    AlbumImage,
    Artist,
    ArtistDetail,
    ArtistRelations,
    CollectionKind,
    CollectionState,
    CollectionStatus,
    ConcertInfo,
    LocationRecord,
    RelationRecord,
)
from src.models.search import SearchEvent, SearchImage, UnifiedSearchResult


class TestArtist:
    def test_validates_upstream_camel_case(self, raw_artists: list[dict[str, Any]]) -> None:
        artist = Artist.model_validate(raw_artists[0])
        assert artist.id == 1
        assert artist.creation_date == 1970
        assert artist.first_album == "14-12-1973"
        assert artist.concert_dates.endswith("/dates/1")
        assert artist.genre == ""

    def test_populate_by_field_name(self) -> None:
        artist = Artist(id=7, name="X", creation_date=2001)
        assert artist.creation_date == 2001

    def test_null_members_become_empty_list(self, raw_artists: list[dict[str, Any]]) -> None:
        assert Artist.model_validate(raw_artists[2]).members == []

    def test_missing_fields_take_defaults(self) -> None:
        artist = Artist.model_validate({})
        assert artist.id == 0
        assert artist.name == ""
        assert artist.members == []

    def test_frozen(self) -> None:
        artist = Artist(id=1, name="Queen")
        with pytest.raises(ValidationError):
            artist.id = 2  # type: ignore[misc]

    def test_serializes_back_to_camel_case(self) -> None:
        dumped = Artist(id=1, name="Queen", creation_date=1970).model_dump(by_alias=True)
        assert dumped["creationDate"] == 1970
        assert "creation_date" not in dumped

    def test_wrong_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Artist.model_validate({"id": "not-a-number"})


class TestEnvelopeRecords:
    def test_location_record_string_id_coerced(self) -> None:
        assert LocationRecord.model_validate({"id": "1"}).id == 1

    def test_location_record_keeps_extra_keys(self) -> None:
        record = LocationRecord.model_validate({"id": 1, "custom": "kept"})
        assert record.model_dump()["custom"] == "kept"

    def test_relation_record_aliases(self) -> None:
        record = RelationRecord.model_validate(
            {"id": 3, "datesLocations": {"berlin-germany": ["01-01-2020"]}}
        )
        assert record.dates_locations == {"berlin-germany": ["01-01-2020"]}
        assert isinstance(record, ArtistRelations)


class TestArtistDetail:
    def test_concert_info_alias_on_output(self) -> None:
        detail = ArtistDetail(
            id=1,
            name="Queen",
            concert_info=[ConcertInfo(location="london-uk", dates=["a", "b"])],
        )
        dumped = detail.model_dump(by_alias=True)
        assert dumped["concertInfo"] == [{"location": "london-uk", "dates": ["a", "b"]}]


class TestCollectionState:
    def test_defaults(self) -> None:
        state = CollectionState(kind=CollectionKind.ARTISTS, status=CollectionStatus.UNLOADED)
        assert state.size == 0
        assert state.loaded_at is None
        assert state.refresh_count == 0

    def test_enum_values(self) -> None:
        assert CollectionKind("relations") is CollectionKind.RELATIONS
        assert CollectionStatus.LOAD_FAILED.value == "load_failed"


class TestSearchModels:
    def test_unified_result_defaults(self) -> None:
        result = UnifiedSearchResult(name="Queen")
        assert result.url is None
        assert result.images == []
        assert result.events == []

    def test_nested_shapes(self) -> None:
        result = UnifiedSearchResult(
            name="Queen",
            url="https://example.com/queen",
            images=[SearchImage(url="https://img")],
            events=[SearchEvent(name="Queen Concert", date="14-06-2020", venue="london-uk")],
            source="groupie",
        )
        dumped = result.model_dump()
        assert dumped["images"] == [{"url": "https://img"}]
        assert dumped["events"][0]["venue"] == "london-uk"
        assert dumped["events"][0]["url"] == ""

    def test_album_image(self) -> None:
        image = AlbumImage.model_validate({"id": 4, "name": "A Night at the Opera", "photo": "p.jpg"})
        assert image.photo == "p.jpg"
