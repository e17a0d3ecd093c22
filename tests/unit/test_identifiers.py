"""Unit tests for id, URI and date parsing helpers and TimePeriod."""

from __future__ import annotations

import datetime

import pytest

from tests.conftest import ARTIST_ID, TODAY, TRACK_ID
from your_spotify_mcp.models.entities import TimePeriod, Track
from your_spotify_mcp.utils.errors import InputValidationError
from your_spotify_mcp.utils.identifiers import (
    normalize_spotify_id,
    parse_iso_date,
    track_uri,
    validate_context_uri,
    validate_track_uris,
)


class TestNormalizeSpotifyId:
    def test_bare_id_passes_through(self) -> None:
        assert normalize_spotify_id(TRACK_ID) == TRACK_ID

    def test_strips_uri_prefix(self) -> None:
        assert normalize_spotify_id(f"spotify:artist:{ARTIST_ID}", "artist") == ARTIST_ID

    def test_rejects_short_id_with_field(self) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            normalize_spotify_id("abc", "artist")
        assert exc_info.value.field == "artist_id"

    def test_rejects_wrong_kind_prefix(self) -> None:
        with pytest.raises(InputValidationError):
            normalize_spotify_id(f"spotify:album:{TRACK_ID}", "track")


class TestUris:
    def test_track_uri_derived_from_id(self) -> None:
        assert track_uri(TRACK_ID) == f"spotify:track:{TRACK_ID}"
        assert Track(id=TRACK_ID).uri == f"spotify:track:{TRACK_ID}"

    def test_empty_id_gives_empty_uri(self) -> None:
        assert Track().uri == ""

    def test_validate_track_uris_rejects_album_uri(self) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            validate_track_uris([f"spotify:track:{TRACK_ID}", f"spotify:album:{TRACK_ID}"])
        assert exc_info.value.field == "track_uris"

    def test_validate_context_uri(self) -> None:
        uri = f"spotify:playlist:{TRACK_ID}"
        assert validate_context_uri(uri) == uri
        with pytest.raises(InputValidationError):
            validate_context_uri(f"spotify:track:{TRACK_ID}")


class TestParseIsoDate:
    def test_valid(self) -> None:
        assert parse_iso_date("2024-02-29", "start_date") == datetime.date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2024/01/01", "24-01-01", "2024-1-1", ""])
    def test_bad_format(self, value: str) -> None:
        with pytest.raises(InputValidationError, match="YYYY-MM-DD"):
            parse_iso_date(value, "start_date")

    def test_impossible_calendar_date(self) -> None:
        with pytest.raises(InputValidationError, match="calendar"):
            parse_iso_date("2023-02-29", "end_date")


class TestTimePeriod:
    def test_defaults(self) -> None:
        period = TimePeriod.resolve(today=TODAY)
        assert period.start == datetime.date(2000, 1, 1)
        assert period.end == TODAY
        assert period.explicit_start is False
        assert period.explicit_end is False

    def test_start_after_end_rejected(self) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            TimePeriod.resolve("2024-05-02", "2024-05-01", today=TODAY)
        assert exc_info.value.field == "start_date"

    def test_same_day_allowed(self) -> None:
        assert TimePeriod.resolve("2024-05-01", "2024-05-01", today=TODAY).days == 1

    def test_leap_year_is_366_days(self) -> None:
        assert TimePeriod.resolve("2024-01-01", "2024-12-31", today=TODAY).days == 366

    def test_params_omit_implicit_end(self) -> None:
        period = TimePeriod.resolve("2024-01-01", today=TODAY)
        assert period.as_params() == {"start": "2024-01-01"}
        assert period.as_dict() == {"start": "2024-01-01", "end": TODAY.isoformat()}
