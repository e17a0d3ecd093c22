"""Canonical music entities produced by response normalization.

Every model is a frozen Pydantic v2 value record: built fresh per request
from upstream payloads, never cached or mutated.  Key relationships:

    - Track has an ordered list of Artist and one Album
    - TrackPlayCount / ArtistPlayCount / AlbumPlayCount pair an entity with a
      play count inside a ranked list
    - TrackStats / ArtistStats are the per-entity detail views
    - TimePeriod is the validated date window every analytic query takes
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from your_spotify_mcp.utils.errors import InputValidationError
from your_spotify_mcp.utils.identifiers import parse_iso_date, track_uri


# ---------------------------------------------------------------------------
# Core entities
# ---------------------------------------------------------------------------

class Artist(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = "Unknown"
    genres: list[str] = Field(default_factory=list)


class Album(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    release_date: str = ""  # ISO date, or empty when unknown


class Track(BaseModel):
    """A single track.  ``uri`` is always derived from ``id``."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = "Unknown"
    artists: list[Artist] = Field(default_factory=list)
    album: Album = Field(default_factory=Album)
    duration_ms: int = Field(default=0, ge=0)
    explicit: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def uri(self) -> str:
        return track_uri(self.id)

    @property
    def artist_names(self) -> list[str]:
        return [a.name for a in self.artists]


# ---------------------------------------------------------------------------
# Ranked play-count records
# ---------------------------------------------------------------------------

class TrackPlayCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    track: Track
    play_count: int = Field(default=0, ge=0)


class ArtistPlayCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    artist: Artist
    play_count: int = Field(default=0, ge=0)
    listening_time_ms: int = Field(default=0, ge=0)


class AlbumPlayCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    album: Album
    artist_name: str = ""
    play_count: int = Field(default=0, ge=0)


# ---------------------------------------------------------------------------
# Detail views
# ---------------------------------------------------------------------------

class TrackStats(BaseModel):
    """Lifetime statistics of one track.

    ``total_duration_ms`` is ``total_plays * duration``; when the upstream
    omits the track duration a fallback average is used and
    ``duration_estimated`` is True.
    """

    model_config = ConfigDict(frozen=True)

    track: Track
    total_plays: int = 0
    total_duration_ms: int = 0
    duration_estimated: bool = False
    first_played: str = ""
    last_played: str = ""
    peak_day: str = ""
    peak_day_plays: int = 0


class ArtistStats(BaseModel):
    """Lifetime statistics of one artist.

    The upstream reports only play counts for artists, so
    ``total_duration_ms`` and ``listening_hours`` are always estimates.
    """

    model_config = ConfigDict(frozen=True)

    artist: Artist
    total_plays: int = 0
    total_duration_ms: int = 0
    first_played: str = ""
    last_played: str = ""
    top_tracks: list[TrackPlayCount] = Field(default_factory=list)
    listening_hours: float = 0.0


class TimeBucket(BaseModel):
    """One slice of a time-bucketed listening series.

    The calendar keys present depend on the upstream ``timeSplit``; the
    upstream puts listening duration (ms) in its ``count`` field.
    """

    model_config = ConfigDict(frozen=True)

    year: int | None = None
    month: int | None = None
    day: int | None = None
    week: int | None = None
    hour: int | None = None
    duration_ms: int = 0

    @property
    def date(self) -> datetime.date | None:
        if self.year and self.month and self.day:
            try:
                return datetime.date(self.year, self.month, self.day)
            except ValueError:
                return None
        return None

    @property
    def label(self) -> str:
        if self.year and self.month and self.day:
            return f"{self.year}-{self.month:02d}-{self.day:02d}"
        if self.year and self.month:
            return f"{self.year}-{self.month:02d}"
        if self.year and self.week:
            return f"{self.year}-W{self.week:02d}"
        return ""


class UserInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    username: str = ""
    public_token: str | None = None
    settings: dict = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Time period
# ---------------------------------------------------------------------------

class TimePeriod(BaseModel):
    """Inclusive date window ``start..end``.

    ``explicit_end`` records whether the caller supplied the end date.  When
    it did not, ``end`` is today and the upstream is left to apply its own
    "up to now" default so plays from earlier today are counted.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime.date
    end: datetime.date
    explicit_start: bool = True
    explicit_end: bool = True

    @classmethod
    def resolve(
        cls,
        start_date: str | None = None,
        end_date: str | None = None,
        *,
        default_start: str = "2000-01-01",
        today: datetime.date | None = None,
        start_field: str = "start_date",
        end_field: str = "end_date",
    ) -> TimePeriod:
        """Build a period from optional ISO strings, rejecting ``start > end``."""
        today = today or datetime.date.today()
        start = parse_iso_date(start_date, start_field) if start_date else parse_iso_date(
            default_start, start_field
        )
        end = parse_iso_date(end_date, end_field) if end_date else today
        if start > end:
            raise InputValidationError(
                message=f"{start_field} ({start.isoformat()}) must not be after {end_field} ({end.isoformat()})",
                field=start_field,
            )
        return cls(
            start=start,
            end=end,
            explicit_start=bool(start_date),
            explicit_end=bool(end_date),
        )

    @property
    def days(self) -> int:
        """Inclusive day count."""
        return (self.end - self.start).days + 1

    def as_params(self) -> dict[str, str]:
        params = {"start": self.start.isoformat()}
        if self.explicit_end:
            params["end"] = self.end.isoformat()
        return params

    def as_dict(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}
