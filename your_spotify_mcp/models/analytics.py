"""Result records of the derived-analytics engine.

These models are what :class:`~your_spotify_mcp.services.analytics_service.AnalyticsService`
returns and what the tool layer formats.  Several fields are approximations
(see ``services/estimation.py``); the field docs say which.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from your_spotify_mcp.models.entities import (
    AlbumPlayCount,
    Artist,
    ArtistPlayCount,
    TimePeriod,
    Track,
    TrackPlayCount,
)

WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


class TopTracksResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: TimePeriod
    tracks: list[TrackPlayCount] = Field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.tracks)


class TopArtistsResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: TimePeriod
    artists: list[ArtistPlayCount] = Field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.artists)


class SearchResult(BaseModel):
    """A page of history matches; ``total`` counts every match, not the page."""

    model_config = ConfigDict(frozen=True)

    query: str
    search_type: Literal["track", "artist", "album"]
    period: TimePeriod
    items: list[TrackPlayCount] = Field(default_factory=list)
    total: int = 0
    offset: int = 0
    limit: int = 20
    used_artist_search: bool = False


class WrappedReport(BaseModel):
    """Year-in-review style aggregate over an arbitrary period.

    ``listening_by_hour`` has 24 entries indexed by hour; ``listening_by_day``
    maps weekday name (Sunday first) to summed duration.  ``peak_hour`` is
    ``None`` and ``peak_day`` / ``most_active_date`` are ``"Unknown"`` when
    every bucket is zero.  Discovery counts are always zero because the
    upstream has no first-listen signal.
    """

    model_config = ConfigDict(frozen=True)

    period: TimePeriod
    total_duration_ms: int = 0
    total_tracks_played: int = 0
    unique_tracks: int = 0
    unique_artists: int = 0
    top_tracks: list[TrackPlayCount] = Field(default_factory=list)
    top_artists: list[ArtistPlayCount] = Field(default_factory=list)
    top_albums: list[AlbumPlayCount] = Field(default_factory=list)
    listening_by_hour: list[int] = Field(default_factory=lambda: [0] * 24)
    listening_by_day: dict[str, int] = Field(
        default_factory=lambda: {name: 0 for name in WEEKDAY_NAMES}
    )
    peak_hour: int | None = None
    peak_day: str = "Unknown"
    most_active_date: str = "Unknown"
    new_tracks_count: int = 0
    new_artists_count: int = 0


class TimelinePoint(BaseModel):
    """``plays`` is estimated from ``duration_ms``."""

    model_config = ConfigDict(frozen=True)

    date: str
    plays: int = 0
    duration_ms: int = 0


class ListeningTimeline(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: TimePeriod
    granularity: Literal["day", "week", "month"]
    points: list[TimelinePoint] = Field(default_factory=list)


class PatternBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: str
    plays: int = 0
    duration_ms: int = 0


class ListeningPatterns(BaseModel):
    model_config = ConfigDict(frozen=True)

    pattern_type: str
    period: TimePeriod
    buckets: list[PatternBucket] = Field(default_factory=list)

    @property
    def total_plays(self) -> int:
        return sum(b.plays for b in self.buckets)


class RankResult(BaseModel):
    """Position of a track or artist among all listened subjects.

    The upstream only returns a neighbourhood window around the subject, so
    ``total`` is estimated as ``max(window_length, rank)`` and never falls
    below ``rank``.
    """

    model_config = ConfigDict(frozen=True)

    subject_type: Literal["track", "artist"]
    subject: Track | Artist
    rank: int = Field(ge=1)
    total: int = Field(ge=1)
    play_count: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percentile(self) -> int:
        return percentile(self.rank, self.total)


def percentile(rank: int, total: int) -> int:
    """``round((1 - rank / total) * 100)``; 0 for an empty population."""
    if total <= 0:
        return 0
    return round((1 - rank / total) * 100)


class DiscoveredTrack(BaseModel):
    model_config = ConfigDict(frozen=True)

    track: Track
    first_played: str
    total_plays: int = 0


class DiscoveredArtist(BaseModel):
    model_config = ConfigDict(frozen=True)

    artist: Artist
    first_played: str
    total_plays: int = 0


class DiscoveryInsights(BaseModel):
    """Low-play-count heuristic, not a true first-listen computation."""

    model_config = ConfigDict(frozen=True)

    period: TimePeriod
    new_tracks: list[DiscoveredTrack] = Field(default_factory=list)
    new_artists: list[DiscoveredArtist] = Field(default_factory=list)


class PeriodSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: TimePeriod
    total_plays: int = 0
    total_duration_ms: int = 0
    top_track: str | None = None
    top_artist: str | None = None


class PeriodComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    period1: PeriodSnapshot
    period2: PeriodSnapshot
    plays_change: int = 0
    plays_change_percent: int = 0
    hours_change: float = 0.0


class AffinityTrack(BaseModel):
    """``play_counts_estimated`` is True when counts were split evenly."""

    model_config = ConfigDict(frozen=True)

    track: Track
    score: int = 0
    play_counts: dict[str, int] = Field(default_factory=dict)
    play_counts_estimated: bool = False


class AffinityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    users: list[str]
    mode: Literal["average", "minima"]
    tracks: list[AffinityTrack] = Field(default_factory=list)
    overlap_percentage: float | None = None


class ExportResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: TimePeriod
    tracks: list[TrackPlayCount] = Field(default_factory=list)
    artists: list[ArtistPlayCount] = Field(default_factory=list)
    total_plays: int = 0
    total_duration_ms: int = 0
