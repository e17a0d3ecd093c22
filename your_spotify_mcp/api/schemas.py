"""Pydantic input schemas for every MCP tool.

Each tool publishes ``model_json_schema()`` of its input model as the MCP
``inputSchema`` and validates incoming arguments against the same model, so
the declared contract and the enforced one cannot drift.

# ─── HOW SCHEMAS WORK ──────────────────────────────────────────────────
#
# Field(...) constraints (ge/le, min_length, pattern) become JSON-schema
# keywords the assistant sees, and pydantic enforces them on every call.
# A violation raises ``pydantic.ValidationError``; the tool boundary turns
# that into an ``InputValidationError`` naming the first offending field.
#
# Convention: one ``...Input`` model per tool, named after the tool.
# Date fields are plain ``YYYY-MM-DD`` strings; calendar validity and the
# ``start <= end`` rule are checked by the analytics engine.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

DateStr = Annotated[str, Field(pattern=r"^\d{4}-\d{2}-\d{2}$", description="Date as YYYY-MM-DD")]
TrackUri = Annotated[str, Field(pattern=r"^spotify:track:[a-zA-Z0-9]{22}$")]
PlaylistId = Annotated[str, Field(pattern=r"^[a-zA-Z0-9]{22}$", description="22-character Spotify playlist id")]

OutputFormat = Literal["json", "compact"]


class _PeriodInput(BaseModel):
    start_date: DateStr | None = Field(default=None, description="Start date (YYYY-MM-DD); defaults to all history")
    end_date: DateStr | None = Field(default=None, description="End date (YYYY-MM-DD); defaults to today")


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


class GetTrackStatsInput(BaseModel):
    track_id: str = Field(min_length=1, description="Spotify track id or spotify:track: URI")


class GetArtistStatsInput(BaseModel):
    artist_id: str = Field(min_length=1, description="Spotify artist id or spotify:artist: URI")


class GetTopTracksInput(_PeriodInput):
    limit: int = Field(default=10, ge=1, le=30, description="Number of tracks (1-30)")
    offset: int = Field(default=0, ge=0)
    output_format: OutputFormat = Field(
        default="json", description="'compact' returns a token-efficient table instead of JSON rows"
    )


class GetTopArtistsInput(_PeriodInput):
    limit: int = Field(default=10, ge=1, le=30, description="Number of artists (1-30)")
    offset: int = Field(default=0, ge=0)
    output_format: OutputFormat = "json"


class SearchListeningHistoryInput(_PeriodInput):
    query: str = Field(min_length=1, max_length=200, description="Text to match against names")
    type: Literal["track", "artist", "album"] = "track"
    limit: int = Field(default=20, ge=1, le=50)
    offset: int = Field(default=0, ge=0)


class CreateCustomWrappedInput(BaseModel):
    start_date: DateStr
    end_date: DateStr


class AnalyzeAffinityInput(_PeriodInput):
    user_ids: list[str] = Field(min_length=2, max_length=5, description="2-5 distinct Your Spotify user ids")
    mode: Literal["average", "minima"] = Field(
        default="average",
        description="'minima' favours tracks every user shares, 'average' tracks anyone loves",
    )
    limit: int = Field(default=20, ge=1, le=30)


class GetListeningTimelineInput(_PeriodInput):
    granularity: Literal["day", "week", "month"] = "day"


class GetArtistRankInput(_PeriodInput):
    artist_id: str = Field(min_length=1)


class GetTrackRankInput(_PeriodInput):
    track_id: str = Field(min_length=1)


class AnalyzeListeningPatternsInput(_PeriodInput):
    pattern_type: Literal[
        "hour_of_day", "day_of_week", "day_and_time", "day", "week", "month",
        "hourly", "daily", "weekly", "monthly",
    ] = "hour_of_day"


class GetDiscoveryInsightsInput(BaseModel):
    start_date: DateStr
    end_date: DateStr | None = None
    limit: int = Field(default=20, ge=1, le=30)


class CompareListeningPeriodsInput(BaseModel):
    period1_start: DateStr
    period1_end: DateStr
    period2_start: DateStr
    period2_end: DateStr


class ExportListeningDataInput(_PeriodInput):
    format: Literal["json", "csv", "summary"] = "summary"
    include: list[Literal["tracks", "artists"]] = Field(default_factory=lambda: ["tracks", "artists"])
    limit: int = Field(default=10, ge=1, le=30)


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------


class UpdateUserSettingsInput(BaseModel):
    timezone: str | None = Field(default=None, description="IANA timezone, e.g. Europe/Paris")


class RenameAccountInput(BaseModel):
    new_username: str = Field(min_length=1, max_length=50)


class GeneratePublicShareLinkInput(BaseModel):
    pass


class RevokePublicAccessInput(BaseModel):
    pass


# ---------------------------------------------------------------------------
# Spotify playback and playlists
# ---------------------------------------------------------------------------


class CreatePlaylistInput(BaseModel):
    playlist_name: str = Field(min_length=1, max_length=100)
    playlist_description: str = Field(default="", max_length=300)
    track_uris: list[TrackUri] = Field(min_length=1, max_length=100)
    public: bool = False


class AddTracksToPlaylistInput(BaseModel):
    playlist_id: PlaylistId
    track_uris: list[TrackUri] = Field(min_length=1, max_length=100)
    position: int | None = Field(default=None, ge=0)


class RemoveFromPlaylistInput(BaseModel):
    playlist_id: PlaylistId
    track_uris: list[TrackUri] = Field(min_length=1, max_length=100)
    snapshot_id: str | None = None


class UpdatePlaylistDetailsInput(BaseModel):
    playlist_id: PlaylistId
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=300)
    public: bool | None = None


class GetUserPlaylistsInput(BaseModel):
    limit: int = Field(default=20, ge=1, le=50)
    offset: int = Field(default=0, ge=0)


class SearchSpotifyCatalogInput(BaseModel):
    query: str = Field(min_length=1, max_length=200)
    types: list[Literal["track", "artist", "album", "playlist"]] = Field(
        default_factory=lambda: ["track"], min_length=1
    )
    limit: int = Field(default=20, ge=1, le=50)


class GetCurrentPlaybackInput(BaseModel):
    market: str | None = Field(default=None, pattern=r"^[A-Z]{2}$", description="ISO 3166-1 alpha-2 code")


class ControlPlaybackInput(BaseModel):
    action: Literal["play", "pause", "next", "previous", "seek", "volume"]
    device_id: str | None = None
    position_ms: int | None = Field(default=None, ge=0, description="Required for seek")
    volume_percent: int | None = Field(default=None, ge=0, le=100, description="Required for volume")


class PlayTracksInput(BaseModel):
    uris: list[TrackUri] | None = Field(default=None, min_length=1, max_length=100)
    context_uri: str | None = Field(
        default=None, pattern=r"^spotify:(album|playlist|artist):[a-zA-Z0-9]{22}$"
    )
    offset_position: int | None = Field(default=None, ge=0)
    device_id: str | None = None


class QueueTracksInput(BaseModel):
    track_uris: list[TrackUri] = Field(min_length=1, max_length=50)
    device_id: str | None = None
