"""Spotify Web API records used by the playback and playlist tools."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from your_spotify_mcp.models.entities import Track


class Device(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    type: str = ""
    volume_percent: int | None = None
    is_active: bool = False


class PlaybackState(BaseModel):
    """Current playback.  ``is_playing`` False and no track when idle."""

    model_config = ConfigDict(frozen=True)

    is_playing: bool = False
    track: Track | None = None
    device: Device | None = None
    progress_ms: int = 0
    shuffle_state: bool = False
    repeat_state: str = "off"
    context_uri: str = ""


class Playlist(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    description: str = ""
    public: bool | None = None
    collaborative: bool = False
    track_count: int = 0
    owner: str = ""
    uri: str = ""
    url: str = ""
    snapshot_id: str = ""


class CatalogItem(BaseModel):
    """One catalog search hit, flattened across result types."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    type: str = ""
    uri: str = ""
    subtitle: str = ""  # artists for tracks/albums, owner for playlists
    popularity: int | None = None


class CatalogSearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str
    tracks: list[CatalogItem] = Field(default_factory=list)
    artists: list[CatalogItem] = Field(default_factory=list)
    albums: list[CatalogItem] = Field(default_factory=list)
    playlists: list[CatalogItem] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.tracks) + len(self.artists) + len(self.albums) + len(self.playlists)
