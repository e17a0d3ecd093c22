"""Domain models, re-exported from one place.

    - entities.py  -- Track, Artist, Album, play-count records, stats, TimePeriod
    - analytics.py -- results of the derived-analytics engine
    - playback.py  -- Spotify Web API playback and playlist records
"""

from __future__ import annotations

from your_spotify_mcp.models.analytics import (
    WEEKDAY_NAMES,
    AffinityResult,
    AffinityTrack,
    DiscoveredArtist,
    DiscoveredTrack,
    DiscoveryInsights,
    ExportResult,
    ListeningPatterns,
    ListeningTimeline,
    PatternBucket,
    PeriodComparison,
    PeriodSnapshot,
    RankResult,
    SearchResult,
    TimelinePoint,
    TopArtistsResult,
    TopTracksResult,
    WrappedReport,
    percentile,
)
from your_spotify_mcp.models.entities import (
    Album,
    AlbumPlayCount,
    Artist,
    ArtistPlayCount,
    ArtistStats,
    TimeBucket,
    TimePeriod,
    Track,
    TrackPlayCount,
    TrackStats,
    UserInfo,
)
from your_spotify_mcp.models.playback import (
    CatalogItem,
    CatalogSearchResult,
    Device,
    PlaybackState,
    Playlist,
)

__all__ = [
    "WEEKDAY_NAMES",
    "AffinityResult",
    "AffinityTrack",
    "Album",
    "AlbumPlayCount",
    "Artist",
    "ArtistPlayCount",
    "ArtistStats",
    "CatalogItem",
    "CatalogSearchResult",
    "Device",
    "DiscoveredArtist",
    "DiscoveredTrack",
    "DiscoveryInsights",
    "ExportResult",
    "ListeningPatterns",
    "ListeningTimeline",
    "PatternBucket",
    "PeriodComparison",
    "PeriodSnapshot",
    "PlaybackState",
    "Playlist",
    "RankResult",
    "SearchResult",
    "TimeBucket",
    "TimePeriod",
    "TimelinePoint",
    "TopArtistsResult",
    "TopTracksResult",
    "Track",
    "TrackPlayCount",
    "TrackStats",
    "UserInfo",
    "WrappedReport",
    "percentile",
]
