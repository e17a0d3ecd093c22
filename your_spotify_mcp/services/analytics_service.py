"""Derived-analytics engine over the Your Spotify API.

One stateless :class:`AnalyticsService` method per analytic capability.  The
service owns no mutable state: every call is a function of its arguments and
of the upstream data at call time.  All upstream access goes through the
injected :class:`IUpstreamClient`, whose rate limiter also governs the
concurrent sub-fetches issued here via :func:`gather_all`.

Approximations in use (see ``services/estimation.py``):

- Track-stats duration falls back to 180 s per play; artist-stats duration is
  210 s per play.
- Timeline and pattern play counts are ``listening ms / 180 s``.
- Discoveries are low-play-count entries, not true first listens.
- Affinity play counts are split evenly when the upstream gives only a score.
- Wrapped's unique track and artist counts are the sizes of the top lists.

Total plays always come from the ``total_count`` grand total attached to the
top-songs response.  The dedicated "listened to" endpoint reports wrong
numbers and is never used.
"""

from __future__ import annotations

import datetime
from typing import Any, Callable
from urllib.parse import quote

from your_spotify_mcp.config.loader import AnalyticsTuning
from your_spotify_mcp.interfaces.upstream_client import IUpstreamClient
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
)
from your_spotify_mcp.models.entities import (
    ArtistStats,
    TimeBucket,
    TimePeriod,
    TrackPlayCount,
    TrackStats,
)
from your_spotify_mcp.services import normalizer
from your_spotify_mcp.services.estimation import (
    estimate_plays_from_duration,
    is_probable_discovery,
    ms_to_hours,
    split_evenly,
)
from your_spotify_mcp.utils.concurrency import gather_all
from your_spotify_mcp.utils.errors import (
    InputValidationError,
    UnsupportedOperationError,
    UpstreamError,
)
from your_spotify_mcp.utils.identifiers import normalize_spotify_id
from your_spotify_mcp.utils.logging import get_logger

logger = get_logger(__name__)

_TOP_SONGS = "/spotify/top/songs"
_TOP_ARTISTS = "/spotify/top/artists"
_TOP_ALBUMS = "/spotify/top/albums"
_TIME_PER = "/spotify/time_per"
_COLLABORATIVE = "/spotify/collaborative/top/songs"

_PATTERN_ALIASES = {
    "hourly": "hour_of_day",
    "hour_of_day": "hour_of_day",
    "day_of_week": "day_of_week",
    "day_and_time": "day_and_time",
    "daily": "day",
    "day": "day",
    "weekly": "week",
    "week": "week",
    "monthly": "month",
    "month": "month",
}

_AFFINITY_MODE_FLAGS = {"average": 0, "minima": 1}


def _sort_by_plays(records: list[Any]) -> list[Any]:
    """Stable sort by ``play_count`` descending; ties keep upstream order."""
    return sorted(records, key=lambda r: r.play_count, reverse=True)


def _argmax(values: dict[Any, int]) -> Any | None:
    """Key of the first maximal value, or ``None`` when every value is zero."""
    best_key = None
    best_value = 0
    for key, value in values.items():
        if value > best_value:
            best_key, best_value = key, value
    return best_key


def _weekday_name(day: datetime.date) -> str:
    # date.weekday() is Monday=0; WEEKDAY_NAMES starts on Sunday.
    return WEEKDAY_NAMES[(day.weekday() + 1) % 7]


def _sum_duration(buckets: list[TimeBucket]) -> int:
    return sum(b.duration_ms for b in buckets)


class AnalyticsService:
    """Read-only analytics over the Your Spotify API.

    Parameters
    ----------
    client:
        The Your Spotify upstream client.
    tuning:
        Thresholds and caps; defaults match the upstream's documented limits.
    today:
        Clock for "today" defaults, injectable for tests.
    """

    def __init__(
        self,
        client: IUpstreamClient,
        tuning: AnalyticsTuning | None = None,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self._client = client
        self._tuning = tuning or AnalyticsTuning()
        self._today = today

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def resolve_period(
        self,
        start_date: str | None,
        end_date: str | None,
        start_field: str = "start_date",
        end_field: str = "end_date",
    ) -> TimePeriod:
        return TimePeriod.resolve(
            start_date,
            end_date,
            default_start=self._tuning.default_start_date,
            today=self._today(),
            start_field=start_field,
            end_field=end_field,
        )

    def _count(self, requested: int | None, default: int = 10) -> int:
        """Clamp a result count to ``1..max_result_count``; the upstream caps at 30."""
        value = default if requested is None else requested
        return max(1, min(int(value), self._tuning.max_result_count))

    @staticmethod
    def _optional_period_params(period: TimePeriod) -> dict[str, str]:
        params: dict[str, str] = {}
        if period.explicit_start:
            params["start"] = period.start.isoformat()
        if period.explicit_end:
            params["end"] = period.end.isoformat()
        return params

    async def _get_list(self, endpoint: str, params: dict[str, Any]) -> list[Any]:
        raw = await self._client.get(endpoint, params)
        return raw if isinstance(raw, list) else []

    async def _time_series(self, period: TimePeriod, split: str) -> list[TimeBucket]:
        raw = await self._get_list(_TIME_PER, {**period.as_params(), "timeSplit": split})
        return normalizer.normalize_time_series(raw)

    # ------------------------------------------------------------------
    # Top lists and detail views
    # ------------------------------------------------------------------

    async def get_top_tracks(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> TopTracksResult:
        period = self.resolve_period(start_date, end_date)
        nb = self._count(limit)
        raw = await self._get_list(_TOP_SONGS, {**period.as_params(), "nb": nb, "offset": max(offset, 0)})
        tracks = _sort_by_plays([normalizer.normalize_top_track(item) for item in raw])[:nb]
        logger.debug("top_tracks_fetched", count=len(tracks), nb=nb)
        return TopTracksResult(period=period, tracks=tracks)

    async def get_top_artists(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> TopArtistsResult:
        period = self.resolve_period(start_date, end_date)
        nb = self._count(limit)
        raw = await self._get_list(_TOP_ARTISTS, {**period.as_params(), "nb": nb, "offset": max(offset, 0)})
        artists = _sort_by_plays([normalizer.normalize_top_artist(item) for item in raw])[:nb]
        logger.debug("top_artists_fetched", count=len(artists), nb=nb)
        return TopArtistsResult(period=period, artists=artists)

    async def get_track_stats(self, track_id: str) -> TrackStats:
        track_id = normalize_spotify_id(track_id, "track")
        raw = await self._client.get(f"/track/{track_id}/stats")
        return normalizer.normalize_track_stats(raw, track_id)

    async def get_artist_stats(self, artist_id: str) -> ArtistStats:
        artist_id = normalize_spotify_id(artist_id, "artist")
        raw = await self._client.get(f"/artist/{artist_id}/stats")
        return normalizer.normalize_artist_stats(raw, artist_id, top_n=self._tuning.artist_top_tracks)

    # ------------------------------------------------------------------
    # History search
    # ------------------------------------------------------------------

    async def search_history(
        self,
        query: str,
        search_type: str = "track",
        start_date: str | None = None,
        end_date: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> SearchResult:
        """Approximate history search over the period's top-N window.

        The upstream has no free-text history search.  Tracks are matched
        locally against a fixed-size top-songs pool.  Artist queries long
        enough for the upstream artist search try it first and match its
        candidates by id or name; any failure or empty match falls back to
        local filtering silently.
        """
        needle = query.strip().lower()
        if not needle:
            raise InputValidationError("query must not be empty", field="query")
        if search_type not in ("track", "artist", "album"):
            raise InputValidationError("type must be one of track, artist, album", field="type")
        period = self.resolve_period(start_date, end_date)

        candidates: list[Any] = []
        if search_type == "artist" and len(query.strip()) >= self._tuning.artist_search_min_length:
            candidates = await self._search_artists(query.strip())

        pool = await self._top_track_pool(period)

        matches: list[TrackPlayCount] = []
        used_artist_search = False
        if candidates:
            ids = {a.id for a in candidates if a.id}
            names = {a.name.lower() for a in candidates if a.name}
            matches = [
                entry
                for entry in pool
                if any(a.id in ids or a.name.lower() in names for a in entry.track.artists)
            ]
            used_artist_search = bool(matches)

        if not matches:
            matches = [entry for entry in pool if self._matches_locally(entry, needle, search_type)]

        page = matches[offset : offset + limit]
        logger.info(
            "history_search_complete",
            search_type=search_type,
            total=len(matches),
            returned=len(page),
            used_artist_search=used_artist_search,
        )
        return SearchResult(
            query=query,
            search_type=search_type,
            period=period,
            items=page,
            total=len(matches),
            offset=offset,
            limit=limit,
            used_artist_search=used_artist_search,
        )

    async def _search_artists(self, query: str) -> list[Any]:
        try:
            raw = await self._client.get(f"/artist/search/{quote(query, safe='')}")
        except UpstreamError as exc:
            logger.info("artist_search_fallback", reason=exc.message, status=exc.status)
            return []
        if not isinstance(raw, list):
            return []
        return [normalizer.normalize_search_artist(item) for item in raw if isinstance(item, dict)]

    async def _top_track_pool(self, period: TimePeriod) -> list[TrackPlayCount]:
        nb = self._count(self._tuning.search_pool_size)
        raw = await self._get_list(_TOP_SONGS, {**period.as_params(), "nb": nb})
        return _sort_by_plays([normalizer.normalize_top_track(item) for item in raw])

    @staticmethod
    def _matches_locally(entry: TrackPlayCount, needle: str, search_type: str) -> bool:
        artist_hit = any(needle in a.name.lower() for a in entry.track.artists)
        if search_type == "artist":
            return artist_hit
        if search_type == "album":
            return needle in entry.track.album.name.lower() or artist_hit
        return needle in entry.track.name.lower() or artist_hit

    # ------------------------------------------------------------------
    # Wrapped
    # ------------------------------------------------------------------

    async def create_custom_wrapped(self, start_date: str, end_date: str) -> WrappedReport:
        """Aggregate a year-in-review style report for ``start_date..end_date``.

        Periods longer than ``wrapped_max_days`` (366, inclusive) are rejected
        before any fetch.  The five sub-fetches run concurrently and any
        failure fails the whole report.
        """
        period = self.resolve_period(start_date, end_date)
        if period.days > self._tuning.wrapped_max_days:
            raise InputValidationError(
                f"Wrapped periods are limited to {self._tuning.wrapped_max_days} days "
                f"(requested {period.days})",
                field="end_date",
            )

        params = period.as_dict()
        songs, artists, albums, hourly, daily = await gather_all(
            self._get_list(_TOP_SONGS, {**params, "nb": 10}),
            self._get_list(_TOP_ARTISTS, {**params, "nb": 10}),
            self._get_list(_TOP_ALBUMS, {**params, "nb": 5}),
            self._get_list(_TIME_PER, {**params, "timeSplit": "hour"}),
            self._get_list(_TIME_PER, {**params, "timeSplit": "day"}),
        )

        hour_buckets = normalizer.normalize_time_series(hourly)
        day_buckets = normalizer.normalize_time_series(daily)

        by_hour = [0] * 24
        for bucket in hour_buckets:
            if bucket.hour is not None and 0 <= bucket.hour < 24:
                by_hour[bucket.hour] += bucket.duration_ms

        by_weekday = {name: 0 for name in WEEKDAY_NAMES}
        by_date: dict[str, int] = {}
        for bucket in day_buckets:
            day = bucket.date
            if day is None:
                continue
            by_weekday[_weekday_name(day)] += bucket.duration_ms
            by_date[day.isoformat()] = by_date.get(day.isoformat(), 0) + bucket.duration_ms

        top_tracks = _sort_by_plays([normalizer.normalize_top_track(i) for i in songs])
        top_artists = _sort_by_plays([normalizer.normalize_top_artist(i) for i in artists])
        top_albums = _sort_by_plays([normalizer.normalize_top_album(i) for i in albums])

        report = WrappedReport(
            period=period,
            total_duration_ms=_sum_duration(day_buckets),
            total_tracks_played=normalizer.grand_total(songs),
            unique_tracks=len(top_tracks),
            unique_artists=len(top_artists),
            top_tracks=top_tracks[:5],
            top_artists=top_artists[:5],
            top_albums=top_albums[:5],
            listening_by_hour=by_hour,
            listening_by_day=by_weekday,
            peak_hour=_argmax(dict(enumerate(by_hour))),
            peak_day=_argmax(by_weekday) or "Unknown",
            most_active_date=_argmax(by_date) or "Unknown",
        )
        logger.info(
            "wrapped_report_built",
            days=period.days,
            total_tracks_played=report.total_tracks_played,
            total_duration_ms=report.total_duration_ms,
        )
        return report

    # ------------------------------------------------------------------
    # Time series
    # ------------------------------------------------------------------

    async def get_listening_timeline(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        granularity: str = "day",
    ) -> ListeningTimeline:
        if granularity not in ("day", "week", "month"):
            raise InputValidationError("granularity must be day, week or month", field="granularity")
        period = self.resolve_period(start_date, end_date)
        buckets = await self._time_series(period, granularity)
        points = [
            TimelinePoint(
                date=b.label,
                plays=estimate_plays_from_duration(b.duration_ms),
                duration_ms=b.duration_ms,
            )
            for b in buckets
        ]
        return ListeningTimeline(period=period, granularity=granularity, points=points)

    async def analyze_listening_patterns(
        self,
        pattern_type: str = "hour_of_day",
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> ListeningPatterns:
        canonical = _PATTERN_ALIASES.get(pattern_type)
        if canonical is None:
            raise InputValidationError(
                "pattern_type must be hour_of_day, day_of_week, day, week or month",
                field="pattern_type",
            )
        if canonical == "day_and_time":
            raise UnsupportedOperationError(
                "The day_and_time pattern is not supported: the upstream cannot combine hour and weekday data",
                guidance="Run hour_of_day and day_of_week separately instead.",
                provider_name=self._client.get_provider_name(),
            )
        period = self.resolve_period(start_date, end_date)

        if canonical == "hour_of_day":
            totals = [0] * 24
            for bucket in await self._time_series(period, "hour"):
                if bucket.hour is not None and 0 <= bucket.hour < 24:
                    totals[bucket.hour] += bucket.duration_ms
            buckets = [
                PatternBucket(
                    period=f"{hour:02d}:00",
                    plays=estimate_plays_from_duration(ms),
                    duration_ms=ms,
                )
                for hour, ms in enumerate(totals)
            ]
        elif canonical == "day_of_week":
            by_weekday = {name: 0 for name in WEEKDAY_NAMES}
            for bucket in await self._time_series(period, "day"):
                if bucket.date is not None:
                    by_weekday[_weekday_name(bucket.date)] += bucket.duration_ms
            buckets = [
                PatternBucket(period=name, plays=estimate_plays_from_duration(ms), duration_ms=ms)
                for name, ms in by_weekday.items()
            ]
        else:
            buckets = [
                PatternBucket(
                    period=b.label,
                    plays=estimate_plays_from_duration(b.duration_ms),
                    duration_ms=b.duration_ms,
                )
                for b in await self._time_series(period, canonical)
            ]

        return ListeningPatterns(pattern_type=canonical, period=period, buckets=buckets)

    # ------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------

    async def get_artist_rank(
        self,
        artist_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> RankResult:
        artist_id = normalize_spotify_id(artist_id, "artist")
        period = self.resolve_period(start_date, end_date)
        rank_raw, stats_raw = await gather_all(
            self._client.get(f"/artist/{artist_id}/rank", self._optional_period_params(period)),
            self._client.get(f"/artist/{artist_id}/stats"),
        )
        rank, window, plays = normalizer.normalize_rank(rank_raw, artist_id)
        artist = normalizer.normalize_artist_stats(stats_raw, artist_id, top_n=0).artist
        return RankResult(
            subject_type="artist",
            subject=artist.model_copy(update={"id": artist_id}),
            rank=rank,
            total=max(window, rank),
            play_count=plays,
        )

    async def get_track_rank(
        self,
        track_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> RankResult:
        track_id = normalize_spotify_id(track_id, "track")
        period = self.resolve_period(start_date, end_date)
        rank_raw, stats_raw = await gather_all(
            self._client.get(f"/track/{track_id}/rank", self._optional_period_params(period)),
            self._client.get(f"/track/{track_id}/stats"),
        )
        rank, window, plays = normalizer.normalize_rank(rank_raw, track_id)
        track = normalizer.normalize_track_stats(stats_raw, track_id).track
        return RankResult(
            subject_type="track",
            subject=track.model_copy(update={"id": track_id}),
            rank=rank,
            total=max(window, rank),
            play_count=plays,
        )

    # ------------------------------------------------------------------
    # Discovery, comparison, affinity, export
    # ------------------------------------------------------------------

    async def get_discovery_insights(
        self,
        start_date: str,
        end_date: str | None = None,
        limit: int = 20,
    ) -> DiscoveryInsights:
        """Probable discoveries: entries with few plays inside the period.

        This is a heuristic.  The upstream has no first-listen signal, so
        ``first_played`` is reported as the period start.
        """
        period = self.resolve_period(start_date, end_date)
        nb = self._count(limit, default=20)
        params = period.as_params()
        songs, artists = await gather_all(
            self._get_list(_TOP_SONGS, {**params, "nb": nb}),
            self._get_list(_TOP_ARTISTS, {**params, "nb": self._tuning.discovery_artist_pool_size}),
        )
        first_played = period.start.isoformat()

        new_tracks = [
            DiscoveredTrack(track=entry.track, first_played=first_played, total_plays=entry.play_count)
            for entry in (normalizer.normalize_top_track(i) for i in songs)
            if is_probable_discovery(entry.play_count, self._tuning.discovery_max_track_plays)
        ][:nb]
        new_artists = [
            DiscoveredArtist(artist=entry.artist, first_played=first_played, total_plays=entry.play_count)
            for entry in (normalizer.normalize_top_artist(i) for i in artists)
            if is_probable_discovery(entry.play_count, self._tuning.discovery_max_artist_plays)
        ][: self._tuning.discovery_artist_pool_size]

        return DiscoveryInsights(period=period, new_tracks=new_tracks, new_artists=new_artists)

    async def compare_listening_periods(
        self,
        period1_start: str,
        period1_end: str,
        period2_start: str,
        period2_end: str,
    ) -> PeriodComparison:
        first = self.resolve_period(period1_start, period1_end, "period1_start", "period1_end")
        second = self.resolve_period(period2_start, period2_end, "period2_start", "period2_end")
        p1, p2 = first.as_dict(), second.as_dict()

        p1_songs, p1_artists, p1_days, p2_songs, p2_artists, p2_days = await gather_all(
            self._get_list(_TOP_SONGS, {**p1, "nb": 1}),
            self._get_list(_TOP_ARTISTS, {**p1, "nb": 1}),
            self._get_list(_TIME_PER, {**p1, "timeSplit": "day"}),
            self._get_list(_TOP_SONGS, {**p2, "nb": 1}),
            self._get_list(_TOP_ARTISTS, {**p2, "nb": 1}),
            self._get_list(_TIME_PER, {**p2, "timeSplit": "day"}),
        )

        snapshot1 = self._snapshot(first, p1_songs, p1_artists, p1_days)
        snapshot2 = self._snapshot(second, p2_songs, p2_artists, p2_days)

        plays_change = snapshot2.total_plays - snapshot1.total_plays
        plays_change_percent = (
            round(plays_change / snapshot1.total_plays * 100) if snapshot1.total_plays > 0 else 0
        )
        hours_change = round(
            ms_to_hours(snapshot2.total_duration_ms) - ms_to_hours(snapshot1.total_duration_ms), 1
        )
        return PeriodComparison(
            period1=snapshot1,
            period2=snapshot2,
            plays_change=plays_change,
            plays_change_percent=plays_change_percent,
            hours_change=hours_change,
        )

    @staticmethod
    def _snapshot(
        period: TimePeriod, songs: list[Any], artists: list[Any], days: list[Any]
    ) -> PeriodSnapshot:
        top_track = normalizer.normalize_top_track(songs[0]).track.name if songs else None
        top_artist = normalizer.normalize_top_artist(artists[0]).artist.name if artists else None
        return PeriodSnapshot(
            period=period,
            total_plays=normalizer.grand_total(songs),
            total_duration_ms=_sum_duration(normalizer.normalize_time_series(days)),
            top_track=top_track,
            top_artist=top_artist,
        )

    async def analyze_affinity(
        self,
        user_ids: list[str],
        mode: str = "average",
        limit: int = 20,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> AffinityResult:
        """Shared-taste ranking across 2-5 users.

        ``mode`` is forwarded as the upstream numeric flag (average=0,
        minima=1) and never re-derived locally.
        """
        cleaned = [uid.strip() for uid in user_ids if isinstance(uid, str)]
        if any(not uid for uid in cleaned) or len(cleaned) != len(user_ids):
            raise InputValidationError("user_ids must all be non-empty strings", field="user_ids")
        if len(set(cleaned)) != len(cleaned):
            raise InputValidationError("user_ids must not contain duplicates", field="user_ids")
        if not 2 <= len(cleaned) <= 5:
            raise InputValidationError(
                "Affinity analysis needs between 2 and 5 distinct user ids", field="user_ids"
            )
        if mode not in _AFFINITY_MODE_FLAGS:
            raise InputValidationError("mode must be 'average' or 'minima'", field="mode")
        period = self.resolve_period(start_date, end_date)

        params: dict[str, Any] = {
            "ids": ",".join(cleaned),
            "mode": _AFFINITY_MODE_FLAGS[mode],
            "nb": self._count(limit, default=20),
            **self._optional_period_params(period),
        }
        try:
            raw = await self._client.get(_COLLABORATIVE, params)
        except UpstreamError as exc:
            if exc.status == 404:
                raise UpstreamError(
                    message=f"Affinity analysis failed: one or more user ids were not found. Verify ids: {', '.join(cleaned)}",
                    status=exc.status,
                    code=exc.code,
                    provider_name=exc.provider_name,
                ) from exc
            raise

        items = raw if isinstance(raw, list) else (raw or {}).get("songs") or (raw or {}).get("tracks") or []
        overlap = None
        if isinstance(raw, dict):
            stats = raw.get("stats") or {}
            if isinstance(stats, dict) and isinstance(stats.get("overlap_percentage"), (int, float)):
                overlap = float(stats["overlap_percentage"])

        tracks: list[AffinityTrack] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            entry = normalizer.normalize_top_track(item)
            counts = normalizer.normalize_affinity_counts(item)
            if counts:
                estimated = False
            else:
                counts = split_evenly(entry.play_count, cleaned)
                estimated = True
            tracks.append(
                AffinityTrack(
                    track=entry.track,
                    score=entry.play_count,
                    play_counts=counts,
                    play_counts_estimated=estimated,
                )
            )

        return AffinityResult(users=cleaned, mode=mode, tracks=tracks, overlap_percentage=overlap)

    async def export_listening_data(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        limit: int = 10,
    ) -> ExportResult:
        period = self.resolve_period(start_date, end_date)
        nb = self._count(limit)
        params = period.as_dict()
        songs, artists, days = await gather_all(
            self._get_list(_TOP_SONGS, {**params, "nb": nb}),
            self._get_list(_TOP_ARTISTS, {**params, "nb": nb}),
            self._get_list(_TIME_PER, {**params, "timeSplit": "day"}),
        )
        return ExportResult(
            period=period,
            tracks=[normalizer.normalize_top_track(i) for i in songs],
            artists=[normalizer.normalize_top_artist(i) for i in artists],
            total_plays=normalizer.grand_total(songs),
            total_duration_ms=_sum_duration(normalizer.normalize_time_series(days)),
        )

