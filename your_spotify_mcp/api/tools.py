"""MCP tool registry and handlers.

Each tool is a :class:`ToolSpec`: a name, the description the assistant sees,
the pydantic input model that doubles as its JSON schema, and an async
handler.  Handlers receive already-validated input, delegate to a service and
shape the success payload: structured fields first, then a ``message``
sentence built from those fields.

Errors are not handled here; they propagate to
:func:`your_spotify_mcp.api.middleware.invoke_tool`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from your_spotify_mcp.api import schemas
from your_spotify_mcp.models.entities import TimePeriod, Track
from your_spotify_mcp.models.playback import Playlist
from your_spotify_mcp.services import output_formatter as fmt
from your_spotify_mcp.services.account_service import AccountService
from your_spotify_mcp.services.analytics_service import AnalyticsService
from your_spotify_mcp.services.estimation import ms_to_hours
from your_spotify_mcp.services.playback_service import PlaybackService


@dataclass
class ToolContext:
    """Services shared by every tool call."""

    analytics: AnalyticsService
    account: AccountService
    playback: PlaybackService

    @property
    def streaming_available(self) -> bool:
        return self.playback.available


Handler = Callable[[ToolContext, Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: Handler
    requires_streaming: bool = False


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def _period(period: TimePeriod) -> dict[str, Any]:
    return {
        "start_date": period.start.isoformat() if period.explicit_start else None,
        "end_date": period.end.isoformat() if period.explicit_end else None,
        "description": fmt.describe_period_bounds(period),
    }


def _track(track: Track) -> dict[str, Any]:
    return {
        "id": track.id,
        "name": track.name,
        "artists": track.artist_names,
        "album": track.album.name,
        "duration_ms": track.duration_ms,
        "uri": track.uri,
    }


def _playlist(playlist: Playlist) -> dict[str, Any]:
    return playlist.model_dump(mode="json")


def _ok(message: str, **fields: Any) -> dict[str, Any]:
    return {"success": True, **fields, "message": message}


# ---------------------------------------------------------------------------
# Analytics handlers
# ---------------------------------------------------------------------------


async def get_track_stats(ctx: ToolContext, params: schemas.GetTrackStatsInput) -> dict[str, Any]:
    stats = await ctx.analytics.get_track_stats(params.track_id)
    hours = ms_to_hours(stats.total_duration_ms)
    artists = ", ".join(stats.track.artist_names) or "Unknown"
    message = f'"{stats.track.name}" by {artists}: {stats.total_plays} plays, {hours} hours in total.'
    if stats.peak_day:
        message += f" Most plays in a day: {stats.peak_day_plays} on {stats.peak_day}."
    return _ok(
        message,
        track=_track(stats.track),
        stats={
            "total_plays": stats.total_plays,
            "total_listening_hours": hours,
            "duration_estimated": stats.duration_estimated,
            "first_played": stats.first_played or None,
            "last_played": stats.last_played or None,
            "peak_day": stats.peak_day or None,
            "peak_day_plays": stats.peak_day_plays,
        },
    )


async def get_top_tracks(ctx: ToolContext, params: schemas.GetTopTracksInput) -> dict[str, Any]:
    result = await ctx.analytics.get_top_tracks(
        params.start_date, params.end_date, limit=params.limit, offset=params.offset
    )
    rows = fmt.track_rows(result.tracks, start=params.offset + 1)
    message = fmt.top_tracks_message(result.tracks, result.period)
    if params.output_format == "compact":
        return _ok(message, period=_period(result.period), format="compact",
                   data=fmt.encode_compact(rows), total_count=result.total_count)
    return _ok(message, period=_period(result.period), tracks=rows, total_count=result.total_count)


async def get_artist_stats(ctx: ToolContext, params: schemas.GetArtistStatsInput) -> dict[str, Any]:
    stats = await ctx.analytics.get_artist_stats(params.artist_id)
    message = (
        f"{stats.artist.name}: {stats.total_plays} plays, about {stats.listening_hours} hours of listening."
    )
    if stats.top_tracks:
        message += f' Most played track: "{stats.top_tracks[0].track.name}".'
    return _ok(
        message,
        artist={"id": stats.artist.id, "name": stats.artist.name, "genres": stats.artist.genres},
        stats={
            "total_plays": stats.total_plays,
            "listening_hours": stats.listening_hours,
            "listening_hours_estimated": True,
            "first_played": stats.first_played or None,
            "last_played": stats.last_played or None,
        },
        top_tracks=fmt.track_rows(stats.top_tracks),
    )


async def get_top_artists(ctx: ToolContext, params: schemas.GetTopArtistsInput) -> dict[str, Any]:
    result = await ctx.analytics.get_top_artists(
        params.start_date, params.end_date, limit=params.limit, offset=params.offset
    )
    rows = fmt.artist_rows(result.artists)
    message = fmt.top_artists_message(result.artists, result.period)
    if params.output_format == "compact":
        return _ok(message, period=_period(result.period), format="compact",
                   data=fmt.encode_compact(rows), total_count=result.total_count)
    return _ok(message, period=_period(result.period), artists=rows, total_count=result.total_count)


async def search_listening_history(
    ctx: ToolContext, params: schemas.SearchListeningHistoryInput
) -> dict[str, Any]:
    result = await ctx.analytics.search_history(
        params.query,
        params.type,
        params.start_date,
        params.end_date,
        limit=params.limit,
        offset=params.offset,
    )
    if result.total:
        message = f'Found {result.total} {result.search_type} matches for "{result.query}".'
        if len(result.items) < result.total:
            message += f" Showing {len(result.items)} starting at {result.offset + 1}."
    else:
        message = f'No {result.search_type} matches for "{result.query}" among your most played tracks.'
    return _ok(
        message,
        query=result.query,
        type=result.search_type,
        period=_period(result.period),
        results=fmt.track_rows(result.items, start=result.offset + 1),
        total=result.total,
        offset=result.offset,
        limit=result.limit,
        has_more=result.offset + len(result.items) < result.total,
    )


async def create_custom_wrapped(ctx: ToolContext, params: schemas.CreateCustomWrappedInput) -> dict[str, Any]:
    report = await ctx.analytics.create_custom_wrapped(params.start_date, params.end_date)
    return _ok(
        fmt.wrapped_message(report),
        period_name=fmt.describe_period(report.period),
        period=report.period.as_dict(),
        total_listening_hours=ms_to_hours(report.total_duration_ms),
        total_tracks_played=report.total_tracks_played,
        unique_tracks=report.unique_tracks,
        unique_artists=report.unique_artists,
        top_tracks=fmt.track_rows(report.top_tracks),
        top_artists=fmt.artist_rows(report.top_artists),
        top_albums=[
            {"rank": rank, "name": a.album.name, "artist": a.artist_name, "plays": a.play_count}
            for rank, a in enumerate(report.top_albums, start=1)
        ],
        listening_by_hour=[
            {"hour": fmt.format_hour_label(hour), "hours": ms_to_hours(ms)}
            for hour, ms in enumerate(report.listening_by_hour)
        ],
        listening_by_day={day: ms_to_hours(ms) for day, ms in report.listening_by_day.items()},
        peak_hour=fmt.format_hour_label(report.peak_hour),
        peak_day=report.peak_day,
        most_active_date=report.most_active_date,
        new_tracks_count=report.new_tracks_count,
        new_artists_count=report.new_artists_count,
    )


async def analyze_affinity(ctx: ToolContext, params: schemas.AnalyzeAffinityInput) -> dict[str, Any]:
    result = await ctx.analytics.analyze_affinity(
        params.user_ids,
        mode=params.mode,
        limit=params.limit,
        start_date=params.start_date,
        end_date=params.end_date,
    )
    tracks = [
        {
            "rank": rank,
            "name": t.track.name,
            "artist": ", ".join(t.track.artist_names),
            "uri": t.track.uri,
            "score": t.score,
            "play_counts": t.play_counts,
            "play_counts_estimated": t.play_counts_estimated,
        }
        for rank, t in enumerate(result.tracks, start=1)
    ]
    message = f"Found {len(tracks)} shared tracks across {len(result.users)} users ({result.mode} mode)."
    if tracks:
        message += f' Top shared track: "{tracks[0]["name"]}" by {tracks[0]["artist"] or "Unknown"}.'
    return _ok(
        message,
        users=result.users,
        mode=result.mode,
        tracks=tracks,
        overlap_percentage=result.overlap_percentage,
    )


async def get_listening_timeline(ctx: ToolContext, params: schemas.GetListeningTimelineInput) -> dict[str, Any]:
    timeline = await ctx.analytics.get_listening_timeline(
        params.start_date, params.end_date, granularity=params.granularity
    )
    points = [
        {"date": p.date, "plays": p.plays, "hours": ms_to_hours(p.duration_ms)} for p in timeline.points
    ]
    total_plays = sum(p.plays for p in timeline.points)
    if points:
        busiest = max(timeline.points, key=lambda p: p.duration_ms)
        message = (
            f"{len(points)} {timeline.granularity} buckets with about {total_plays} plays in total. "
            f"Busiest {timeline.granularity}: {busiest.date}."
        )
    else:
        message = f"No listening data found for {fmt.describe_period_bounds(timeline.period)}."
    return _ok(
        message,
        period=_period(timeline.period),
        granularity=timeline.granularity,
        timeline=points,
        plays_estimated=True,
    )


async def analyze_listening_patterns(
    ctx: ToolContext, params: schemas.AnalyzeListeningPatternsInput
) -> dict[str, Any]:
    patterns = await ctx.analytics.analyze_listening_patterns(
        params.pattern_type, params.start_date, params.end_date
    )
    total = patterns.total_plays
    buckets = [
        {
            "period": b.period,
            "plays": b.plays,
            "hours": ms_to_hours(b.duration_ms),
            "percentage": round(b.plays / total * 100, 1) if total > 0 else 0.0,
        }
        for b in patterns.buckets
    ]
    insights: dict[str, Any] = {}
    if total > 0:
        peak = max(patterns.buckets, key=lambda b: b.plays)
        lowest = min(patterns.buckets, key=lambda b: b.plays)
        insights = {"peak": peak.period, "lowest": lowest.period}
        message = f"Peak listening {patterns.pattern_type}: {peak.period}. Quietest: {lowest.period}."
    else:
        message = f"No listening data found for {fmt.describe_period_bounds(patterns.period)}."
    return _ok(
        message,
        pattern_type=patterns.pattern_type,
        period=_period(patterns.period),
        patterns=buckets,
        insights=insights,
        plays_estimated=True,
    )


async def get_artist_rank(ctx: ToolContext, params: schemas.GetArtistRankInput) -> dict[str, Any]:
    result = await ctx.analytics.get_artist_rank(params.artist_id, params.start_date, params.end_date)
    return _ok(
        fmt.rank_message(result),
        artist={"id": result.subject.id, "name": result.subject.name},
        rank=result.rank,
        total_artists=result.total,
        play_count=result.play_count,
        percentile=result.percentile,
    )


async def get_track_rank(ctx: ToolContext, params: schemas.GetTrackRankInput) -> dict[str, Any]:
    result = await ctx.analytics.get_track_rank(params.track_id, params.start_date, params.end_date)
    return _ok(
        fmt.rank_message(result),
        track=_track(result.subject),
        rank=result.rank,
        total_tracks=result.total,
        play_count=result.play_count,
        percentile=result.percentile,
    )


async def get_discovery_insights(ctx: ToolContext, params: schemas.GetDiscoveryInsightsInput) -> dict[str, Any]:
    insights = await ctx.analytics.get_discovery_insights(
        params.start_date, params.end_date, limit=params.limit
    )
    return _ok(
        fmt.discovery_message(insights),
        period=_period(insights.period),
        new_tracks=[
            {
                "name": d.track.name,
                "artist": ", ".join(d.track.artist_names),
                "uri": d.track.uri,
                "first_played": d.first_played,
                "plays": d.total_plays,
            }
            for d in insights.new_tracks
        ],
        new_artists=[
            {"name": d.artist.name, "artist_id": d.artist.id, "first_played": d.first_played, "plays": d.total_plays}
            for d in insights.new_artists
        ],
        note="Discoveries are estimated from low play counts in the period, not from first-listen dates.",
    )


async def compare_listening_periods(
    ctx: ToolContext, params: schemas.CompareListeningPeriodsInput
) -> dict[str, Any]:
    comparison = await ctx.analytics.compare_listening_periods(
        params.period1_start, params.period1_end, params.period2_start, params.period2_end
    )

    def _snapshot(snapshot: Any) -> dict[str, Any]:
        return {
            **snapshot.period.as_dict(),
            "total_plays": snapshot.total_plays,
            "total_hours": ms_to_hours(snapshot.total_duration_ms),
            "top_track": snapshot.top_track,
            "top_artist": snapshot.top_artist,
        }

    return _ok(
        fmt.comparison_message(comparison),
        period1=_snapshot(comparison.period1),
        period2=_snapshot(comparison.period2),
        changes={
            "plays_change": comparison.plays_change,
            "plays_change_percent": comparison.plays_change_percent,
            "hours_change": comparison.hours_change,
        },
    )


async def export_listening_data(ctx: ToolContext, params: schemas.ExportListeningDataInput) -> dict[str, Any]:
    export = await ctx.analytics.export_listening_data(params.start_date, params.end_date, limit=params.limit)
    include = set(params.include)
    hours = ms_to_hours(export.total_duration_ms)
    summary = {
        "total_plays": export.total_plays,
        "total_hours": hours,
        "track_count": len(export.tracks),
        "artist_count": len(export.artists),
        "top_track": export.tracks[0].track.name if export.tracks else None,
        "top_artist": export.artists[0].artist.name if export.artists else None,
    }

    data: dict[str, Any] | None
    if params.format == "summary":
        data = None
    elif params.format == "csv":
        data = {}
        if "tracks" in include:
            data["tracks"] = fmt.tracks_csv(export.tracks)
        if "artists" in include:
            data["artists"] = fmt.artists_csv(export.artists)
    else:
        data = {}
        if "tracks" in include:
            data["tracks"] = fmt.track_rows(export.tracks)
        if "artists" in include:
            data["artists"] = fmt.artist_rows(export.artists)

    return _ok(
        f"Exported {params.format} data for {fmt.describe_period_bounds(export.period)}: "
        f"{export.total_plays} plays over {hours} hours.",
        format=params.format,
        period=_period(export.period),
        summary=summary,
        data=data,
    )


# ---------------------------------------------------------------------------
# Account handlers
# ---------------------------------------------------------------------------


async def update_user_settings(ctx: ToolContext, params: schemas.UpdateUserSettingsInput) -> dict[str, Any]:
    await ctx.account.update_user_settings(timezone=params.timezone)
    return _ok("Settings updated.")


async def rename_account(ctx: ToolContext, params: schemas.RenameAccountInput) -> dict[str, Any]:
    await ctx.account.rename_account(params.new_username)
    return _ok(f"Account renamed to {params.new_username}.")


async def generate_public_share_link(
    ctx: ToolContext, params: schemas.GeneratePublicShareLinkInput
) -> dict[str, Any]:
    token, url = await ctx.account.generate_public_share_link()
    return _ok(
        f"Anyone with this link can view your listening stats: {url}",
        public_url=url,
        public_token=token,
    )


async def revoke_public_access(ctx: ToolContext, params: schemas.RevokePublicAccessInput) -> dict[str, Any]:
    await ctx.account.revoke_public_access()
    return _ok("Public access revoked.")


# ---------------------------------------------------------------------------
# Playback handlers
# ---------------------------------------------------------------------------


async def create_playlist_from_query(ctx: ToolContext, params: schemas.CreatePlaylistInput) -> dict[str, Any]:
    playlist = await ctx.playback.create_playlist(
        params.playlist_name,
        params.track_uris,
        description=params.playlist_description,
        public=params.public,
    )
    return _ok(
        f'Created playlist "{playlist.name}" with {playlist.track_count} tracks.',
        playlist_id=playlist.id,
        playlist_url=playlist.url,
        playlist=_playlist(playlist),
    )


async def add_tracks_to_playlist(ctx: ToolContext, params: schemas.AddTracksToPlaylistInput) -> dict[str, Any]:
    snapshot_id = await ctx.playback.add_tracks_to_playlist(
        params.playlist_id, params.track_uris, position=params.position
    )
    return _ok(
        f"Added {len(params.track_uris)} tracks to the playlist.",
        playlist_id=params.playlist_id,
        tracks_added=len(params.track_uris),
        snapshot_id=snapshot_id,
    )


async def remove_from_playlist(ctx: ToolContext, params: schemas.RemoveFromPlaylistInput) -> dict[str, Any]:
    snapshot_id = await ctx.playback.remove_from_playlist(
        params.playlist_id, params.track_uris, snapshot_id=params.snapshot_id
    )
    return _ok(
        f"Removed {len(params.track_uris)} tracks from the playlist.",
        playlist_id=params.playlist_id,
        tracks_removed=len(params.track_uris),
        snapshot_id=snapshot_id,
    )


async def update_playlist_details(
    ctx: ToolContext, params: schemas.UpdatePlaylistDetailsInput
) -> dict[str, Any]:
    updated = await ctx.playback.update_playlist_details(
        params.playlist_id, name=params.name, description=params.description, public=params.public
    )
    return _ok(
        f"Updated playlist {', '.join(updated)}.",
        playlist_id=params.playlist_id,
        updated_fields=updated,
    )


async def get_user_playlists(ctx: ToolContext, params: schemas.GetUserPlaylistsInput) -> dict[str, Any]:
    playlists, total = await ctx.playback.get_user_playlists(limit=params.limit, offset=params.offset)
    return _ok(
        f"Found {total} playlists; showing {len(playlists)}.",
        playlists=[_playlist(p) for p in playlists],
        total=total,
        offset=params.offset,
        limit=params.limit,
        has_more=params.offset + len(playlists) < total,
    )


async def search_spotify_catalog(ctx: ToolContext, params: schemas.SearchSpotifyCatalogInput) -> dict[str, Any]:
    result = await ctx.playback.search_catalog(params.query, types=list(params.types), limit=params.limit)
    return _ok(
        f'Found {result.total} catalog results for "{result.query}".',
        query=result.query,
        tracks=[i.model_dump() for i in result.tracks],
        artists=[i.model_dump() for i in result.artists],
        albums=[i.model_dump() for i in result.albums],
        playlists=[i.model_dump() for i in result.playlists],
        total=result.total,
    )


async def get_current_playback(ctx: ToolContext, params: schemas.GetCurrentPlaybackInput) -> dict[str, Any]:
    state = await ctx.playback.get_current_playback(market=params.market)
    if state.track is None:
        return _ok("Nothing is playing right now.", is_playing=False, track=None)
    artists = ", ".join(state.track.artist_names) or "Unknown"
    verb = "Now playing" if state.is_playing else "Paused"
    device = f" on {state.device.name}" if state.device and state.device.name else ""
    return _ok(
        f'{verb} "{state.track.name}" by {artists}{device}.',
        is_playing=state.is_playing,
        track=_track(state.track),
        progress_ms=state.progress_ms,
        device=state.device.model_dump() if state.device else None,
        shuffle_state=state.shuffle_state,
        repeat_state=state.repeat_state,
        context_uri=state.context_uri or None,
    )


async def control_playback(ctx: ToolContext, params: schemas.ControlPlaybackInput) -> dict[str, Any]:
    await ctx.playback.control_playback(
        params.action,
        device_id=params.device_id,
        position_ms=params.position_ms,
        volume_percent=params.volume_percent,
    )
    return _ok(f"Playback command '{params.action}' sent.", action=params.action)


async def play_tracks(ctx: ToolContext, params: schemas.PlayTracksInput) -> dict[str, Any]:
    await ctx.playback.play_tracks(
        uris=params.uris,
        context_uri=params.context_uri,
        offset_position=params.offset_position,
        device_id=params.device_id,
    )
    if params.uris:
        message = f"Started playback of {len(params.uris)} tracks."
    else:
        message = f"Started playback of {params.context_uri}."
    return _ok(message, uris=params.uris, context_uri=params.context_uri)


async def queue_tracks(ctx: ToolContext, params: schemas.QueueTracksInput) -> dict[str, Any]:
    queued = await ctx.playback.queue_tracks(params.track_uris, device_id=params.device_id)
    return _ok(f"Added {queued} tracks to the queue.", tracks_queued=queued)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_PERIOD_NOTE = " Dates are YYYY-MM-DD; omit start_date for all history and end_date for today."

TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        "get_track_stats",
        "Lifetime statistics for one track: play count, total listening time, first and last play, best day.",
        schemas.GetTrackStatsInput,
        get_track_stats,
    ),
    ToolSpec(
        "get_top_tracks",
        "Most played tracks for a period, ordered by play count (max 30)." + _PERIOD_NOTE,
        schemas.GetTopTracksInput,
        get_top_tracks,
    ),
    ToolSpec(
        "get_artist_stats",
        "Lifetime statistics for one artist with their most played tracks. Listening hours are estimated.",
        schemas.GetArtistStatsInput,
        get_artist_stats,
    ),
    ToolSpec(
        "get_top_artists",
        "Most played artists for a period, ordered by play count (max 30)." + _PERIOD_NOTE,
        schemas.GetTopArtistsInput,
        get_top_artists,
    ),
    ToolSpec(
        "search_listening_history",
        "Search your most played tracks of a period by track, artist or album name. "
        "Only the top 30 tracks of the period are searched." + _PERIOD_NOTE,
        schemas.SearchListeningHistoryInput,
        search_listening_history,
    ),
    ToolSpec(
        "create_custom_wrapped",
        "Year-in-review style summary for any period of up to 366 days: totals, top tracks, "
        "artists and albums, and when you listen most.",
        schemas.CreateCustomWrappedInput,
        create_custom_wrapped,
    ),
    ToolSpec(
        "analyze_affinity",
        "Find music shared between 2-5 Your Spotify users. 'minima' favours tracks everyone plays, "
        "'average' tracks anyone plays a lot.",
        schemas.AnalyzeAffinityInput,
        analyze_affinity,
    ),
    ToolSpec(
        "get_listening_timeline",
        "Listening time per day, week or month. Play counts are estimated from listening time." + _PERIOD_NOTE,
        schemas.GetListeningTimelineInput,
        get_listening_timeline,
    ),
    ToolSpec(
        "get_artist_rank",
        "Where an artist ranks among everything you have listened to.",
        schemas.GetArtistRankInput,
        get_artist_rank,
    ),
    ToolSpec(
        "get_track_rank",
        "Where a track ranks among everything you have listened to.",
        schemas.GetTrackRankInput,
        get_track_rank,
    ),
    ToolSpec(
        "analyze_listening_patterns",
        "When you listen: by hour of day, day of week, or per day, week or month. "
        "Combined day_and_time is not supported." + _PERIOD_NOTE,
        schemas.AnalyzeListeningPatternsInput,
        analyze_listening_patterns,
    ),
    ToolSpec(
        "get_discovery_insights",
        "Tracks and artists you probably discovered in a period, estimated from low play counts.",
        schemas.GetDiscoveryInsightsInput,
        get_discovery_insights,
    ),
    ToolSpec(
        "compare_listening_periods",
        "Compare plays, listening hours and top track and artist between two periods.",
        schemas.CompareListeningPeriodsInput,
        compare_listening_periods,
    ),
    ToolSpec(
        "export_listening_data",
        "Export top tracks and artists for a period as a summary, JSON rows or CSV text." + _PERIOD_NOTE,
        schemas.ExportListeningDataInput,
        export_listening_data,
    ),
    ToolSpec(
        "update_user_settings",
        "Change account settings such as the timezone. Requires the Your Spotify web interface.",
        schemas.UpdateUserSettingsInput,
        update_user_settings,
    ),
    ToolSpec(
        "rename_account",
        "Change the Your Spotify username. Requires the Your Spotify web interface.",
        schemas.RenameAccountInput,
        rename_account,
    ),
    ToolSpec(
        "generate_public_share_link",
        "Get a link that lets anyone view your listening statistics.",
        schemas.GeneratePublicShareLinkInput,
        generate_public_share_link,
    ),
    ToolSpec(
        "revoke_public_access",
        "Disable the public share link. Requires the Your Spotify web interface.",
        schemas.RevokePublicAccessInput,
        revoke_public_access,
    ),
    ToolSpec(
        "create_playlist_from_query",
        "Create a Spotify playlist from track URIs, for example from get_top_tracks results.",
        schemas.CreatePlaylistInput,
        create_playlist_from_query,
        requires_streaming=True,
    ),
    ToolSpec(
        "add_tracks_to_playlist",
        "Add tracks to an existing Spotify playlist, optionally at a position.",
        schemas.AddTracksToPlaylistInput,
        add_tracks_to_playlist,
        requires_streaming=True,
    ),
    ToolSpec(
        "search_spotify_catalog",
        "Search the Spotify catalog for tracks, artists, albums or playlists.",
        schemas.SearchSpotifyCatalogInput,
        search_spotify_catalog,
        requires_streaming=True,
    ),
    ToolSpec(
        "get_current_playback",
        "What is playing right now, on which device, and the playback position.",
        schemas.GetCurrentPlaybackInput,
        get_current_playback,
        requires_streaming=True,
    ),
    ToolSpec(
        "control_playback",
        "Play, pause, skip, go back, seek or set the volume on the active device.",
        schemas.ControlPlaybackInput,
        control_playback,
        requires_streaming=True,
    ),
    ToolSpec(
        "play_tracks",
        "Start playing a list of track URIs, or an album, playlist or artist.",
        schemas.PlayTracksInput,
        play_tracks,
        requires_streaming=True,
    ),
    ToolSpec(
        "queue_tracks",
        "Add up to 50 tracks to the playback queue, in order.",
        schemas.QueueTracksInput,
        queue_tracks,
        requires_streaming=True,
    ),
    ToolSpec(
        "get_user_playlists",
        "List your Spotify playlists.",
        schemas.GetUserPlaylistsInput,
        get_user_playlists,
        requires_streaming=True,
    ),
    ToolSpec(
        "update_playlist_details",
        "Rename a playlist or change its description or visibility.",
        schemas.UpdatePlaylistDetailsInput,
        update_playlist_details,
        requires_streaming=True,
    ),
    ToolSpec(
        "remove_from_playlist",
        "Remove tracks from a Spotify playlist.",
        schemas.RemoveFromPlaylistInput,
        remove_from_playlist,
        requires_streaming=True,
    ),
)

TOOL_REGISTRY: dict[str, ToolSpec] = {tool.name: tool for tool in TOOLS}
