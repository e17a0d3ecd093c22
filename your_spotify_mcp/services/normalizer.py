"""Per-endpoint mapping from raw upstream JSON to canonical records.

Upstream payloads are loosely typed and drift between API versions (an
artist id may sit under ``id`` or ``_id``, a track's artist under
``artist`` or ``artists``).  Each function here handles one response type
with explicit fallback chains and substitutes ``""`` / ``0`` / ``[]`` for
anything missing.  None of them raise on a missing field.
"""

from __future__ import annotations

from typing import Any

from your_spotify_mcp.models.entities import (
    Album,
    AlbumPlayCount,
    Artist,
    ArtistPlayCount,
    ArtistStats,
    TimeBucket,
    Track,
    TrackPlayCount,
    TrackStats,
    UserInfo,
)
from your_spotify_mcp.models.playback import CatalogItem, Device, PlaybackState, Playlist
from your_spotify_mcp.services.estimation import (
    estimate_artist_duration,
    estimate_track_total_duration,
    ms_to_hours,
)

# ---------------------------------------------------------------------------
# Fallback helpers
# ---------------------------------------------------------------------------


def _first(obj: Any, *keys: str, default: Any = "") -> Any:
    """Return the first present, non-empty value among *keys* of *obj*."""
    if not isinstance(obj, dict):
        return default
    for key in keys:
        value = obj.get(key)
        if value not in (None, ""):
            return value
    return default


def _text(obj: Any, *keys: str, default: str = "") -> str:
    """Like :func:`_first`, coerced to ``str`` for text fields."""
    value = _first(obj, *keys, default=default)
    return value if isinstance(value, str) else str(value)


def _dict(obj: Any, key: str) -> dict[str, Any]:
    if not isinstance(obj, dict):
        return {}
    value = obj.get(key)
    return value if isinstance(value, dict) else {}


def _list(obj: Any, key: str | None = None) -> list[Any]:
    value = obj.get(key) if key is not None and isinstance(obj, dict) else obj
    return value if isinstance(value, list) else []


def _int(value: Any) -> int:
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        return 0


def _str_id(value: Any) -> str:
    return str(value) if value not in (None, "") else ""


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


def normalize_artist(raw: Any) -> Artist:
    genres = [g for g in _list(raw, "genres") if isinstance(g, str)]
    return Artist(
        id=_str_id(_first(raw, "id", "_id")),
        name=_text(raw, "name", default="Unknown"),
        genres=genres,
    )


def normalize_album(raw: Any) -> Album:
    return Album(
        id=_str_id(_first(raw, "id", "_id")),
        name=_text(raw, "name"),
        release_date=_text(raw, "release_date"),
    )


def _item_artists(item: dict[str, Any], track: dict[str, Any]) -> list[Artist]:
    """Artists of a top-list item: ``artist`` object, else ``artists`` list."""
    single = _dict(item, "artist")
    if single:
        return [normalize_artist(single)]
    for source in (item, track):
        many = [a for a in _list(source, "artists") if isinstance(a, dict)]
        if many:
            return [normalize_artist(a) for a in many]
    return []


def _item_track(item: Any) -> Track:
    """Build a Track from a Your Spotify list item (top songs, collaborative)."""
    track = _dict(item, "track")
    return Track(
        id=_str_id(_first(track, "id", default=_first(item, "_id"))),
        name=_text(track, "name", default=_first(item, "name", default="Unknown")),
        artists=_item_artists(item if isinstance(item, dict) else {}, track),
        album=normalize_album(_dict(item, "album") or _dict(track, "album")),
        duration_ms=_int(_first(track, "duration_ms", default=_first(item, "duration_ms", default=0))),
        explicit=bool(track.get("explicit", False)),
    )


def normalize_top_track(item: Any) -> TrackPlayCount:
    """One entry of ``/spotify/top/songs``."""
    return TrackPlayCount(track=_item_track(item), play_count=_int(_first(item, "count", default=0)))


def normalize_top_artist(item: Any) -> ArtistPlayCount:
    """One entry of ``/spotify/top/artists``."""
    artist = _dict(item, "artist")
    return ArtistPlayCount(
        artist=Artist(
            id=_str_id(_first(artist, "id", "_id", default=_first(item, "_id"))),
            name=_text(artist, "name", default="Unknown"),
            genres=[g for g in _list(artist, "genres") if isinstance(g, str)],
        ),
        play_count=_int(_first(item, "count", default=0)),
        listening_time_ms=_int(_first(item, "duration_ms", default=0)),
    )


def normalize_top_album(item: Any) -> AlbumPlayCount:
    """One entry of ``/spotify/top/albums``."""
    album = _dict(item, "album")
    artist_name = _text(_dict(item, "artist"), "name")
    if not artist_name:
        names = [_text(a, "name") for a in _list(album, "artists") if isinstance(a, dict)]
        artist_name = ", ".join(n for n in names if n)
    return AlbumPlayCount(
        album=Album(
            id=_str_id(_first(album, "id", "_id", default=_first(item, "_id"))),
            name=_text(album, "name", default="Unknown"),
            release_date=_text(album, "release_date"),
        ),
        artist_name=artist_name,
        play_count=_int(_first(item, "count", default=0)),
    )


def grand_total(items: Any) -> int:
    """The ``total_count`` the upstream attaches to every top-songs entry."""
    entries = _list(items)
    if not entries:
        return 0
    return _int(_first(entries[0], "total_count", default=0))


# ---------------------------------------------------------------------------
# Detail endpoints
# ---------------------------------------------------------------------------


def _played_at(first_last: dict[str, Any], key: str) -> str:
    return _text(_dict(first_last, key), "played_at")


def _peak_day(raw: Any) -> tuple[str, int]:
    best = _list(raw, "bestPeriod")
    if not best or not isinstance(best[0], dict):
        return "", 0
    key = _dict(best[0], "_id")
    year = _int(key.get("year"))
    if not year:
        return "", _int(best[0].get("count"))
    month = _int(key.get("month")) or 1
    day = _int(key.get("day")) or 1
    return f"{year}-{month:02d}-{day:02d}", _int(best[0].get("count"))


def normalize_track_stats(raw: Any, track_id: str) -> TrackStats:
    """``/track/{id}/stats``."""
    track = _dict(raw, "track")
    artist = _dict(raw, "artist")
    album = _dict(raw, "album")
    first_last = _dict(raw, "firstLast")
    total_plays = _int(_dict(raw, "total").get("count"))
    duration_ms = _int(_first(track, "duration_ms", default=_first(raw, "duration_ms", default=0)))
    total_duration, estimated = estimate_track_total_duration(total_plays, duration_ms)
    peak_day, peak_plays = _peak_day(raw)

    artists = [normalize_artist(artist)] if artist else [
        normalize_artist(a) for a in _list(track, "artists") if isinstance(a, dict)
    ]
    return TrackStats(
        track=Track(
            id=_str_id(_first(track, "id", default=track_id)),
            name=_text(track, "name", default="Unknown"),
            artists=artists,
            album=normalize_album(album),
            duration_ms=duration_ms,
            explicit=bool(track.get("explicit", False)),
        ),
        total_plays=total_plays,
        total_duration_ms=total_duration,
        duration_estimated=estimated,
        first_played=_played_at(first_last, "first"),
        last_played=_played_at(first_last, "last"),
        peak_day=peak_day,
        peak_day_plays=peak_plays,
    )


def normalize_artist_stats(raw: Any, artist_id: str, top_n: int = 10) -> ArtistStats:
    """``/artist/{id}/stats``; ``mostListened`` is cut to *top_n* entries."""
    artist_raw = _dict(raw, "artist")
    artist = Artist(
        id=_str_id(_first(artist_raw, "id", "_id", default=artist_id)),
        name=_text(artist_raw, "name", default="Unknown"),
        genres=[g for g in _list(artist_raw, "genres") if isinstance(g, str)],
    )
    first_last = _dict(raw, "firstLast")
    total_plays = _int(_dict(raw, "total").get("count"))
    estimated_ms = estimate_artist_duration(total_plays)

    top_tracks: list[TrackPlayCount] = []
    for song in _list(raw, "mostListened")[:top_n]:
        track = _dict(song, "track")
        top_tracks.append(
            TrackPlayCount(
                track=Track(
                    id=_str_id(_first(track, "id", default=_first(song, "_id"))),
                    name=_text(track, "name", default=_first(song, "name", default="Unknown")),
                    artists=[Artist(id=artist.id, name=artist.name)],
                    album=normalize_album(_dict(song, "album") or _dict(track, "album")),
                    duration_ms=_int(_first(track, "duration_ms", default=_first(song, "duration_ms", default=0))),
                ),
                play_count=_int(_first(song, "count", default=0)),
            )
        )

    return ArtistStats(
        artist=artist,
        total_plays=total_plays,
        total_duration_ms=estimated_ms,
        first_played=_played_at(first_last, "first"),
        last_played=_played_at(first_last, "last"),
        top_tracks=top_tracks,
        listening_hours=ms_to_hours(estimated_ms),
    )


def normalize_rank(raw: Any, subject_id: str) -> tuple[int, int, int]:
    """``/{track|artist}/{id}/rank`` -> (rank, window_length, play_count).

    ``rank`` is the zero-based ``index`` plus one.
    """
    results = [r for r in _list(raw, "results") if isinstance(r, dict)]
    rank = _int(_first(raw, "index", default=0)) + 1
    play_count = 0
    for entry in results:
        if _str_id(_first(entry, "id", "_id")) == subject_id:
            play_count = _int(entry.get("count"))
            break
    return rank, len(results), play_count


def normalize_time_bucket(item: Any) -> TimeBucket:
    """One entry of ``/spotify/time_per``; ``count`` holds duration in ms."""
    key = _dict(item, "_id")

    def _opt(name: str) -> int | None:
        value = key.get(name)
        return int(value) if isinstance(value, (int, float)) else None

    return TimeBucket(
        year=_opt("year"),
        month=_opt("month"),
        day=_opt("day"),
        week=_opt("week"),
        hour=_opt("hour"),
        duration_ms=_int(_first(item, "count", default=0)),
    )


def normalize_time_series(items: Any) -> list[TimeBucket]:
    return [normalize_time_bucket(i) for i in _list(items) if isinstance(i, dict)]


def normalize_search_artist(item: Any) -> Artist:
    """One entry of ``/artist/search/{query}``."""
    return normalize_artist(item)


def normalize_affinity_counts(item: Any) -> dict[str, int]:
    """Per-user ``play_counts`` of a collaborative entry; ``{}`` when absent."""
    counts = _dict(item, "play_counts")
    return {str(user_id): _int(count) for user_id, count in counts.items()}


def normalize_user(raw: Any) -> UserInfo | None:
    """``/me``; ``None`` when the response does not describe a logged-in user."""
    if not isinstance(raw, dict) or not raw.get("status") or not isinstance(raw.get("user"), dict):
        return None
    user = raw["user"]
    return UserInfo(
        id=_str_id(_first(user, "_id", "id")),
        username=_text(user, "username"),
        public_token=user.get("publicToken") or None,
        settings=_dict(user, "settings"),
    )


# ---------------------------------------------------------------------------
# Spotify Web API
# ---------------------------------------------------------------------------


def normalize_spotify_track(raw: Any) -> Track:
    return Track(
        id=_str_id(_first(raw, "id")),
        name=_text(raw, "name", default="Unknown"),
        artists=[normalize_artist(a) for a in _list(raw, "artists") if isinstance(a, dict)],
        album=normalize_album(_dict(raw, "album")),
        duration_ms=_int(_first(raw, "duration_ms", default=0)),
        explicit=bool(_first(raw, "explicit", default=False)),
    )


def normalize_playback(raw: Any) -> PlaybackState:
    """``/me/player``; an empty body means nothing is playing."""
    if not isinstance(raw, dict) or not raw:
        return PlaybackState()
    item = _dict(raw, "item")
    device = _dict(raw, "device")
    return PlaybackState(
        is_playing=bool(raw.get("is_playing", False)),
        track=normalize_spotify_track(item) if item and item.get("type", "track") == "track" else None,
        device=Device(
            id=_str_id(_first(device, "id")),
            name=_text(device, "name"),
            type=_text(device, "type"),
            volume_percent=device.get("volume_percent"),
            is_active=bool(device.get("is_active", False)),
        ) if device else None,
        progress_ms=_int(raw.get("progress_ms")),
        shuffle_state=bool(raw.get("shuffle_state", False)),
        repeat_state=_text(raw, "repeat_state", default="off"),
        context_uri=_text(_dict(raw, "context"), "uri"),
    )


def normalize_playlist(raw: Any) -> Playlist:
    owner = _dict(raw, "owner")
    return Playlist(
        id=_str_id(_first(raw, "id")),
        name=_text(raw, "name"),
        description=_text(raw, "description"),
        public=raw.get("public") if isinstance(raw, dict) else None,
        collaborative=bool(_first(raw, "collaborative", default=False)),
        track_count=_int(_dict(raw, "tracks").get("total")),
        owner=_text(owner, "display_name", "id"),
        uri=_text(raw, "uri"),
        url=_text(_dict(raw, "external_urls"), "spotify"),
        snapshot_id=_text(raw, "snapshot_id"),
    )


def normalize_catalog_item(raw: Any, item_type: str) -> CatalogItem:
    if item_type in ("track", "album"):
        names = [_text(a, "name") for a in _list(raw, "artists") if isinstance(a, dict)]
        subtitle = ", ".join(n for n in names if n)
    elif item_type == "playlist":
        subtitle = _text(_dict(raw, "owner"), "display_name", "id")
    else:
        subtitle = ", ".join(g for g in _list(raw, "genres")[:3] if isinstance(g, str))
    popularity = raw.get("popularity") if isinstance(raw, dict) else None
    return CatalogItem(
        id=_str_id(_first(raw, "id")),
        name=_text(raw, "name"),
        type=item_type,
        uri=_text(raw, "uri"),
        subtitle=subtitle,
        popularity=popularity if isinstance(popularity, int) else None,
    )
