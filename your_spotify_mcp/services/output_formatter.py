"""Presentation helpers for tool payloads.

Pure functions that turn analytic results into flat rows, CSV text, the
compact tabular encoding and the one-sentence summaries every tool returns.
Messages are always built from the structured fields, never the reverse.
"""

from __future__ import annotations

import csv
import io
from typing import Any, Iterable, Sequence

from your_spotify_mcp.models.analytics import (
    DiscoveryInsights,
    PeriodComparison,
    RankResult,
    WrappedReport,
)
from your_spotify_mcp.models.entities import ArtistPlayCount, TimePeriod, TrackPlayCount
from your_spotify_mcp.services.estimation import ms_to_hours

_SUMMER_START_MONTHS = (6, 7, 8)
_SUMMER_END_MONTHS = (6, 7, 8, 9)
_WINTER_MONTHS = (12, 1, 2)
_COMPACT_SPECIAL = (",", '"', "\n", "\r", ":", "\\")


# ---------------------------------------------------------------------------
# Units and labels
# ---------------------------------------------------------------------------

def format_hour_label(hour: int | None) -> str:
    """0 -> ``12AM``, 15 -> ``3PM``; ``None`` -> ``Unknown``."""
    if hour is None:
        return "Unknown"
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display}{suffix}"


def describe_period(period: TimePeriod) -> str:
    """Friendly name for a wrapped period ("March 2024", "Summer 2024", ...)."""
    start, end = period.start, period.end
    if start.year == end.year and start.month == end.month:
        return f"{start:%B} {start.year}"
    if start.year == end.year and (start.month, start.day, end.month, end.day) == (1, 1, 12, 31):
        return str(start.year)
    if start.month in _SUMMER_START_MONTHS and end.month in _SUMMER_END_MONTHS and start.year == end.year:
        return f"Summer {start.year}"
    if start.month in _WINTER_MONTHS and end.month in _WINTER_MONTHS:
        return f"Winter {end.year}"
    return f"{start:%B} - {end:%B} {end.year}"


def describe_period_bounds(period: TimePeriod) -> str:
    """Describe only the bounds the caller actually gave."""
    start = period.start.isoformat() if period.explicit_start else None
    end = period.end.isoformat() if period.explicit_end else None
    if start and end:
        return f"{start} to {end}"
    if start:
        return f"since {start}"
    if end:
        return f"until {end}"
    return "all time"


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------

def track_rows(entries: Iterable[TrackPlayCount], start: int = 1) -> list[dict[str, Any]]:
    return [
        {
            "rank": rank,
            "name": entry.track.name,
            "artist": ", ".join(entry.track.artist_names),
            "plays": entry.play_count,
            "track_id": entry.track.id,
            "uri": entry.track.uri,
        }
        for rank, entry in enumerate(entries, start=start)
    ]


def artist_rows(entries: Iterable[ArtistPlayCount]) -> list[dict[str, Any]]:
    return [
        {
            "rank": rank,
            "name": entry.artist.name,
            "plays": entry.play_count,
            "hours": ms_to_hours(entry.listening_time_ms),
            "artist_id": entry.artist.id,
        }
        for rank, entry in enumerate(entries, start=1)
    ]


def render_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """CSV text with every string field quoted and embedded quotes doubled."""
    buffer = io.StringIO()
    buffer.write(",".join(headers) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def tracks_csv(entries: Iterable[TrackPlayCount]) -> str:
    rows = [(r["rank"], r["name"], r["artist"], r["plays"]) for r in track_rows(entries)]
    return render_csv(("rank", "name", "artist", "plays"), rows)


def artists_csv(entries: Iterable[ArtistPlayCount]) -> str:
    rows = [(r["rank"], r["name"], r["plays"]) for r in artist_rows(entries)]
    return render_csv(("rank", "name", "plays"), rows)


# ---------------------------------------------------------------------------
# Compact tabular encoding
# ---------------------------------------------------------------------------

def _compact_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value)
    if text == "" or text != text.strip() or any(ch in text for ch in _COMPACT_SPECIAL):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")
        return f'"{escaped}"'
    return text


def encode_compact(rows: Sequence[dict[str, Any]], fields: Sequence[str] | None = None) -> str:
    """Encode uniform records as ``[N]{f1,f2}:`` followed by one row per line.

    ``fields`` defaults to the keys of the first record.  Missing keys encode
    as empty values.
    """
    if fields is None:
        fields = list(rows[0]) if rows else []
    lines = [f"[{len(rows)}]{{{','.join(fields)}}}:"]
    for row in rows:
        lines.append("  " + ",".join(_compact_value(row.get(f)) for f in fields))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Summary sentences
# ---------------------------------------------------------------------------

def top_tracks_message(entries: Sequence[TrackPlayCount], period: TimePeriod) -> str:
    description = describe_period_bounds(period)
    if not entries:
        return f"No listening history found for {description}."
    top = entries[0]
    artist = ", ".join(top.track.artist_names) or "Unknown"
    return (
        f'Your #1 track for {description} is "{top.track.name}" by {artist} '
        f"with {top.play_count} plays. Found {len(entries)} unique tracks in this period."
    )


def top_artists_message(entries: Sequence[ArtistPlayCount], period: TimePeriod) -> str:
    description = describe_period_bounds(period)
    if not entries:
        return f"No listening history found for {description}."
    top = entries[0]
    return (
        f"Your #1 artist for {description} is {top.artist.name} with {top.play_count} plays. "
        f"Found {len(entries)} artists in this period."
    )


def wrapped_message(report: WrappedReport) -> str:
    name = describe_period(report.period)
    message = (
        f"Your {name} Wrapped: You listened to {ms_to_hours(report.total_duration_ms)} hours "
        f"of music across {report.unique_artists} artists."
    )
    if report.top_tracks:
        top = report.top_tracks[0]
        artist = ", ".join(top.track.artist_names) or "Unknown"
        message += f' Your #1 track was "{top.track.name}" by {artist} ({top.play_count} plays).'
    if report.top_artists:
        top_artist = report.top_artists[0]
        message += (
            f" {top_artist.artist.name} was your top artist with "
            f"{ms_to_hours(top_artist.listening_time_ms)} hours."
        )
    return message


def comparison_message(comparison: PeriodComparison) -> str:
    change = comparison.plays_change
    more_or_fewer = "more" if change >= 0 else "fewer"
    direction = "increase" if comparison.plays_change_percent >= 0 else "decrease"
    message = (
        f"Period 2 had {abs(change)} {more_or_fewer} plays "
        f"({abs(comparison.plays_change_percent)}% {direction})."
    )
    before = comparison.period1.top_artist or "N/A"
    after = comparison.period2.top_artist or "N/A"
    if before != after:
        message += f" Top artist changed from {before} to {after}."
    else:
        message += f" Top artist stayed {after}."
    return message


def rank_message(result: RankResult) -> str:
    noun = "artists" if result.subject_type == "artist" else "tracks"
    return (
        f"{result.subject.name} is #{result.rank} out of {result.total} {noun} "
        f"(top {100 - result.percentile}%) with {result.play_count} plays."
    )


def discovery_message(insights: DiscoveryInsights) -> str:
    return (
        f"You discovered {len(insights.new_tracks)} new tracks and "
        f"{len(insights.new_artists)} new artists in this period."
    )
