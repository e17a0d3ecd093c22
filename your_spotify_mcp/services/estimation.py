"""Named approximations used where the upstream lacks an exact signal.

Each function documents its rule in one line.  Nothing computed here is an
exact measurement; callers keep that distinction in the field docs of the
models that carry these values.
"""

from __future__ import annotations

# Assumed length of a track whose duration the upstream did not report.
TRACK_FALLBACK_DURATION_MS = 180_000
# Assumed average track length when only an artist's play count is known.
ARTIST_AVERAGE_TRACK_MS = 210_000

_MS_PER_HOUR = 3_600_000


def estimate_track_total_duration(plays: int, duration_ms: int) -> tuple[int, bool]:
    """plays x known duration, else plays x 180 s.  Returns (ms, estimated)."""
    if duration_ms > 0:
        return plays * duration_ms, False
    return plays * TRACK_FALLBACK_DURATION_MS, True


def estimate_artist_duration(plays: int) -> int:
    """plays x 210 s average track length."""
    return plays * ARTIST_AVERAGE_TRACK_MS


def estimate_plays_from_duration(duration_ms: int) -> int:
    """round(listening ms / 180 s average track length)."""
    return round(duration_ms / TRACK_FALLBACK_DURATION_MS)


def split_evenly(total: int, participants: list[str]) -> dict[str, int]:
    """Give each participant round(total / n) plays."""
    if not participants:
        return {}
    share = round(total / len(participants))
    return {participant: share for participant in participants}


def is_probable_discovery(play_count: int, threshold: int) -> bool:
    """A play count at or below *threshold* in the period suggests a new find."""
    return play_count <= threshold


def ms_to_hours(ms: int) -> float:
    """Milliseconds to hours, rounded to one decimal."""
    return round(ms / _MS_PER_HOUR, 1)
