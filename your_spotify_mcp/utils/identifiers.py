"""Spotify identifier and calendar-date parsing.

Track, artist, album and playlist ids are 22-character base-62 tokens.
Callers may also pass the URI form ``spotify:<kind>:<id>``; the prefix is
stripped before validation.  Every failure here is caller input, so it raises
:class:`InputValidationError` naming the offending field.
"""

from __future__ import annotations

import datetime
import re

from your_spotify_mcp.utils.errors import InputValidationError

SPOTIFY_ID_RE = re.compile(r"^[a-zA-Z0-9]{22}$")
TRACK_URI_RE = re.compile(r"^spotify:track:[a-zA-Z0-9]{22}$")
CONTEXT_URI_RE = re.compile(r"^spotify:(album|playlist|artist):[a-zA-Z0-9]{22}$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def normalize_spotify_id(value: str, kind: str = "track", field: str | None = None) -> str:
    """Return the bare 22-character id for *value*.

    >>> normalize_spotify_id("spotify:track:4uLU6hMCjMI75M1A2tKUQC")
    '4uLU6hMCjMI75M1A2tKUQC'
    """
    field = field or f"{kind}_id"
    candidate = (value or "").strip()
    prefix = f"spotify:{kind}:"
    if candidate.startswith(prefix):
        candidate = candidate[len(prefix):]
    if not SPOTIFY_ID_RE.match(candidate):
        raise InputValidationError(
            message=f"{field} must be a 22-character Spotify {kind} id or a {prefix}<id> URI",
            field=field,
        )
    return candidate


def track_uri(track_id: str) -> str:
    """Canonical URI for a track id (empty id gives an empty URI)."""
    return f"spotify:track:{track_id}" if track_id else ""


def validate_track_uris(uris: list[str], field: str = "track_uris") -> list[str]:
    for uri in uris:
        if not TRACK_URI_RE.match(uri):
            raise InputValidationError(
                message=f"Invalid track URI '{uri}'. Expected spotify:track:<22-character id>",
                field=field,
            )
    return uris


def validate_context_uri(uri: str, field: str = "context_uri") -> str:
    if not CONTEXT_URI_RE.match(uri):
        raise InputValidationError(
            message="context_uri must be a spotify:album:, spotify:playlist: or spotify:artist: URI",
            field=field,
        )
    return uri


def parse_iso_date(value: str, field: str) -> datetime.date:
    """Parse a strict ``YYYY-MM-DD`` string into a :class:`datetime.date`."""
    if not ISO_DATE_RE.match(value or ""):
        raise InputValidationError(message=f"{field} must use YYYY-MM-DD format", field=field)
    try:
        return datetime.date.fromisoformat(value)
    except ValueError as exc:
        raise InputValidationError(message=f"{field} is not a valid calendar date", field=field) from exc
