"""Shared pytest fixtures for the your-spotify-mcp test suite."""

from __future__ import annotations

import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from your_spotify_mcp.config.settings import Settings
from your_spotify_mcp.interfaces.upstream_client import IUpstreamClient
from your_spotify_mcp.services.account_service import AccountService
from your_spotify_mcp.services.analytics_service import AnalyticsService
from your_spotify_mcp.services.playback_service import PlaybackService

TODAY = datetime.date(2024, 6, 15)

TRACK_ID = "4uLU6hMCjMI75M1A2tKUQC"
ARTIST_ID = "0OdUWJ0sBjDrqHygGUXeCF"
PLAYLIST_ID = "37i9dQZF1DXcBWIGoYBM5M"


def _settings(**overrides: Any) -> Settings:
    defaults: dict[str, Any] = {
        "your_spotify_api_url": "https://ys.example.com/api",
        "your_spotify_token": "ys-secret-token",
        "spotify_client_id": "",
        "spotify_client_secret": "",
        "spotify_access_token": "",
        "spotify_refresh_token": "",
        "_env_file": None,
    }
    defaults.update(overrides)
    return Settings(**defaults)


def make_mock_client(provider_name: str = "your_spotify") -> MagicMock:
    """A ``MagicMock(spec=IUpstreamClient)`` whose request methods are AsyncMocks."""
    client = MagicMock(spec=IUpstreamClient)
    client.get = AsyncMock(return_value=[])
    client.post = AsyncMock(return_value=None)
    client.put = AsyncMock(return_value=None)
    client.delete = AsyncMock(return_value=None)
    client.get_provider_name.return_value = provider_name
    client.get_base_url.return_value = "https://ys.example.com/api"
    client.is_available.return_value = True
    return client


def top_song(name: str, count: int, *, track_id: str = "", artist: str = "Artist",
             artist_id: str = "", album: str = "Album", total_count: int = 0) -> dict[str, Any]:
    """One ``/spotify/top/songs`` entry as the upstream returns it."""
    return {
        "_id": track_id,
        "count": count,
        "duration_ms": 200_000,
        "total_count": total_count,
        "track": {"id": track_id, "name": name, "duration_ms": 200_000},
        "artist": {"id": artist_id, "name": artist},
        "album": {"id": "", "name": album},
    }


def top_artist(name: str, count: int, *, artist_id: str = "", duration_ms: int = 0) -> dict[str, Any]:
    return {"_id": artist_id, "count": count, "duration_ms": duration_ms,
            "artist": {"id": artist_id, "name": name, "genres": []}}


def day_bucket(day: datetime.date, duration_ms: int) -> dict[str, Any]:
    return {"_id": {"year": day.year, "month": day.month, "day": day.day}, "count": duration_ms}


def hour_bucket(hour: int, duration_ms: int) -> dict[str, Any]:
    return {"_id": {"hour": hour}, "count": duration_ms}


@pytest.fixture()
def settings() -> Settings:
    return _settings()


@pytest.fixture()
def mock_client() -> MagicMock:
    return make_mock_client()


@pytest.fixture()
def mock_spotify_client() -> MagicMock:
    return make_mock_client("spotify")


@pytest.fixture()
def analytics(mock_client: MagicMock) -> AnalyticsService:
    return AnalyticsService(mock_client, today=lambda: TODAY)


@pytest.fixture()
def account(mock_client: MagicMock) -> AccountService:
    return AccountService(mock_client)


@pytest.fixture()
def playback(mock_spotify_client: MagicMock) -> PlaybackService:
    return PlaybackService(mock_spotify_client)


def endpoint_router(routes: dict[str, Any]) -> AsyncMock:
    """AsyncMock for ``client.get`` that answers by endpoint (and ``timeSplit``).

    Keys are either an endpoint or ``"endpoint?timeSplit"``; values are the
    payload, or an exception instance to raise.
    """

    async def _get(endpoint: str, params: dict[str, Any] | None = None) -> Any:
        split = (params or {}).get("timeSplit")
        key = f"{endpoint}?{split}" if split else endpoint
        value = routes.get(key, routes.get(endpoint, []))
        if isinstance(value, BaseException):
            raise value
        return value

    return AsyncMock(side_effect=_get)
