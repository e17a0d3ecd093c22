"""Unit tests for the two REST clients, driven through ``httpx.MockTransport``."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from tests.conftest import _settings
from your_spotify_mcp.providers.spotify.client import SpotifyWebClient
from your_spotify_mcp.providers.your_spotify.client import YourSpotifyClient
from your_spotify_mcp.utils.errors import ConfigurationError, RateLimitError, UpstreamError
from your_spotify_mcp.utils.rate_limit import RequestLimiter

YS_URL = "https://ys.example.com/api"
TOKEN = "ys-secret-token"

Handler = Callable[[httpx.Request], httpx.Response]


def _your_spotify(handler: Handler, auth_method: str = "query") -> YourSpotifyClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=YS_URL)
    return YourSpotifyClient(YS_URL, TOKEN, auth_method=auth_method, http_client=http, limiter=RequestLimiter())


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _spotify(handler: Handler, clock: _Clock | None = None) -> SpotifyWebClient:
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://api.spotify.com/v1"
    )
    return SpotifyWebClient(
        client_id="cid",
        client_secret="csecret",
        access_token="old-access",
        refresh_token="refresh-1",
        http_client=http,
        limiter=RequestLimiter(),
        clock=clock or _Clock(),
    )


# ======================================================================
# YourSpotifyClient
# ======================================================================


class TestYourSpotifyAuth:
    @pytest.mark.asyncio
    async def test_query_token_is_sent(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        client = _your_spotify(handler)
        await client.get("/spotify/top/songs", {"nb": 5, "end": None})
        assert seen[0].url.path == "/api/spotify/top/songs"
        assert seen[0].url.params["token"] == TOKEN
        assert seen[0].url.params["nb"] == "5"
        assert "end" not in seen[0].url.params
        assert "authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_bearer_mode(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": True})

        client = _your_spotify(handler, auth_method="bearer")
        await client.get("/me")
        assert seen[0].headers["authorization"] == f"Bearer {TOKEN}"
        assert "token" not in seen[0].url.params

    def test_missing_configuration(self) -> None:
        with pytest.raises(ConfigurationError, match="YOUR_SPOTIFY_TOKEN"):
            YourSpotifyClient(YS_URL, "")
        with pytest.raises(ConfigurationError, match="AUTH_METHOD"):
            YourSpotifyClient(YS_URL, TOKEN, auth_method="cookie")


class TestYourSpotifyErrors:
    @pytest.mark.asyncio
    async def test_status_table_message(self) -> None:
        client = _your_spotify(lambda request: httpx.Response(404, json={"message": "nope"}))
        with pytest.raises(UpstreamError) as exc_info:
            await client.get("/artist/x/stats")
        assert exc_info.value.status == 404
        assert exc_info.value.code == "YOUR_SPOTIFY_404"
        assert exc_info.value.message == "Resource not found"

    @pytest.mark.asyncio
    async def test_token_scrubbed_from_unmapped_detail(self) -> None:
        client = _your_spotify(lambda request: httpx.Response(418, json={"message": f"bad token {TOKEN}"}))
        with pytest.raises(UpstreamError) as exc_info:
            await client.get("/me")
        assert TOKEN not in str(exc_info.value)
        assert exc_info.value.message == "bad token ***"

    @pytest.mark.asyncio
    async def test_network_error_is_scrubbed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(f"connection refused for {request.url}")

        client = _your_spotify(handler)
        with pytest.raises(UpstreamError) as exc_info:
            await client.get("/me")
        assert exc_info.value.code == "YOUR_SPOTIFY_NETWORK"
        assert exc_info.value.status is None
        assert TOKEN not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client = _your_spotify(handler)
        with pytest.raises(UpstreamError) as exc_info:
            await client.get("/me")
        assert exc_info.value.code == "YOUR_SPOTIFY_TIMEOUT"

    @pytest.mark.asyncio
    async def test_rate_limited(self) -> None:
        client = _your_spotify(lambda request: httpx.Response(429, headers={"Retry-After": "7"}))
        with pytest.raises(RateLimitError, match="retry after 7s"):
            await client.get("/me")

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self) -> None:
        client = _your_spotify(lambda request: httpx.Response(204))
        assert await client.post("/anything", data={"x": 1}) is None

    @pytest.mark.asyncio
    async def test_validate_connection(self) -> None:
        assert await _your_spotify(lambda request: httpx.Response(200, json={})).validate_connection() is True
        assert await _your_spotify(lambda request: httpx.Response(401)).validate_connection() is False


# ======================================================================
# SpotifyWebClient
# ======================================================================


class TestSpotifyTokens:
    @pytest.mark.asyncio
    async def test_401_refreshes_once_and_retries(self) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "accounts.spotify.com":
                calls.append("refresh")
                assert b"refresh_token=refresh-1" in request.content
                assert request.headers["authorization"].startswith("Basic ")
                return httpx.Response(
                    200, json={"access_token": "new-access", "expires_in": 3600, "refresh_token": "refresh-2"}
                )
            calls.append(request.headers["authorization"])
            if request.headers["authorization"] == "Bearer old-access":
                return httpx.Response(401, json={"error": {"status": 401, "message": "expired"}})
            return httpx.Response(200, json={"id": "spotify-user"})

        client = _spotify(handler)
        assert await client.get("/me") == {"id": "spotify-user"}
        assert calls == ["Bearer old-access", "refresh", "Bearer new-access"]
        assert client.access_token == "new-access"
        assert client.refresh_token == "refresh-2"

    @pytest.mark.asyncio
    async def test_second_401_is_raised(self) -> None:
        refreshes = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal refreshes
            if request.url.host == "accounts.spotify.com":
                refreshes += 1
                return httpx.Response(200, json={"access_token": "new-access", "expires_in": 3600})
            return httpx.Response(401)

        client = _spotify(handler)
        with pytest.raises(UpstreamError) as exc_info:
            await client.get("/me/player")
        assert exc_info.value.status == 401
        assert refreshes == 1
        assert client.refresh_token == "refresh-1"

    @pytest.mark.asyncio
    async def test_proactive_refresh_near_expiry(self) -> None:
        clock = _Clock()
        hosts: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            hosts.append(request.url.host)
            if request.url.host == "accounts.spotify.com":
                return httpx.Response(200, json={"access_token": "fresh", "expires_in": 3600})
            return httpx.Response(200, json={})

        client = _spotify(handler, clock)
        await client.get("/me")
        clock.now = 46 * 60
        await client.get("/me")
        assert hosts == ["api.spotify.com", "accounts.spotify.com", "api.spotify.com"]

    @pytest.mark.asyncio
    async def test_refresh_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "accounts.spotify.com":
                return httpx.Response(400, json={"error": "invalid_grant"})
            return httpx.Response(401)

        client = _spotify(handler)
        with pytest.raises(UpstreamError) as exc_info:
            await client.get("/me")
        assert exc_info.value.code == "SPOTIFY_TOKEN_REFRESH"
        assert "refresh-1" not in str(exc_info.value)


    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "token_response",
        [
            httpx.Response(200, json={"expires_in": 3600}),
            httpx.Response(200, content=b"<html>oops</html>"),
            httpx.Response(200, json=["access_token"]),
        ],
    )
    async def test_malformed_refresh_response(self, token_response: httpx.Response) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "accounts.spotify.com":
                return token_response
            return httpx.Response(401)

        client = _spotify(handler)
        with pytest.raises(UpstreamError) as exc_info:
            await client.get("/me")
        assert exc_info.value.code == "SPOTIFY_TOKEN_REFRESH"
        assert client.access_token == "old-access"


class TestSpotifyErrors:
    @pytest.mark.asyncio
    async def test_premium_required(self) -> None:
        client = _spotify(lambda request: httpx.Response(403, json={"error": {"message": "Premium required"}}))
        with pytest.raises(UpstreamError) as exc_info:
            await client.put("/me/player/pause")
        assert exc_info.value.code == "SPOTIFY_403"
        assert exc_info.value.message == "Premium required or scope missing"

    def test_from_settings_without_credentials(self) -> None:
        assert SpotifyWebClient.from_settings(_settings()) is None

    def test_from_settings_with_credentials(self) -> None:
        client = SpotifyWebClient.from_settings(
            _settings(
                spotify_client_id="id",
                spotify_client_secret="secret",
                spotify_access_token="a",
                spotify_refresh_token="r",
            )
        )
        assert client is not None
        assert client.is_available() is True
        assert client.get_base_url() == "https://api.spotify.com/v1"
