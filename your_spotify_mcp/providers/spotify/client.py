"""Spotify Web API client with OAuth refresh-token handling.

Holds an access token, a refresh token and the access token's expiry for the
lifetime of the process (nothing is persisted).  Tokens are refreshed:

- proactively, when a request is about to be sent within five minutes of
  expiry (the initial token is assumed to have 50 minutes left);
- reactively, when the API answers 401: refresh once, then retry the
  original request exactly once.  A second failure is raised as usual.

If the token endpoint rotates the refresh token, the new one replaces the
held value.  Requests share a refilling 180-per-minute quota with at most
five in flight.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Callable

import httpx

from your_spotify_mcp.config.settings import Settings
from your_spotify_mcp.providers.base_client import BaseRESTClient
from your_spotify_mcp.utils.errors import ConfigurationError, UpstreamError
from your_spotify_mcp.utils.rate_limit import RequestLimiter

API_BASE_URL = "https://api.spotify.com/v1"
TOKEN_URL = "https://accounts.spotify.com/api/token"

_INITIAL_TOKEN_LIFETIME = 50 * 60
_REFRESH_MARGIN = 5 * 60


class SpotifyWebClient(BaseRESTClient):
    """OAuth2 client for the Spotify Web API."""

    _PROVIDER_NAME = "spotify"
    _CODE_PREFIX = "SPOTIFY"
    _ERROR_MESSAGES = {
        400: "Invalid request - check parameters",
        401: "Authentication failed - Spotify token may need refresh",
        403: "Premium required or scope missing",
        404: "Resource not found on Spotify",
        429: "Spotify rate limit exceeded - please wait",
        500: "Spotify server error",
        502: "Spotify service temporarily unavailable",
        503: "Spotify service temporarily unavailable",
    }

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        access_token: str,
        refresh_token: str,
        requests_per_minute: int = 180,
        max_concurrent: int = 5,
        min_interval: float = 0.05,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
        limiter: RequestLimiter | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not client_id or not client_secret:
            raise ConfigurationError(
                "SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET are required",
                provider_name=self._PROVIDER_NAME,
            )
        if not access_token or not refresh_token:
            raise ConfigurationError(
                "SPOTIFY_ACCESS_TOKEN and SPOTIFY_REFRESH_TOKEN are required",
                provider_name=self._PROVIDER_NAME,
            )
        self._client_id = client_id
        self._client_secret = client_secret
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._clock = clock
        self._token_expires_at = clock() + _INITIAL_TOKEN_LIFETIME
        self._refresh_lock = asyncio.Lock()
        super().__init__(
            base_url=API_BASE_URL,
            limiter=limiter
            or RequestLimiter(
                min_interval=min_interval,
                max_concurrent=max_concurrent,
                reservoir=requests_per_minute,
                reservoir_period=60.0,
            ),
            timeout=timeout,
            http_client=http_client,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> SpotifyWebClient | None:
        """Build a client, or return ``None`` when any credential is missing."""
        if not settings.has_spotify_credentials():
            return None
        return cls(
            client_id=settings.spotify_client_id,
            client_secret=settings.spotify_client_secret,
            access_token=settings.spotify_access_token,
            refresh_token=settings.spotify_refresh_token,
            requests_per_minute=settings.spotify_requests_per_minute,
            max_concurrent=settings.spotify_max_concurrent,
            min_interval=settings.spotify_min_interval_seconds,
            timeout=settings.request_timeout_seconds,
        )

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def refresh_token(self) -> str:
        return self._refresh_token

    # -- Auth hooks ------------------------------------------------------------

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._access_token}"}

    def _secrets(self) -> list[str]:
        return [self._access_token, self._refresh_token, self._client_secret]

    def _display_name(self) -> str:
        return "Spotify"

    def is_available(self) -> bool:
        return bool(self._access_token and self._refresh_token)

    # -- Token lifecycle -------------------------------------------------------

    def _token_expiring(self) -> bool:
        return self._clock() > self._token_expires_at - _REFRESH_MARGIN

    async def refresh_access_token(self, stale_token: str | None = None) -> None:
        """Exchange the refresh token for a new access token.

        When *stale_token* is given and another coroutine has already
        replaced it, the refresh is skipped.
        """
        async with self._refresh_lock:
            if stale_token is not None and stale_token != self._access_token:
                return
            try:
                response = await self._http.post(
                    TOKEN_URL,
                    data={"grant_type": "refresh_token", "refresh_token": self._refresh_token},
                    auth=(self._client_id, self._client_secret),
                )
            except httpx.HTTPError as exc:
                raise UpstreamError(
                    message="Could not reach the Spotify accounts service to refresh the access token",
                    code="SPOTIFY_TOKEN_REFRESH",
                    provider_name=self._PROVIDER_NAME,
                ) from exc

            if response.is_error:
                self._logger.error("spotify_token_refresh_failed", status=response.status_code)
                raise UpstreamError(
                    message=(
                        "Failed to refresh the Spotify access token - re-authorize the app "
                        "and update SPOTIFY_REFRESH_TOKEN"
                    ),
                    status=response.status_code,
                    code="SPOTIFY_TOKEN_REFRESH",
                    provider_name=self._PROVIDER_NAME,
                )

            try:
                payload = response.json()
                access_token = payload["access_token"]
                expires_in = int(payload.get("expires_in", 3600))
            except (ValueError, KeyError, TypeError, AttributeError) as exc:
                self._logger.error("spotify_token_refresh_malformed", status=response.status_code)
                raise UpstreamError(
                    message="The Spotify accounts service returned an unreadable token response",
                    status=response.status_code,
                    code="SPOTIFY_TOKEN_REFRESH",
                    provider_name=self._PROVIDER_NAME,
                ) from exc
            if not isinstance(access_token, str) or not access_token:
                raise UpstreamError(
                    message="The Spotify accounts service returned an empty access token",
                    status=response.status_code,
                    code="SPOTIFY_TOKEN_REFRESH",
                    provider_name=self._PROVIDER_NAME,
                )

            self._access_token = access_token
            self._token_expires_at = self._clock() + expires_in
            rotated = payload.get("refresh_token")
            if isinstance(rotated, str) and rotated:
                self._refresh_token = rotated
            self._logger.info(
                "spotify_token_refreshed",
                expires_in=expires_in,
                refresh_token_rotated=bool(rotated),
            )

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        data: Any = None,
    ) -> Any:
        if self._token_expiring():
            await self.refresh_access_token(stale_token=self._access_token)

        token_used = self._access_token
        try:
            return await super()._request(method, endpoint, params=params, data=data)
        except UpstreamError as exc:
            if exc.status != 401:
                raise
            self._logger.info("spotify_token_rejected_refreshing", endpoint=endpoint)
        await self.refresh_access_token(stale_token=token_used)
        return await super()._request(method, endpoint, params=params, data=data)
