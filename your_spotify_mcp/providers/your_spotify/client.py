"""Your Spotify REST API client.

Your Spotify is a self-hosted listening-history service.  Its API accepts a
public or API token either as a ``token`` query parameter (the default, which
is what public share tokens require) or as a bearer header.

Requests are strictly serialized with a minimum spacing between them
(~5 req/s by default); concurrent callers queue on the shared limiter.
"""

from __future__ import annotations

from typing import Any, Literal

import httpx

from your_spotify_mcp.config.settings import Settings
from your_spotify_mcp.providers.base_client import BaseRESTClient
from your_spotify_mcp.utils.errors import ConfigurationError, UpstreamError
from your_spotify_mcp.utils.rate_limit import RequestLimiter

AuthMethod = Literal["query", "bearer"]


class YourSpotifyClient(BaseRESTClient):
    """Token-authenticated client for the Your Spotify API."""

    _PROVIDER_NAME = "your_spotify"
    _CODE_PREFIX = "YOUR_SPOTIFY"
    _ERROR_MESSAGES = {
        400: "Invalid request parameters",
        401: "Authentication failed - check your Your Spotify token, or regenerate it in the Your Spotify settings",
        403: "Access denied - insufficient permissions",
        404: "Resource not found",
        429: "Rate limit exceeded - please wait before retrying",
        500: "Your Spotify server error",
        502: "Your Spotify server is temporarily unavailable",
        503: "Your Spotify service is temporarily unavailable",
    }

    def __init__(
        self,
        base_url: str,
        token: str,
        auth_method: AuthMethod = "query",
        min_interval: float = 0.2,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
        limiter: RequestLimiter | None = None,
    ) -> None:
        if not base_url:
            raise ConfigurationError("YOUR_SPOTIFY_API_URL is required", provider_name=self._PROVIDER_NAME)
        if not token:
            raise ConfigurationError("YOUR_SPOTIFY_TOKEN is required", provider_name=self._PROVIDER_NAME)
        if auth_method not in ("query", "bearer"):
            raise ConfigurationError(
                f"YOUR_SPOTIFY_AUTH_METHOD must be 'query' or 'bearer', got '{auth_method}'",
                provider_name=self._PROVIDER_NAME,
            )
        self._token = token
        self._auth_method = auth_method
        super().__init__(
            base_url=base_url,
            limiter=limiter or RequestLimiter(min_interval=min_interval, max_concurrent=1),
            timeout=timeout,
            http_client=http_client,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> YourSpotifyClient:
        return cls(
            base_url=settings.your_spotify_api_url,
            token=settings.your_spotify_token,
            auth_method=settings.your_spotify_auth_method,
            min_interval=settings.your_spotify_min_interval_seconds,
            timeout=settings.request_timeout_seconds,
        )

    @property
    def auth_method(self) -> AuthMethod:
        return self._auth_method

    def _auth_params(self) -> dict[str, Any]:
        if self._auth_method == "query":
            return {"token": self._token}
        return {}

    def _auth_headers(self) -> dict[str, str]:
        if self._auth_method == "bearer":
            return {"Authorization": f"Bearer {self._token}"}
        return {}

    def _secrets(self) -> list[str]:
        return [self._token]

    def _display_name(self) -> str:
        return "Your Spotify"

    def is_available(self) -> bool:
        return bool(self._base_url and self._token)

    async def validate_connection(self) -> bool:
        """Return ``True`` if ``GET /me`` succeeds with the configured token."""
        try:
            await self.get("/me")
        except UpstreamError as exc:
            self._logger.warning("your_spotify_connection_check_failed", error=str(exc))
            return False
        return True
