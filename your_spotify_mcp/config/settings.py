"""Application settings loaded from environment variables via pydantic-settings.

Values come from two sources, in priority order:

  1. **Environment variables** -- e.g. ``YOUR_SPOTIFY_TOKEN=abc123``
     (highest priority, always wins; this is how MCP hosts pass config)
  2. **.env file** -- key=value lines in the working directory

Field ``your_spotify_api_url`` maps to env var ``YOUR_SPOTIFY_API_URL``.
Empty string means "not configured": the Spotify playback tier is enabled
only when all four ``SPOTIFY_*`` credentials are non-empty.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """your-spotify-mcp settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Your Spotify (analytics, required) ===
    your_spotify_api_url: str = ""
    your_spotify_token: str = ""
    your_spotify_auth_method: Literal["query", "bearer"] = "query"
    your_spotify_min_interval_seconds: float = 0.2  # ~5 requests per second

    # === Spotify Web API (playback tier, optional) ===
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_access_token: str = ""
    spotify_refresh_token: str = ""
    spotify_requests_per_minute: int = 180
    spotify_max_concurrent: int = 5
    spotify_min_interval_seconds: float = 0.05

    # === Shared HTTP ===
    request_timeout_seconds: float = 30.0

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"
    config_path: str = ""  # Override path to the tuning YAML

    def has_spotify_credentials(self) -> bool:
        """Return True when every credential the playback tier needs is set."""
        return all(
            (
                self.spotify_client_id,
                self.spotify_client_secret,
                self.spotify_access_token,
                self.spotify_refresh_token,
            )
        )

    def missing_required(self) -> list[str]:
        """Names of required env vars that are empty."""
        missing: list[str] = []
        if not self.your_spotify_api_url:
            missing.append("YOUR_SPOTIFY_API_URL")
        if not self.your_spotify_token:
            missing.append("YOUR_SPOTIFY_TOKEN")
        return missing
