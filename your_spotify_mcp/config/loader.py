"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. ``config.yaml`` shipped beside this module -- static tuning defaults
  2. ``.env`` file                               -- local developer overrides
  3. Environment variables                       -- set by the MCP host

:func:`load_config` reads the YAML first, then deep-merges the
environment-derived values on top.  :class:`AnalyticsTuning` is the typed view
of the ``analytics`` section that the engine actually consumes.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict

from your_spotify_mcp.config.settings import Settings

_DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.yaml")


class AnalyticsTuning(BaseModel):
    """Constants of the analytics engine that deployments may tune."""

    model_config = ConfigDict(frozen=True)

    default_start_date: str = "2000-01-01"
    max_result_count: int = 30
    search_pool_size: int = 30
    artist_search_min_length: int = 3
    wrapped_max_days: int = 366
    discovery_max_track_plays: int = 5
    discovery_max_artist_plays: int = 10
    discovery_artist_pool_size: int = 10
    artist_top_tracks: int = 10

    @classmethod
    def from_config(cls, config: dict) -> "AnalyticsTuning":
        section = dict(config.get("analytics") or {})
        discovery = section.pop("discovery", None) or {}
        for key, value in discovery.items():
            section[f"discovery_{key}"] = value
        known = {k: v for k, v in section.items() if k in cls.model_fields}
        return cls(**known)


def load_config(path: str | None = None, settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.  Defaults to the
            ``config.yaml`` packaged with this module.
        settings: Pre-built settings; read from the environment when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    settings = settings or Settings()
    config_path = Path(path or settings.config_path or _DEFAULT_CONFIG_PATH)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    # Only non-secret values go into the merged dict; credentials stay on
    # the Settings object.
    env_overrides = {
        "your_spotify": {
            "api_url": settings.your_spotify_api_url,
            "auth_method": settings.your_spotify_auth_method,
            "min_interval_seconds": settings.your_spotify_min_interval_seconds,
        },
        "spotify": {
            "enabled": settings.has_spotify_credentials(),
            "requests_per_minute": settings.spotify_requests_per_minute,
            "max_concurrent": settings.spotify_max_concurrent,
        },
        "http": {
            "timeout_seconds": settings.request_timeout_seconds,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
