"""Configuration module: exports Settings, AnalyticsTuning and load_config."""

from your_spotify_mcp.config.loader import AnalyticsTuning, load_config
from your_spotify_mcp.config.settings import Settings

__all__ = ["AnalyticsTuning", "Settings", "load_config"]
