"""your-spotify-mcp entry point.

Wires together the upstream clients, services and tool registry via
dependency injection, then serves the MCP protocol over stdio.  Loads
configuration from the environment / ``.env`` and ``config/config.yaml`` and
configures structured logging on stderr before anything else runs.

    your-spotify-mcp                     # serve over stdio
    your-spotify-mcp --check-connection  # verify the Your Spotify token and exit
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any

import structlog
from mcp.server.stdio import stdio_server

from your_spotify_mcp import __version__
from your_spotify_mcp.api.server import build_server, visible_tools
from your_spotify_mcp.api.tools import ToolContext
from your_spotify_mcp.config.loader import AnalyticsTuning, load_config
from your_spotify_mcp.config.settings import Settings
from your_spotify_mcp.providers.spotify.client import SpotifyWebClient
from your_spotify_mcp.providers.your_spotify.client import YourSpotifyClient
from your_spotify_mcp.services.account_service import AccountService
from your_spotify_mcp.services.analytics_service import AnalyticsService
from your_spotify_mcp.services.playback_service import PlaybackService
from your_spotify_mcp.utils.errors import ConfigurationError
from your_spotify_mcp.utils.logging import configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, config: dict[str, Any]) -> dict[str, Any]:
    """Construct every client and service instance for the server.

    Returns a flat dict of named components; ``context`` is what the tool
    layer consumes, the clients are kept so they can be closed on shutdown.
    """
    missing = app_settings.missing_required()
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}. "
            "Set them in the MCP host config or a .env file."
        )

    # -- Upstream clients --
    your_spotify = YourSpotifyClient.from_settings(app_settings)
    spotify = SpotifyWebClient.from_settings(app_settings)

    # -- Services --
    tuning = AnalyticsTuning.from_config(config)
    analytics = AnalyticsService(your_spotify, tuning=tuning)
    account = AccountService(your_spotify)
    playback = PlaybackService(spotify)

    return {
        "your_spotify_client": your_spotify,
        "spotify_client": spotify,
        "context": ToolContext(analytics=analytics, account=account, playback=playback),
    }


async def _close_all(components: dict[str, Any]) -> None:
    for key in ("your_spotify_client", "spotify_client"):
        client = components.get(key)
        if client is not None:
            await client.aclose()


# ---------------------------------------------------------------------------
# Run modes
# ---------------------------------------------------------------------------


async def run(app_settings: Settings) -> None:
    """Serve MCP over stdio until the host closes the stream."""
    components = _build_all(app_settings, load_config(settings=app_settings))
    context: ToolContext = components["context"]
    server = build_server(context)
    _logger.info(
        "server_startup",
        version=__version__,
        environment=app_settings.app_env,
        tools=len(visible_tools(context)),
        spotify_playback=context.streaming_available,
    )
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await _close_all(components)
        _logger.info("server_shutdown", message="HTTP clients closed")


async def check_connection(app_settings: Settings) -> int:
    """Check the Your Spotify API with the configured token; 0 on success."""
    components = _build_all(app_settings, load_config(settings=app_settings))
    try:
        ok = await components["your_spotify_client"].validate_connection()
    finally:
        await _close_all(components)
    _logger.info("connection_check", ok=ok)
    return 0 if ok else 1


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="your-spotify-mcp",
        description="MCP server exposing Your Spotify listening analytics and Spotify playback tools.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR).")
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Render log lines as JSON (the default when APP_ENV=production).",
    )
    parser.add_argument(
        "--check-connection",
        action="store_true",
        help="Verify the Your Spotify URL and token, then exit.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main() -> None:
    args = _build_parser().parse_args()
    app_settings = Settings()
    configure_logging(
        log_level=args.log_level or app_settings.log_level,
        json_output=args.json_logs or app_settings.app_env == "production",
    )

    try:
        if args.check_connection:
            sys.exit(asyncio.run(check_connection(app_settings)))
        asyncio.run(run(app_settings))
    except ConfigurationError as exc:
        _logger.error("configuration_error", message=exc.message, provider=exc.provider_name)
        sys.exit(2)
    except KeyboardInterrupt:
        _logger.info("server_interrupted")


if __name__ == "__main__":
    main()
