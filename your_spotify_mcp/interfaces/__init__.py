"""Abstract contracts for the external services this server talks to.

    Interface          ->  Concrete implementations (in providers/)
    ---------------------------------------------------------------
    IUpstreamClient    ->  YourSpotifyClient, SpotifyWebClient
"""

from your_spotify_mcp.interfaces.upstream_client import IUpstreamClient

__all__ = ["IUpstreamClient"]
