from your_spotify_mcp.providers.spotify.client import SpotifyWebClient

__all__ = ["SpotifyWebClient"]
