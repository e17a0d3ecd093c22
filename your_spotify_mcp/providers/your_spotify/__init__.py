from your_spotify_mcp.providers.your_spotify.client import YourSpotifyClient

__all__ = ["YourSpotifyClient"]
