"""your-spotify-mcp: MCP tools over Your Spotify analytics and the Spotify Web API."""

__version__ = "0.1.0"
