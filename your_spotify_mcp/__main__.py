"""Allow ``python -m your_spotify_mcp``."""

from your_spotify_mcp.main import main

main()
