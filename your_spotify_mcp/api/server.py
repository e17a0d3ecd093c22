"""MCP server wiring.

Builds a low-level :class:`mcp.server.Server` whose ``list_tools`` publishes
the registry in :mod:`your_spotify_mcp.api.tools` and whose ``call_tool``
routes every invocation through
:func:`your_spotify_mcp.api.middleware.invoke_tool`.  Results are returned as
a single JSON text block.
"""

from __future__ import annotations

import json
from typing import Any

import mcp.types as types
from mcp.server import Server

from your_spotify_mcp import __version__
from your_spotify_mcp.api.middleware import invoke_tool
from your_spotify_mcp.api.tools import TOOL_REGISTRY, TOOLS, ToolContext, ToolSpec

SERVER_NAME = "your-spotify-mcp"


def visible_tools(context: ToolContext) -> list[ToolSpec]:
    """Playback tools are only advertised when the Spotify credentials are configured."""
    return [t for t in TOOLS if context.streaming_available or not t.requires_streaming]


def build_server(context: ToolContext) -> Server:
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=spec.name,
                description=spec.description,
                inputSchema=spec.input_model.model_json_schema(),
            )
            for spec in visible_tools(context)
        ]

    # Arguments are validated by each tool's input model so failures carry the
    # structured error payload.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        payload = await invoke_tool(TOOL_REGISTRY.get(name), name, arguments, context)
        return [types.TextContent(type="text", text=json.dumps(payload, indent=2, default=str))]

    return server
