"""Integration tests: tool calls through the MCP boundary down to a mocked upstream.

Services are real; only the two upstream clients are mocks.  Calls go through
:func:`invoke_tool` (and, for the smoke tests, through the MCP request
handlers registered by :func:`build_server`).
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import mcp.types as types
import pytest

from tests.conftest import TODAY, TRACK_ID, endpoint_router, make_mock_client, top_artist, top_song
from your_spotify_mcp.api.middleware import invoke_tool
from your_spotify_mcp.api.server import build_server, visible_tools
from your_spotify_mcp.api.tools import TOOL_REGISTRY, TOOLS, ToolContext
from your_spotify_mcp.services.account_service import AccountService
from your_spotify_mcp.services.analytics_service import AnalyticsService
from your_spotify_mcp.services.playback_service import PlaybackService
from your_spotify_mcp.utils.errors import UpstreamError


def _context(ys_client: MagicMock, spotify_client: MagicMock | None = None) -> ToolContext:
    return ToolContext(
        analytics=AnalyticsService(ys_client, today=lambda: TODAY),
        account=AccountService(ys_client),
        playback=PlaybackService(spotify_client),
    )


async def _call(context: ToolContext, name: str, arguments: dict | None = None) -> dict:
    return await invoke_tool(TOOL_REGISTRY.get(name), name, arguments, context)


@pytest.fixture()
def ys_client() -> MagicMock:
    return make_mock_client()


@pytest.fixture()
def context(ys_client: MagicMock) -> ToolContext:
    return _context(ys_client)


# ======================================================================
# Registry
# ======================================================================


class TestRegistry:
    def test_every_tool_is_registered_once(self) -> None:
        assert len(TOOLS) == 28
        assert len(TOOL_REGISTRY) == len(TOOLS)

    def test_playback_tools_hidden_without_credentials(self, context: ToolContext) -> None:
        names = {t.name for t in visible_tools(context)}
        assert "get_top_tracks" in names
        assert "queue_tracks" not in names
        assert len(names) == 18

    def test_all_tools_visible_with_credentials(self, ys_client: MagicMock) -> None:
        context = _context(ys_client, make_mock_client("spotify"))
        assert len(visible_tools(context)) == 28


# ======================================================================
# Failure shapes
# ======================================================================


class TestFailures:
    @pytest.mark.asyncio
    async def test_unknown_tool(self, context: ToolContext) -> None:
        payload = await _call(context, "get_bottom_tracks")
        assert payload["success"] is False
        assert payload["error"]["type"] == "validation_error"
        assert "get_bottom_tracks" in payload["message"]

    @pytest.mark.asyncio
    async def test_schema_violation_names_field(self, context: ToolContext, ys_client: MagicMock) -> None:
        payload = await _call(context, "get_top_tracks", {"limit": 31})
        assert payload["success"] is False
        assert payload["error"]["field"] == "limit"
        assert payload["message"].startswith("limit:")
        ys_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_reversed_period(self, context: ToolContext, ys_client: MagicMock) -> None:
        payload = await _call(context, "get_top_artists", {"start_date": "2024-05-02", "end_date": "2024-05-01"})
        assert payload["error"]["field"] == "start_date"
        ys_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_playback_without_credentials_makes_no_call(
        self, context: ToolContext, ys_client: MagicMock
    ) -> None:
        payload = await _call(context, "control_playback", {"action": "pause"})
        assert payload["success"] is False
        assert payload["error"]["type"] == "capability_unavailable"
        assert "SPOTIFY_CLIENT_ID" in payload["message"]
        ys_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_error_message_passes_through(self, context: ToolContext, ys_client: MagicMock) -> None:
        ys_client.get.side_effect = UpstreamError(
            "Your Spotify server error", status=500, code="YOUR_SPOTIFY_500", provider_name="your_spotify"
        )
        payload = await _call(context, "get_top_tracks")
        assert payload["error"] == {
            "type": "upstream_error",
            "message": "Your Spotify server error",
            "provider": "your_spotify",
            "status": 500,
            "code": "YOUR_SPOTIFY_500",
        }

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_generic(self, context: ToolContext, ys_client: MagicMock) -> None:
        ys_client.get.side_effect = KeyError("internal detail")
        payload = await _call(context, "get_top_tracks")
        assert payload["success"] is False
        assert payload["error"]["type"] == "internal_error"
        assert "internal detail" not in json.dumps(payload)

    @pytest.mark.asyncio
    async def test_unsupported_pattern_carries_guidance(self, context: ToolContext) -> None:
        payload = await _call(context, "analyze_listening_patterns", {"pattern_type": "day_and_time"})
        assert payload["error"]["type"] == "unsupported_operation"
        assert payload["error"]["guidance"]


# ======================================================================
# Successful calls
# ======================================================================


class TestAnalyticsTools:
    @pytest.mark.asyncio
    async def test_top_tracks_sorted(self, context: ToolContext, ys_client: MagicMock) -> None:
        ys_client.get.return_value = [
            {"track": {"name": "A"}, "count": 10},
            {"track": {"name": "B"}, "count": 25},
        ]
        payload = await _call(context, "get_top_tracks", {"limit": 2})
        assert payload["success"] is True
        assert [(t["name"], t["plays"]) for t in payload["tracks"]] == [("B", 25), ("A", 10)]
        assert [t["rank"] for t in payload["tracks"]] == [1, 2]
        assert payload["total_count"] == 2
        assert payload["message"].startswith('Your #1 track for all time is "B"')

    @pytest.mark.asyncio
    async def test_top_tracks_compact(self, context: ToolContext, ys_client: MagicMock) -> None:
        ys_client.get.return_value = [top_song("Song", 3, track_id=TRACK_ID)]
        payload = await _call(context, "get_top_tracks", {"output_format": "compact"})
        assert payload["format"] == "compact"
        assert payload["data"].startswith("[1]{rank,name,artist,plays,track_id,uri}:")
        assert "tracks" not in payload

    @pytest.mark.asyncio
    async def test_export_summary_has_no_data(self, context: ToolContext, ys_client: MagicMock) -> None:
        ys_client.get = endpoint_router(
            {
                "/spotify/top/songs": [top_song("Hit", 9, total_count=120)],
                "/spotify/top/artists": [top_artist("Band", 9)],
            }
        )
        payload = await _call(context, "export_listening_data", {"start_date": "2024-01-01"})
        assert payload["format"] == "summary"
        assert payload["data"] is None
        assert payload["summary"]["total_plays"] == 120
        assert payload["summary"]["top_track"] == "Hit"

    @pytest.mark.asyncio
    async def test_export_csv_respects_include(self, context: ToolContext, ys_client: MagicMock) -> None:
        ys_client.get = endpoint_router({"/spotify/top/artists": [top_artist("Band", 9)]})
        payload = await _call(context, "export_listening_data", {"format": "csv", "include": ["artists"]})
        assert payload["data"] == {"artists": 'rank,name,plays\n1,"Band",9\n'}

    @pytest.mark.asyncio
    async def test_share_link(self, context: ToolContext, ys_client: MagicMock) -> None:
        ys_client.get.return_value = {"status": True, "user": {"_id": "u1", "publicToken": "pub"}}
        payload = await _call(context, "generate_public_share_link")
        assert payload["public_url"] == "https://ys.example.com?token=pub"


class TestPlaybackTools:
    @pytest.mark.asyncio
    async def test_queue_through_boundary(self, ys_client: MagicMock) -> None:
        spotify = make_mock_client("spotify")
        context = _context(ys_client, spotify)
        payload = await _call(context, "queue_tracks", {"track_uris": [f"spotify:track:{TRACK_ID}"]})
        assert payload["success"] is True
        assert payload["tracks_queued"] == 1
        spotify.post.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_nothing_playing(self, ys_client: MagicMock) -> None:
        spotify = make_mock_client("spotify")
        spotify.get.return_value = None
        payload = await _call(_context(ys_client, spotify), "get_current_playback")
        assert payload["message"] == "Nothing is playing right now."
        assert payload["is_playing"] is False


# ======================================================================
# MCP server handlers
# ======================================================================


class TestServerHandlers:
    @pytest.mark.asyncio
    async def test_list_tools_publishes_schemas(self, context: ToolContext) -> None:
        server = build_server(context)
        result = await server.request_handlers[types.ListToolsRequest](types.ListToolsRequest(method="tools/list"))
        tools = {tool.name: tool for tool in result.root.tools}
        assert len(tools) == 18
        schema = tools["get_top_tracks"].inputSchema
        assert schema["properties"]["limit"]["maximum"] == 30

    @pytest.mark.asyncio
    async def test_call_tool_returns_json_text(self, context: ToolContext, ys_client: MagicMock) -> None:
        ys_client.get.return_value = [top_song("Song", 4)]
        server = build_server(context)
        request = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="get_top_tracks", arguments={"limit": 1}),
        )
        result = await server.request_handlers[types.CallToolRequest](request)
        payload = json.loads(result.root.content[0].text)
        assert payload["success"] is True
        assert payload["tracks"][0]["name"] == "Song"

    @pytest.mark.asyncio
    async def test_invalid_arguments_reach_tool_boundary(self, context: ToolContext) -> None:
        server = build_server(context)
        request = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="search_listening_history", arguments={}),
        )
        result = await server.request_handlers[types.CallToolRequest](request)
        payload = json.loads(result.root.content[0].text)
        assert payload["error"]["field"] == "query"
