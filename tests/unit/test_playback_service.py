"""Unit tests for PlaybackService."""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest

from tests.conftest import PLAYLIST_ID, TRACK_ID
from your_spotify_mcp.services.playback_service import PlaybackService
from your_spotify_mcp.utils.errors import (
    CapabilityUnavailableError,
    InputValidationError,
    UpstreamError,
)

URI = f"spotify:track:{TRACK_ID}"
OTHER_URI = "spotify:track:7ouMYWpwJ422jRcDASZB7P"


# ======================================================================
# Capability gating
# ======================================================================


class TestCapability:
    def test_unconfigured_service_is_unavailable(self) -> None:
        assert PlaybackService(None).available is False

    @pytest.mark.asyncio
    async def test_unconfigured_raises_before_any_request(self) -> None:
        service = PlaybackService(None)
        with pytest.raises(CapabilityUnavailableError) as exc_info:
            await service.control_playback("pause")
        assert "SPOTIFY_REFRESH_TOKEN" in exc_info.value.message
        assert exc_info.value.capability == "spotify_playback"

    @pytest.mark.asyncio
    async def test_unavailable_client_makes_no_call(self, mock_spotify_client: MagicMock) -> None:
        mock_spotify_client.is_available.return_value = False
        service = PlaybackService(mock_spotify_client)
        with pytest.raises(CapabilityUnavailableError):
            await service.queue_tracks([URI])
        mock_spotify_client.post.assert_not_called()


# ======================================================================
# Playback control
# ======================================================================


class TestControlPlayback:
    @pytest.mark.asyncio
    async def test_pause_on_device(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        await playback.control_playback("pause", device_id="dev1")
        mock_spotify_client.put.assert_awaited_once_with("/me/player/pause", params={"device_id": "dev1"})

    @pytest.mark.asyncio
    async def test_next_is_post(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        await playback.control_playback("next")
        mock_spotify_client.post.assert_awaited_once_with("/me/player/next", params={})

    @pytest.mark.asyncio
    async def test_seek_requires_position(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            await playback.control_playback("seek")
        assert exc_info.value.field == "position_ms"
        mock_spotify_client.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_volume_requires_percent(self, playback: PlaybackService) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            await playback.control_playback("volume")
        assert exc_info.value.field == "volume_percent"

    @pytest.mark.asyncio
    async def test_volume(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        await playback.control_playback("volume", volume_percent=40)
        mock_spotify_client.put.assert_awaited_once_with("/me/player/volume", params={"volume_percent": 40})

    @pytest.mark.asyncio
    async def test_unknown_action(self, playback: PlaybackService) -> None:
        with pytest.raises(InputValidationError):
            await playback.control_playback("rewind")


class TestPlayAndQueue:
    @pytest.mark.asyncio
    async def test_play_needs_uris_or_context(self, playback: PlaybackService) -> None:
        with pytest.raises(InputValidationError):
            await playback.play_tracks()

    @pytest.mark.asyncio
    async def test_play_context_with_offset(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        context = f"spotify:playlist:{PLAYLIST_ID}"
        await playback.play_tracks(context_uri=context, offset_position=3)
        mock_spotify_client.put.assert_awaited_once_with(
            "/me/player/play", data={"context_uri": context, "offset": {"position": 3}}, params=None
        )

    @pytest.mark.asyncio
    async def test_queue_is_one_request_per_uri_in_order(
        self, playback: PlaybackService, mock_spotify_client: MagicMock
    ) -> None:
        queued = await playback.queue_tracks([URI, OTHER_URI], device_id="dev1")
        assert queued == 2
        assert mock_spotify_client.post.await_args_list == [
            call("/me/player/queue", params={"uri": URI, "device_id": "dev1"}),
            call("/me/player/queue", params={"uri": OTHER_URI, "device_id": "dev1"}),
        ]

    @pytest.mark.asyncio
    async def test_queue_stops_at_first_failure(
        self, playback: PlaybackService, mock_spotify_client: MagicMock
    ) -> None:
        mock_spotify_client.post.side_effect = [None, UpstreamError("No active device", status=404)]
        with pytest.raises(UpstreamError):
            await playback.queue_tracks([URI, OTHER_URI, URI])
        assert mock_spotify_client.post.await_count == 2

    @pytest.mark.asyncio
    async def test_invalid_uri_rejected_before_any_request(
        self, playback: PlaybackService, mock_spotify_client: MagicMock
    ) -> None:
        with pytest.raises(InputValidationError):
            await playback.queue_tracks([URI, "spotify:album:abc"])
        mock_spotify_client.post.assert_not_called()


# ======================================================================
# Playlists
# ======================================================================


class TestPlaylists:
    @pytest.mark.asyncio
    async def test_create_playlist_flow(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        mock_spotify_client.get.return_value = {"id": "spotify-user"}
        mock_spotify_client.post.side_effect = [
            {"id": PLAYLIST_ID, "name": "Mix", "external_urls": {"spotify": "https://open.spotify.com/playlist/x"}},
            {"snapshot_id": "snap"},
        ]
        playlist = await playback.create_playlist("Mix", [URI, OTHER_URI], description="d")
        assert mock_spotify_client.post.await_args_list == [
            call("/users/spotify-user/playlists", data={"name": "Mix", "description": "d", "public": False}),
            call(f"/playlists/{PLAYLIST_ID}/tracks", data={"uris": [URI, OTHER_URI]}),
        ]
        assert playlist.id == PLAYLIST_ID
        assert playlist.track_count == 2

    @pytest.mark.asyncio
    async def test_create_playlist_without_profile(
        self, playback: PlaybackService, mock_spotify_client: MagicMock
    ) -> None:
        mock_spotify_client.get.return_value = {}
        with pytest.raises(UpstreamError) as exc_info:
            await playback.create_playlist("Mix", [URI])
        assert exc_info.value.code == "SPOTIFY_PROFILE"
        mock_spotify_client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_sends_track_objects_and_snapshot(
        self, playback: PlaybackService, mock_spotify_client: MagicMock
    ) -> None:
        mock_spotify_client.delete.return_value = {"snapshot_id": "new"}
        snapshot = await playback.remove_from_playlist(PLAYLIST_ID, [URI], snapshot_id="old")
        mock_spotify_client.delete.assert_awaited_once_with(
            f"/playlists/{PLAYLIST_ID}/tracks", data={"tracks": [{"uri": URI}], "snapshot_id": "old"}
        )
        assert snapshot == "new"

    @pytest.mark.asyncio
    async def test_add_with_position(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        mock_spotify_client.post.return_value = {"snapshot_id": "s2"}
        assert await playback.add_tracks_to_playlist(PLAYLIST_ID, [URI], position=0) == "s2"
        mock_spotify_client.post.assert_awaited_once_with(
            f"/playlists/{PLAYLIST_ID}/tracks", data={"uris": [URI], "position": 0}
        )

    @pytest.mark.asyncio
    async def test_bad_playlist_id(self, playback: PlaybackService) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            await playback.add_tracks_to_playlist("nope", [URI])
        assert exc_info.value.field == "playlist_id"

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        with pytest.raises(InputValidationError):
            await playback.update_playlist_details(PLAYLIST_ID)
        mock_spotify_client.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_sends_only_given_fields(
        self, playback: PlaybackService, mock_spotify_client: MagicMock
    ) -> None:
        updated = await playback.update_playlist_details(PLAYLIST_ID, description="", public=True)
        assert updated == ["description", "public"]
        mock_spotify_client.put.assert_awaited_once_with(
            f"/playlists/{PLAYLIST_ID}", data={"description": "", "public": True}
        )

    @pytest.mark.asyncio
    async def test_user_playlists(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        mock_spotify_client.get.return_value = {"items": [{"id": "p1", "name": "A"}], "total": 12}
        items, total = await playback.get_user_playlists(limit=1)
        assert [p.name for p in items] == ["A"]
        assert total == 12


# ======================================================================
# Catalog / now playing
# ======================================================================


class TestCatalogAndState:
    @pytest.mark.asyncio
    async def test_search_joins_types(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        mock_spotify_client.get.return_value = {
            "tracks": {"items": [{"id": "t", "name": "T", "artists": [{"name": "A"}]}]},
            "artists": {"items": [{"id": "a", "name": "A"}]},
        }
        result = await playback.search_catalog("radio", ["track", "artist"], limit=5)
        mock_spotify_client.get.assert_awaited_once_with(
            "/search", {"q": "radio", "type": "track,artist", "limit": 5}
        )
        assert [t.name for t in result.tracks] == ["T"]
        assert result.albums == []

    @pytest.mark.asyncio
    async def test_search_rejects_unknown_type(self, playback: PlaybackService) -> None:
        with pytest.raises(InputValidationError):
            await playback.search_catalog("x", ["podcast"])

    @pytest.mark.asyncio
    async def test_nothing_playing(self, playback: PlaybackService, mock_spotify_client: MagicMock) -> None:
        mock_spotify_client.get.return_value = None
        state = await playback.get_current_playback(market="GB")
        mock_spotify_client.get.assert_awaited_once_with("/me/player", {"market": "GB"})
        assert state.is_playing is False
