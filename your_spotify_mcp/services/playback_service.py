"""Playback, queue, playlist and catalog operations on the Spotify Web API.

Only available when all four ``SPOTIFY_*`` credentials are configured.  The
service is constructed with ``client=None`` otherwise, and every method
raises :class:`CapabilityUnavailableError` before issuing any request.
"""

from __future__ import annotations

from typing import Any

from your_spotify_mcp.interfaces.upstream_client import IUpstreamClient
from your_spotify_mcp.models.playback import CatalogSearchResult, PlaybackState, Playlist
from your_spotify_mcp.services import normalizer
from your_spotify_mcp.utils.errors import (
    CapabilityUnavailableError,
    InputValidationError,
    UpstreamError,
)
from your_spotify_mcp.utils.identifiers import (
    SPOTIFY_ID_RE,
    validate_context_uri,
    validate_track_uris,
)
from your_spotify_mcp.utils.logging import get_logger

PLAYBACK_ACTIONS = ("play", "pause", "next", "previous", "seek", "volume")
CATALOG_TYPES = ("track", "artist", "album", "playlist")

CAPABILITY_MESSAGE = (
    "Spotify playback and playlist tools are not configured. Set SPOTIFY_CLIENT_ID, "
    "SPOTIFY_CLIENT_SECRET, SPOTIFY_ACCESS_TOKEN and SPOTIFY_REFRESH_TOKEN to enable them."
)


def _playlist_id(value: str) -> str:
    if not SPOTIFY_ID_RE.match(value or ""):
        raise InputValidationError("playlist_id must be a 22-character Spotify id", field="playlist_id")
    return value


class PlaybackService:
    """Thin, validated wrapper over the Spotify Web API endpoints the tools use."""

    def __init__(self, client: IUpstreamClient | None) -> None:
        self._client = client
        self._logger = get_logger(__name__)

    @property
    def available(self) -> bool:
        return self._client is not None and self._client.is_available()

    def _require(self) -> IUpstreamClient:
        if self._client is None or not self._client.is_available():
            raise CapabilityUnavailableError(CAPABILITY_MESSAGE, capability="spotify_playback")
        return self._client

    async def _current_user_id(self, client: IUpstreamClient) -> str:
        profile = await client.get("/me")
        user_id = profile.get("id", "") if isinstance(profile, dict) else ""
        if not user_id:
            raise UpstreamError(
                "Spotify did not return a user profile for the configured token",
                code="SPOTIFY_PROFILE",
                provider_name=client.get_provider_name(),
            )
        return user_id

    # -- Playback --------------------------------------------------------------

    async def get_current_playback(self, market: str | None = None) -> PlaybackState:
        client = self._require()
        raw = await client.get("/me/player", {"market": market} if market else None)
        return normalizer.normalize_playback(raw)

    async def control_playback(
        self,
        action: str,
        device_id: str | None = None,
        position_ms: int | None = None,
        volume_percent: int | None = None,
    ) -> None:
        client = self._require()
        if action not in PLAYBACK_ACTIONS:
            raise InputValidationError(
                f"action must be one of {', '.join(PLAYBACK_ACTIONS)}", field="action"
            )
        params: dict[str, Any] = {"device_id": device_id} if device_id else {}

        if action == "play":
            await client.put("/me/player/play", params=params)
        elif action == "pause":
            await client.put("/me/player/pause", params=params)
        elif action == "next":
            await client.post("/me/player/next", params=params)
        elif action == "previous":
            await client.post("/me/player/previous", params=params)
        elif action == "seek":
            if position_ms is None:
                raise InputValidationError("position_ms is required for the seek action", field="position_ms")
            await client.put("/me/player/seek", params={**params, "position_ms": position_ms})
        else:
            if volume_percent is None:
                raise InputValidationError(
                    "volume_percent is required for the volume action", field="volume_percent"
                )
            await client.put("/me/player/volume", params={**params, "volume_percent": volume_percent})
        self._logger.info("playback_control_sent", action=action)

    async def play_tracks(
        self,
        uris: list[str] | None = None,
        context_uri: str | None = None,
        offset_position: int | None = None,
        device_id: str | None = None,
    ) -> None:
        client = self._require()
        if not uris and not context_uri:
            raise InputValidationError("Either uris or context_uri is required", field="uris")
        body: dict[str, Any] = {}
        if uris:
            body["uris"] = validate_track_uris(uris, field="uris")
        if context_uri:
            body["context_uri"] = validate_context_uri(context_uri)
            if offset_position is not None:
                body["offset"] = {"position": offset_position}
        await client.put("/me/player/play", data=body, params={"device_id": device_id} if device_id else None)

    async def queue_tracks(self, track_uris: list[str], device_id: str | None = None) -> int:
        """Queue each URI in order; the API accepts one URI per request."""
        client = self._require()
        validate_track_uris(track_uris)
        queued = 0
        for uri in track_uris:
            params: dict[str, Any] = {"uri": uri}
            if device_id:
                params["device_id"] = device_id
            await client.post("/me/player/queue", params=params)
            queued += 1
        return queued

    # -- Playlists -------------------------------------------------------------

    async def get_user_playlists(self, limit: int = 20, offset: int = 0) -> tuple[list[Playlist], int]:
        client = self._require()
        raw = await client.get("/me/playlists", {"limit": limit, "offset": offset})
        raw = raw if isinstance(raw, dict) else {}
        items = [normalizer.normalize_playlist(p) for p in raw.get("items") or [] if isinstance(p, dict)]
        return items, int(raw.get("total") or len(items))

    async def create_playlist(
        self,
        name: str,
        track_uris: list[str],
        description: str = "",
        public: bool = False,
    ) -> Playlist:
        client = self._require()
        validate_track_uris(track_uris)
        user_id = await self._current_user_id(client)
        created = await client.post(
            f"/users/{user_id}/playlists",
            data={"name": name, "description": description, "public": public},
        )
        playlist = normalizer.normalize_playlist(created)
        await client.post(f"/playlists/{playlist.id}/tracks", data={"uris": track_uris})
        self._logger.info("playlist_created", playlist_id=playlist.id, tracks=len(track_uris))
        return playlist.model_copy(update={"track_count": len(track_uris)})

    async def add_tracks_to_playlist(
        self, playlist_id: str, track_uris: list[str], position: int | None = None
    ) -> str:
        """Returns the new playlist snapshot id."""
        client = self._require()
        body: dict[str, Any] = {"uris": validate_track_uris(track_uris)}
        if position is not None:
            body["position"] = position
        response = await client.post(f"/playlists/{_playlist_id(playlist_id)}/tracks", data=body)
        return (response or {}).get("snapshot_id", "") if isinstance(response, dict) else ""

    async def remove_from_playlist(
        self, playlist_id: str, track_uris: list[str], snapshot_id: str | None = None
    ) -> str:
        client = self._require()
        body: dict[str, Any] = {"tracks": [{"uri": uri} for uri in validate_track_uris(track_uris)]}
        if snapshot_id:
            body["snapshot_id"] = snapshot_id
        response = await client.delete(f"/playlists/{_playlist_id(playlist_id)}/tracks", data=body)
        return (response or {}).get("snapshot_id", "") if isinstance(response, dict) else ""

    async def update_playlist_details(
        self,
        playlist_id: str,
        name: str | None = None,
        description: str | None = None,
        public: bool | None = None,
    ) -> list[str]:
        """Returns the names of the fields that were sent."""
        client = self._require()
        body = {
            key: value
            for key, value in (("name", name), ("description", description), ("public", public))
            if value is not None
        }
        if not body:
            raise InputValidationError(
                "At least one of name, description or public must be provided", field="name"
            )
        await client.put(f"/playlists/{_playlist_id(playlist_id)}", data=body)
        return list(body)

    # -- Catalog ---------------------------------------------------------------

    async def search_catalog(
        self, query: str, types: list[str] | None = None, limit: int = 20
    ) -> CatalogSearchResult:
        client = self._require()
        types = types or ["track"]
        unknown = [t for t in types if t not in CATALOG_TYPES]
        if unknown:
            raise InputValidationError(f"Unsupported search type(s): {', '.join(unknown)}", field="type")
        raw = await client.get("/search", {"q": query, "type": ",".join(types), "limit": limit})
        raw = raw if isinstance(raw, dict) else {}

        def _section(key: str, item_type: str) -> list:
            section = raw.get(key) or {}
            return [
                normalizer.normalize_catalog_item(item, item_type)
                for item in section.get("items") or []
                if isinstance(item, dict)
            ]

        return CatalogSearchResult(
            query=query,
            tracks=_section("tracks", "track"),
            artists=_section("artists", "artist"),
            albums=_section("albums", "album"),
            playlists=_section("playlists", "playlist"),
        )
