"""Account-level operations against Your Spotify.

The API token this server holds is read-only from the account's point of
view: renaming, settings changes and token revocation need an authenticated
web session.  Those operations validate their input and then fail with an
:class:`UnsupportedOperationError` that points the user at the web UI.  Only
reading the profile and building the public share link actually work.
"""

from __future__ import annotations

import re
from zoneinfo import available_timezones

from your_spotify_mcp.interfaces.upstream_client import IUpstreamClient
from your_spotify_mcp.models.entities import UserInfo
from your_spotify_mcp.services import normalizer
from your_spotify_mcp.utils.errors import (
    InputValidationError,
    UnsupportedOperationError,
    UpstreamError,
)
from your_spotify_mcp.utils.logging import get_logger

_USERNAME_RE = re.compile(r"[a-zA-Z0-9_-]{1,50}")
_WEB_SESSION_GUIDANCE = "Open the Your Spotify web interface, go to Settings, and make the change there."


class AccountService:
    """Profile and sharing operations for the configured Your Spotify account."""

    def __init__(self, client: IUpstreamClient) -> None:
        self._client = client
        self._logger = get_logger(__name__)

    async def get_current_user(self) -> UserInfo:
        raw = await self._client.get("/me")
        user = normalizer.normalize_user(raw)
        if user is None:
            raise UpstreamError(
                message="Failed to get user info - the token is not authenticated. Check YOUR_SPOTIFY_TOKEN.",
                code="YOUR_SPOTIFY_NOT_AUTHENTICATED",
                provider_name=self._client.get_provider_name(),
            )
        return user

    async def generate_public_share_link(self) -> tuple[str, str]:
        """Return ``(public_token, public_url)`` for the account's existing share token.

        The frontend URL is derived from the API URL by dropping ``-api`` and
        ``/api`` (the usual Your Spotify deployment layouts).
        """
        user = await self.get_current_user()
        if not user.public_token:
            raise UnsupportedOperationError(
                "No public token exists for this account yet",
                guidance="Generate one in the Your Spotify web interface (Settings > Public token) first.",
                provider_name=self._client.get_provider_name(),
            )
        frontend = self._client.get_base_url().replace("-api", "").replace("/api", "")
        self._logger.info("public_share_link_built", user_id=user.id)
        return user.public_token, f"{frontend}?token={user.public_token}"

    async def update_user_settings(self, timezone: str | None = None) -> None:
        if timezone is not None and timezone not in available_timezones():
            raise InputValidationError(
                f"Unknown timezone '{timezone}'. Use an IANA name such as 'Europe/Paris'.",
                field="timezone",
            )
        raise UnsupportedOperationError(
            "Settings updates require an authenticated web session; API token access is read-only",
            guidance=_WEB_SESSION_GUIDANCE,
            provider_name=self._client.get_provider_name(),
        )

    async def rename_account(self, new_username: str) -> None:
        if not _USERNAME_RE.fullmatch(new_username or ""):
            raise InputValidationError(
                "new_username must be 1-50 letters, digits, underscores or hyphens",
                field="new_username",
            )
        raise UnsupportedOperationError(
            "Account rename requires an authenticated web session",
            guidance="Visit the Your Spotify settings page to change your username.",
            provider_name=self._client.get_provider_name(),
        )

    async def revoke_public_access(self) -> None:
        raise UnsupportedOperationError(
            "Public token revocation requires an authenticated web session",
            guidance="Visit the Your Spotify settings page to revoke or regenerate the public token.",
            provider_name=self._client.get_provider_name(),
        )
