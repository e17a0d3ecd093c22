"""Abstract base class for upstream REST clients.

Both upstreams (the Your Spotify analytics API and the Spotify Web API) are
reached only through this contract, so services can be tested against a
``MagicMock(spec=IUpstreamClient)`` and never touch the network.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IUpstreamClient(ABC):
    """Contract for a rate-limited JSON REST client.

    Every method returns the parsed JSON body (``None`` for an empty 2xx
    response) or raises :class:`~your_spotify_mcp.utils.errors.UpstreamError`
    with a normalized, credential-free message.  Implementations never retry
    on their own, except for the single token-refresh retry of an OAuth
    client.
    """

    @abstractmethod
    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """Issue a GET request against *endpoint* (relative to the base URL)."""

    @abstractmethod
    async def post(
        self,
        endpoint: str,
        data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Issue a POST request with a JSON body."""

    @abstractmethod
    async def put(
        self,
        endpoint: str,
        data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Issue a PUT request with a JSON body."""

    @abstractmethod
    async def delete(
        self,
        endpoint: str,
        data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Issue a DELETE request, optionally with a JSON body."""

    @abstractmethod
    def get_base_url(self) -> str:
        """Return the configured base URL."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"your_spotify"`` or ``"spotify"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the client holds the credentials it needs."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
