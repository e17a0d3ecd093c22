"""Custom exception hierarchy for your-spotify-mcp.

All application exceptions inherit from :class:`YourSpotifyMCPError`, which
carries an optional ``provider_name`` so the tool boundary can say which
upstream ("your_spotify", "spotify") caused the failure.

    YourSpotifyMCPError  (base -- catch-all for any application error)
    +-- InputValidationError       (caller parameter violates its declared shape)
    +-- UpstreamError              (non-2xx or network failure from an upstream)
    |   +-- RateLimitError         (upstream answered 429)
    +-- UnsupportedOperationError  (upstream cannot service the request at all)
    +-- CapabilityUnavailableError (optional credentials were never configured)
    +-- ConfigurationError         (startup / missing config)

Every class exposes a ``kind`` string used as the ``error.type`` field of a
structured tool failure, so callers can branch on it without parsing text.
"""

from __future__ import annotations

from typing import Any


class YourSpotifyMCPError(Exception):
    """Base exception for all your-spotify-mcp errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which upstream triggered the error.  The
    ``__str__`` method prefixes the provider name in brackets for log output,
    e.g. ``[spotify] Spotify rate limit exceeded - please wait``.
    """

    kind = "internal_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message

    def to_dict(self) -> dict[str, Any]:
        """Return the ``error`` object of a structured tool failure."""
        payload: dict[str, Any] = {"type": self.kind, "message": self._message}
        if self._provider_name:
            payload["provider"] = self._provider_name
        return payload


# ---------------------------------------------------------------------------
# Caller input
# ---------------------------------------------------------------------------

class InputValidationError(YourSpotifyMCPError):
    """Raised when a caller parameter violates its declared shape or range.

    ``field`` names the offending parameter so the caller can correct it.
    """

    kind = "validation_error"

    def __init__(
        self,
        message: str = "Invalid input",
        field: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._field = field

    @property
    def field(self) -> str | None:
        return self._field

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self._field:
            payload["field"] = self._field
        return payload


# ---------------------------------------------------------------------------
# Upstream failures
# ---------------------------------------------------------------------------

class UpstreamError(YourSpotifyMCPError):
    """Raised when an upstream API call fails (non-2xx, timeout, network).

    ``status`` is the HTTP status code, or ``None`` for transport failures.
    ``code`` is a stable identifier such as ``YOUR_SPOTIFY_401``.  The message
    is already normalized and never contains a credential.
    """

    kind = "upstream_error"

    def __init__(
        self,
        message: str = "Upstream request failed",
        status: int | None = None,
        code: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._status = status
        self._code = code

    @property
    def status(self) -> int | None:
        return self._status

    @property
    def code(self) -> str | None:
        return self._code

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self._status is not None:
            payload["status"] = self._status
        if self._code:
            payload["code"] = self._code
        return payload


class RateLimitError(UpstreamError):
    """Raised when an upstream answers 429.

    Not retried automatically; the caller decides whether to try again.
    """

    kind = "rate_limited"

    def __init__(
        self,
        message: str = "Rate limit exceeded - please wait before retrying",
        status: int | None = 429,
        code: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, status=status, code=code, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Capability errors
# ---------------------------------------------------------------------------

class UnsupportedOperationError(YourSpotifyMCPError):
    """Raised for requests the upstream cannot service at all.

    ``guidance`` tells the caller what to do instead (use another pattern
    type, visit the web UI, ...).
    """

    kind = "unsupported_operation"

    def __init__(
        self,
        message: str = "This operation is not supported",
        guidance: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._guidance = guidance

    @property
    def guidance(self) -> str | None:
        return self._guidance

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self._guidance:
            payload["guidance"] = self._guidance
        return payload


class CapabilityUnavailableError(YourSpotifyMCPError):
    """Raised when a whole tool tier is disabled because credentials are missing."""

    kind = "capability_unavailable"

    def __init__(
        self,
        message: str = "This capability is not configured",
        capability: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._capability = capability

    @property
    def capability(self) -> str | None:
        return self._capability

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self._capability:
            payload["capability"] = self._capability
        return payload


class ConfigurationError(YourSpotifyMCPError):
    """Raised when configuration is invalid or missing at startup."""

    kind = "configuration_error"

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
