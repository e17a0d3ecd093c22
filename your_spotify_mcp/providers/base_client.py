"""Shared httpx plumbing for the two upstream REST clients.

Subclasses declare their status-to-message table, the provider name, the
error-code prefix, and how credentials are attached (query parameter or
header).  Everything else is shared: the rate-limited send, the empty-body
handling, and error normalization that never leaks a credential.
"""

from __future__ import annotations

from typing import Any

import httpx

from your_spotify_mcp.interfaces.upstream_client import IUpstreamClient
from your_spotify_mcp.utils.errors import RateLimitError, UpstreamError
from your_spotify_mcp.utils.logging import get_logger
from your_spotify_mcp.utils.rate_limit import RequestLimiter

_USER_AGENT = "your-spotify-mcp/0.1.0"
_REDACTED = "***"


class BaseRESTClient(IUpstreamClient):
    """Rate-limited JSON client over a single ``httpx.AsyncClient``."""

    _PROVIDER_NAME = "upstream"
    _CODE_PREFIX = "UPSTREAM"
    _ERROR_MESSAGES: dict[int, str] = {}

    def __init__(
        self,
        base_url: str,
        limiter: RequestLimiter,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._limiter = limiter
        self._http = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers={"User-Agent": _USER_AGENT, "Accept": "application/json"},
        )
        self._logger = get_logger(__name__)

    # -- Hooks -----------------------------------------------------------------

    def _auth_params(self) -> dict[str, Any]:
        return {}

    def _auth_headers(self) -> dict[str, str]:
        return {}

    def _secrets(self) -> list[str]:
        """Credential values that must never appear in an error message."""
        return []

    # -- Request core ----------------------------------------------------------

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        data: Any = None,
    ) -> Any:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        query.update(self._auth_params())

        async with self._limiter:
            try:
                response = await self._http.request(
                    method,
                    endpoint,
                    params=query,
                    json=data,
                    headers=self._auth_headers(),
                )
            except httpx.TimeoutException as exc:
                self._logger.warning(
                    "upstream_timeout", provider=self._PROVIDER_NAME, method=method, endpoint=endpoint
                )
                raise UpstreamError(
                    message=f"{self._display_name()} did not respond in time - please try again",
                    code=f"{self._CODE_PREFIX}_TIMEOUT",
                    provider_name=self._PROVIDER_NAME,
                ) from exc
            except httpx.HTTPError as exc:
                self._logger.warning(
                    "upstream_network_error",
                    provider=self._PROVIDER_NAME,
                    method=method,
                    endpoint=endpoint,
                    error=self._scrub(str(exc)),
                )
                raise UpstreamError(
                    message=f"Could not reach {self._display_name()}: {self._scrub(str(exc)) or type(exc).__name__}",
                    code=f"{self._CODE_PREFIX}_NETWORK",
                    provider_name=self._PROVIDER_NAME,
                ) from exc

        if response.is_error:
            error = self._normalize_error(response)
            self._logger.warning(
                "upstream_http_error",
                provider=self._PROVIDER_NAME,
                method=method,
                endpoint=endpoint,
                status=response.status_code,
                code=error.code,
            )
            raise error

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _normalize_error(self, response: httpx.Response) -> UpstreamError:
        status = response.status_code
        message = self._ERROR_MESSAGES.get(status) or self._extract_detail(response) or f"HTTP {status}"
        message = self._scrub(message)
        code = f"{self._CODE_PREFIX}_{status}"
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            if retry_after:
                message = f"{message} (retry after {retry_after}s)"
            return RateLimitError(
                message=message, status=status, code=code, provider_name=self._PROVIDER_NAME
            )
        return UpstreamError(message=message, status=status, code=code, provider_name=self._PROVIDER_NAME)

    @staticmethod
    def _extract_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] if response.text else ""
        if not isinstance(body, dict):
            return ""
        error = body.get("error")
        if isinstance(error, dict):
            return str(error.get("message") or "")
        return str(body.get("message") or error or "")

    def _scrub(self, text: str) -> str:
        for secret in self._secrets():
            if secret:
                text = text.replace(secret, _REDACTED)
        return text

    def _display_name(self) -> str:
        return self._PROVIDER_NAME

    # -- IUpstreamClient -------------------------------------------------------

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", endpoint, params=params)

    async def post(
        self, endpoint: str, data: Any = None, params: dict[str, Any] | None = None
    ) -> Any:
        return await self._request("POST", endpoint, params=params, data=data)

    async def put(
        self, endpoint: str, data: Any = None, params: dict[str, Any] | None = None
    ) -> Any:
        return await self._request("PUT", endpoint, params=params, data=data)

    async def delete(
        self, endpoint: str, data: Any = None, params: dict[str, Any] | None = None
    ) -> Any:
        return await self._request("DELETE", endpoint, params=params, data=data)

    def get_base_url(self) -> str:
        return self._base_url

    def get_provider_name(self) -> str:
        return self._PROVIDER_NAME

    async def aclose(self) -> None:
        await self._http.aclose()
