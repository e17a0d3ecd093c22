"""Tool-boundary error handling and call logging.

Every MCP tool invocation passes through :func:`invoke_tool`, the equivalent
of a request-logging plus error-handling middleware pair:

    call_tool -> invoke_tool -> (capability check, input validation) -> handler

Nothing raised by a handler escapes this boundary.  Application errors become
a structured failure payload carrying the error's own message; anything else
is logged with its traceback and reported with a generic message so internal
details stay in the server log.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from your_spotify_mcp.services.playback_service import CAPABILITY_MESSAGE
from your_spotify_mcp.utils.errors import (
    CapabilityUnavailableError,
    InputValidationError,
    YourSpotifyMCPError,
)
from your_spotify_mcp.utils.logging import get_logger

if TYPE_CHECKING:
    from your_spotify_mcp.api.tools import ToolContext, ToolSpec

_logger: structlog.BoundLogger = get_logger(__name__)

_GENERIC_FAILURE = "Something went wrong while running this tool. Check the server log for details."


def input_error_from(exc: ValidationError) -> InputValidationError:
    """Convert a pydantic ``ValidationError`` into an error naming the first bad field."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = first.get("loc") or ()
    field = str(location[0]) if location else None
    detail = first.get("msg", "invalid value")
    message = f"{field}: {detail}" if field else detail
    return InputValidationError(message=message, field=field)


def failure_payload(exc: YourSpotifyMCPError) -> dict[str, Any]:
    return {"success": False, "error": exc.to_dict(), "message": exc.message}


def _unexpected_failure() -> dict[str, Any]:
    return {
        "success": False,
        "error": {"type": "internal_error", "message": _GENERIC_FAILURE},
        "message": _GENERIC_FAILURE,
    }


async def invoke_tool(
    spec: ToolSpec | None,
    name: str,
    arguments: dict[str, Any] | None,
    context: ToolContext,
) -> dict[str, Any]:
    """Run one tool call and always return a JSON-serializable payload."""
    start = time.perf_counter()
    try:
        if spec is None:
            raise InputValidationError(message=f"Unknown tool: {name}", field="name")
        if spec.requires_streaming and not context.streaming_available:
            raise CapabilityUnavailableError(CAPABILITY_MESSAGE, capability="spotify_playback")
        try:
            params = spec.input_model.model_validate(arguments or {})
        except ValidationError as exc:
            raise input_error_from(exc) from exc

        payload = await spec.handler(context, params)
    except YourSpotifyMCPError as exc:
        _logger.warning(
            "tool_call_failed",
            tool=name,
            error_type=exc.kind,
            message=exc.message,
            provider=exc.provider_name,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return failure_payload(exc)
    except Exception:
        _logger.error(
            "tool_call_crashed",
            tool=name,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            exc_info=True,
        )
        return _unexpected_failure()

    _logger.info(
        "tool_call_completed",
        tool=name,
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
    )
    return payload
