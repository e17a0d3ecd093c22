"""Join-all fan-out used by operations that need several upstream facts.

Wrapped, period comparison, export and ranking issue their sub-fetches
concurrently.  Unlike the ``return_exceptions=True`` fan-out pattern, a
report built from partial data would be wrong, so :func:`gather_all` fails
the whole join on the first error and cancels the siblings still pending.
Rate limiting is not applied here; every sub-fetch still passes through its
client's shared :class:`~your_spotify_mcp.utils.rate_limit.RequestLimiter`.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable

from your_spotify_mcp.utils.logging import get_logger

_logger = get_logger(__name__)


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """Await every awaitable concurrently and return results in input order.

    Parameters
    ----------
    *aws:
        Coroutines or futures to run together.

    Returns
    -------
    list
        Results in the same order as the inputs.

    Raises
    ------
    Exception
        The first exception raised by any awaitable.  Remaining tasks are
        cancelled and drained before it propagates.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException as exc:
        pending = [t for t in tasks if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            _logger.debug("gather_all_cancelled_siblings", count=len(pending), error=str(exc))
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
