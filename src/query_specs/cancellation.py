"""
Cooperative cancellation.

Callers pass an :class:`asyncio.Event` as ``cancellation``; setting it
abandons the in-flight query and raises :class:`EvaluationCancelled`.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, TypeVar

from .exceptions import EvaluationCancelled

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

R = TypeVar("R")


def raise_if_cancelled(cancellation: asyncio.Event | None) -> None:
    if cancellation is not None and cancellation.is_set():
        raise EvaluationCancelled("Evaluation cancelled before it started")


async def run_cancellable(
    awaitable: Awaitable[R],
    cancellation: asyncio.Event | None,
) -> R:
    """
    Await *awaitable* unless *cancellation* is set first.

    When the signal wins, the query task is cancelled and awaited so no
    work is left running, then :class:`EvaluationCancelled` is raised.
    """
    if cancellation is None:
        return await awaitable
    if cancellation.is_set():
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise EvaluationCancelled("Evaluation cancelled before it started")

    query = asyncio.ensure_future(awaitable)
    signal = asyncio.ensure_future(cancellation.wait())
    try:
        await asyncio.wait({query, signal}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        query.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await query
        raise
    finally:
        signal.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await signal

    if query.done():
        return query.result()

    logger.debug("Cancellation requested; abandoning in-flight query")
    query.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await query
    raise EvaluationCancelled("Evaluation cancelled while the query was running")
