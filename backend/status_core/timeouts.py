"""Deadline wrapper for backing-store calls.

with_timeout races an awaitable against a timer. When the timer wins, the
caller gets OperationTimeoutError and the operation is abandoned, not
cancelled: it keeps running and its eventual result or error is consumed
and logged here. Store calls run in their own session, so a late completion
cannot touch state owned by the request that gave up on it.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from status_core.errors import OperationTimeoutError

LOG = logging.getLogger(__name__)

T = TypeVar("T")


def _consume_abandoned(operation_name: str, task: asyncio.Future) -> None:
    """Done-callback for operations whose caller already timed out."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        LOG.warning("Abandoned %s failed after its deadline: %r", operation_name, exc)
    else:
        LOG.debug("Abandoned %s completed after its deadline; result dropped", operation_name)


async def with_timeout(
    operation: Awaitable[T],
    timeout_ms: int,
    operation_name: str = "operation",
    *,
    retry_after_s: int = 2,
) -> T:
    """Await operation for at most timeout_ms. Raises OperationTimeoutError when the deadline passes first."""
    task = asyncio.ensure_future(operation)
    try:
        done, _ = await asyncio.wait({task}, timeout=max(0, timeout_ms) / 1000.0)
    except asyncio.CancelledError:
        task.add_done_callback(lambda t: _consume_abandoned(operation_name, t))
        raise
    if task in done:
        return task.result()
    LOG.warning("%s exceeded %dms deadline; abandoning", operation_name, timeout_ms)
    task.add_done_callback(lambda t: _consume_abandoned(operation_name, t))
    raise OperationTimeoutError(operation_name, timeout_ms, retry_after_s)
