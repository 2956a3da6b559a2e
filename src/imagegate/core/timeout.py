"""Latency bound for backend calls."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from imagegate.core.backend import BackendTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], seconds: float | None) -> T:
    """Await *awaitable*, giving up after *seconds*.

    The in-flight call is cancelled when the deadline passes, so a slow
    backend does not keep a connection busy after the caller has been
    answered.

    Args:
        awaitable: The backend call.
        seconds: Time budget.  ``None`` waits indefinitely.

    Returns:
        The awaitable's result.

    Raises:
        BackendTimeoutError: The deadline passed first.
    """
    if seconds is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        logger.warning(f"Backend call exceeded {seconds}s and was cancelled")
        raise BackendTimeoutError(f"Backend did not answer within {seconds}s") from e
