"""Bridge from a paginator's error stream to a caller-supplied handler."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

from .streams import StreamPair

logger = logging.getLogger("canvas_api_client")

ErrorHandler = Callable[[Exception, asyncio.Event], Awaitable[None] | None]


def fatal_error_handler(error: Exception, cancel: asyncio.Event) -> None:
    """Default policy: the error is re-raised from the item iteration."""

    raise error


def cancel_on_error(error: Exception, cancel: asyncio.Event) -> None:
    logger.warning("stream error; cancelling error=%s", error)
    cancel.set()


def continue_on_error(error: Exception, cancel: asyncio.Event) -> None:
    logger.warning("stream error; continuing error=%s", error)


def bridge_errors(pair: StreamPair, handler: ErrorHandler) -> asyncio.Task[None]:
    """Run ``handler`` for the terminal error of ``pair``, if any.

    If the handler sets the cancel event the item stream is cancelled and
    iteration ends without further items. If it raises, the item stream fails
    with that exception. Otherwise the stream is left for the caller to drain.
    """

    task = asyncio.create_task(_run_bridge(pair, handler))
    pair.items.bind_guard(task)
    return task


async def _run_bridge(pair: StreamPair, handler: ErrorHandler) -> None:
    error = await pair.errors.get()
    if error is None:
        return
    cancel = asyncio.Event()
    try:
        outcome = handler(error, cancel)
        if inspect.isawaitable(outcome):
            await outcome
    except Exception as exc:
        logger.error("stream error is fatal error=%s", exc)
        pair.items.fail(exc)
        return
    if cancel.is_set():
        logger.debug("stream cancelled by error handler")
        pair.cancel()


__all__ = [
    "ErrorHandler",
    "fatal_error_handler",
    "cancel_on_error",
    "continue_on_error",
    "bridge_errors",
]
