"""Dispatch engine.

Delivers one raised event to a snapshot of its subscribers, routes subscriber
faults to ``error`` / ``ERROR_MONITOR`` listeners, and optionally captures
failures of awaitable results on the running asyncio loop.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import functools
import inspect
from typing import Any, Callable, Hashable

import structlog

from eventwire.core.exceptions import UnhandledErrorEvent
from eventwire.domain.events import ERROR, ERROR_MONITOR

logger = structlog.get_logger(__name__)


def deliver(
    emitter: Any,
    event: Hashable,
    snapshot: tuple[Callable[..., Any], ...],
    args: tuple,
    capture: bool = False,
) -> None:
    """Call every subscriber in *snapshot* with *args*, in order.

    A subscriber fault is redirected to ``error`` listeners when possible;
    otherwise it propagates and the rest of the snapshot is skipped.
    """
    for listener in snapshot:
        try:
            result = listener(*args)
        except Exception as exc:
            logger.debug("dispatch.listener_failed", event_key=str(event), error=repr(exc))
            if not redirect_fault(emitter, event, exc):
                raise
            continue

        if result is None:
            continue
        if capture:
            capture_rejection(emitter, event, args, result)
        elif inspect.iscoroutine(result):
            schedule(result, event)


def redirect_fault(emitter: Any, event: Hashable, exc: BaseException) -> bool:
    """Route a subscriber fault.

    Returns ``True`` if the fault was handed to ``error`` listeners, ``False``
    if the caller must re-raise it (after monitors have seen it).
    """
    if event != ERROR and emitter.listener_count(ERROR) > 0:
        emitter.emit(ERROR, exc)
        return True
    if event is not ERROR_MONITOR:
        notify_monitors(emitter, exc)
    return False


def notify_monitors(emitter: Any, *args: Any) -> None:
    if emitter.listener_count(ERROR_MONITOR) > 0:
        emitter.emit(ERROR_MONITOR, *args)


def raise_unhandled(args: tuple) -> None:
    """``emit("error", ...)`` with nobody listening."""
    error = args[0] if args else None
    if isinstance(error, BaseException):
        raise error
    raise UnhandledErrorEvent(f"Unhandled error. ({error!r})", details={"object": error})


# ---------------------------------------------------------------------------
# Awaitable results
# ---------------------------------------------------------------------------


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def schedule(result: Any, event: Hashable) -> asyncio.Future | None:
    """Run an awaitable result on the running loop.

    Without a running loop a coroutine is closed and dropped.
    """
    loop = _running_loop()
    if loop is None:
        logger.warning("dispatch.no_running_loop", event_key=str(event), result=repr(result))
        if inspect.iscoroutine(result):
            result.close()
        return None
    if isinstance(result, concurrent.futures.Future):
        return asyncio.wrap_future(result, loop=loop)
    return asyncio.ensure_future(result, loop=loop)


def capture_rejection(emitter: Any, event: Hashable, args: tuple, result: Any) -> None:
    """Watch an awaitable subscriber result and route its failure."""
    if not (inspect.isawaitable(result) or isinstance(result, concurrent.futures.Future)):
        return
    future = schedule(result, event)
    if future is not None:
        future.add_done_callback(functools.partial(_on_settled, emitter, event, args))


def _on_settled(emitter: Any, event: Hashable, args: tuple, future: asyncio.Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is None:
        return

    log = logger.bind(event_key=str(event))
    log.debug("dispatch.rejection_captured", error=repr(exc))

    handler = getattr(emitter, "rejection_handler", None)
    if handler is not None:
        handler(exc, event, *args)
        return

    # An async ``error`` listener that fails must not be captured again.
    state = emitter._state
    previous, state.capture_rejections = state.capture_rejections, False
    try:
        emitter.emit(ERROR, exc)
    finally:
        state.capture_rejections = previous
