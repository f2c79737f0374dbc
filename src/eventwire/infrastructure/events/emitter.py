"""EventEmitter.

The listener-registry and raise surface every engine-built emitter exposes.
Subclasses are wired at definition time (see
:mod:`eventwire.application.wiring.resolver`), so ``@on``/``@emit``/``@emits``
members take effect on every instance without extra calls.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Hashable, Mapping

import structlog

from eventwire.application.wiring.resolver import Wired, mix_into
from eventwire.config.settings import get_settings
from eventwire.core.exceptions import InvalidListenerError, describe
from eventwire.domain.entities import EmitterOptions
from eventwire.domain.events import ERROR, ERROR_MONITOR, NEW_LISTENER, REMOVE_LISTENER
from eventwire.infrastructure.events.capability import register_emitter
from eventwire.infrastructure.events.dispatch import deliver, notify_monitors, raise_unhandled
from eventwire.infrastructure.events.registry import (
    EmitterState,
    LimitedListener,
    original_of,
    state_of,
)

logger = structlog.get_logger(__name__)

Listener = Callable[..., Any]


class EventEmitter(Wired):
    """In-process publish/subscribe emitter.

    Args:
        options: :class:`EmitterOptions` or a mapping with
            ``capture_rejections``/``captureRejections`` and
            ``max_listeners``/``maxListeners``.
        capture_rejections: Route failures of awaitable listener results to
            :attr:`rejection_handler` or ``error`` listeners.
        max_listeners: Per-instance ceiling; ``0`` means unlimited.
    """

    default_max_listeners: ClassVar[int] = get_settings().default_max_listeners
    default_capture_rejections: ClassVar[bool | None] = None

    # Called as ``rejection_handler(exc, event, *args)`` when set.
    rejection_handler: ClassVar[Callable[..., Any] | None] = None

    def __init__(
        self,
        options: EmitterOptions | Mapping[str, Any] | None = None,
        *,
        capture_rejections: bool | None = None,
        max_listeners: int | None = None,
    ) -> None:
        state = self._state
        if options is None:
            opts = EmitterOptions()
        elif isinstance(options, EmitterOptions):
            opts = options
        else:
            opts = EmitterOptions.model_validate(dict(options))

        if capture_rejections is None:
            capture_rejections = opts.capture_rejections
        if capture_rejections is not None:
            state.capture_rejections = capture_rejections
        if max_listeners is None:
            max_listeners = opts.max_listeners
        if max_listeners is not None:
            self.set_max_listeners(max_listeners)

    @property
    def _state(self) -> EmitterState:
        state = state_of(self)
        if not state.bound:
            state.bound = True
            if type(self).default_capture_rejections is not None:
                state.capture_rejections = type(self).default_capture_rejections
            register_emitter(self)
        return state

    @classmethod
    def mixin(cls, base: type) -> type:
        """Return a subclass of *base* that is also an emitter."""
        return mix_into(base, cls)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_listener(
        self,
        event: Hashable,
        listener: Listener,
        *,
        once: bool = False,
        prepend: bool = False,
        limit: int | None = None,
    ) -> EventEmitter:
        """Subscribe *listener* to *event*.

        ``once`` is shorthand for ``limit=1``; a limited listener removes
        itself before its last call.
        """
        if not callable(listener):
            raise InvalidListenerError(
                f'The "listener" argument must be callable. Received {listener!r}',
                details={"object": listener},
            )
        if once:
            limit = 1
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")

        state = self._state
        self.emit(NEW_LISTENER, event, listener, prepend)

        entry = LimitedListener(self, event, listener, limit) if limit is not None else listener
        state.registry.add(event, entry, prepend=prepend)
        state.registry.check_ceiling(event, self.get_max_listeners(), owner=self)
        return self

    def on(self, event: Hashable, listener: Listener | None = None, **kwargs: Any) -> Any:
        """Subscribe *listener*, or return a decorator doing so when it is omitted."""
        if listener is None:

            def decorator(fn: Listener) -> Listener:
                self.add_listener(event, fn, **kwargs)
                return fn

            return decorator
        return self.add_listener(event, listener, **kwargs)

    def once(self, event: Hashable, listener: Listener) -> EventEmitter:
        return self.add_listener(event, listener, once=True)

    def prepend_listener(self, event: Hashable, listener: Listener) -> EventEmitter:
        return self.add_listener(event, listener, prepend=True)

    def prepend_once_listener(self, event: Hashable, listener: Listener) -> EventEmitter:
        return self.add_listener(event, listener, once=True, prepend=True)

    def many(self, event: Hashable, times: int, listener: Listener) -> EventEmitter:
        """Subscribe *listener* for at most *times* calls."""
        return self.add_listener(event, listener, limit=times)

    def remove_listener(self, event: Hashable, listener: Listener) -> EventEmitter:
        """Remove the first subscription of *listener* to *event*, if any."""
        removed = self._state.registry.remove(event, listener)
        if removed is not None:
            self.emit(REMOVE_LISTENER, event, original_of(removed))
        return self

    def off(self, event: Hashable, listener: Listener) -> EventEmitter:
        return self.remove_listener(event, listener)

    def remove_all_listeners(self, event: Hashable | None = None) -> EventEmitter:
        """Remove every subscription, or every subscription to *event*.

        ``removeListener`` is raised once per removed entry; its own list is
        removed last so its subscribers see everything else go.
        """
        if event is not None:
            self._drain(event)
            return self

        for key in self._state.registry.names():
            if key != REMOVE_LISTENER:
                self._drain(key)
        self._drain(REMOVE_LISTENER)
        return self

    def _drain(self, event: Hashable) -> None:
        for entry in self._state.registry.pop(event):
            self.emit(REMOVE_LISTENER, event, original_of(entry))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def listener_count(self, event: Hashable, listener: Listener | None = None) -> int:
        return self._state.registry.count(event, listener)

    def event_names(self) -> list[Hashable]:
        return self._state.registry.names()

    def raw_listeners(self, event: Hashable) -> list[Listener]:
        """Subscribers for *event* including limited-use wrappers."""
        return self._state.registry.raw(event)

    def listeners(self, event: Hashable) -> list[Listener]:
        """Subscribers for *event* as originally registered."""
        return self._state.registry.originals(event)

    def set_max_listeners(self, n: int) -> EventEmitter:
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValueError(f'The value of "n" is out of range. It must be a non-negative integer. Received {n!r}')
        self._state.max_listeners = n
        return self

    def get_max_listeners(self) -> int:
        state = self._state
        if state.max_listeners is None:
            return type(self).default_max_listeners
        return state.max_listeners

    @property
    def capture_rejections(self) -> bool:
        return self._state.capture_rejections

    # ------------------------------------------------------------------
    # Raising
    # ------------------------------------------------------------------

    def emit(self, event: Hashable, *args: Any) -> bool:
        """Call every subscriber of *event* with *args*.

        Returns ``False`` when *event* has no subscribers.  Emitting
        ``"error"`` with nobody listening raises the payload.
        """
        state = self._state
        if event == ERROR:
            notify_monitors(self, *args)
            if not state.registry.has(ERROR):
                logger.debug("emitter.unhandled_error", emitter=describe(self), payload=repr(args[:1]))
                raise_unhandled(args)

        snapshot = state.registry.snapshot(event)
        if snapshot is None:
            return False

        deliver(self, event, snapshot, args, capture=state.capture_rejections)
        return True

    def raise_event(self, event: Hashable, *args: Any) -> bool:
        return self.emit(event, *args)

    # ------------------------------------------------------------------
    # camelCase aliases
    # ------------------------------------------------------------------

    addListener = add_listener
    prependListener = prepend_listener
    prependOnceListener = prepend_once_listener
    removeListener = remove_listener
    removeAllListeners = remove_all_listeners
    listenerCount = listener_count
    eventNames = event_names
    rawListeners = raw_listeners
    setMaxListeners = set_max_listeners
    getMaxListeners = get_max_listeners


__all__ = ["ERROR", "ERROR_MONITOR", "EventEmitter", "NEW_LISTENER", "REMOVE_LISTENER"]
