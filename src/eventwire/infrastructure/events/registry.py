"""Listener registry.

Per-emitter storage of subscription lists keyed by event.  The registry only
stores and reads; the emitter surface raises the ``newListener`` and
``removeListener`` meta events around its mutations.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable

import structlog

from eventwire.config.settings import get_settings
from eventwire.core.exceptions import MaxListenersExceededWarning, describe

logger = structlog.get_logger(__name__)

STATE_ATTR = "_eventwire_state"


class LimitedListener:
    """Subscriber wrapper that removes itself after ``limit`` calls.

    ``listener`` is the original callable, so removal and listing can work in
    terms of what the caller registered.
    """

    __slots__ = ("emitter", "event", "listener", "limit", "calls")

    def __init__(self, emitter: Any, event: Hashable, listener: Callable[..., Any], limit: int) -> None:
        self.emitter = emitter
        self.event = event
        self.listener = listener
        self.limit = limit
        self.calls = 0

    @property
    def exhausted(self) -> bool:
        return self.calls >= self.limit

    def __call__(self, *args: Any) -> Any:
        # A stale snapshot may still hold a wrapper that already ran out.
        if self.exhausted:
            return None
        self.calls += 1
        if self.exhausted:
            self.emitter.remove_listener(self.event, self)
        return self.listener(*args)

    def __repr__(self) -> str:
        return f"LimitedListener({self.listener!r}, limit={self.limit}, calls={self.calls})"


def original_of(entry: Callable[..., Any]) -> Callable[..., Any]:
    """The callable a caller registered, unwrapping limited-use wrappers."""
    if isinstance(entry, LimitedListener):
        return entry.listener
    return entry


def matches(entry: Callable[..., Any], listener: Callable[..., Any]) -> bool:
    """True if *entry* is *listener* or wraps it."""
    return entry == listener or (isinstance(entry, LimitedListener) and entry.listener == listener)


@dataclass
class SubscriptionList:
    """Ordered subscribers for one event key."""

    entries: list[Callable[..., Any]] = field(default_factory=list)
    warned: bool = False

    def __len__(self) -> int:
        return len(self.entries)


class ListenerRegistry:
    """Event key to :class:`SubscriptionList` mapping.

    Lists exist only while non-empty; insertion order is delivery order.
    """

    def __init__(self) -> None:
        self._lists: dict[Hashable, SubscriptionList] = {}

    def add(self, event: Hashable, entry: Callable[..., Any], prepend: bool = False) -> SubscriptionList:
        subs = self._lists.get(event)
        if subs is None:
            subs = self._lists[event] = SubscriptionList()
        if prepend:
            subs.entries.insert(0, entry)
        else:
            subs.entries.append(entry)
        return subs

    def remove(self, event: Hashable, listener: Callable[..., Any]) -> Callable[..., Any] | None:
        """Remove the first entry matching *listener*; return it, or ``None``."""
        subs = self._lists.get(event)
        if subs is None:
            return None
        for index, entry in enumerate(subs.entries):
            if matches(entry, listener):
                del subs.entries[index]
                if not subs.entries:
                    del self._lists[event]
                return entry
        return None

    def pop(self, event: Hashable) -> list[Callable[..., Any]]:
        """Drop the whole list for *event* and return its entries."""
        subs = self._lists.pop(event, None)
        return subs.entries if subs is not None else []

    def get(self, event: Hashable) -> SubscriptionList | None:
        return self._lists.get(event)

    def has(self, event: Hashable) -> bool:
        return event in self._lists

    def snapshot(self, event: Hashable) -> tuple[Callable[..., Any], ...] | None:
        """Immutable copy of the list for *event*, or ``None`` if absent."""
        subs = self._lists.get(event)
        if subs is None:
            return None
        return tuple(subs.entries)

    def count(self, event: Hashable, listener: Callable[..., Any] | None = None) -> int:
        subs = self._lists.get(event)
        if subs is None:
            return 0
        if listener is None:
            return len(subs)
        return sum(1 for entry in subs.entries if matches(entry, listener))

    def names(self) -> list[Hashable]:
        return list(self._lists)

    def raw(self, event: Hashable) -> list[Callable[..., Any]]:
        subs = self._lists.get(event)
        return list(subs.entries) if subs is not None else []

    def originals(self, event: Hashable) -> list[Callable[..., Any]]:
        return [original_of(entry) for entry in self.raw(event)]

    def check_ceiling(self, event: Hashable, ceiling: int, owner: Any = None) -> bool:
        """Warn once per list when it grows past a positive *ceiling*.

        Returns ``True`` if a warning was issued by this call.  Delivery is
        never affected.
        """
        subs = self._lists.get(event)
        if subs is None or ceiling <= 0 or subs.warned or len(subs) <= ceiling:
            return False

        subs.warned = True
        message = (
            f"Possible EventEmitter memory leak detected. {len(subs)} {event!s} listeners "
            f"added to [{describe(owner)}]. MaxListeners is {ceiling}. "
            "Use emitter.set_max_listeners() to increase limit"
        )
        logger.warning(
            "registry.max_listeners_exceeded",
            event_key=str(event),
            count=len(subs),
            ceiling=ceiling,
            emitter=describe(owner),
        )
        warnings.warn(
            MaxListenersExceededWarning(message, emitter=owner, event=event, count=len(subs)),
            stacklevel=3,
        )
        return True

    def __len__(self) -> int:
        return len(self._lists)

    def __contains__(self, event: Hashable) -> bool:
        return event in self._lists


# ---------------------------------------------------------------------------
# Emitter state
# ---------------------------------------------------------------------------


@dataclass
class EmitterState:
    """Everything the engine keeps per emitter instance."""

    registry: ListenerRegistry = field(default_factory=ListenerRegistry)
    max_listeners: int | None = None
    capture_rejections: bool = field(default_factory=lambda: get_settings().capture_rejections)
    pending: list[Any] = field(default_factory=list)
    constructing: int = 0
    bound: bool = False


def state_of(obj: Any, create: bool = True) -> EmitterState | None:
    """Return the :class:`EmitterState` stored on *obj*, creating it if asked.

    Objects without an instance ``__dict__`` cannot carry state.
    """
    namespace = getattr(obj, "__dict__", None)
    if not isinstance(namespace, dict):
        return None
    state = namespace.get(STATE_ATTR)
    if state is None and create:
        state = namespace[STATE_ATTR] = EmitterState()
    return state
