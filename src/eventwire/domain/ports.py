"""Capability interfaces.

Each Protocol names one way an object can take part in event wiring.  The
capability gate checks these structurally, so foreign emitters interoperate
as long as they expose the conventional method names.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Registration surfaces
# ---------------------------------------------------------------------------


@runtime_checkable
class Registrable(Protocol):
    """Accepts listeners through ``on``."""

    def on(self, event: Hashable, listener: Callable[..., Any]) -> Any: ...


@runtime_checkable
class ListenerRegistrable(Protocol):
    """Accepts listeners through ``add_listener``."""

    def add_listener(self, event: Hashable, listener: Callable[..., Any]) -> Any: ...


@runtime_checkable
class EventListenerTarget(Protocol):
    """Native surface: ``add_event_listener(type, listener, once=False)``."""

    def add_event_listener(self, type: str, listener: Callable[..., Any], once: bool = False) -> Any: ...


# ---------------------------------------------------------------------------
# Raise surfaces
# ---------------------------------------------------------------------------


@runtime_checkable
class Emittable(Protocol):
    """Raises events through ``emit``."""

    def emit(self, event: Hashable, *args: Any) -> Any: ...


@runtime_checkable
class EventDispatcher(Protocol):
    """Native surface: ``dispatch_event(event)``."""

    def dispatch_event(self, event: Any) -> Any: ...


REGISTRATION_SURFACES: tuple[type, ...] = (Registrable, ListenerRegistrable, EventListenerTarget)
RAISE_SURFACES: tuple[type, ...] = (Emittable, EventDispatcher)

# Method names behind each surface, for checks against classes.
REGISTRATION_METHODS: tuple[str, ...] = ("on", "add_listener", "add_event_listener")
RAISE_METHODS: tuple[str, ...] = ("emit", "dispatch_event")
