"""DOM-style event target.

A minimal native surface (``add_event_listener`` / ``remove_event_listener``
/ ``dispatch_event``) for objects that raise :class:`Event` instances rather
than keyed events.  Subclasses take wiring decorators like emitters do.
"""

from __future__ import annotations

from typing import Any, Callable

from eventwire.application.wiring.resolver import Wired
from eventwire.core.exceptions import InvalidListenerError
from eventwire.domain.events import Event


class EventTarget(Wired):
    """Dispatches :class:`Event` objects to listeners registered by type."""

    def __init__(self) -> None:
        self.__dict__.setdefault("_event_listeners", {})

    def _listeners_for(self, type: str) -> list[tuple[Callable[[Event], Any], bool]]:
        # Wiring may attach listeners before the constructor body runs.
        registry = self.__dict__.setdefault("_event_listeners", {})
        return registry.setdefault(type, [])

    def add_event_listener(self, type: str, listener: Callable[[Event], Any], once: bool = False) -> None:
        """Register *listener* for events of *type*; duplicates are ignored."""
        if not callable(listener):
            raise InvalidListenerError(
                f'The "listener" argument must be callable. Received {listener!r}',
                details={"object": listener},
            )
        entries = self._listeners_for(type)
        if any(existing == listener for existing, _ in entries):
            return
        entries.append((listener, once))

    def remove_event_listener(self, type: str, listener: Callable[[Event], Any]) -> None:
        entries = self.__dict__.get("_event_listeners", {}).get(type)
        if not entries:
            return
        for index, (existing, _) in enumerate(entries):
            if existing == listener:
                del entries[index]
                return

    def dispatch_event(self, event: Event) -> bool:
        """Deliver *event* to listeners of ``event.type``; sets ``event.target``.

        Returns ``True`` if any listener was called.
        """
        event.target = self
        entries = tuple(self.__dict__.get("_event_listeners", {}).get(event.type, ()))
        for listener, once in entries:
            if once:
                self.remove_event_listener(event.type, listener)
            listener(event)
        return bool(entries)
