"""Event identities for eventwire.

An event is identified either by a key (a string name or an
:class:`EventToken`), by a pre-built :class:`Event` instance, or by an
:class:`Event` subclass from which a fresh instance is built per emission.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Hashable

from eventwire.domain.enums import IdentityKind


class EventToken:
    """A unique event key, equal only to itself."""

    __slots__ = ("description",)

    def __init__(self, description: str) -> None:
        self.description = description

    def __repr__(self) -> str:
        return f"EventToken({self.description!r})"


NEW_LISTENER = "newListener"
REMOVE_LISTENER = "removeListener"
ERROR = "error"
ERROR_MONITOR = EventToken("events.errorMonitor")


# ---------------------------------------------------------------------------
# Event objects
# ---------------------------------------------------------------------------


@dataclass
class Event:
    """A dispatchable event object.

    ``target`` is filled in by the object that dispatches it.
    """

    type: str
    target: Any = field(default=None, init=False, repr=False, compare=False)


@dataclass
class CustomEvent(Event):
    """An :class:`Event` that carries arbitrary ``detail``."""

    detail: Any = None


# ---------------------------------------------------------------------------
# Identity (tagged union)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EventIdentity:
    """Resolved identity of the event an emit directive raises.

    ``name`` is the key used when the target only exposes ``emit``: the key
    itself for NAME, ``event.type`` for INSTANCE, and the member name for
    CLASS.  ``carries_payload`` is true for NAME and for CustomEvent classes.
    """

    kind: IdentityKind
    value: Any
    name: Hashable
    carries_payload: bool

    def build(self, detail: Any = None, *, with_detail: bool = False) -> Event:
        """Build the event object to dispatch for INSTANCE and CLASS identities."""
        if self.kind is IdentityKind.INSTANCE:
            return self.value
        if self.kind is IdentityKind.CLASS:
            if with_detail and self.carries_payload:
                return self.value(self.name, detail)
            return self.value(self.name)
        raise TypeError(f"Identity of kind {self.kind.value} has no event object")


def is_event_class(value: Any) -> bool:
    return inspect.isclass(value) and issubclass(value, Event)


def identify(value: Any, member: str) -> EventIdentity:
    """Classify *value* as an event identity, defaulting to *member* as the name."""
    if value is None or value == "":
        return EventIdentity(IdentityKind.NAME, member, member, True)
    if isinstance(value, Event):
        return EventIdentity(
            IdentityKind.INSTANCE, value, value.type, False,
        )
    if is_event_class(value):
        return EventIdentity(
            IdentityKind.CLASS, value, member, issubclass(value, CustomEvent),
        )
    return EventIdentity(IdentityKind.NAME, value, value, True)
