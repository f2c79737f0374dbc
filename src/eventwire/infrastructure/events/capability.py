"""Identity and capability gate.

Answers "is this an emitter?", "can it take listeners?" and "can it raise
events?" for engine-built emitters and for foreign objects exposing the
conventional surfaces declared in :mod:`eventwire.domain.ports`.
"""

from __future__ import annotations

import weakref
from typing import Any, Callable, Hashable

from eventwire.core.exceptions import (
    NotDefinedError,
    NotEmittableError,
    NotRegistrableError,
    describe,
)
from eventwire.domain.events import Event
from eventwire.domain.ports import (
    RAISE_SURFACES,
    REGISTRATION_SURFACES,
    Emittable,
    EventDispatcher,
    EventListenerTarget,
    ListenerRegistrable,
    Registrable,
)

# Objects constructed through the engine, keyed by id() so that emitters
# need not be hashable.  Weak, so membership never keeps an emitter alive.
_EMITTERS: weakref.WeakValueDictionary = weakref.WeakValueDictionary()


def register_emitter(obj: Any) -> None:
    """Record *obj* as an engine-built emitter."""
    _EMITTERS[id(obj)] = obj


def is_registered(obj: Any) -> bool:
    return _EMITTERS.get(id(obj)) is obj


def can_register(obj: Any) -> bool:
    """True if listeners can be attached to *obj*."""
    if obj is None:
        return False
    return is_registered(obj) or any(isinstance(obj, p) for p in REGISTRATION_SURFACES)


def can_emit(obj: Any) -> bool:
    """True if *obj* can raise events."""
    if obj is None:
        return False
    return is_registered(obj) or any(isinstance(obj, p) for p in RAISE_SURFACES)


def is_emitter(obj: Any) -> bool:
    """True if *obj* was built by the engine or exposes both surfaces."""
    if obj is None:
        return False
    return is_registered(obj) or (can_register(obj) and can_emit(obj))


# ---------------------------------------------------------------------------
# Assertions
# ---------------------------------------------------------------------------


def assert_can_register(obj: Any, name: str | None = None) -> bool:
    """Return ``True`` or raise if *obj* cannot take listeners.

    Raises:
        NotDefinedError: If *obj* is ``None``.
        NotRegistrableError: If *obj* has no registration surface.
    """
    label = describe(obj, name)
    if obj is None:
        raise NotDefinedError(f"Object '{label}' is not defined.", details={"object": obj})
    if can_register(obj):
        return True
    raise NotRegistrableError(
        f"Object '{label}' is not an EventEmitter.",
        details={"object": obj},
    )


def assert_can_emit(obj: Any, name: str | None = None) -> bool:
    """Return ``True`` or raise if *obj* cannot raise events.

    Raises:
        NotDefinedError: If *obj* is ``None``.
        NotEmittableError: If *obj* has no raise surface.
    """
    label = describe(obj, name)
    if obj is None:
        raise NotDefinedError(f"Object '{label}' is not defined.", details={"object": obj})
    if can_emit(obj):
        return True
    raise NotEmittableError(
        f"Object '{label}' does not emit events.",
        details={"object": obj},
    )


def assert_is_emitter(obj: Any, name: str | None = None) -> bool:
    """Both :func:`assert_can_register` and :func:`assert_can_emit`."""
    assert_can_register(obj, name)
    assert_can_emit(obj, name)
    return True


# ---------------------------------------------------------------------------
# Surface adapters
# ---------------------------------------------------------------------------


def attach_listener(
    target: Any,
    event: Hashable,
    listener: Callable[..., Any],
    once: bool = False,
) -> Any:
    """Register *listener* on *target* through whichever surface it exposes."""
    if target is None:
        raise NotDefinedError("Emitter is not defined.", details={"object": target})

    if once:
        if callable(getattr(target, "once", None)):
            return target.once(event, listener)
        if isinstance(target, EventListenerTarget):
            return target.add_event_listener(event, listener, once=True)
        raise NotRegistrableError(
            f"Object '{describe(target)}' cannot register one-time listeners.",
            details={"object": target},
        )

    if isinstance(target, Registrable):
        return target.on(event, listener)
    if isinstance(target, ListenerRegistrable):
        return target.add_listener(event, listener)
    if isinstance(target, EventListenerTarget):
        return target.add_event_listener(event, listener)
    raise NotRegistrableError(
        f"Object '{describe(target)}' does not have a listener registration method.",
        details={"object": target},
    )


def raise_event(target: Any, event: Hashable, *args: Any) -> Any:
    """Raise a keyed event on *target*; it must expose ``emit``."""
    if isinstance(target, Emittable):
        return target.emit(event, *args)
    raise NotEmittableError(
        f"Object '{describe(target)}' does not have an 'emit()' method.",
        details={"object": target},
    )


def dispatch_event(
    target: Any,
    event: Event,
    fallback_key: Hashable,
    fallback_args: tuple = (),
) -> Any:
    """Dispatch an event object, falling back to ``emit(fallback_key, *fallback_args)``."""
    if isinstance(target, EventDispatcher):
        return target.dispatch_event(event)
    if isinstance(target, Emittable):
        return target.emit(fallback_key, *fallback_args)
    raise NotEmittableError(
        f"Object '{describe(target)}' does not have an 'emit()' or 'dispatch_event()' method.",
        details={"object": target},
    )
