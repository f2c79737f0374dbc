"""Wiring decorators.

``@on``/``@once`` subscribe a method at construction, ``@emit`` makes a
method raise an event when called, ``@emits`` makes an accessor raise
``get:``/``set:``/``init:`` events, and ``@emitter`` turns any class into an
emitter that honours all of them.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Hashable

from eventwire.application.wiring.accessors import EmittingAccessor, accessor
from eventwire.application.wiring.emission import emitting_method
from eventwire.application.wiring.resolver import Wired, add_directive, mix_into
from eventwire.core.exceptions import DecoratorMisuseError, describe
from eventwire.domain.entities import AccessorDirective, EmitDirective, EmitterOptions, ListenDirective
from eventwire.domain.enums import AccessMode, EmitMode
from eventwire.domain.events import identify
from eventwire.domain.ports import RAISE_METHODS, REGISTRATION_METHODS
from eventwire.domain.rules import coerce_access_mode, coerce_emit_mode, resolve_emission
from eventwire.infrastructure.events.emitter import EventEmitter

_NOT_METHODS = (property, staticmethod, classmethod, EmittingAccessor, accessor)


def _require_method(member: Any, what: str) -> None:
    if isinstance(member, _NOT_METHODS) or inspect.isclass(member) or not callable(member):
        raise DecoratorMisuseError(
            f"Can only apply {what} to methods, got {describe(member)}.",
            details={"object": member},
        )


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------


def _has_native_surface(cls: type) -> bool:
    def has_any(names: tuple[str, ...]) -> bool:
        return any(callable(getattr(cls, name, None)) for name in names)

    return has_any(REGISTRATION_METHODS) and has_any(RAISE_METHODS)


def emitter(cls: type | None = None, /, **options: Any) -> Any:
    """Class decorator: make *cls* an emitter whose instances are wired.

    Usable bare (``@emitter``) or with :class:`EmitterOptions` keywords
    (``@emitter(max_listeners=20)``) setting class-wide defaults.
    """
    if cls is None:
        return lambda target: emitter(target, **options)
    if not inspect.isclass(cls):
        raise DecoratorMisuseError(
            f"Decorator can only be applied to classes, got {describe(cls)}.",
            details={"object": cls},
        )

    opts = EmitterOptions.model_validate(options)

    if issubclass(cls, Wired):
        wired = cls
    elif _has_native_surface(cls):
        wired = mix_into(cls, Wired)
    else:
        wired = EventEmitter.mixin(cls)

    if opts.max_listeners is not None:
        wired.default_max_listeners = opts.max_listeners
    if opts.capture_rejections is not None:
        wired.default_capture_rejections = opts.capture_rejections
    return wired


# ---------------------------------------------------------------------------
# Listen directives
# ---------------------------------------------------------------------------


def on(event: Hashable | Callable[..., Any] = None, once: bool = False) -> Any:
    """Subscribe the decorated method to *event* on every new instance.

    *event* may be a dotted path (``"child.ready"``) naming an event on an
    attribute of the instance.  Bare ``@on`` uses the method name.
    """
    if inspect.isfunction(event):
        return on(None, once)(event)

    def decorator(method: Callable[..., Any]) -> Callable[..., Any]:
        _require_method(method, "event listeners")
        member = method.__name__
        key = member if event is None or event == "" else event
        add_directive(method, ListenDirective(member=member, event=key, once=once))
        return method

    return decorator


def once(event: Hashable | Callable[..., Any] = None) -> Any:
    """Like :func:`on`, but the listener runs at most once per instance."""
    if inspect.isfunction(event):
        return on(None, True)(event)
    return on(event, True)


# ---------------------------------------------------------------------------
# Emit directives
# ---------------------------------------------------------------------------


def emit(identity: Any = None, mode: EmitMode | str | None = None) -> Any:
    """Make the decorated method raise an event each time it is called.

    *identity* is an event name, an :class:`Event` instance or an
    :class:`Event` subclass; it defaults to the method name.  *mode* picks
    when the event is raised and with what payload.
    """
    if inspect.isfunction(identity):
        return emit()(identity)
    if isinstance(identity, EmitMode):
        identity, mode = None, identity
    emit_mode = coerce_emit_mode(mode)

    def decorator(method: Callable[..., Any]) -> Callable[..., Any]:
        _require_method(method, "event emitters")
        member = method.__name__
        resolved = identify(identity, member)
        plan = resolve_emission(resolved.kind, emit_mode, resolved.carries_payload)
        wrapper = emitting_method(method, resolved, plan)
        add_directive(wrapper, EmitDirective(member=member, identity=resolved, mode=emit_mode, plan=plan))
        return wrapper

    return decorator


def emit_directive(member: str, identity: Any = None, mode: EmitMode | str | None = None) -> EmitDirective:
    """Build an :class:`EmitDirective` for a class's ``__directives__`` list."""
    emit_mode = coerce_emit_mode(mode)
    resolved = identify(identity, member)
    plan = resolve_emission(resolved.kind, emit_mode, resolved.carries_payload)
    return EmitDirective(member=member, identity=resolved, mode=emit_mode, plan=plan)


def listen_directive(member: str, event: Hashable = None, once: bool = False) -> ListenDirective:
    """Build a :class:`ListenDirective` for a class's ``__directives__`` list."""
    return ListenDirective(member=member, event=member if event is None else event, once=once)


# ---------------------------------------------------------------------------
# Accessor directives
# ---------------------------------------------------------------------------


def emits(identity: Any = None, mode: AccessMode | str | None = None) -> Any:
    """Make an accessor raise events when read, written or initialised.

    Applies to a ``property``, a getter function or an :func:`accessor`.
    """
    if isinstance(identity, (property, accessor)) or inspect.isfunction(identity):
        return emits()(identity)
    if isinstance(identity, (AccessMode, EmitMode)):
        identity, mode = None, identity
    access = coerce_access_mode(mode)

    def decorator(member: Any) -> EmittingAccessor:
        if isinstance(member, (property, accessor)):
            inner = member
        elif inspect.isfunction(member):
            inner = property(member)
        else:
            raise DecoratorMisuseError(
                f"Can only apply emits to accessors, got {describe(member)}.",
                details={"object": member},
            )
        return EmittingAccessor(inner, identity, access)

    return decorator


def accessor_directive(
    member: str,
    identity: Any = None,
    mode: AccessMode | str | None = None,
) -> AccessorDirective:
    """Build an :class:`AccessorDirective` for a class's ``__directives__`` list.

    The named member (a ``property``, getter function or :func:`accessor`)
    is replaced by an :class:`EmittingAccessor` when the class is defined.
    """
    if isinstance(identity, (AccessMode, EmitMode)):
        identity, mode = None, identity
    custom = identity if isinstance(identity, str) and identity else None
    return AccessorDirective(
        member=member,
        identity=identify(identity, member),
        access=coerce_access_mode(mode),
        custom_name=custom,
    )
