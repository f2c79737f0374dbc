"""Wiring resolver.

Collects the directives a class declares (through decorators or an explicit
``__directives__`` list) into a :class:`WiringTable` once per class, and
applies that table to every instance around its constructor:

1. before the constructor body, listeners are attached (or queued when
   their event path is dotted) and ``init`` accessor events are raised;
2. after the outermost constructor returns, pending queues are drained.
"""

from __future__ import annotations

import functools
import inspect
import types
from typing import Any, Callable, Iterable, Iterator

import structlog

from eventwire.application.wiring.accessors import EmittingAccessor, accessor
from eventwire.application.wiring.emission import emitting_method
from eventwire.application.wiring.pending import listen_on_path, resolve_pending
from eventwire.core.exceptions import DecoratorMisuseError
from eventwire.domain.entities import (
    AccessorDirective,
    EmitDirective,
    ListenDirective,
    WiringDirective,
)
from eventwire.domain.enums import IdentityKind
from eventwire.domain.rules import is_nested_path
from eventwire.infrastructure.events.capability import attach_listener
from eventwire.infrastructure.events.registry import state_of

logger = structlog.get_logger(__name__)

DIRECTIVES_ATTR = "__eventwire_directives__"
WIRED_ATTR = "__eventwire_wired__"


class WiringTable:
    """Immutable list of the directives one class applies at construction."""

    def __init__(self, directives: Iterable[WiringDirective] = ()) -> None:
        self._directives: tuple[WiringDirective, ...] = tuple(directives)

    @property
    def listeners(self) -> tuple[ListenDirective, ...]:
        return tuple(d for d in self._directives if isinstance(d, ListenDirective))

    @property
    def emitters(self) -> tuple[EmitDirective, ...]:
        return tuple(d for d in self._directives if isinstance(d, EmitDirective))

    @property
    def accessors(self) -> tuple[AccessorDirective, ...]:
        return tuple(d for d in self._directives if isinstance(d, AccessorDirective))

    def for_member(self, member: str) -> tuple[WiringDirective, ...]:
        return tuple(d for d in self._directives if d.member == member)

    def __iter__(self) -> Iterator[WiringDirective]:
        return iter(self._directives)

    def __len__(self) -> int:
        return len(self._directives)

    def __repr__(self) -> str:
        return f"WiringTable({len(self)} directives)"


# ---------------------------------------------------------------------------
# Directive collection
# ---------------------------------------------------------------------------


def add_directive(fn: Callable[..., Any], directive: WiringDirective) -> None:
    """Attach *directive* to the function object *fn*."""
    setattr(fn, DIRECTIVES_ATTR, (*getattr(fn, DIRECTIVES_ATTR, ()), directive))


def directives_of(member: Any) -> tuple[WiringDirective, ...]:
    if isinstance(member, EmittingAccessor):
        return (member.directive(),)
    return tuple(getattr(member, DIRECTIVES_ATTR, ()))


def collect_directives(cls: type) -> WiringTable:
    """Build the table for *cls* from its whole MRO.

    A member's directives come from the most-derived class defining that
    name.  Base-class directives come first.
    """
    owners: dict[str, type] = {}
    for klass in cls.__mro__:
        for name in vars(klass):
            owners.setdefault(name, klass)

    collected: list[WiringDirective] = []
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if owners[name] is not klass:
                continue
            for directive in directives_of(member):
                if directive.member != name:
                    directive = directive.model_copy(update={"member": name})
                collected.append(directive)
        for directive in vars(klass).get("__directives__", ()):
            if isinstance(directive, ListenDirective):
                collected.append(directive)
    return WiringTable(collected)


def _apply_explicit_directives(cls: type) -> None:
    for directive in cls.__dict__.get("__directives__", ()):
        if isinstance(directive, EmitDirective):
            _wrap_explicit_method(cls, directive)
        elif isinstance(directive, AccessorDirective):
            _wrap_explicit_accessor(cls, directive)


def _wrap_explicit_method(cls: type, directive: EmitDirective) -> None:
    method = cls.__dict__.get(directive.member)
    if not callable(method):
        raise DecoratorMisuseError(
            f"'{cls.__name__}.{directive.member}' is not a method defined on the class.",
            details={"object": cls},
        )
    wrapper = emitting_method(method, directive.identity, directive.plan)
    add_directive(wrapper, directive)
    setattr(cls, directive.member, wrapper)


def _wrap_explicit_accessor(cls: type, directive: AccessorDirective) -> None:
    member = cls.__dict__.get(directive.member)
    if isinstance(member, (property, accessor)):
        inner = member
    elif inspect.isfunction(member):
        inner = property(member)
    else:
        raise DecoratorMisuseError(
            f"'{cls.__name__}.{directive.member}' is not an accessor defined on the class.",
            details={"object": cls},
        )
    identity = directive.identity
    source = directive.custom_name if identity.kind is IdentityKind.NAME else identity.value
    wrapper = EmittingAccessor(inner, source, directive.access)
    setattr(cls, directive.member, wrapper)
    wrapper.__set_name__(cls, directive.member)


def _check_listeners(cls: type, table: WiringTable) -> None:
    for directive in table.listeners:
        if not callable(getattr(cls, directive.member, None)):
            raise DecoratorMisuseError(
                f"'{cls.__name__}.{directive.member}' is not a method; cannot listen to "
                f"'{directive.event}'.",
                details={"object": cls},
            )


def install_wiring(cls: type) -> WiringTable:
    """Collect *cls*'s directives and hook its constructor."""
    _apply_explicit_directives(cls)
    table = collect_directives(cls)
    _check_listeners(cls, table)
    cls.__wiring__ = table

    init = cls.__dict__.get("__init__")
    if init is None:
        init = cls.__init__
    if not getattr(init, WIRED_ATTR, False):
        cls.__init__ = wire_init(init)

    return table


# ---------------------------------------------------------------------------
# Construction hooks
# ---------------------------------------------------------------------------


def wire_init(init: Callable[..., None]) -> Callable[..., None]:
    """Wrap a constructor so the outermost call applies the class wiring."""

    @functools.wraps(init)
    def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
        state = state_of(self)
        if state is None:
            init(self, *args, **kwargs)
            return

        outermost = state.constructing == 0
        if outermost:
            prepare_instance(self)
        state.constructing += 1
        try:
            init(self, *args, **kwargs)
        finally:
            state.constructing -= 1
        if outermost:
            finalize_instance(self)

    setattr(__init__, WIRED_ATTR, True)
    return __init__


def prepare_instance(obj: Any) -> None:
    """Attach or queue listeners, then raise ``init`` accessor events."""
    table: WiringTable = type(obj).__wiring__
    for directive in table.listeners:
        listener = getattr(obj, directive.member)
        if is_nested_path(directive.event):
            listen_on_path(obj, directive.event, listener, directive.once)
        else:
            attach_listener(obj, directive.event, listener, directive.once)

    for directive in table.accessors:
        if directive.has_init:
            getattr(type(obj), directive.member).initialize(obj)


def finalize_instance(obj: Any) -> int:
    """Drain the pending queue once the constructor body has run."""
    return resolve_pending(obj)


def after_assignment(obj: Any, name: str) -> None:
    """Drain pending listeners waiting on attribute *name* of *obj*."""
    state = state_of(obj, create=False)
    if state is None or state.constructing or not state.pending:
        return
    if any(entry.target == name for entry in state.pending):
        logger.debug("wiring.late_assignment", owner=type(obj).__name__, attribute=name)
        resolve_pending(obj, name)


class Wired:
    """Mixin that wires every subclass at definition and every instance at construction."""

    __wiring__: WiringTable = WiringTable()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        install_wiring(cls)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        after_assignment(self, name)


def mix_into(base: type, mixin: type) -> type:
    """Return a subclass of *base* that also inherits *mixin*.

    The new class keeps *base*'s name, module and docstring.
    """
    if issubclass(base, mixin):
        return base

    def body(ns: dict[str, Any]) -> None:
        ns["__module__"] = base.__module__
        ns["__qualname__"] = base.__qualname__
        ns["__doc__"] = base.__doc__

    return types.new_class(base.__name__, (base, mixin), exec_body=body)
