"""Accessor descriptors.

:class:`accessor` is a plain per-instance attribute with a default, the
only accessor kind that has an ``init`` step.  :class:`EmittingAccessor` is
what ``@emits`` returns: it wraps a ``property`` or an :class:`accessor` and
raises ``get:``/``set:``/``init:`` events around it.
"""

from __future__ import annotations

from typing import Any, Callable

from eventwire.application.wiring.emission import emit_for_access
from eventwire.domain.entities import AccessorDirective
from eventwire.domain.enums import AccessMode
from eventwire.domain.events import EventIdentity, identify

_MISSING = object()


class accessor:
    """Per-instance attribute with a default value.

    >>> class Point(EventEmitter):
    ...     x = accessor(0)
    """

    def __init__(self, default: Any = _MISSING, *, default_factory: Callable[[], Any] | None = None) -> None:
        if default is not _MISSING and default_factory is not None:
            raise ValueError("Cannot specify both default and default_factory")
        self.default = None if default is _MISSING else default
        self.default_factory = default_factory
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def initial(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        try:
            return obj.__dict__[self.name]
        except KeyError:
            value = obj.__dict__[self.name] = self.initial()
            return value

    def __set__(self, obj: Any, value: Any) -> None:
        obj.__dict__[self.name] = value

    def __repr__(self) -> str:
        return f"accessor(name={self.name!r}, default={self.default!r})"


class EmittingAccessor:
    """Descriptor that raises events when the wrapped accessor is used."""

    def __init__(self, inner: property | accessor, identity: Any = None, access: AccessMode = AccessMode.BOTH) -> None:
        self.inner = inner
        self.access = access
        self.source = identity
        self.name: str | None = None
        self.identity: EventIdentity | None = None
        self.__doc__ = getattr(inner, "__doc__", None)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        set_name = getattr(self.inner, "__set_name__", None)
        if set_name is not None:
            set_name(owner, name)
        self.identity = identify(self.source, name)

    @property
    def custom_name(self) -> str | None:
        return self.source if isinstance(self.source, str) and self.source else None

    @property
    def operations(self) -> frozenset[str]:
        ops = set(self.access.operations)
        if not isinstance(self.inner, accessor):
            ops.discard("init")
            if self.inner.fset is None:
                ops.discard("set")
        return frozenset(ops)

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        value = self.inner.__get__(obj, objtype)
        if "get" in self.operations:
            emit_for_access(obj, self.identity, self.name, "get", value, self.custom_name)
        return value

    def __set__(self, obj: Any, value: Any) -> None:
        if "set" in self.operations:
            emit_for_access(obj, self.identity, self.name, "set", value, self.custom_name)
        self.inner.__set__(obj, value)

    def setter(self, fset: Callable[[Any, Any], None]) -> EmittingAccessor:
        """Same as ``property.setter``, keeping the emitting wrapper."""
        if isinstance(self.inner, accessor):
            raise TypeError("accessor() members have no custom setter")
        return type(self)(self.inner.setter(fset), self.source, self.access)

    def initialize(self, obj: Any) -> Any:
        """Store the initial value on *obj* and raise ``init:<name>`` with it."""
        value = self.inner.initial()
        emit_for_access(obj, self.identity, self.name, "init", value, self.custom_name)
        obj.__dict__[self.name] = value
        return value

    def directive(self) -> AccessorDirective:
        ops = self.operations
        return AccessorDirective(
            member=self.name,
            identity=self.identity,
            access=self.access,
            custom_name=self.custom_name,
            initial=self.inner.default if isinstance(self.inner, accessor) else None,
            has_init="init" in ops,
        )

    def __repr__(self) -> str:
        return f"EmittingAccessor(name={self.name!r}, access={self.access.value!r})"
