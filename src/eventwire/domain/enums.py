"""Domain enumerations for eventwire.

- EmitMode: when an ``@emit`` wrapper raises and what it carries.
- AccessMode: which accessor operations an ``@emits`` wrapper observes.
- IdentityKind: the three shapes an event identity can take.
- Timing / Payload: the two axes of a resolved emission plan.
- DirectiveKind: the kinds of wiring directive a class can carry.
"""

from __future__ import annotations

from enum import Enum


class EmitMode(str, Enum):
    """Emission modes accepted by ``@emit``."""

    ARGS = "args"
    BEFORE = "before"
    AFTER = "after"
    RESULT = "result"
    ALL = "all"
    NONE = "none"
    CONDITIONAL = "conditional"


class AccessMode(str, Enum):
    """Accessor operations observed by ``@emits``.

    ``BOTH`` covers get and set; ``ALL`` adds init.
    """

    GET = "get"
    SET = "set"
    INIT = "init"
    BOTH = "both"
    ALL = "all"

    @property
    def operations(self) -> frozenset[str]:
        """The concrete operations (``get``/``set``/``init``) this mode covers."""
        if self is AccessMode.BOTH:
            return frozenset({"get", "set"})
        if self is AccessMode.ALL:
            return frozenset({"get", "set", "init"})
        return frozenset({self.value})


class IdentityKind(str, Enum):
    """How an event is identified by an emit directive."""

    NAME = "name"
    INSTANCE = "instance"
    CLASS = "class"


class Timing(str, Enum):
    """When an emission happens relative to the wrapped call."""

    BEFORE = "before"
    AFTER = "after"
    CONDITIONAL = "conditional"


class Payload(str, Enum):
    """What an emission carries."""

    NOTHING = "nothing"
    ARGS = "args"
    RESULT = "result"
    RESULT_AND_ARGS = "result_and_args"
    EVENT = "event"


class DirectiveKind(str, Enum):
    """Kinds of wiring directive."""

    LISTEN = "listen"
    EMIT = "emit"
    ACCESSOR = "accessor"
