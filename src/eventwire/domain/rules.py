"""Wiring rules as pure functions.

Deterministic helpers shared by the decorators and the resolver: the
emission-mode state machine, event-path splitting and accessor event
naming.  No I/O, no side-effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable

from eventwire.core.exceptions import InvalidEmitModeError
from eventwire.domain.enums import AccessMode, EmitMode, IdentityKind, Payload, Timing

# Synthetic target meaning "the instance itself"
SELF_TARGET = "self"

PATH_SEPARATOR = "."


# ---------------------------------------------------------------------------
# Emission-mode state machine
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmissionPlan:
    """When to emit relative to the wrapped call, and with what."""

    timing: Timing
    payload: Payload


# Plans for identities that can carry data: names and CustomEvent classes.
PAYLOAD_PLANS: dict[EmitMode, EmissionPlan] = {
    EmitMode.BEFORE: EmissionPlan(Timing.BEFORE, Payload.NOTHING),
    EmitMode.NONE: EmissionPlan(Timing.BEFORE, Payload.NOTHING),
    EmitMode.AFTER: EmissionPlan(Timing.AFTER, Payload.ARGS),
    EmitMode.ARGS: EmissionPlan(Timing.BEFORE, Payload.ARGS),
    EmitMode.RESULT: EmissionPlan(Timing.AFTER, Payload.RESULT),
    EmitMode.ALL: EmissionPlan(Timing.AFTER, Payload.RESULT_AND_ARGS),
    EmitMode.CONDITIONAL: EmissionPlan(Timing.CONDITIONAL, Payload.ARGS),
}

# Plans for event instances and plain Event classes, which have no data slot.
# ``all`` degrades to ``conditional``; ``args`` and ``result`` are absent.
EVENT_PLANS: dict[EmitMode, EmissionPlan] = {
    EmitMode.BEFORE: EmissionPlan(Timing.BEFORE, Payload.EVENT),
    EmitMode.NONE: EmissionPlan(Timing.BEFORE, Payload.EVENT),
    EmitMode.AFTER: EmissionPlan(Timing.AFTER, Payload.EVENT),
    EmitMode.ALL: EmissionPlan(Timing.CONDITIONAL, Payload.EVENT),
    EmitMode.CONDITIONAL: EmissionPlan(Timing.CONDITIONAL, Payload.EVENT),
}


def coerce_emit_mode(mode: EmitMode | str | None) -> EmitMode:
    """Normalise *mode* to an :class:`EmitMode`, defaulting to ``ALL``."""
    if mode is None:
        return EmitMode.ALL
    try:
        return EmitMode(mode)
    except ValueError:
        raise InvalidEmitModeError(
            f"Unknown emit mode '{mode}'.",
            details={"object": mode},
        ) from None


def coerce_access_mode(mode: AccessMode | EmitMode | str | None) -> AccessMode:
    """Normalise *mode* to an :class:`AccessMode`, defaulting to ``BOTH``.

    ``EmitMode.ALL`` is accepted as an alias of ``AccessMode.ALL``.
    """
    if mode is None:
        return AccessMode.BOTH
    value = mode.value if isinstance(mode, Enum) else mode
    try:
        return AccessMode(value)
    except ValueError:
        raise InvalidEmitModeError(
            f"Unknown accessor mode '{mode}'.",
            details={"object": mode},
        ) from None


def resolve_emission(
    kind: IdentityKind,
    mode: EmitMode,
    carries_payload: bool = True,
) -> EmissionPlan:
    """Map an identity kind and mode to an :class:`EmissionPlan`.

    Raises:
        InvalidEmitModeError: If the pair is unsupported.
    """
    if kind is IdentityKind.NAME or (kind is IdentityKind.CLASS and carries_payload):
        table = PAYLOAD_PLANS
    else:
        table = EVENT_PLANS

    plan = table.get(mode)
    if plan is None:
        raise InvalidEmitModeError(
            f"Invalid emit mode '{mode.value}' for {kind.value} event identity.",
            details={"object": mode, "kind": kind},
        )
    return plan


def build_payload(payload: Payload, args: tuple, result: Any = None) -> tuple:
    """Positional arguments passed to ``emit`` for a NAME-style emission."""
    if payload is Payload.ARGS:
        return tuple(args)
    if payload is Payload.RESULT:
        return (result,)
    if payload is Payload.RESULT_AND_ARGS:
        return (result, *args)
    return ()


def build_detail(payload: Payload, args: tuple, result: Any = None) -> Any:
    """``detail`` for a CustomEvent built by a CLASS-style emission."""
    if payload is Payload.ARGS:
        return list(args)
    if payload is Payload.RESULT:
        return result
    if payload is Payload.RESULT_AND_ARGS:
        return {"args": list(args), "result": result}
    return None


# ---------------------------------------------------------------------------
# Event paths
# ---------------------------------------------------------------------------


def is_nested_path(event: Hashable) -> bool:
    """True if *event* is a dotted path such as ``"child.ready"``."""
    return isinstance(event, str) and PATH_SEPARATOR in event


def split_event_path(event: str) -> tuple[str, str]:
    """Split ``"a.b.event"`` into ``("a", "b.event")``."""
    head, _, rest = event.partition(PATH_SEPARATOR)
    return head, rest


def path_depth(event: Hashable) -> int:
    """Number of attribute hops in *event* (0 for a plain key)."""
    if not isinstance(event, str):
        return 0
    return event.count(PATH_SEPARATOR)


# ---------------------------------------------------------------------------
# Accessor naming
# ---------------------------------------------------------------------------


def accessor_event_name(operation: str, member: str, custom: str | None = None) -> str:
    """``get:<member>``/``set:<member>``/``init:<member>``, or *custom* as-is."""
    return custom or f"{operation}:{member}"
