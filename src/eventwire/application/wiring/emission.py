"""Raising the events declared by emit and accessor directives."""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable

from eventwire.domain.enums import IdentityKind, Payload, Timing
from eventwire.domain.events import EventIdentity
from eventwire.domain.rules import EmissionPlan, accessor_event_name, build_detail, build_payload
from eventwire.infrastructure.events.capability import dispatch_event, raise_event


def emit_for_call(
    target: Any,
    identity: EventIdentity,
    plan: EmissionPlan,
    args: tuple,
    result: Any = None,
) -> Any:
    """Raise the event for one call of an emitting method."""
    payload = build_payload(plan.payload, args, result)

    if identity.kind is IdentityKind.NAME:
        return raise_event(target, identity.name, *payload)

    if identity.kind is IdentityKind.INSTANCE:
        event = identity.build()
        return dispatch_event(target, event, event.type, (event,))

    # Fresh instance of an event class per emission.
    with_detail = plan.payload not in (Payload.NOTHING, Payload.EVENT)
    event = identity.build(build_detail(plan.payload, args, result), with_detail=with_detail)
    return dispatch_event(target, event, identity.name, payload)


def emit_for_access(
    target: Any,
    identity: EventIdentity,
    member: str,
    operation: str,
    value: Any,
    custom: str | None = None,
) -> Any:
    """Raise the ``get``/``set``/``init`` event of an emitting accessor."""
    name = accessor_event_name(operation, member, custom)

    if identity.kind is IdentityKind.NAME:
        return raise_event(target, name, value)

    if identity.kind is IdentityKind.INSTANCE:
        event = identity.build()
        return dispatch_event(target, event, event.type, (event,))

    event = identity.value(name)
    return dispatch_event(target, event, name, ())


def emitting_method(fn: Callable[..., Any], identity: EventIdentity, plan: EmissionPlan) -> Callable[..., Any]:
    """Wrap *fn* so each call raises *identity* as *plan* prescribes.

    Keyword arguments reach *fn* but are not part of the payload.
    """
    timing = plan.timing

    if inspect.iscoroutinefunction(fn):

        @functools.wraps(fn)
        async def async_wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            if timing is Timing.BEFORE:
                emit_for_call(self, identity, plan, args)
                return await fn(self, *args, **kwargs)
            result = await fn(self, *args, **kwargs)
            if timing is Timing.AFTER or result:
                emit_for_call(self, identity, plan, args, result)
            return result

        return async_wrapper

    @functools.wraps(fn)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        if timing is Timing.BEFORE:
            emit_for_call(self, identity, plan, args)
            return fn(self, *args, **kwargs)
        result = fn(self, *args, **kwargs)
        if timing is Timing.AFTER or result:
            emit_for_call(self, identity, plan, args, result)
        return result

    return wrapper
