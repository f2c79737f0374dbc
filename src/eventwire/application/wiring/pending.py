"""Pending listener queues.

A listener declared on a dotted path (``"child.grandchild.ready"``) cannot be
attached until every object along the path exists.  It is queued on its owner
as a :class:`PendingListener` and resolved one segment at a time: each drain
either attaches it on the target, or pushes the remainder of the path onto
the target's own queue and drains that in turn.
"""

from __future__ import annotations

import functools
import weakref
from typing import Any

import structlog

from eventwire.config.settings import get_settings
from eventwire.core.exceptions import DecoratorMisuseError, NotDefinedError, describe
from eventwire.domain.entities import PendingListener
from eventwire.domain.rules import SELF_TARGET, is_nested_path, path_depth, split_event_path
from eventwire.infrastructure.events.capability import attach_listener, can_register
from eventwire.infrastructure.events.registry import state_of

logger = structlog.get_logger(__name__)

# Queues for intermediate objects that carry no emitter state, keyed by
# id() as ``id -> (weak reference, queue)`` so owners need not be hashable.
_FOREIGN_QUEUES: dict[int, tuple[weakref.ref, list[PendingListener]]] = {}


def _forget(key: int, ref: weakref.ref) -> None:
    held = _FOREIGN_QUEUES.get(key)
    if held is not None and held[0] is ref:
        del _FOREIGN_QUEUES[key]


def pending_queue(owner: Any, create: bool = False) -> list[PendingListener] | None:
    """The pending queue of *owner*, or ``None`` if it has none."""
    state = state_of(owner, create=False)
    if state is not None:
        return state.pending

    key = id(owner)
    held = _FOREIGN_QUEUES.get(key)
    if held is not None and held[0]() is owner:
        return held[1]
    if not create:
        return None
    try:
        ref = weakref.ref(owner, functools.partial(_forget, key))
    except TypeError:
        raise DecoratorMisuseError(
            f"Object '{describe(owner)}' cannot hold pending listeners.",
            details={"object": owner},
        ) from None
    queue: list[PendingListener] = []
    _FOREIGN_QUEUES[key] = (ref, queue)
    return queue


def can_queue(obj: Any) -> bool:
    """True if *obj* can hold a pending queue of its own."""
    if state_of(obj, create=False) is not None:
        return True
    try:
        weakref.ref(obj)
    except TypeError:
        return False
    return True


def listen_on_path(owner: Any, path: str, listener: Any, once: bool = False) -> PendingListener:
    """Queue *listener* for the dotted *path* below *owner*."""
    depth = path_depth(path)
    limit = get_settings().max_wiring_depth
    if depth > limit:
        raise DecoratorMisuseError(
            f"Event path '{path}' is {depth} segments deep; the limit is {limit}.",
            details={"object": owner},
        )
    target, rest = split_event_path(path)
    entry = PendingListener(target=target, event=rest, listener=listener, once=once)
    enqueue(owner, entry)
    return entry


def enqueue(owner: Any, entry: PendingListener) -> None:
    if owner is None:
        raise NotDefinedError("Emitter is not defined.", details={"object": owner})
    pending_queue(owner, create=True).append(entry)
    logger.debug(
        "wiring.pending_queued",
        owner=describe(owner),
        target=entry.target,
        event_key=str(entry.event),
    )


def resolve_pending(owner: Any, target: str | None = None) -> int:
    """Drain the pending queue of *owner*.

    Only entries for attribute *target* are considered when it is given.
    Entries whose target is still unset, or cannot take listeners yet, stay
    queued.  Returns the number of listeners attached, including those
    attached further down the path.
    """
    queue = pending_queue(owner)
    if not queue:
        return 0

    entries = list(queue)
    queue.clear()
    remaining: list[PendingListener] = []
    touched: list[Any] = []
    attached = 0
    position = 0

    try:
        for position, entry in enumerate(entries):
            if target is not None and entry.target != target:
                remaining.append(entry)
                continue

            value = owner if entry.target == SELF_TARGET else getattr(owner, entry.target, None)
            if value is None:
                remaining.append(entry)
                continue

            if is_nested_path(entry.event):
                if not can_queue(value):
                    remaining.append(entry)
                    continue
                head, rest = split_event_path(entry.event)
                enqueue(value, PendingListener(target=head, event=rest, listener=entry.listener, once=entry.once))
                if not any(seen is value for seen in touched):
                    touched.append(value)
            elif can_register(value):
                attach_listener(value, entry.event, entry.listener, entry.once)
                attached += 1
                logger.debug(
                    "wiring.pending_attached",
                    owner=describe(owner),
                    target=entry.target,
                    event_key=str(entry.event),
                )
            else:
                remaining.append(entry)
        position = len(entries)
    finally:
        # Entries pushed onto ``owner`` itself during the pass were appended
        # to the cleared queue; keep the unresolved ones ahead of them.  When
        # a step fails, the failing entry and everything after it stay queued.
        queue[:0] = remaining + entries[position:]

    for value in touched:
        attached += resolve_pending(value)
    return attached
