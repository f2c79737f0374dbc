"""Domain entities for eventwire.

Emitter options, pending listeners and wiring directives are Pydantic
models; directives are frozen once built at class-definition time.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from eventwire.domain.enums import AccessMode, DirectiveKind, EmitMode
from eventwire.domain.events import EventIdentity
from eventwire.domain.rules import EmissionPlan


# ---------------------------------------------------------------------------
# Emitter configuration
# ---------------------------------------------------------------------------


class EmitterOptions(BaseModel):
    """Construction options for an emitter.

    Accepts both ``capture_rejections``/``max_listeners`` and the camelCase
    spellings ``captureRejections``/``maxListeners``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    capture_rejections: bool | None = Field(default=None, alias="captureRejections")
    max_listeners: int | None = Field(default=None, ge=0, alias="maxListeners")


# ---------------------------------------------------------------------------
# Pending listeners
# ---------------------------------------------------------------------------


class PendingListener(BaseModel):
    """A subscription waiting for ``target`` to resolve on its owner.

    ``event`` is the remaining path below ``target``: a plain key once only
    one segment is left, otherwise a dotted path.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    target: str
    event: Any
    listener: Callable[..., Any]
    once: bool = False


# ---------------------------------------------------------------------------
# Wiring directives
# ---------------------------------------------------------------------------


class ListenDirective(BaseModel):
    """``@on`` / ``@once``: subscribe *member* to *event* at construction."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[DirectiveKind.LISTEN] = DirectiveKind.LISTEN
    member: str
    event: Hashable
    once: bool = False


class EmitDirective(BaseModel):
    """``@emit``: the method *member* raises *identity* according to *plan*."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[DirectiveKind.EMIT] = DirectiveKind.EMIT
    member: str
    identity: EventIdentity
    mode: EmitMode
    plan: EmissionPlan


class AccessorDirective(BaseModel):
    """``@emits``: the accessor *member* raises on the operations in *access*."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[DirectiveKind.ACCESSOR] = DirectiveKind.ACCESSOR
    member: str
    identity: EventIdentity
    access: AccessMode
    custom_name: str | None = None
    initial: Any = None
    has_init: bool = False

    @property
    def operations(self) -> frozenset[str]:
        return self.access.operations


WiringDirective = Union[ListenDirective, EmitDirective, AccessorDirective]
