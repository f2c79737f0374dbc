"""eventwire: in-process events with declarative class wiring."""

from eventwire.application.wiring.accessors import EmittingAccessor, accessor
from eventwire.application.wiring.decorators import (
    accessor_directive,
    emit,
    emit_directive,
    emits,
    emitter,
    listen_directive,
    on,
    once,
)
from eventwire.application.wiring.pending import resolve_pending
from eventwire.config import Settings, configure_logging, get_settings
from eventwire.core.exceptions import (
    DecoratorMisuseError,
    EventWireError,
    InvalidEmitModeError,
    InvalidListenerError,
    MaxListenersExceededWarning,
    NotDefinedError,
    NotEmittableError,
    NotEmitterError,
    NotRegistrableError,
    UnhandledErrorEvent,
)
from eventwire.domain.entities import EmitterOptions
from eventwire.domain.enums import AccessMode, EmitMode
from eventwire.domain.events import (
    ERROR,
    ERROR_MONITOR,
    NEW_LISTENER,
    REMOVE_LISTENER,
    CustomEvent,
    Event,
    EventToken,
)
from eventwire.infrastructure.events.capability import (
    assert_can_emit,
    assert_can_register,
    assert_is_emitter,
    attach_listener,
    can_emit,
    can_register,
    is_emitter,
    register_emitter,
)
from eventwire.infrastructure.events.emitter import EventEmitter
from eventwire.infrastructure.events.target import EventTarget

__version__ = "0.1.0"

__all__ = [
    # Emitters
    "EventEmitter",
    "EventTarget",
    "EmitterOptions",
    # Decorators
    "emitter",
    "on",
    "once",
    "emit",
    "emits",
    "accessor",
    "EmittingAccessor",
    "emit_directive",
    "accessor_directive",
    "listen_directive",
    "resolve_pending",
    # Events
    "Event",
    "CustomEvent",
    "EventToken",
    "EmitMode",
    "AccessMode",
    "NEW_LISTENER",
    "REMOVE_LISTENER",
    "ERROR",
    "ERROR_MONITOR",
    # Capability checks
    "is_emitter",
    "can_register",
    "can_emit",
    "assert_can_register",
    "assert_can_emit",
    "assert_is_emitter",
    "attach_listener",
    "register_emitter",
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Exceptions
    "EventWireError",
    "NotDefinedError",
    "NotEmitterError",
    "NotRegistrableError",
    "NotEmittableError",
    "InvalidListenerError",
    "InvalidEmitModeError",
    "DecoratorMisuseError",
    "UnhandledErrorEvent",
    "MaxListenersExceededWarning",
]
