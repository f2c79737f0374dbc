"""Core exceptions for eventwire."""

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

__all__ = [
    "EventWireError",
    "NotDefinedError",
    "NotEmitterError",
    "NotRegistrableError",
    "NotEmittableError",
    "InvalidListenerError",
    "MaxListenersExceededWarning",
    "InvalidEmitModeError",
    "DecoratorMisuseError",
    "UnhandledErrorEvent",
]
