"""Custom exceptions for eventwire."""

from __future__ import annotations

from typing import Any


class EventWireError(Exception):
    """Base exception for all eventwire errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def object(self) -> Any:
        """The offending object, when one was supplied."""
        return self.details.get("object")


class NotDefinedError(EventWireError):
    """Raised when a required target object is absent."""

    pass


class NotEmitterError(EventWireError):
    """Raised when an object fails a capability assertion."""

    pass


class NotRegistrableError(NotEmitterError):
    """Raised when an object exposes no way to register listeners."""

    pass


class NotEmittableError(NotEmitterError):
    """Raised when an object exposes no way to raise events."""

    pass


class InvalidListenerError(EventWireError, TypeError):
    """Raised when a non-callable is passed as a listener."""

    pass


class InvalidEmitModeError(EventWireError):
    """Raised when an emit mode is not supported for an event identity."""

    pass


class DecoratorMisuseError(EventWireError):
    """Raised when a wiring decorator is applied to an unsupported member."""

    pass


class UnhandledErrorEvent(EventWireError):
    """Raised when ``error`` is emitted with a non-exception payload and nobody listens."""

    pass


def describe(obj: Any, name: str | None = None) -> str:
    """Best-effort display name for *obj* used in error messages."""
    if name:
        return name
    if obj is None:
        return "object"
    return getattr(obj, "__name__", None) or type(obj).__name__


class MaxListenersExceededWarning(RuntimeWarning):
    """Advisory warning: a subscription list grew past the emitter's ceiling."""

    def __init__(self, message: str, emitter: Any = None, event: Any = None, count: int = 0) -> None:
        super().__init__(message)
        self.emitter = emitter
        self.event = event
        self.count = count
