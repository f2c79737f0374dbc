"""Tests for eventwire.infrastructure.events.capability."""

import pytest

from eventwire.core.exceptions import (
    NotDefinedError,
    NotEmittableError,
    NotEmitterError,
    NotRegistrableError,
)
from eventwire.domain.events import Event
from eventwire.infrastructure.events.capability import (
    assert_can_emit,
    assert_can_register,
    assert_is_emitter,
    attach_listener,
    can_emit,
    can_register,
    dispatch_event,
    is_emitter,
    raise_event,
    register_emitter,
)
from eventwire.infrastructure.events.emitter import EventEmitter


class OnlyOn:
    def __init__(self):
        self.calls = []

    def on(self, event, listener):
        self.calls.append(("on", event, listener))


class OnlyAddListener:
    def __init__(self):
        self.calls = []

    def add_listener(self, event, listener):
        self.calls.append(("add_listener", event, listener))


class NativeTarget:
    def __init__(self):
        self.calls = []
        self.dispatched = []

    def add_event_listener(self, type, listener, once=False):
        self.calls.append(("add_event_listener", type, listener, once))

    def dispatch_event(self, event):
        self.dispatched.append(event)
        return True


class OnlyEmit:
    def __init__(self):
        self.emitted = []

    def emit(self, event, *args):
        self.emitted.append((event, args))
        return True


class Plain:
    pass


class TestPredicates:
    def test_engine_emitter(self):
        assert is_emitter(EventEmitter())

    def test_foreign_surfaces(self):
        assert can_register(OnlyOn())
        assert can_register(OnlyAddListener())
        assert can_register(NativeTarget())
        assert can_emit(OnlyEmit())
        assert can_emit(NativeTarget())
        assert is_emitter(NativeTarget())

    def test_partial_surfaces_are_not_emitters(self):
        assert not is_emitter(OnlyOn())
        assert not is_emitter(OnlyEmit())

    def test_none_and_plain(self):
        for obj in (None, Plain(), 42):
            assert not can_register(obj)
            assert not can_emit(obj)
            assert not is_emitter(obj)

    def test_registered_object(self):
        obj = Plain()
        register_emitter(obj)
        assert is_emitter(obj)

    def test_registered_unhashable_object(self):
        class Unhashable:
            __hash__ = None

        obj = Unhashable()
        register_emitter(obj)
        assert is_emitter(obj)
        assert not is_emitter(Unhashable())

    def test_unweakrefable_object_is_not_registered(self):
        assert not is_emitter(object())


class TestAssertions:
    def test_none_is_not_defined(self):
        for check in (assert_can_register, assert_can_emit, assert_is_emitter):
            with pytest.raises(NotDefinedError):
                check(None)

    def test_not_registrable(self):
        obj = Plain()
        with pytest.raises(NotRegistrableError) as exc_info:
            assert_can_register(obj)
        assert exc_info.value.object is obj
        assert "Plain" in str(exc_info.value)

    def test_not_emittable(self):
        with pytest.raises(NotEmittableError, match="child"):
            assert_can_emit(OnlyOn(), "child")

    def test_is_emitter_reports_first_failure(self):
        with pytest.raises(NotRegistrableError):
            assert_is_emitter(Plain())
        with pytest.raises(NotEmittableError):
            assert_is_emitter(OnlyOn())

    def test_common_base(self):
        with pytest.raises(NotEmitterError):
            assert_is_emitter(OnlyAddListener())

    def test_success_returns_true(self):
        assert assert_is_emitter(EventEmitter()) is True


class TestAttachListener:
    def test_prefers_on(self):
        target = OnlyOn()
        attach_listener(target, "x", print)
        assert target.calls == [("on", "x", print)]

    def test_falls_back_to_add_listener(self):
        target = OnlyAddListener()
        attach_listener(target, "x", print)
        assert target.calls == [("add_listener", "x", print)]

    def test_native_once(self):
        target = NativeTarget()
        attach_listener(target, "x", print, once=True)
        assert target.calls == [("add_event_listener", "x", print, True)]

    def test_once_on_emitter(self):
        emitter = EventEmitter()
        calls = []
        attach_listener(emitter, "x", calls.append, once=True)
        emitter.emit("x", 1)
        emitter.emit("x", 2)
        assert calls == [1]

    def test_once_without_surface(self):
        with pytest.raises(NotRegistrableError):
            attach_listener(OnlyOn(), "x", print, once=True)

    def test_none_target(self):
        with pytest.raises(NotDefinedError):
            attach_listener(None, "x", print)


class TestRaising:
    def test_raise_event_requires_emit(self):
        with pytest.raises(NotEmittableError):
            raise_event(NativeTarget(), "x")

    def test_dispatch_prefers_native_surface(self):
        target = NativeTarget()
        event = Event("ready")
        dispatch_event(target, event, "ready", (event,))
        assert target.dispatched == [event]

    def test_dispatch_falls_back_to_emit(self):
        target = OnlyEmit()
        event = Event("ready")
        dispatch_event(target, event, "ready", (event,))
        assert target.emitted == [("ready", (event,))]

    def test_dispatch_without_surface(self):
        with pytest.raises(NotEmittableError):
            dispatch_event(Plain(), Event("x"), "x")
