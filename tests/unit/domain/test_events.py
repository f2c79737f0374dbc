"""Tests for eventwire.domain.events and eventwire.domain.enums."""

from dataclasses import dataclass

import pytest

from eventwire.domain.enums import AccessMode, EmitMode, IdentityKind
from eventwire.domain.events import (
    ERROR_MONITOR,
    CustomEvent,
    Event,
    EventToken,
    identify,
    is_event_class,
)


@dataclass
class Ready(Event):
    pass


@dataclass
class Progress(CustomEvent):
    pass


class TestEventToken:
    def test_equal_only_to_itself(self):
        a = EventToken("x")
        b = EventToken("x")
        assert a == a
        assert a != b
        assert a != "x"

    def test_usable_as_key(self):
        assert {ERROR_MONITOR: 1}[ERROR_MONITOR] == 1


class TestEventTypes:
    def test_target_not_part_of_equality(self):
        a, b = Event("ready"), Event("ready")
        a.target = object()
        assert a == b

    def test_custom_event_detail(self):
        event = CustomEvent("progress", detail=[1, 2])
        assert event.type == "progress"
        assert event.detail == [1, 2]

    def test_is_event_class(self):
        assert is_event_class(Event)
        assert is_event_class(Progress)
        assert not is_event_class(Event("x"))
        assert not is_event_class(str)


class TestIdentify:
    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_identity_uses_member_name(self, value):
        identity = identify(value, "save")
        assert identity.kind is IdentityKind.NAME
        assert identity.name == "save"
        assert identity.carries_payload

    def test_string_is_name(self):
        identity = identify("saved", "save")
        assert identity.kind is IdentityKind.NAME
        assert identity.name == "saved"

    def test_token_is_name(self):
        token = EventToken("saved")
        assert identify(token, "save").name is token

    def test_event_instance(self):
        event = Ready("ready")
        identity = identify(event, "start")
        assert identity.kind is IdentityKind.INSTANCE
        assert identity.name == "ready"
        assert identity.build() is event

    def test_event_class_builds_fresh_instances(self):
        identity = identify(Ready, "start")
        assert identity.kind is IdentityKind.CLASS
        assert not identity.carries_payload
        first, second = identity.build(), identity.build()
        assert first is not second
        assert first.type == "start"

    def test_custom_event_class_carries_detail(self):
        identity = identify(Progress, "step")
        assert identity.carries_payload
        event = identity.build([1], with_detail=True)
        assert isinstance(event, Progress)
        assert event.detail == [1]

    def test_name_identity_has_no_event_object(self):
        with pytest.raises(TypeError):
            identify("x", "m").build()


class TestEnums:
    def test_emit_modes(self):
        assert {m.value for m in EmitMode} == {
            "args", "before", "after", "result", "all", "none", "conditional",
        }

    def test_emit_mode_is_string(self):
        assert EmitMode.RESULT == "result"

    @pytest.mark.parametrize(
        "mode,ops",
        [
            (AccessMode.GET, {"get"}),
            (AccessMode.SET, {"set"}),
            (AccessMode.INIT, {"init"}),
            (AccessMode.BOTH, {"get", "set"}),
            (AccessMode.ALL, {"get", "set", "init"}),
        ],
    )
    def test_access_operations(self, mode, ops):
        assert mode.operations == frozenset(ops)
