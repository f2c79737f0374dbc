"""Tests for eventwire.application.wiring.accessors."""

import pytest

from eventwire.application.wiring.accessors import EmittingAccessor, accessor
from eventwire.application.wiring.decorators import emits, on
from eventwire.domain.enums import AccessMode
from eventwire.domain.events import CustomEvent, Event
from eventwire.infrastructure.events.emitter import EventEmitter
from eventwire.infrastructure.events.target import EventTarget


class TestAccessor:
    def test_default(self):
        class Point:
            x = accessor(3)

        point = Point()
        assert point.x == 3
        point.x = 4
        assert point.x == 4
        assert isinstance(Point.x, accessor)

    def test_default_factory_is_per_instance(self):
        class Bag:
            items = accessor(default_factory=list)

        a, b = Bag(), Bag()
        a.items.append(1)
        assert b.items == []

    def test_default_and_factory_conflict(self):
        with pytest.raises(ValueError):
            accessor(1, default_factory=list)


class TestEmittingAccessor:
    def test_init_get_set_sequence(self):
        log = []

        class Model(EventEmitter):
            value = emits(AccessMode.ALL)(accessor(5))

            @on("init:value")
            def on_init(self, value):
                log.append(("init", value))

            @on("get:value")
            def on_get(self, value):
                log.append(("get", value))

            @on("set:value")
            def on_set(self, value):
                log.append(("set", value, self.__dict__.get("value")))

        model = Model()
        assert log == [("init", 5)]

        assert model.value == 5
        model.value = 7
        assert model.value == 7
        assert log == [("init", 5), ("get", 5), ("set", 7, 5), ("get", 7)]

    def test_both_skips_init(self):
        class Model(EventEmitter):
            value = emits(accessor(1))

        model = Model()
        seen = []
        model.on("init:value", seen.append)
        model.on("get:value", seen.append)
        assert model.value == 1
        assert seen == [1]

    def test_custom_name(self):
        class Model(EventEmitter):
            value = emits("changed", AccessMode.ALL)(accessor(0))

        model = Model()
        seen = []
        model.on("changed", seen.append)
        model.value = 2
        model.value
        assert seen == [2, 2]

    def test_get_only(self):
        class Model(EventEmitter):
            value = emits(AccessMode.GET)(accessor(0))

        model = Model()
        seen = []
        model.on("get:value", seen.append)
        model.on("set:value", seen.append)
        model.value = 9
        assert model.value == 9
        assert seen == [9]

    def test_property_with_setter(self):
        class Thermostat(EventEmitter):
            def __init__(self):
                super().__init__()
                self._temperature = 20

            @emits
            @property
            def temperature(self):
                return self._temperature

            @temperature.setter
            def temperature(self, value):
                self._temperature = value

        thermostat = Thermostat()
        seen = []
        thermostat.on("get:temperature", lambda v: seen.append(("get", v)))
        thermostat.on("set:temperature", lambda v: seen.append(("set", v)))

        thermostat.temperature = 25
        assert thermostat.temperature == 25
        assert seen == [("set", 25), ("get", 25)]
        assert isinstance(Thermostat.__dict__["temperature"], EmittingAccessor)

    def test_getter_function(self):
        class Box(EventEmitter):
            @emits("measured")
            def size(self):
                return 3

        box = Box()
        seen = []
        box.on("measured", seen.append)
        assert box.size == 3
        assert seen == [3]
        with pytest.raises(AttributeError):
            box.size = 4

    def test_instance_identity(self):
        changed = Event("changed")

        class Field(EventTarget):
            value = emits(changed, AccessMode.SET)(accessor(0))

        field = Field()
        seen = []
        field.add_event_listener("changed", seen.append)
        field.value = 1
        assert seen == [changed]
        assert changed.target is field

    def test_class_identity(self):
        class Field(EventTarget):
            value = emits(CustomEvent, AccessMode.GET)(accessor(1))

        field = Field()
        seen = []
        field.add_event_listener("get:value", seen.append)
        assert field.value == 1
        assert isinstance(seen[0], CustomEvent)
        assert seen[0].detail is None

    def test_accessor_has_no_custom_setter(self):
        wrapped = emits(accessor(0))
        with pytest.raises(TypeError):
            wrapped.setter(lambda self, value: None)

    def test_directive_collected(self):
        class Model(EventEmitter):
            value = emits(AccessMode.ALL)(accessor(5))

        (directive,) = Model.__wiring__.accessors
        assert directive.member == "value"
        assert directive.has_init is True
        assert directive.initial == 5
        assert directive.operations == frozenset({"get", "set", "init"})

    def test_subclass_instances_initialised(self):
        class Base(EventEmitter):
            items = emits(AccessMode.INIT)(accessor(default_factory=list))

        class Child(Base):
            pass

        a, b = Child(), Child()
        a.items.append(1)
        assert b.items == []
