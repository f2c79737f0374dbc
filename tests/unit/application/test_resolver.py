"""Tests for eventwire.application.wiring.resolver."""

import pytest

from eventwire.application.wiring.accessors import accessor
from eventwire.application.wiring.decorators import emit, emits, listen_directive, on
from eventwire.application.wiring.resolver import (
    WiringTable,
    Wired,
    collect_directives,
    mix_into,
)
from eventwire.domain.entities import AccessorDirective, EmitDirective, ListenDirective
from eventwire.domain.enums import AccessMode, EmitMode
from eventwire.infrastructure.events.emitter import EventEmitter
from eventwire.infrastructure.events.registry import state_of


class TestWiringTable:
    def test_collects_by_kind(self):
        class Model(EventEmitter):
            value = emits(AccessMode.ALL)(accessor(0))

            @on("ping")
            def handle(self):
                pass

            @emit("saved", EmitMode.RESULT)
            def save(self):
                return True

        table = Model.__wiring__
        assert isinstance(table, WiringTable)
        assert len(table) == 3
        assert [d.member for d in table.listeners] == ["handle"]
        assert [d.member for d in table.emitters] == ["save"]
        assert [d.member for d in table.accessors] == ["value"]
        assert isinstance(table.for_member("save")[0], EmitDirective)

    def test_base_directives_first(self):
        class Base(EventEmitter):
            @on("first")
            def base_handler(self):
                pass

        class Child(Base):
            @on("second")
            def child_handler(self):
                pass

        assert [d.event for d in Child.__wiring__.listeners] == ["first", "second"]
        assert [d.event for d in Base.__wiring__.listeners] == ["first"]

    def test_aliased_member_takes_class_attribute_name(self):
        class Model(EventEmitter):
            @on("ping")
            def handle(self):
                pass

            alias = handle

        members = sorted(d.member for d in Model.__wiring__.listeners)
        assert members == ["alias", "handle"]

    def test_explicit_listen_directives(self):
        class Model(EventEmitter):
            __directives__ = [listen_directive("handle")]

            def handle(self):
                pass

        (directive,) = collect_directives(Model).listeners
        assert isinstance(directive, ListenDirective)
        assert directive.event == "handle"

    def test_plain_wired_class_has_empty_table(self):
        class Bare(EventEmitter):
            pass

        assert len(Bare.__wiring__) == 0
        assert "0 directives" in repr(Bare.__wiring__)

    def test_accessor_directive_type(self):
        class Model(EventEmitter):
            value = emits(accessor(0))

        assert isinstance(Model.__wiring__.accessors[0], AccessorDirective)


class TestConstructionHooks:
    def test_listeners_ready_inside_constructor(self):
        class Model(EventEmitter):
            def __init__(self):
                super().__init__()
                self.seen = []
                self.emit("boot")

            @on("boot")
            def handle(self):
                self.seen.append("boot")

        assert Model().seen == ["boot"]

    def test_construction_depth_reset(self):
        class Base(EventEmitter):
            def __init__(self):
                super().__init__()

        class Child(Base):
            def __init__(self):
                super().__init__()

        child = Child()
        assert state_of(child).constructing == 0

    def test_failed_constructor_resets_depth(self):
        class Fragile(EventEmitter):
            def __init__(self, fail):
                super().__init__()
                if fail:
                    raise RuntimeError("nope")

        fragile = Fragile.__new__(Fragile)
        with pytest.raises(RuntimeError):
            fragile.__init__(True)
        assert state_of(fragile).constructing == 0

    def test_init_is_wrapped_once(self):
        class Base(EventEmitter):
            pass

        class Child(Base):
            pass

        assert Child.__init__ is Base.__init__ is EventEmitter.__init__


class TestMixInto:
    def test_keeps_identity(self):
        class Plain:
            """Plain docs."""

        mixed = mix_into(Plain, Wired)
        assert mixed.__name__ == "Plain"
        assert mixed.__qualname__ == Plain.__qualname__
        assert mixed.__doc__ == "Plain docs."
        assert issubclass(mixed, Plain)
        assert issubclass(mixed, Wired)

    def test_existing_subclass_returned(self):
        class Already(Wired):
            pass

        assert mix_into(Already, Wired) is Already
