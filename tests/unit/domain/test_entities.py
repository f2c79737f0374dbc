"""Tests for eventwire.domain.entities."""

import pytest
from pydantic import ValidationError

from eventwire.domain.entities import (
    AccessorDirective,
    EmitterOptions,
    ListenDirective,
    PendingListener,
)
from eventwire.domain.enums import AccessMode, DirectiveKind
from eventwire.domain.events import identify


class TestEmitterOptions:
    def test_defaults_are_unset(self):
        opts = EmitterOptions()
        assert opts.capture_rejections is None
        assert opts.max_listeners is None

    def test_camel_case_aliases(self):
        opts = EmitterOptions.model_validate({"captureRejections": True, "maxListeners": 3})
        assert opts.capture_rejections is True
        assert opts.max_listeners == 3

    def test_snake_case_names(self):
        opts = EmitterOptions(capture_rejections=False, max_listeners=0)
        assert opts.max_listeners == 0

    def test_negative_ceiling_rejected(self):
        with pytest.raises(ValidationError):
            EmitterOptions(max_listeners=-1)

    def test_unknown_option_rejected(self):
        with pytest.raises(ValidationError):
            EmitterOptions.model_validate({"maxListener": 3})


class TestDirectives:
    def test_listen_directive_is_frozen(self):
        directive = ListenDirective(member="on_ready", event="ready")
        assert directive.kind is DirectiveKind.LISTEN
        with pytest.raises(ValidationError):
            directive.event = "other"

    def test_accessor_operations(self):
        directive = AccessorDirective(
            member="value",
            identity=identify(None, "value"),
            access=AccessMode.ALL,
        )
        assert directive.operations == frozenset({"get", "set", "init"})

    def test_pending_listener(self):
        def listener():
            pass

        entry = PendingListener(target="child", event="b.ready", listener=listener)
        assert entry.once is False
        assert entry.listener is listener
