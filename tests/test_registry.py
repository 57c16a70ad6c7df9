"""Tests for the change-kind TypeRegistry and built-in handlers."""

from __future__ import annotations

import logging

import pytest

from change_history.domain.records import Capture, Mutation
from change_history.primitives.exceptions import HandlerRegistrationError
from change_history.undo.handlers import (
    FULL_STATE_KINDS,
    AttributeChangeHandler,
    CollectionAddHandler,
    CollectionRemoveHandler,
    FullStateHandler,
    FunctionHandler,
)
from change_history.undo.registry import TypeRegistry


class TestTypeRegistry:
    def test_defaults_cover_builtin_kinds(self) -> None:
        registry = TypeRegistry.with_defaults()

        assert isinstance(registry.resolve("change"), AttributeChangeHandler)
        assert isinstance(registry.resolve("add"), CollectionAddHandler)
        assert isinstance(registry.resolve("remove"), CollectionRemoveHandler)
        for kind in FULL_STATE_KINDS:
            assert isinstance(registry.resolve(kind), FullStateHandler)

    def test_resolve_unregistered_returns_none(self) -> None:
        registry = TypeRegistry()

        assert registry.resolve("change:unknown") is None
        assert not registry.has_handler("change:unknown")

    def test_last_registration_wins(self) -> None:
        registry = TypeRegistry()
        first = FullStateHandler()
        second = FullStateHandler()

        registry.register("change:title", first)
        registry.register("change:title", second)

        assert registry.resolve("change:title") is second
        assert len(registry.list_handlers()) == 1

    def test_register_rejects_non_handlers(self) -> None:
        registry = TypeRegistry()

        with pytest.raises(HandlerRegistrationError, match="does not implement"):
            registry.register("change", object())  # type: ignore[arg-type]

    def test_register_logs_at_debug(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="change_history.undo")
        registry = TypeRegistry()

        registry.register("change:title", FullStateHandler())

        assert "Registered handler for change:title" in caplog.text

    def test_unregister_and_clear(self) -> None:
        registry = TypeRegistry.with_defaults()

        registry.unregister("add")
        registry.unregister("never-registered")

        assert not registry.has_handler("add")
        assert registry.has_handler("remove")

        registry.clear()
        assert registry.list_handlers() == {}

    def test_list_handlers_is_a_copy(self) -> None:
        registry = TypeRegistry.with_defaults()

        registry.list_handlers().clear()

        assert registry.has_handler("change")


class TestUpdate:
    def test_update_overrides_only_given_parts(self, make_component) -> None:
        registry = TypeRegistry.with_defaults()
        component = make_component()
        component.set(color="blue")
        mutation = Mutation("change", component)

        handler = registry.update("change", condition=lambda m: False)

        assert registry.resolve("change") is handler
        assert handler.condition(mutation) is False
        captured = handler.capture(mutation, None)
        assert captured is not None
        assert captured.before["color"] == "red"
        assert captured.after["color"] == "blue"

    def test_update_unknown_part_raises(self) -> None:
        registry = TypeRegistry.with_defaults()

        with pytest.raises(HandlerRegistrationError, match="Unknown handler parts"):
            registry.update("change", on_change=lambda m: None)

    def test_update_without_existing_handler(self) -> None:
        registry = TypeRegistry()

        registry.update("custom", capture=lambda m, pending: Capture(1, 2))

        handler = registry.resolve("custom")
        assert handler is not None
        assert handler.condition(Mutation("custom", None)) is True
        assert handler.capture(Mutation("custom", None), None) == Capture(1, 2)


class TestBuiltinHandlers:
    def test_attribute_change_respects_boolean_policy(self, make_component) -> None:
        handler = AttributeChangeHandler()
        component = make_component(undo_policy=False)
        component.set(color="blue")

        assert handler.condition(Mutation("change", component)) is False

    def test_attribute_change_respects_attribute_list(self, make_component) -> None:
        handler = AttributeChangeHandler()
        component = make_component(undo_policy=["style"])

        component.set(color="blue")
        assert handler.condition(Mutation("change", component)) is False

        component.set(style={"width": "1px"})
        assert handler.condition(Mutation("change", component)) is True

    def test_capture_prefers_pending_snapshot(self, make_component) -> None:
        handler = FullStateHandler()
        component = make_component()
        component.set(color="blue")

        captured = handler.capture(
            Mutation("change:style", component), {"color": "pending"}
        )

        assert captured is not None
        assert captured.before == {"color": "pending"}
        assert captured.after["color"] == "blue"

    def test_add_handler_needs_an_element(self, collection) -> None:
        handler = CollectionAddHandler()

        assert handler.capture(Mutation("add", collection), None) is None

    def test_function_handler_falls_back_to_base(self) -> None:
        calls: list[str] = []
        handler = FunctionHandler(apply_undo=lambda t, b, a, o: calls.append(b))

        handler.apply_undo(None, "before", "after", {})

        assert calls == ["before"]
        assert handler.capture(Mutation("x", None), None) is None
