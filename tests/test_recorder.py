"""Tests for the ChangeRecorder (driven with hand-built notifications)."""

from __future__ import annotations

import gc
import weakref

import pytest

from change_history.domain.collection import TrackedCollection
from change_history.domain.records import AVOID_STORE, NO_UNDO, Mutation, Phase
from change_history.undo.grouping import GroupingIndex
from change_history.undo.recorder import ChangeRecorder
from change_history.undo.registry import TypeRegistry
from change_history.undo.stack import CommandStack


@pytest.fixture()
def parts() -> tuple[ChangeRecorder, CommandStack]:
    types = TypeRegistry.with_defaults()
    stack = CommandStack(types)
    return ChangeRecorder(types, stack, GroupingIndex()), stack


class TestCapture:
    def test_pending_snapshot_is_kept_per_entity(self, parts, make_component) -> None:
        recorder, stack = parts
        first = make_component(color="red")
        second = make_component(color="green")

        # Both entities announce a change before either completes.
        recorder(Mutation("change", first, Phase.BEFORE))
        recorder(Mutation("change", second, Phase.BEFORE))
        first.set(color="blue")
        second.set(color="yellow")
        recorder(Mutation("change", first))
        recorder(Mutation("change", second))

        first_record, second_record = stack.records
        assert first_record.target is first
        assert first_record.before["color"] == "red"
        assert first_record.after["color"] == "blue"
        assert second_record.target is second
        assert second_record.before["color"] == "green"
        assert second_record.after["color"] == "yellow"
        assert first_record.group_id == second_record.group_id

    def test_pending_snapshot_is_released_after_capture(
        self, parts, make_component
    ) -> None:
        recorder, _ = parts
        component = make_component()

        recorder(Mutation("change", component, Phase.BEFORE))
        assert recorder.has_pending(component)
        component.set(color="blue")
        recorder(Mutation("change", component))

        assert not recorder.has_pending(component)

    def test_falls_back_to_previous_snapshot(self, parts, make_component) -> None:
        recorder, stack = parts
        component = make_component(color="red")
        component.set(color="blue")

        recorder(Mutation("change", component))

        assert stack.records[0].before["color"] == "red"
        assert stack.records[0].after["color"] == "blue"


class TestSkips:
    @pytest.mark.parametrize("flag", [AVOID_STORE, NO_UNDO])
    def test_suppression_flags(self, parts, make_component, flag) -> None:
        recorder, stack = parts
        component = make_component()
        recorder(Mutation("change", component, Phase.BEFORE))
        component.set(color="blue")

        recorder(Mutation("change", component, options={flag: True}))

        assert len(stack) == 0
        assert not recorder.has_pending(component)

    def test_unregistered_kind_is_ignored(self, parts, make_component) -> None:
        recorder, stack = parts

        recorder(Mutation("change:unknown", make_component()))

        assert len(stack) == 0

    def test_condition_gates_recording(self, parts, make_component) -> None:
        recorder, stack = parts
        component = make_component(undo_policy=False)
        component.set(color="blue")

        recorder(Mutation("change", component))
        assert len(stack) == 0

        recorder(Mutation("change:style", component))
        assert len(stack) == 1

    def test_stopped_recorder_ignores_everything(self, parts, make_component) -> None:
        recorder, stack = parts
        component = make_component()
        recorder.stop()

        recorder(Mutation("change", component, Phase.BEFORE))
        component.set(color="blue")
        recorder(Mutation("change", component))

        assert len(stack) == 0
        assert not recorder.has_pending(component)
        assert not recorder.is_tracking

    def test_nothing_is_recorded_while_replaying(self, parts, make_component) -> None:
        recorder, stack = parts
        component = make_component()
        component.set(color="blue")

        with stack.replaying():
            recorder(Mutation("change", component))

        assert len(stack) == 0


class TestGrouping:
    def test_each_operation_opens_a_group(self, parts, make_component) -> None:
        recorder, stack = parts
        component = make_component()
        component.subscribe(recorder)

        component.set(color="blue")
        component.set(color="green")

        assert [r.group_id for r in stack.records] == [1, 2]

    def test_one_set_touching_style_is_one_group(self, parts, make_component) -> None:
        recorder, stack = parts
        component = make_component()
        component.subscribe(recorder)

        component.set(style={"width": "1px"})

        assert [r.kind for r in stack.records] == ["change:style", "change"]
        assert len({r.group_id for r in stack.records}) == 1

    def test_after_without_before_opens_a_group(self, parts, make_component) -> None:
        recorder, stack = parts
        first, second = make_component(), make_component()
        first.set(color="blue")
        second.set(color="blue")

        recorder(Mutation("change", first))
        recorder(Mutation("change", second))

        assert [r.group_id for r in stack.records] == [1, 2]

    def test_operation_stays_open_until_final_notification(
        self, parts, make_component
    ) -> None:
        recorder, stack = parts
        first, second = make_component(), make_component()

        recorder(Mutation("change", first, Phase.BEFORE))
        recorder(Mutation("change:color", first, final=False))
        assert recorder.has_open_operation()
        # A listener reacting to the partial notification changes another entity.
        recorder(Mutation("change", second, Phase.BEFORE))
        second.set(color="blue")
        recorder(Mutation("change", second))
        first.set(color="blue")
        recorder(Mutation("change", first))

        assert not recorder.has_open_operation()
        assert stack.records[0].target is second
        assert stack.records[1].target is first
        assert len({r.group_id for r in stack.records}) == 1

    def test_extend_is_one_group(self, parts, make_component) -> None:
        recorder, stack = parts
        collection: TrackedCollection = TrackedCollection()
        collection.subscribe(recorder)

        collection.extend([make_component(), make_component()])
        collection.add(make_component())

        assert [r.group_id for r in stack.records] == [1, 1, 2]


class TestForget:
    def test_forget_releases_pending_and_open_state(
        self, parts, make_component
    ) -> None:
        recorder, stack = parts
        first, second = make_component(), make_component()
        recorder(Mutation("change", first, Phase.BEFORE))

        recorder.forget(first)
        second.set(color="a")
        recorder(Mutation("change", second))
        second.set(color="b")
        recorder(Mutation("change", second))

        assert not recorder.has_pending(first)
        assert not recorder.has_open_operation()
        assert [r.group_id for r in stack.records] == [2, 3]

    def test_pending_entity_is_kept_alive(self, parts) -> None:
        recorder, _ = parts
        collection: TrackedCollection = TrackedCollection()
        ref = weakref.ref(collection)

        recorder(Mutation("add", collection, Phase.BEFORE))
        del collection
        gc.collect()

        assert ref() is not None
        recorder.reset()
        gc.collect()
        assert ref() is None
