"""Built-in change-kind handlers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from ..domain.records import NO_UNDO, Capture, Mutation
from ..ports.trackable import allows_undo

if TYPE_CHECKING:
    from ..ports.handler import IChangeKindHandler

#: Cosmetic sub-properties restored from a full-state snapshot.
FULL_STATE_KINDS: tuple[str, ...] = (
    "change:style",
    "change:attributes",
    "change:content",
    "change:src",
)


def replay_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Options passed to the entity while replaying: never recorded again."""
    return {**options, NO_UNDO: True}


class ChangeKindHandler:
    """Base handler: records everything, restores whole snapshots.

    Subclasses override ``capture`` and, where a snapshot restore is not
    the inverse, ``apply_undo`` / ``apply_redo``.
    """

    def condition(self, mutation: Mutation) -> bool:
        return True

    def capture(self, mutation: Mutation, pending: Any) -> Capture | None:
        return None

    def apply_undo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        target.restore(before, options=replay_options(options))

    def apply_redo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        target.restore(after, options=replay_options(options))


class AttributeChangeHandler(ChangeKindHandler):
    """Generic ``"change"`` handler gated by the entity's undo policy."""

    def condition(self, mutation: Mutation) -> bool:
        return allows_undo(mutation.target, mutation.target.changed_attributes())

    def capture(self, mutation: Mutation, pending: Any) -> Capture | None:
        target = mutation.target
        before = pending if pending is not None else target.previous_snapshot()
        return Capture(before=before, after=target.snapshot())


class FullStateHandler(ChangeKindHandler):
    """Snapshot/restore of the full serialized entity for cosmetic kinds.

    No condition: a style or content change is always recorded.
    """

    def capture(self, mutation: Mutation, pending: Any) -> Capture | None:
        target = mutation.target
        before = pending if pending is not None else target.previous_snapshot()
        return Capture(before=before, after=target.snapshot())


class CollectionAddHandler(ChangeKindHandler):
    """``"add"``: the element is ``after``; undo removes, redo re-inserts."""

    def capture(self, mutation: Mutation, pending: Any) -> Capture | None:
        if mutation.element is None:
            return None
        return Capture(before=None, after=mutation.element, options=mutation.options)

    def apply_undo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        target.remove(after, options=replay_options(options))

    def apply_redo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        target.add(after, at=options.get("index"), options=replay_options(options))


class CollectionRemoveHandler(ChangeKindHandler):
    """``"remove"``: the element is ``before``; undo re-inserts, redo removes."""

    def capture(self, mutation: Mutation, pending: Any) -> Capture | None:
        if mutation.element is None:
            return None
        return Capture(before=mutation.element, after=None, options=mutation.options)

    def apply_undo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        target.add(before, at=options.get("index"), options=replay_options(options))

    def apply_redo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        target.remove(before, options=replay_options(options))


class FunctionHandler(ChangeKindHandler):
    """Handler assembled from plain callables.

    Any callable left out falls back to :class:`ChangeKindHandler`.

    Usage::

        registry.register(
            "change:title",
            FunctionHandler(
                capture=lambda m, pending: Capture(pending, m.target.snapshot()),
            ),
        )
    """

    def __init__(
        self,
        *,
        condition: Callable[[Mutation], bool] | None = None,
        capture: Callable[[Mutation, Any], Capture | None] | None = None,
        apply_undo: Callable[[Any, Any, Any, Mapping[str, Any]], None] | None = None,
        apply_redo: Callable[[Any, Any, Any, Mapping[str, Any]], None] | None = None,
        base: IChangeKindHandler | None = None,
    ) -> None:
        self._base: IChangeKindHandler = base or ChangeKindHandler()
        self._condition = condition
        self._capture = capture
        self._apply_undo = apply_undo
        self._apply_redo = apply_redo

    def condition(self, mutation: Mutation) -> bool:
        if self._condition is None:
            return self._base.condition(mutation)
        return self._condition(mutation)

    def capture(self, mutation: Mutation, pending: Any) -> Capture | None:
        if self._capture is None:
            return self._base.capture(mutation, pending)
        return self._capture(mutation, pending)

    def apply_undo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        if self._apply_undo is None:
            self._base.apply_undo(target, before, after, options)
        else:
            self._apply_undo(target, before, after, options)

    def apply_redo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        if self._apply_redo is None:
            self._base.apply_redo(target, before, after, options)
        else:
            self._apply_redo(target, before, after, options)


def default_handlers() -> dict[str, ChangeKindHandler]:
    """Handlers installed on every new engine."""
    handlers: dict[str, ChangeKindHandler] = {
        "change": AttributeChangeHandler(),
        "add": CollectionAddHandler(),
        "remove": CollectionRemoveHandler(),
    }
    full_state = FullStateHandler()
    for kind in FULL_STATE_KINDS:
        handlers[kind] = full_state
    return handlers
