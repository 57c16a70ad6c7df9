"""ChangeRecorder — turns mutation notifications into history records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..domain.records import ChangeRecord, Mutation, Phase

if TYPE_CHECKING:
    from .grouping import GroupingIndex
    from .registry import TypeRegistry
    from .stack import CommandStack

logger = logging.getLogger("change_history.recorder")


class ChangeRecorder:
    """Listener subscribed to every tracked entity.

    For each AFTER notification:
    1. Skip it if the options carry ``avoid_store`` or ``no_undo``
    2. Resolve the handler for the change kind, skip unknown kinds
    3. Skip it if the handler's ``condition()`` is false
    4. ``capture()`` and push the resulting record onto the stack

    BEFORE notifications cache the entity's snapshot, keyed by entity, until
    the next capture for that entity. An entity's operation stays open from
    its first notification until its final AFTER notification. A new group
    starts only when no operation is open, so changes cascading from a
    listener join the operation that triggered them. Nothing is recorded
    while the stack is replaying or while recording is stopped.
    """

    def __init__(
        self,
        types: TypeRegistry,
        stack: CommandStack,
        grouping: GroupingIndex,
        *,
        tracking: bool = True,
    ) -> None:
        self._types = types
        self._stack = stack
        self._grouping = grouping
        self._tracking = tracking
        # id(entity) -> (entity, snapshot); the entity keeps its id reserved
        self._pending: dict[int, tuple[Any, Any]] = {}
        self._open: dict[int, Any] = {}

    def __call__(self, mutation: Mutation) -> None:
        self.on_mutation(mutation)

    @property
    def is_tracking(self) -> bool:
        return self._tracking

    def start(self) -> None:
        self._tracking = True

    def stop(self) -> None:
        self._tracking = False
        self.reset()

    def reset(self) -> None:
        """Forget cached BEFORE snapshots and open operations."""
        self._pending.clear()
        self._open.clear()

    def forget(self, entity: object) -> None:
        """Drop any cached snapshot or open operation of *entity*."""
        self._pending.pop(id(entity), None)
        self._open.pop(id(entity), None)

    def has_pending(self, entity: object) -> bool:
        return id(entity) in self._pending

    def has_open_operation(self) -> bool:
        return bool(self._open)

    def on_mutation(self, mutation: Mutation) -> None:
        if not self._tracking or self._stack.is_replaying:
            return
        if mutation.phase is Phase.BEFORE:
            self._begin(mutation)
        else:
            key = id(mutation.target)
            try:
                self._record(mutation, key)
            finally:
                if mutation.final:
                    self._open.pop(key, None)

    def _begin(self, mutation: Mutation) -> None:
        if mutation.suppressed:
            return
        target = mutation.target
        key = id(target)
        self._join(key, target)
        if key not in self._pending:
            self._pending[key] = (target, target.snapshot())

    def _join(self, key: int, target: Any) -> None:
        if not self._open:
            self._grouping.next_group()
        self._open[key] = target

    def _record(self, mutation: Mutation, key: int) -> None:
        entry = self._pending.pop(key, None)
        if mutation.suppressed:
            logger.debug("Recording suppressed for '%s'", mutation.kind)
            return
        if key not in self._open:
            self._join(key, mutation.target)

        handler = self._types.resolve(mutation.kind)
        if handler is None:
            return
        if not handler.condition(mutation):
            logger.debug("Condition rejected '%s'", mutation.kind)
            return
        captured = handler.capture(mutation, entry[1] if entry else None)
        if captured is None:
            return

        record = ChangeRecord(
            kind=mutation.kind,
            target=mutation.target,
            before=captured.before,
            after=captured.after,
            group_id=self._grouping.touch(),
            options=dict(captured.options),
        )
        self._stack.push(record)
