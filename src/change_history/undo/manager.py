"""UndoManager — public facade of the change-history engine."""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import EngineDestroyedError
from .config import UndoManagerConfig
from .grouping import GroupingIndex
from .recorder import ChangeRecorder
from .registry import TypeRegistry
from .stack import CommandStack
from .tracking import TrackingRegistry

if TYPE_CHECKING:
    from ..domain.records import ChangeRecord, StackView
    from ..ports.handler import IChangeKindHandler
    from ..ports.host import IEditorHost

logger = logging.getLogger("change_history.undo")

UNDO_EVENT = "undo"
REDO_EVENT = "redo"


class UndoManager:
    """Tracks entities and exposes undo/redo over their recorded changes.

    Construct one per editor and hand it to collaborators; it owns the
    handler registry, the command stack and the set of tracked entities.

    Usage::

        um = UndoManager(host, maximum_stack_length=100)
        um.add(component)
        component.set(color="blue")
        um.undo()        # color is back to its previous value
        um.redo()

        with um.batch():
            first.set(color="red")
            second.set(color="red")
        um.undo()        # both revert together

    ``undo()`` / ``redo()`` do nothing while ``host.is_editing()`` is true.
    After an undo/redo that applied something, the host receives
    ``"undo"`` / ``"redo"`` followed by each of ``config.refresh_events``.
    """

    def __init__(
        self,
        host: IEditorHost | None = None,
        *,
        types: TypeRegistry | None = None,
        clock: Callable[[], float] = time.monotonic,
        **options: Any,
    ) -> None:
        self._config = UndoManagerConfig.build(**options)
        self._host = host
        self._types = types if types is not None else TypeRegistry.with_defaults()
        self._stack = CommandStack(
            self._types, max_length=self._config.maximum_stack_length
        )
        self._grouping = GroupingIndex(
            idle_gap=self._config.group_idle_gap, clock=clock
        )
        self._recorder = ChangeRecorder(
            self._types, self._stack, self._grouping, tracking=self._config.track
        )
        self._tracked = TrackingRegistry(self._recorder)
        self._destroyed = False

    # ── Accessors ────────────────────────────────────────────────

    def get_config(self) -> UndoManagerConfig:
        """Return the (frozen) configuration."""
        self._ensure_alive()
        return self._config

    @property
    def types(self) -> TypeRegistry:
        return self._types

    @property
    def stack(self) -> CommandStack:
        return self._stack

    @property
    def recorder(self) -> ChangeRecorder:
        return self._recorder

    @property
    def tracked(self) -> TrackingRegistry:
        return self._tracked

    # ── Tracking ─────────────────────────────────────────────────

    def add(self, entity: object) -> UndoManager:
        """Track *entity*'s changes."""
        self._ensure_alive()
        self._tracked.add(entity)
        return self

    def remove(self, entity: object) -> UndoManager:
        """Stop tracking *entity*. Its recorded history stays on the stack."""
        self._ensure_alive()
        self._tracked.remove(entity)
        self._recorder.forget(entity)
        return self

    def remove_all(self) -> UndoManager:
        self._ensure_alive()
        self._tracked.clear()
        self._recorder.reset()
        return self

    def start(self) -> UndoManager:
        """Start/resume recording changes."""
        self._ensure_alive()
        self._recorder.start()
        return self

    def stop(self) -> UndoManager:
        """Stop recording; tracked entities stay registered."""
        self._ensure_alive()
        self._recorder.stop()
        return self

    def is_tracking(self) -> bool:
        self._ensure_alive()
        return self._recorder.is_tracking

    @contextlib.contextmanager
    def batch(self) -> Iterator[int]:
        """Record every change made inside the block as one undo step."""
        self._ensure_alive()
        with self._grouping.batch() as group_id:
            yield group_id

    # ── Change kinds ─────────────────────────────────────────────

    def add_type(self, kind: str, handler: IChangeKindHandler) -> UndoManager:
        self._ensure_alive()
        self._types.register(kind, handler)
        return self

    def update_type(self, kind: str, **parts: Callable[..., Any]) -> UndoManager:
        self._ensure_alive()
        self._types.update(kind, **parts)
        return self

    def remove_type(self, kind: str) -> UndoManager:
        self._ensure_alive()
        self._types.unregister(kind)
        return self

    # ── History ──────────────────────────────────────────────────

    def undo(self, grouped: bool = True) -> UndoManager:
        """Undo the last operation (the last record if ``grouped`` is False)."""
        self._ensure_alive()
        if self._is_editing():
            logger.debug("Undo ignored during an inline edit session")
            return self
        if self._stack.undo(grouped=grouped):
            self._notify(UNDO_EVENT)
        return self

    def undo_all(self) -> UndoManager:
        self._ensure_alive()
        if self._stack.undo_all():
            self._notify(UNDO_EVENT)
        return self

    def redo(self, grouped: bool = True) -> UndoManager:
        """Redo the last undone operation (one record if ``grouped`` is False)."""
        self._ensure_alive()
        if self._is_editing():
            logger.debug("Redo ignored during an inline edit session")
            return self
        if self._stack.redo(grouped=grouped):
            self._notify(REDO_EVENT)
        return self

    def redo_all(self) -> UndoManager:
        self._ensure_alive()
        if self._stack.redo_all():
            self._notify(REDO_EVENT)
        return self

    def has_undo(self) -> bool:
        self._ensure_alive()
        return self._stack.is_available("undo")

    def has_redo(self) -> bool:
        self._ensure_alive()
        return self._stack.is_available("redo")

    def get_stack(self) -> StackView:
        self._ensure_alive()
        return self._stack.view()

    def get_stack_group(self) -> list[ChangeRecord]:
        """One representative record per logical operation.

        ``get_stack()`` returns two records when a single operation appended
        two elements; ``get_stack_group()`` returns only the first of them.
        """
        self._ensure_alive()
        return GroupingIndex.reduce(self._stack.records)

    def get_pointer(self) -> int:
        self._ensure_alive()
        return self._stack.pointer

    def clear(self) -> UndoManager:
        """Empty the history. Tracked entities stay registered."""
        self._ensure_alive()
        self._stack.clear()
        self._recorder.reset()
        return self

    def destroy(self) -> None:
        """Clear history, untrack everything and release the host.

        The manager is unusable afterwards.
        """
        if self._destroyed:
            return
        self.clear().remove_all()
        self._host = None
        self._destroyed = True
        logger.debug("UndoManager destroyed")

    # ── Internals ────────────────────────────────────────────────

    def _ensure_alive(self) -> None:
        if self._destroyed:
            raise EngineDestroyedError("UndoManager has been destroyed")

    def _is_editing(self) -> bool:
        return self._host is not None and self._host.is_editing()

    def _notify(self, event: str) -> None:
        if self._host is None:
            return
        self._host.trigger(event)
        for refresh_event in self._config.refresh_events:
            self._host.trigger(refresh_event)
