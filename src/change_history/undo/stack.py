"""CommandStack — bounded, pointer-indexed linear history."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Literal

from ..domain.records import ChangeRecord, StackView

if TYPE_CHECKING:
    from .registry import TypeRegistry

logger = logging.getLogger("change_history.stack")

Direction = Literal["undo", "redo"]


class CommandStack:
    """Ordered records plus a pointer counting how many are applied.

    Records below ``pointer`` are done; records at or above it were undone
    and survive only until the next ``push``, which discards them. The stack
    never holds more than ``max_length`` records: the oldest is evicted and
    the pointer shifted so it still designates the same record.

    Undo and redo run inside :meth:`replaying`; while it is active the
    recorder ignores every notification, so replay never records history.
    """

    def __init__(self, types: TypeRegistry, *, max_length: int = 500) -> None:
        self._types = types
        self._records: list[ChangeRecord] = []
        self._pointer = 0
        self._max_length = max_length
        self._replaying = 0

    def __len__(self) -> int:
        return len(self._records)

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def records(self) -> tuple[ChangeRecord, ...]:
        return tuple(self._records)

    @property
    def is_replaying(self) -> bool:
        return self._replaying > 0

    def view(self) -> StackView:
        return StackView(records=tuple(self._records), pointer=self._pointer)

    @contextlib.contextmanager
    def replaying(self) -> Iterator[None]:
        self._replaying += 1
        try:
            yield
        finally:
            self._replaying -= 1

    # ── Recording ────────────────────────────────────────────────

    def push(self, record: ChangeRecord) -> None:
        """Discard the redo tail, append *record*, evict the oldest if full."""
        if self._pointer < len(self._records):
            logger.debug(
                "Discarding %d undone record(s)", len(self._records) - self._pointer
            )
            del self._records[self._pointer :]
        self._records.append(record)
        self._pointer += 1

        overflow = len(self._records) - self._max_length
        if overflow > 0:
            del self._records[:overflow]
            self._pointer -= overflow
            logger.debug(
                "Evicted %d record(s) over limit %d", overflow, self._max_length
            )
        logger.debug(
            "Pushed %s record (group %d), pointer=%d",
            record.kind,
            record.group_id,
            self._pointer,
        )

    def clear(self) -> None:
        self._records.clear()
        self._pointer = 0

    # ── Replay ───────────────────────────────────────────────────

    def is_available(self, direction: Direction) -> bool:
        if direction == "undo":
            return self._pointer > 0
        return self._pointer < len(self._records)

    def undo(self, steps: int = 1, *, grouped: bool = True) -> bool:
        """Undo *steps* operations; returns True if anything was applied.

        With ``grouped`` a step is a run of contiguous records sharing one
        group id, undone newest first.
        """
        applied = False
        with self.replaying():
            for _ in range(steps):
                if not self.is_available("undo"):
                    break
                group_id = self._records[self._pointer - 1].group_id
                while self._pointer > 0:
                    record = self._records[self._pointer - 1]
                    if grouped and record.group_id != group_id:
                        break
                    self._apply(record, "undo")
                    self._pointer -= 1
                    applied = True
                    if not grouped:
                        break
        return applied

    def redo(self, steps: int = 1, *, grouped: bool = True) -> bool:
        """Redo *steps* operations; returns True if anything was applied."""
        applied = False
        with self.replaying():
            for _ in range(steps):
                if not self.is_available("redo"):
                    break
                group_id = self._records[self._pointer].group_id
                while self._pointer < len(self._records):
                    record = self._records[self._pointer]
                    if grouped and record.group_id != group_id:
                        break
                    self._apply(record, "redo")
                    self._pointer += 1
                    applied = True
                    if not grouped:
                        break
        return applied

    def undo_all(self) -> bool:
        return self.undo(len(self._records), grouped=False)

    def redo_all(self) -> bool:
        return self.redo(len(self._records), grouped=False)

    def _apply(self, record: ChangeRecord, direction: Direction) -> None:
        handler = self._types.resolve(record.kind)
        if handler is None:
            logger.warning(
                "No handler registered for '%s'; %s skipped", record.kind, direction
            )
            return
        try:
            if direction == "undo":
                handler.apply_undo(
                    record.target, record.before, record.after, record.options
                )
            else:
                handler.apply_redo(
                    record.target, record.before, record.after, record.options
                )
        except Exception:
            logger.exception("Failed to %s '%s' record", direction, record.kind)
            raise
