"""GroupingIndex — burst grouping of change records into logical operations."""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.records import ChangeRecord

logger = logging.getLogger("change_history.grouping")


class GroupingIndex:
    """Monotonic group counter with explicit batches and an optional idle gap.

    A boundary (``next_group()``) starts a new logical operation. It is
    ignored while a batch is open, and, when ``idle_gap`` is set, while the
    previous change happened less than ``idle_gap`` seconds ago. Group ids
    are never reused, not even after the history is cleared.
    """

    def __init__(
        self,
        *,
        idle_gap: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._current = 0
        self._batch_depth = 0
        self._idle_gap = idle_gap
        self._clock = clock
        self._last_change: float | None = None

    @property
    def current(self) -> int:
        return self._current

    @property
    def in_batch(self) -> bool:
        return self._batch_depth > 0

    def next_group(self) -> int:
        """Mark an operation boundary; returns the group id now in effect."""
        if self.in_batch or self._within_idle_gap():
            return self._current
        self._current += 1
        return self._current

    def touch(self) -> int:
        """Note that a change was recorded now; returns its group id."""
        self._last_change = self._clock()
        return self._current

    @contextlib.contextmanager
    def batch(self) -> Iterator[int]:
        """Group everything recorded inside the block as one operation.

        Nested batches join the outermost one.
        """
        if self._batch_depth == 0:
            self._current += 1
            logger.debug("Opened batch group %d", self._current)
        self._batch_depth += 1
        try:
            yield self._current
        finally:
            self._batch_depth -= 1

    def _within_idle_gap(self) -> bool:
        if self._idle_gap is None or self._last_change is None:
            return False
        return self._clock() - self._last_change <= self._idle_gap

    @staticmethod
    def reduce(records: Iterable[ChangeRecord]) -> list[ChangeRecord]:
        """First record of each distinct group, in order of first appearance."""
        seen: set[int] = set()
        result: list[ChangeRecord] = []
        for record in records:
            if record.group_id not in seen:
                seen.add(record.group_id)
                result.append(record)
        return result
