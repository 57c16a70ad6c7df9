"""Mutation notifications and the history records built from them."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

#: Option flags that suppress recording of a mutation. Either one is enough.
AVOID_STORE = "avoid_store"
NO_UNDO = "no_undo"

Snapshot = Any


def is_suppressed(options: Mapping[str, Any]) -> bool:
    """Return True if *options* carry a suppress-recording flag."""
    return bool(options.get(AVOID_STORE) or options.get(NO_UNDO))


class Phase(str, enum.Enum):
    """When a mutation notification fires relative to the state change."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class Mutation:
    """Notification emitted by a tracked entity.

    - ``kind``: change-kind identifier (``"change"``, ``"add"``,
      ``"change:style"``...).
    - ``target``: the entity that emitted the notification.
    - ``element``: the added/removed element for collection mutations.
    - ``final``: False on an AFTER notification that is followed by more
      notifications of the same operation. The operation ends with the
      first final one.
    """

    kind: str
    target: Any
    phase: Phase = Phase.AFTER
    element: Any = None
    options: Mapping[str, Any] = field(default_factory=dict)
    final: bool = True

    @property
    def suppressed(self) -> bool:
        return is_suppressed(self.options)


@dataclass(frozen=True)
class Capture:
    """Result of a handler's ``capture()``: what to store on the record."""

    before: Snapshot = None
    after: Snapshot = None
    options: Mapping[str, Any] = field(default_factory=dict)


class ChangeRecord(BaseModel):
    """One recorded, replayable change.

    Records are immutable once pushed. ``target`` is the live entity, not a
    copy: undo/redo must mutate the entity the host is rendering.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    record_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    kind: str
    target: Any
    before: Any = None
    after: Any = None
    group_id: int = 0
    options: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class StackView:
    """Read-only view of the history: records in order plus the pointer."""

    records: tuple[ChangeRecord, ...] = ()
    pointer: int = 0

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[ChangeRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> ChangeRecord:
        return self.records[index]

    @property
    def done(self) -> tuple[ChangeRecord, ...]:
        """Records currently applied (undoable)."""
        return self.records[: self.pointer]

    @property
    def undone(self) -> tuple[ChangeRecord, ...]:
        """Records that were undone and can be redone."""
        return self.records[self.pointer :]
