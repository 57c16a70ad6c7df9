"""IChangeKindHandler — capture/replay protocol for one change kind."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.records import Capture, Mutation


@runtime_checkable
class IChangeKindHandler(Protocol):
    """
    Port for capturing and replaying one kind of change.

    One handler is registered per change-kind string. The recorder asks
    ``condition()`` whether a mutation is worth recording, then ``capture()``
    for the before/after pair. The command stack calls ``apply_undo()`` /
    ``apply_redo()`` with recording suppressed.
    """

    def condition(self, mutation: Mutation) -> bool:
        """Return *True* if the mutation should be recorded."""
        ...

    def capture(self, mutation: Mutation, pending: Any) -> Capture | None:
        """Build the before/after pair, or *None* to skip.

        Args:
            mutation: The AFTER notification.
            pending: Snapshot cached at the entity's BEFORE notification,
                or *None* when no BEFORE notification preceded it.
        """
        ...

    def apply_undo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        """Bring *target* back to the state described by *before*."""
        ...

    def apply_redo(
        self, target: Any, before: Any, after: Any, options: Mapping[str, Any]
    ) -> None:
        """Bring *target* forward to the state described by *after*."""
        ...
