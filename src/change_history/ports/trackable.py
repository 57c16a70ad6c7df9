"""Trackable / TrackableCollection — what the engine needs from an entity."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from ..domain.records import Mutation

ChangeListener: TypeAlias = "Callable[[Mutation], None]"
UndoPolicy: TypeAlias = "bool | Sequence[str]"


@runtime_checkable
class Trackable(Protocol):
    """Port for a stateful entity observed by the engine.

    The engine holds a non-owning reference: the host owns the entity's
    lifetime. Implementations emit a BEFORE :class:`Mutation` right before
    their state changes and one or more AFTER notifications once it has. Every
    AFTER but the last of an operation carries ``final=False``.
    """

    @property
    def undo_policy(self) -> UndoPolicy:
        """``True``/``False``, or the attribute names whose changes are undoable."""
        ...

    def snapshot(self) -> Any:
        """Return a detached copy of the current observable state."""
        ...

    def previous_snapshot(self) -> Any:
        """Return the state as it was before the last mutation."""
        ...

    def changed_attributes(self) -> Mapping[str, Any]:
        """Return the attributes touched by the last mutation."""
        ...

    def restore(self, state: Any, *, options: Mapping[str, Any] | None = None) -> None:
        """Apply a snapshot back onto the entity."""
        ...

    def subscribe(self, listener: ChangeListener) -> None:
        """Register *listener* for mutation notifications."""
        ...

    def unsubscribe(self, listener: ChangeListener) -> None:
        """Remove *listener*; unknown listeners are ignored."""
        ...


@runtime_checkable
class TrackableCollection(Trackable, Protocol):
    """Port for an ordered container emitting ``"add"`` / ``"remove"``."""

    def add(
        self,
        element: Any,
        *,
        at: int | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        ...

    def remove(self, element: Any, *, options: Mapping[str, Any] | None = None) -> Any:
        ...

    def index(self, element: Any) -> int:
        ...


def is_trackable(entity: object) -> bool:
    """Typed capability check used when registering entities."""
    return isinstance(entity, Trackable)


def allows_undo(entity: Trackable, changed: Mapping[str, Any]) -> bool:
    """Evaluate the entity's undo policy against the attributes it changed.

    A boolean policy answers directly. A sequence of names makes the change
    undoable only if at least one changed attribute is in it.
    """
    policy = entity.undo_policy
    if isinstance(policy, bool):
        return policy
    if not policy:
        return False
    return any(name in policy for name in changed)
