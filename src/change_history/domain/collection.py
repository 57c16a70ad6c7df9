"""TrackedCollection — ordered container that announces adds and removes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Generic

from typing_extensions import TypeVar

from .model import ChangeListener
from .records import Mutation, Phase

T = TypeVar("T")


class TrackedCollection(Generic[T]):
    """Ordered collection of elements compared by identity.

    ``add`` and ``remove`` emit a BEFORE notification, then an AFTER
    notification of kind ``"add"`` / ``"remove"`` carrying the element and
    its ``index`` in the options. ``extend`` emits a single BEFORE followed by
    one ``"add"`` per element so the whole insert is one logical operation;
    only the last of them is final.
    ``restore`` replaces the contents and emits ``"reset"``.
    """

    def __init__(
        self,
        elements: Iterable[T] = (),
        *,
        undo_policy: bool | Sequence[str] = True,
    ) -> None:
        self._elements: list[T] = list(elements)
        self._previous: list[T] = list(self._elements)
        self._listeners: list[ChangeListener] = []
        self._undo_policy = (
            undo_policy if isinstance(undo_policy, bool) else tuple(undo_policy)
        )

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._elements))

    def __getitem__(self, index: int) -> T:
        return self._elements[index]

    def __contains__(self, element: object) -> bool:
        return self._position(element) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._elements!r})"

    # ── Trackable ────────────────────────────────────────────────

    @property
    def undo_policy(self) -> bool | tuple[str, ...]:
        return self._undo_policy

    def snapshot(self) -> list[T]:
        return list(self._elements)

    def previous_snapshot(self) -> list[T]:
        return list(self._previous)

    def changed_attributes(self) -> dict[str, Any]:
        return {}

    def restore(
        self, state: Iterable[T], *, options: Mapping[str, Any] | None = None
    ) -> None:
        opts = dict(options or {})
        self._emit(Mutation("reset", self, Phase.BEFORE, options=opts))
        self._previous = list(self._elements)
        self._elements = list(state)
        self._emit(Mutation("reset", self, options=opts))

    def subscribe(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ── Mutation ─────────────────────────────────────────────────

    def index(self, element: object) -> int:
        """Position of *element*; raises ``ValueError`` if absent."""
        position = self._position(element)
        if position is None:
            raise ValueError(f"{element!r} is not in the collection")
        return position

    def add(
        self,
        element: T,
        *,
        at: int | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> TrackedCollection[T]:
        """Insert *element* at *at* (default: the end). Already present: no-op."""
        return self.extend([element], at=at, options=options)

    def extend(
        self,
        elements: Iterable[T],
        *,
        at: int | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> TrackedCollection[T]:
        pending: list[T] = []
        for element in elements:
            if element not in self and all(element is not p for p in pending):
                pending.append(element)
        if not pending:
            return self

        opts = dict(options or {})
        self._emit(Mutation("add", self, Phase.BEFORE, options=opts))
        self._previous = list(self._elements)
        index = len(self._elements) if at is None else min(max(at, 0), len(self))
        last = len(pending) - 1
        for position, element in enumerate(pending):
            self._elements.insert(index, element)
            self._emit(
                Mutation(
                    "add",
                    self,
                    element=element,
                    options={**opts, "index": index},
                    final=position == last,
                )
            )
            index += 1
        return self

    def remove(
        self, element: T, *, options: Mapping[str, Any] | None = None
    ) -> TrackedCollection[T]:
        """Remove *element*. Absent: no-op."""
        index = self._position(element)
        if index is None:
            return self

        opts = dict(options or {})
        self._emit(Mutation("remove", self, Phase.BEFORE, options=opts))
        self._previous = list(self._elements)
        del self._elements[index]
        self._emit(
            Mutation("remove", self, element=element, options={**opts, "index": index})
        )
        return self

    def _position(self, element: object) -> int | None:
        for index, candidate in enumerate(self._elements):
            if candidate is element:
                return index
        return None

    def _emit(self, mutation: Mutation) -> None:
        for listener in tuple(self._listeners):
            listener(mutation)
