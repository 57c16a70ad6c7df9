"""TrackedModel — attribute bag that announces its own mutations."""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .records import Mutation, Phase

ChangeListener = Callable[[Mutation], None]

_MISSING = object()


class TrackedModel(BaseModel):
    """Base class for entities whose attribute changes can be undone.

    Mutate through :meth:`set` (or :meth:`unset`), never by plain attribute
    assignment: ``set`` emits a ``"change"`` BEFORE notification, applies the
    values, then emits one ``"change:<attr>"`` AFTER notification per changed
    attribute followed by a ``"change"`` AFTER notification, the only final
    one.

    ``undo_policy`` marks what the generic ``"change"`` handler records:
    ``True`` for every attribute, a sequence of attribute names to restrict it,
    ``False`` to opt out.

    Usage::

        class Component(TrackedModel):
            color: str = "red"

        component = Component(undo_policy=["color"])
        component.set(color="blue")
        component.set(color="green", options={"no_undo": True})
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    _undo_policy: bool | tuple[str, ...] = PrivateAttr(default=True)
    _previous: dict[str, Any] = PrivateAttr(default_factory=dict)
    _changed: dict[str, Any] = PrivateAttr(default_factory=dict)
    _listeners: list[ChangeListener] = PrivateAttr(default_factory=list)

    def __init__(
        self, undo_policy: bool | Sequence[str] = True, **data: object
    ) -> None:
        super().__init__(**data)
        self._undo_policy = (
            undo_policy if isinstance(undo_policy, bool) else tuple(undo_policy)
        )
        self._previous = self.snapshot()

    # ── Trackable ────────────────────────────────────────────────

    @property
    def undo_policy(self) -> bool | tuple[str, ...]:
        return self._undo_policy

    def snapshot(self) -> dict[str, Any]:
        """Return a deep copy of every attribute, extras included."""
        return copy.deepcopy(dict(self))

    def previous_snapshot(self) -> dict[str, Any]:
        """State as it was before the last mutation."""
        return copy.deepcopy(self._previous)

    def changed_attributes(self) -> dict[str, Any]:
        """Attributes changed by the last mutation, with their new values."""
        return dict(self._changed)

    def restore(
        self, state: Mapping[str, Any], *, options: Mapping[str, Any] | None = None
    ) -> None:
        """Replace the whole state with *state*.

        Extra attributes missing from *state* are removed; declared fields
        missing from it keep their current value.
        """
        target = copy.deepcopy(dict(state))
        current = dict(self)
        changes = {
            key: value
            for key, value in target.items()
            if current.get(key, _MISSING) != value
        }
        removed = [
            key
            for key in current
            if key not in target and key not in type(self).model_fields
        ]
        self._mutate(changes, removed, options)

    def subscribe(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ── Mutation ─────────────────────────────────────────────────

    def get(self, name: str, default: Any = None) -> Any:
        return dict(self).get(name, default)

    def set(
        self,
        attrs: Mapping[str, Any] | None = None,
        /,
        *,
        options: Mapping[str, Any] | None = None,
        **values: Any,
    ) -> TrackedModel:
        """Assign attributes, notifying listeners if anything changed."""
        merged = {**(attrs or {}), **values}
        current = dict(self)
        changes = {
            key: value
            for key, value in merged.items()
            if current.get(key, _MISSING) != value
        }
        self._mutate(changes, [], options)
        return self

    def unset(
        self, *names: str, options: Mapping[str, Any] | None = None
    ) -> TrackedModel:
        """Remove extra attributes. Declared fields cannot be unset."""
        extra = self.__pydantic_extra__ or {}
        self._mutate({}, [name for name in names if name in extra], options)
        return self

    def _mutate(
        self,
        changes: dict[str, Any],
        removed: list[str],
        options: Mapping[str, Any] | None,
    ) -> None:
        if not changes and not removed:
            return
        opts = dict(options or {})
        self._emit(Mutation("change", self, Phase.BEFORE, options=opts))

        self._previous = self.snapshot()
        for key, value in changes.items():
            setattr(self, key, value)
        extra = self.__pydantic_extra__
        for key in removed:
            if extra is not None:
                extra.pop(key, None)
        self._changed = {**changes, **dict.fromkeys(removed)}

        for key in self._changed:
            self._emit(Mutation(f"change:{key}", self, options=opts, final=False))
        self._emit(Mutation("change", self, options=opts))

    def _emit(self, mutation: Mutation) -> None:
        for listener in tuple(self._listeners):
            listener(mutation)
