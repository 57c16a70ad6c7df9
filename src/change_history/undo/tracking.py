"""TrackingRegistry — the set of entities under observation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from ..ports.trackable import is_trackable
from ..primitives.exceptions import UntrackableEntityError

if TYPE_CHECKING:
    from ..ports.trackable import ChangeListener, Trackable

logger = logging.getLogger("change_history.tracking")


class TrackingRegistry:
    """Identity set of tracked entities.

    Adding an entity subscribes *listener* to its notifications; removing it
    unsubscribes. References are non-owning: the host keeps entities alive,
    the registry only forgets them on ``remove``/``clear``.
    """

    def __init__(self, listener: ChangeListener) -> None:
        self._listener = listener
        self._entities: dict[int, Trackable] = {}

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Trackable]:
        return iter(list(self._entities.values()))

    def __contains__(self, entity: object) -> bool:
        return id(entity) in self._entities

    def add(self, entity: object) -> None:
        """Start observing *entity*. Adding it twice is a no-op."""
        if not is_trackable(entity):
            raise UntrackableEntityError(entity)
        if id(entity) in self._entities:
            return
        self._entities[id(entity)] = entity  # type: ignore[assignment]
        entity.subscribe(self._listener)  # type: ignore[attr-defined]
        logger.debug("Tracking %s", type(entity).__name__)

    def remove(self, entity: object) -> None:
        """Stop observing *entity*. Unknown entities are ignored."""
        tracked = self._entities.pop(id(entity), None)
        if tracked is None:
            return
        tracked.unsubscribe(self._listener)
        logger.debug("Stopped tracking %s", type(tracked).__name__)

    def clear(self) -> None:
        for entity in list(self._entities.values()):
            entity.unsubscribe(self._listener)
        self._entities.clear()
