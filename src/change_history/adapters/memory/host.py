"""InMemoryEditorHost — minimal host for tests and headless use."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ...ports.host import IEditorHost

logger = logging.getLogger("change_history.host")


class InMemoryEditorHost(IEditorHost):
    """In-memory implementation of ``IEditorHost``.

    Keeps every triggered event in ``events`` (in order) and dispatches it
    to callbacks registered with :meth:`on`. ``editing`` toggles the inline
    edit guard.
    """

    def __init__(self) -> None:
        self.editing = False
        self.events: list[tuple[str, dict[str, Any]]] = []
        self._callbacks: dict[str, list[Callable[..., None]]] = {}

    def is_editing(self) -> bool:
        return self.editing

    def trigger(self, event: str, **payload: Any) -> None:
        self.events.append((event, payload))
        for callback in list(self._callbacks.get(event, [])):
            try:
                callback(**payload)
            except Exception:
                logger.exception("Error in callback for host event %s", event)
                raise

    def on(self, event: str, callback: Callable[..., None]) -> None:
        callbacks = self._callbacks.setdefault(event, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def off(self, event: str, callback: Callable[..., None]) -> None:
        callbacks = self._callbacks.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    # ── Test helpers ─────────────────────────────────────────────

    def event_names(self) -> list[str]:
        return [name for name, _ in self.events]

    def clear(self) -> None:
        self.events.clear()
