from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IEditorHost(Protocol):
    """Port for the host application around the engine.

    The host owns the event bus and knows whether an inline edit session
    (text/content editing) is active.
    """

    def is_editing(self) -> bool:
        """Return *True* while an inline edit session is active."""
        ...

    def trigger(self, event: str, **payload: Any) -> None:
        """Publish *event* on the host event bus."""
        ...
