"""TypeRegistry — maps change kinds to their capture/replay handlers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..ports.handler import IChangeKindHandler
from ..primitives.exceptions import HandlerRegistrationError
from .handlers import FunctionHandler, default_handlers

logger = logging.getLogger("change_history.undo")

_HANDLER_PARTS = ("condition", "capture", "apply_undo", "apply_redo")


class TypeRegistry:
    """Concrete registry of change-kind handlers indexed by kind string.

    Registering a kind twice is not an error: the last registration wins.

    Usage::

        registry = TypeRegistry.with_defaults()
        registry.register("change:title", FullStateHandler())

        # Later, lookup by kind
        handler = registry.resolve("change:title")
    """

    def __init__(self) -> None:
        self._handlers: dict[str, IChangeKindHandler] = {}

    @classmethod
    def with_defaults(cls) -> TypeRegistry:
        """Registry pre-loaded with the built-in handlers."""
        registry = cls()
        for kind, handler in default_handlers().items():
            registry.register(kind, handler)
        return registry

    def register(self, kind: str, handler: IChangeKindHandler) -> None:
        """Register *handler* for *kind*, replacing any existing one."""
        if not isinstance(handler, IChangeKindHandler):
            raise HandlerRegistrationError(
                f"Cannot register {type(handler).__name__} for '{kind}': "
                "it does not implement condition/capture/apply_undo/apply_redo"
            )
        self._handlers[kind] = handler
        logger.debug("Registered handler for %s: %s", kind, type(handler).__name__)

    def update(self, kind: str, **parts: Callable[..., Any]) -> IChangeKindHandler:
        """Override individual callables of the handler registered for *kind*.

        Parts left out keep the current behaviour. With no handler registered
        yet the parts are layered over the base handler.
        """
        unknown = set(parts) - set(_HANDLER_PARTS)
        if unknown:
            raise HandlerRegistrationError(
                f"Unknown handler parts for '{kind}': {', '.join(sorted(unknown))}"
            )
        current = self._handlers.get(kind)
        handler = FunctionHandler(base=current, **parts)
        self.register(kind, handler)
        return handler

    def unregister(self, kind: str) -> None:
        """Remove the handler for *kind*. Changes of that kind stop recording."""
        if self._handlers.pop(kind, None) is not None:
            logger.debug("Unregistered handler for %s", kind)

    def resolve(self, kind: str) -> IChangeKindHandler | None:
        """Look up the handler for *kind*."""
        return self._handlers.get(kind)

    def has_handler(self, kind: str) -> bool:
        """Return True if a handler is registered for *kind*."""
        return kind in self._handlers

    def list_handlers(self) -> dict[str, IChangeKindHandler]:
        """Return all registered handlers (shallow copy)."""
        return dict(self._handlers)

    def clear(self) -> None:
        """Remove all handlers (testing utility)."""
        self._handlers.clear()
