"""Exceptions for change-history.

History conditions (empty stack, active edit session, overflow, unknown
change kind, suppression flags) are no-ops and never raise. The exceptions
below signal programming errors at the engine's seams.
"""

from __future__ import annotations


class ChangeHistoryError(Exception):
    """Root exception for the change-history engine."""


class HandlerRegistrationError(ChangeHistoryError):
    """Raised when an object that is not a change-kind handler is registered.

    Usage: TypeRegistry raises this from ``register()`` / ``update()``.
    Registering a second handler for the same kind is *not* an error.
    """


class UntrackableEntityError(ChangeHistoryError, TypeError):
    """Raised when an entity that does not implement ``Trackable`` is added."""

    def __init__(self, entity: object) -> None:
        self.entity = entity
        super().__init__(
            f"{type(entity).__name__} does not implement the Trackable protocol"
        )


class ConfigurationError(ChangeHistoryError):
    """Raised when the engine configuration fails validation.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))


class EngineDestroyedError(ChangeHistoryError):
    """Raised when an ``UndoManager`` is used after ``destroy()``."""
