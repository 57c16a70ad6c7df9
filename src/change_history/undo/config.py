"""UndoManagerConfig — validated engine options."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..primitives.exceptions import ConfigurationError

DEFAULT_MAXIMUM_STACK_LENGTH = 500
DEFAULT_REFRESH_EVENTS: tuple[str, ...] = ("component:toggled", "change:canvasOffset")


class UndoManagerConfig(BaseModel):
    """Options for :class:`~change_history.undo.manager.UndoManager`.

    Unknown keys are kept as pass-through options for collaborators.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    maximum_stack_length: int = Field(
        default=DEFAULT_MAXIMUM_STACK_LENGTH,
        ge=1,
        description="Maximum number of records kept; the oldest are evicted first",
    )
    group_idle_gap: float | None = Field(
        default=None,
        ge=0,
        description=(
            "Seconds within which consecutive changes join the same group. "
            "None disables time-based grouping"
        ),
    )
    track: bool = Field(
        default=True, description="Start recording as soon as the engine is built"
    )
    refresh_events: tuple[str, ...] = Field(
        default=DEFAULT_REFRESH_EVENTS,
        description="Host events triggered after every undo/redo",
    )

    @classmethod
    def build(cls, **options: Any) -> UndoManagerConfig:
        """Validate *options*, raising :class:`ConfigurationError` on failure."""
        try:
            return cls(**options)
        except PydanticValidationError as exc:
            errors: dict[str, list[str]] = {}
            for error in exc.errors():
                loc = ".".join(str(p) for p in error.get("loc", ("__root__",)))
                msg = error.get("msg", "validation error")
                errors.setdefault(loc, []).append(msg)
            raise ConfigurationError(errors) from exc
