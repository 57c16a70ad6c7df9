"""change-history — in-memory undo/redo engine for tracked entities.

Zero infrastructure dependencies. Pydantic for records, entities and config.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import InMemoryEditorHost

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    AVOID_STORE,
    NO_UNDO,
    Capture,
    ChangeRecord,
    Mutation,
    Phase,
    StackView,
    TrackedCollection,
    TrackedModel,
    is_suppressed,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    IChangeKindHandler,
    IEditorHost,
    Trackable,
    TrackableCollection,
    allows_undo,
    is_trackable,
)

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
    ChangeHistoryError,
    ConfigurationError,
    EngineDestroyedError,
    HandlerRegistrationError,
    UntrackableEntityError,
)

# ── Undo ─────────────────────────────────────────────────────────
from .undo import (
    FULL_STATE_KINDS,
    AttributeChangeHandler,
    ChangeKindHandler,
    ChangeRecorder,
    CollectionAddHandler,
    CollectionRemoveHandler,
    CommandStack,
    FullStateHandler,
    FunctionHandler,
    GroupingIndex,
    TrackingRegistry,
    TypeRegistry,
    UndoManager,
    UndoManagerConfig,
)

__all__: list[str] = [
    # Domain
    "AVOID_STORE",
    "NO_UNDO",
    "Capture",
    "ChangeRecord",
    "Mutation",
    "Phase",
    "StackView",
    "TrackedCollection",
    "TrackedModel",
    "is_suppressed",
    # Ports
    "IChangeKindHandler",
    "IEditorHost",
    "Trackable",
    "TrackableCollection",
    "allows_undo",
    "is_trackable",
    # Undo
    "FULL_STATE_KINDS",
    "AttributeChangeHandler",
    "ChangeKindHandler",
    "ChangeRecorder",
    "CollectionAddHandler",
    "CollectionRemoveHandler",
    "CommandStack",
    "FullStateHandler",
    "FunctionHandler",
    "GroupingIndex",
    "TrackingRegistry",
    "TypeRegistry",
    "UndoManager",
    "UndoManagerConfig",
    # Primitives
    "ChangeHistoryError",
    "ConfigurationError",
    "EngineDestroyedError",
    "HandlerRegistrationError",
    "UntrackableEntityError",
    # Adapters
    "InMemoryEditorHost",
]
