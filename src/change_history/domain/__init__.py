from .collection import TrackedCollection
from .model import ChangeListener, TrackedModel
from .records import (
    AVOID_STORE,
    NO_UNDO,
    Capture,
    ChangeRecord,
    Mutation,
    Phase,
    Snapshot,
    StackView,
    is_suppressed,
)

__all__ = [
    "AVOID_STORE",
    "NO_UNDO",
    "Capture",
    "ChangeListener",
    "ChangeRecord",
    "Mutation",
    "Phase",
    "Snapshot",
    "StackView",
    "TrackedCollection",
    "TrackedModel",
    "is_suppressed",
]
