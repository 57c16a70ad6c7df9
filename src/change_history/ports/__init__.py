from .handler import IChangeKindHandler
from .host import IEditorHost
from .trackable import (
    ChangeListener,
    Trackable,
    TrackableCollection,
    UndoPolicy,
    allows_undo,
    is_trackable,
)

__all__ = [
    "ChangeListener",
    "IChangeKindHandler",
    "IEditorHost",
    "Trackable",
    "TrackableCollection",
    "UndoPolicy",
    "allows_undo",
    "is_trackable",
]
