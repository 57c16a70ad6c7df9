"""Undo/Redo engine — recording, stacking and replaying entity changes."""

from .config import UndoManagerConfig
from .grouping import GroupingIndex
from .handlers import (
    FULL_STATE_KINDS,
    AttributeChangeHandler,
    ChangeKindHandler,
    CollectionAddHandler,
    CollectionRemoveHandler,
    FullStateHandler,
    FunctionHandler,
    default_handlers,
)
from .manager import REDO_EVENT, UNDO_EVENT, UndoManager
from .recorder import ChangeRecorder
from .registry import TypeRegistry
from .stack import CommandStack
from .tracking import TrackingRegistry

__all__ = [
    "FULL_STATE_KINDS",
    "REDO_EVENT",
    "UNDO_EVENT",
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
    "default_handlers",
]
