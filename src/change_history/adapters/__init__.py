from .memory import InMemoryEditorHost

__all__ = ["InMemoryEditorHost"]
