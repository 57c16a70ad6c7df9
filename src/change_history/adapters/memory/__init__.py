from .host import InMemoryEditorHost

__all__ = ["InMemoryEditorHost"]
