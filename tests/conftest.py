from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from pydantic import Field

from change_history.adapters.memory import InMemoryEditorHost
from change_history.domain.collection import TrackedCollection
from change_history.domain.model import TrackedModel
from change_history.undo.manager import UndoManager


class Component(TrackedModel):
    """Test entity with a couple of declared attributes."""

    color: str = "red"
    style: dict[str, str] = Field(default_factory=dict)
    content: str = ""


@pytest.fixture()
def component_cls() -> type[Component]:
    return Component


@pytest.fixture()
def make_component() -> Callable[..., Component]:
    def _make(**data: Any) -> Component:
        return Component(**data)

    return _make


@pytest.fixture()
def host() -> InMemoryEditorHost:
    return InMemoryEditorHost()


@pytest.fixture()
def manager(host: InMemoryEditorHost) -> Iterator[UndoManager]:
    um = UndoManager(host)
    yield um
    um.destroy()


@pytest.fixture()
def collection() -> TrackedCollection[Component]:
    return TrackedCollection()
