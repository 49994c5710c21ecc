from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class TodoItem:
    """A single named todo with a two-state completion flag."""

    id: int
    name: str
    completed: bool = False


@dataclass(slots=True)
class TodoList:
    """A named, ordered collection of todos.

    ``id`` is stable for the lifetime of the session; the position of the list
    inside its session is what routes use to address it.
    """

    id: int
    name: str
    todos: List[TodoItem] = field(default_factory=list)
