"""Session-scoped todo list domain shared by the server routes."""

from .exceptions import NotFoundError, TodoListError, ValidationError
from .models import TodoItem, TodoList
from .session import ListSession
from .store import SessionStore

__all__ = [
    "ListSession",
    "NotFoundError",
    "SessionStore",
    "TodoItem",
    "TodoList",
    "TodoListError",
    "ValidationError",
]
