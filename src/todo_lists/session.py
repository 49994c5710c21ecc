"""Per-browser-session list state.

A ``ListSession`` is created by :class:`~src.todo_lists.store.SessionStore` on
the first request of a browser session and handed explicitly to every route
handler. All mutations take the session lock so that two requests racing on the
same session cannot interleave on the position-addressed list array.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional, Tuple

from .exceptions import NotFoundError, ValidationError
from .models import TodoItem, TodoList
from .validation import error_for_list_name, error_for_todo

logger = logging.getLogger(__name__)

FLASH_KINDS = ("success", "error")


class ListSession:
    """Ordered todo lists belonging to one browser session."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.lock = threading.RLock()
        self.lists: List[TodoList] = []
        self.last_accessed = time.monotonic()
        self._next_id = 1
        self._flash: Optional[Tuple[str, str]] = None

    def _allocate_id(self) -> int:
        allocated = self._next_id
        self._next_id += 1
        return allocated

    def touch(self) -> None:
        self.last_accessed = time.monotonic()

    # ------------------------------------------------------------------
    # Flash messages
    # ------------------------------------------------------------------

    def flash(self, kind: str, message: str) -> None:
        """Store a one-shot message for the next rendered page."""
        if kind not in FLASH_KINDS:
            raise ValueError(f"Unknown flash kind: {kind}")
        with self.lock:
            self._flash = (kind, message)

    def pop_flash(self) -> Optional[Tuple[str, str]]:
        """Return and clear the pending flash message, if any."""
        with self.lock:
            pending, self._flash = self._flash, None
            return pending

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_list(self, index: int) -> TodoList:
        with self.lock:
            if not 0 <= index < len(self.lists):
                raise NotFoundError("The specified list was not found.")
            return self.lists[index]

    def get_todo(self, list_index: int, todo_index: int) -> TodoItem:
        with self.lock:
            todos = self.get_list(list_index).todos
            if not 0 <= todo_index < len(todos):
                raise NotFoundError("The specified todo was not found.")
            return todos[todo_index]

    # ------------------------------------------------------------------
    # List operations
    # ------------------------------------------------------------------

    def create_list(self, name: str) -> TodoList:
        name = name.strip()
        with self.lock:
            error = error_for_list_name(name, self.lists)
            if error:
                raise ValidationError(error)
            todo_list = TodoList(id=self._allocate_id(), name=name)
            self.lists.append(todo_list)
        logger.info("Session %s created list %d", self.session_id[:8], todo_list.id)
        return todo_list

    def rename_list(self, index: int, new_name: str) -> TodoList:
        new_name = new_name.strip()
        with self.lock:
            todo_list = self.get_list(index)
            error = error_for_list_name(new_name, self.lists, exclude=todo_list)
            if error:
                raise ValidationError(error)
            todo_list.name = new_name
        logger.info("Session %s renamed list %d", self.session_id[:8], todo_list.id)
        return todo_list

    def delete_list(self, index: int) -> TodoList:
        with self.lock:
            self.get_list(index)
            removed = self.lists.pop(index)
        logger.info("Session %s deleted list %d", self.session_id[:8], removed.id)
        return removed

    # ------------------------------------------------------------------
    # Todo operations
    # ------------------------------------------------------------------

    def add_todo(self, list_index: int, text: str) -> TodoItem:
        text = text.strip()
        with self.lock:
            todo_list = self.get_list(list_index)
            error = error_for_todo(text)
            if error:
                raise ValidationError(error)
            todo = TodoItem(id=self._allocate_id(), name=text)
            todo_list.todos.append(todo)
        logger.info(
            "Session %s added todo %d to list %d",
            self.session_id[:8],
            todo.id,
            todo_list.id,
        )
        return todo

    def delete_todo(self, list_index: int, todo_index: int) -> TodoItem:
        with self.lock:
            self.get_todo(list_index, todo_index)
            removed = self.lists[list_index].todos.pop(todo_index)
        logger.info("Session %s deleted todo %d", self.session_id[:8], removed.id)
        return removed

    def set_todo_status(self, list_index: int, todo_index: int, completed: bool) -> TodoItem:
        with self.lock:
            todo = self.get_todo(list_index, todo_index)
            todo.completed = bool(completed)
        logger.info(
            "Session %s set todo %d completed=%s",
            self.session_id[:8],
            todo.id,
            todo.completed,
        )
        return todo

    def complete_all(self, list_index: int) -> TodoList:
        with self.lock:
            todo_list = self.get_list(list_index)
            for todo in todo_list.todos:
                todo.completed = True
        logger.info("Session %s completed all todos in list %d", self.session_id[:8], todo_list.id)
        return todo_list
