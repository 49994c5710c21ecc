"""Read-only helpers used when rendering lists and todos."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .models import TodoItem, TodoList


def is_list_complete(todo_list: TodoList) -> bool:
    """True when the list has at least one todo and every todo is completed."""
    return len(todo_list.todos) > 0 and all(todo.completed for todo in todo_list.todos)


def list_class(todo_list: TodoList) -> str:
    return "complete" if is_list_complete(todo_list) else ""


def remaining_count(todo_list: TodoList) -> int:
    return sum(1 for todo in todo_list.todos if not todo.completed)


def total_count(todo_list: TodoList) -> int:
    return len(todo_list.todos)


def _stable_partition(items: Sequence, is_done) -> List[Tuple[int, object]]:
    pending: List[Tuple[int, object]] = []
    done: List[Tuple[int, object]] = []
    for index, item in enumerate(items):
        (done if is_done(item) else pending).append((index, item))
    return pending + done


def sorted_lists(lists: Iterable[TodoList]) -> List[Tuple[int, TodoList]]:
    """Incomplete lists first, then complete ones, each group in original order.

    Returns ``(position, list)`` pairs so templates can still link by position.
    """
    return _stable_partition(list(lists), is_list_complete)


def sorted_todos(todos: Iterable[TodoItem]) -> List[Tuple[int, TodoItem]]:
    """Incomplete todos first, then completed ones, each group in original order."""
    return _stable_partition(list(todos), lambda todo: todo.completed)
