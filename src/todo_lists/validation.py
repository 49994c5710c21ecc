"""Name validation rules for lists and todos."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import TodoList

MIN_NAME_LENGTH = 1
MAX_NAME_LENGTH = 100


def _length_ok(name: str) -> bool:
    return MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH


def error_for_list_name(
    name: str,
    lists: Iterable[TodoList],
    exclude: Optional[TodoList] = None,
) -> Optional[str]:
    """Return an error message if the list name is invalid, otherwise None.

    ``exclude`` is the list being renamed; its own current name does not count
    as a duplicate.
    """
    if not _length_ok(name):
        return f"List name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters."
    if any(existing.name == name for existing in lists if existing is not exclude):
        return "List name must be unique."
    return None


def error_for_todo(name: str) -> Optional[str]:
    """Return an error message if the todo name is invalid, otherwise None."""
    if not _length_ok(name):
        return f"Todo name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters."
    return None
