"""Todo list domain exceptions.

Every exception carries a message that is safe to show to the user.
"""


class TodoListError(Exception):
    """Base class for todo list errors"""

    pass


class ValidationError(TodoListError):
    """A list or todo name was rejected"""

    pass


class NotFoundError(TodoListError):
    """A list or todo position does not exist in the session"""

    pass
