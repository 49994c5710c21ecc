"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Any, Callable, List, Optional

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from src.list_manager import Config, setup_logger
from src.todo_lists import ListSession, NotFoundError, SessionStore, TodoList, ValidationError
from src.todo_lists.views import (
    list_class,
    remaining_count,
    sorted_lists,
    sorted_todos,
    total_count,
)

from .schemas import FlashMessage, ListDetail, ListSummary, TodoView

SESSION_ID_KEY = "session_id"

config = Config.load()
setup_logger(log_level=config.log_level, log_file=config.log_file)


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Configuration the app was started with."""
    return config


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Singleton SessionStore."""
    session_config = get_config().session
    return SessionStore(
        ttl_seconds=session_config.ttl_seconds,
        max_sessions=session_config.max_sessions,
    )


@lru_cache(maxsize=1)
def get_templates() -> Jinja2Templates:
    """Singleton template renderer."""
    return Jinja2Templates(directory=get_config().templates_dir)


def get_list_session(request: Request) -> ListSession:
    """Resolve the browser's ListSession, starting one on first contact.

    The id lives in the signed cookie managed by SessionMiddleware; the lists
    themselves never leave the server.
    """
    store = get_session_store()
    session_id, list_session = store.get_or_create(request.session.get(SESSION_ID_KEY))
    request.session[SESSION_ID_KEY] = session_id
    return list_session


def serialize_list_summary(index: int, todo_list: TodoList) -> ListSummary:
    """Convert a domain TodoList into its index-page view."""
    return ListSummary(
        index=index,
        id=todo_list.id,
        name=todo_list.name,
        css_class=list_class(todo_list),
        remaining_count=remaining_count(todo_list),
        total_count=total_count(todo_list),
    )


def serialize_list_detail(index: int, todo_list: TodoList) -> ListDetail:
    """Convert a domain TodoList into its detail view with sorted todos."""
    summary = serialize_list_summary(index, todo_list)
    return ListDetail(
        **summary.model_dump(),
        todos=[
            TodoView(index=todo_index, id=todo.id, name=todo.name, completed=todo.completed)
            for todo_index, todo in sorted_todos(todo_list.todos)
        ],
    )


def build_list_summaries(list_session: ListSession) -> List[ListSummary]:
    """Snapshot every list of the session, incomplete lists first."""
    with list_session.lock:
        return [serialize_list_summary(index, todo_list) for index, todo_list in sorted_lists(list_session.lists)]


def build_list_detail(list_session: ListSession, index: int) -> ListDetail:
    """Snapshot one list. Raises NotFoundError for unknown positions."""
    with list_session.lock:
        return serialize_list_detail(index, list_session.get_list(index))


def mutate_or_snapshot(
    list_session: ListSession,
    list_index: int,
    operation: Callable[..., Any],
    *args: Any,
) -> Optional[ListDetail]:
    """Run ``operation(list_index, *args)`` under the session lock.

    Returns None on success. On a validation failure the error is flashed and a
    snapshot of the list is returned, taken before the lock is released so the
    re-rendered page matches the state the validation ran against. NotFoundError
    propagates.
    """
    with list_session.lock:
        try:
            operation(list_index, *args)
        except ValidationError as exc:
            list_session.flash("error", str(exc))
            return serialize_list_detail(list_index, list_session.get_list(list_index))
    return None


def flash_not_found(list_session: ListSession, exc: NotFoundError, list_index: int) -> str:
    """Flash the error and return the closest page that still exists."""
    with list_session.lock:
        list_session.flash("error", str(exc))
        list_exists = 0 <= list_index < len(list_session.lists)
    return f"/lists/{list_index}" if list_exists else "/lists"


async def render(
    request: Request,
    list_session: ListSession,
    template_name: str,
    status_code: int = 200,
    **context: Any,
) -> HTMLResponse:
    """Render a page and consume the session's pending flash message."""
    pending = await asyncio.to_thread(list_session.pop_flash)
    flash = FlashMessage(kind=pending[0], message=pending[1]) if pending else None
    return get_templates().TemplateResponse(
        request,
        template_name,
        {"flash": flash, **context},
        status_code=status_code,
    )


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=302)
