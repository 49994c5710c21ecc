"""Todo mutations inside a list."""

from __future__ import annotations

import asyncio
import logging

from fastapi import Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import RedirectResponse

from src.todo_lists import ListSession, NotFoundError

from ..dependencies import flash_not_found, get_list_session, mutate_or_snapshot, redirect, render

logger = logging.getLogger(__name__)


def register_todo_routes(app: FastAPI) -> None:
    """Register todo mutation endpoints."""

    @app.post("/lists/{list_index}/todos")
    async def add_todo(
        request: Request,
        list_index: int,
        todo: str = Form(""),
        list_session: ListSession = Depends(get_list_session),
    ):
        """Add a todo, or re-render the list page with the validation error."""
        try:
            rejected = await asyncio.to_thread(
                mutate_or_snapshot,
                list_session,
                list_index,
                list_session.add_todo,
                todo,
            )
        except NotFoundError as exc:
            return await _not_found(list_session, exc, list_index)
        except Exception as exc:
            logger.exception("Failed to add todo to list %d: %s", list_index, exc)
            raise HTTPException(status_code=500, detail="Failed to add todo") from exc
        if rejected is not None:
            logger.info("Rejected todo for list %d", list_index)
            return await render(
                request,
                list_session,
                "list.html",
                status_code=422,
                todo_list=rejected,
                todo_name=todo,
            )
        await asyncio.to_thread(list_session.flash, "success", "The todo has been added.")
        return redirect(f"/lists/{list_index}")

    @app.post("/lists/{list_index}/delete/{todo_index}")
    async def delete_todo(
        list_index: int,
        todo_index: int,
        list_session: ListSession = Depends(get_list_session),
    ) -> RedirectResponse:
        try:
            await asyncio.to_thread(list_session.delete_todo, list_index, todo_index)
        except NotFoundError as exc:
            return await _not_found(list_session, exc, list_index)
        except Exception as exc:
            logger.exception("Failed to delete todo %d from list %d: %s", todo_index, list_index, exc)
            raise HTTPException(status_code=500, detail="Failed to delete todo") from exc
        await asyncio.to_thread(list_session.flash, "success", "The todo has been deleted.")
        return redirect(f"/lists/{list_index}")

    @app.post("/lists/{list_index}/todo/{todo_index}")
    async def set_todo_status(
        list_index: int,
        todo_index: int,
        completed: bool = Form(False),
        list_session: ListSession = Depends(get_list_session),
    ) -> RedirectResponse:
        try:
            await asyncio.to_thread(
                list_session.set_todo_status, list_index, todo_index, completed
            )
        except NotFoundError as exc:
            return await _not_found(list_session, exc, list_index)
        except Exception as exc:
            logger.exception("Failed to update todo %d in list %d: %s", todo_index, list_index, exc)
            raise HTTPException(status_code=500, detail="Failed to update todo") from exc
        await asyncio.to_thread(list_session.flash, "success", "The todo has been updated.")
        return redirect(f"/lists/{list_index}")

    @app.post("/lists/{list_index}/complete_all")
    async def complete_all(
        list_index: int,
        list_session: ListSession = Depends(get_list_session),
    ) -> RedirectResponse:
        try:
            await asyncio.to_thread(list_session.complete_all, list_index)
        except NotFoundError as exc:
            return await _not_found(list_session, exc, list_index)
        except Exception as exc:
            logger.exception("Failed to complete todos in list %d: %s", list_index, exc)
            raise HTTPException(status_code=500, detail="Failed to complete todos") from exc
        await asyncio.to_thread(list_session.flash, "success", "All todos have been completed.")
        return redirect(f"/lists/{list_index}")


async def _not_found(list_session: ListSession, exc: NotFoundError, list_index: int) -> RedirectResponse:
    """Send the browser back to the list, or to the index if the list itself is gone."""
    logger.warning("Session %s: %s", list_session.session_id[:8], exc)
    url = await asyncio.to_thread(flash_not_found, list_session, exc, list_index)
    return redirect(url)
