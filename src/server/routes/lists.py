"""List pages and list mutations."""

from __future__ import annotations

import asyncio
import logging

from fastapi import Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from src.todo_lists import ListSession, NotFoundError, ValidationError

from ..dependencies import (
    build_list_detail,
    build_list_summaries,
    flash_not_found,
    get_list_session,
    mutate_or_snapshot,
    redirect,
    render,
)

logger = logging.getLogger(__name__)


def register_list_routes(app: FastAPI) -> None:
    """Register list CRUD pages."""

    @app.get("/")
    async def index() -> RedirectResponse:
        return redirect("/lists")

    @app.get("/lists", response_class=HTMLResponse)
    async def show_lists(
        request: Request,
        list_session: ListSession = Depends(get_list_session),
    ) -> HTMLResponse:
        """All lists, incomplete first."""
        try:
            lists = await asyncio.to_thread(build_list_summaries, list_session)
        except Exception as exc:
            logger.exception("Failed to list todo lists: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list todo lists") from exc
        return await render(request, list_session, "lists.html", lists=lists)

    # Registered before /lists/{list_index} so "new" is not parsed as an index.
    @app.get("/lists/new", response_class=HTMLResponse)
    async def new_list_form(
        request: Request,
        list_session: ListSession = Depends(get_list_session),
    ) -> HTMLResponse:
        return await render(request, list_session, "new_list.html", list_name="")

    @app.post("/lists")
    async def create_list(
        request: Request,
        list_name: str = Form(""),
        list_session: ListSession = Depends(get_list_session),
    ):
        """Create a list, or re-render the form with the validation error."""
        try:
            await asyncio.to_thread(list_session.create_list, list_name)
        except ValidationError as exc:
            logger.info("Rejected list name: %s", exc)
            await asyncio.to_thread(list_session.flash, "error", str(exc))
            return await render(
                request, list_session, "new_list.html", status_code=422, list_name=list_name
            )
        except Exception as exc:
            logger.exception("Failed to create list: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to create list") from exc
        await asyncio.to_thread(list_session.flash, "success", "The list has been created.")
        return redirect("/lists")

    @app.get("/lists/{list_index}", response_class=HTMLResponse)
    async def show_list(
        request: Request,
        list_index: int,
        list_session: ListSession = Depends(get_list_session),
    ):
        try:
            detail = await asyncio.to_thread(build_list_detail, list_session, list_index)
        except NotFoundError as exc:
            return await _not_found(list_session, exc, list_index)
        except Exception as exc:
            logger.exception("Failed to show list %d: %s", list_index, exc)
            raise HTTPException(status_code=500, detail="Failed to show list") from exc
        return await render(request, list_session, "list.html", todo_list=detail, todo_name="")

    @app.get("/lists/{list_index}/edit", response_class=HTMLResponse)
    async def edit_list_form(
        request: Request,
        list_index: int,
        list_session: ListSession = Depends(get_list_session),
    ):
        try:
            detail = await asyncio.to_thread(build_list_detail, list_session, list_index)
        except NotFoundError as exc:
            return await _not_found(list_session, exc, list_index)
        except Exception as exc:
            logger.exception("Failed to load list %d for editing: %s", list_index, exc)
            raise HTTPException(status_code=500, detail="Failed to load list") from exc
        return await render(
            request, list_session, "edit_list.html", todo_list=detail, new_list_name=detail.name
        )

    @app.post("/lists/{list_index}")
    async def rename_list(
        request: Request,
        list_index: int,
        new_list_name: str = Form(""),
        list_session: ListSession = Depends(get_list_session),
    ):
        """Rename a list, or re-render the edit form with the validation error."""
        try:
            rejected = await asyncio.to_thread(
                mutate_or_snapshot,
                list_session,
                list_index,
                list_session.rename_list,
                new_list_name,
            )
        except NotFoundError as exc:
            return await _not_found(list_session, exc, list_index)
        except Exception as exc:
            logger.exception("Failed to rename list %d: %s", list_index, exc)
            raise HTTPException(status_code=500, detail="Failed to rename list") from exc
        if rejected is not None:
            logger.info("Rejected new name for list %d", list_index)
            return await render(
                request,
                list_session,
                "edit_list.html",
                status_code=422,
                todo_list=rejected,
                new_list_name=new_list_name,
            )
        await asyncio.to_thread(list_session.flash, "success", "The list name has been updated.")
        return redirect(f"/lists/{list_index}")

    @app.post("/lists/{list_index}/delete")
    async def delete_list(
        list_index: int,
        list_session: ListSession = Depends(get_list_session),
    ) -> RedirectResponse:
        try:
            await asyncio.to_thread(list_session.delete_list, list_index)
        except NotFoundError as exc:
            return await _not_found(list_session, exc, list_index)
        except Exception as exc:
            logger.exception("Failed to delete list %d: %s", list_index, exc)
            raise HTTPException(status_code=500, detail="Failed to delete list") from exc
        await asyncio.to_thread(list_session.flash, "success", "The list has been deleted.")
        return redirect("/lists")


async def _not_found(list_session: ListSession, exc: NotFoundError, list_index: int) -> RedirectResponse:
    logger.warning("Session %s: %s", list_session.session_id[:8], exc)
    await asyncio.to_thread(flash_not_found, list_session, exc, list_index)
    return redirect("/lists")
