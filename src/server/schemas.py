"""Pydantic view models handed to the templates."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class FlashMessage(BaseModel):
    """One-shot message shown at the top of the next page."""

    kind: str = Field(..., description="success or error")
    message: str


class TodoView(BaseModel):
    """Snapshot of a todo as rendered in a list page."""

    index: int = Field(..., description="Current position inside the list")
    id: int
    name: str
    completed: bool


class ListSummary(BaseModel):
    """Snapshot of a list as rendered on the index page."""

    index: int = Field(..., description="Current position inside the session")
    id: int
    name: str
    css_class: str = ""
    remaining_count: int
    total_count: int


class ListDetail(ListSummary):
    """List snapshot including its todos, incomplete ones first."""

    todos: List[TodoView] = Field(default_factory=list)
