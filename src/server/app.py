"""FastAPI application bootstrap."""

from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from .dependencies import get_config, get_session_store, get_templates
from .routes import (
    register_health_routes,
    register_list_routes,
    register_todo_routes,
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_config()
    app = FastAPI(title="Todo Lists", version="1.0.0")

    app.add_middleware(
        SessionMiddleware,
        secret_key=config.session.secret_key,
        session_cookie=config.session.cookie_name,
        max_age=config.session.ttl_seconds,
        same_site="lax",
    )

    register_health_routes(app)
    register_list_routes(app)
    register_todo_routes(app)

    return app


app = create_app()

__all__ = ["app", "create_app", "get_session_store", "get_templates"]
