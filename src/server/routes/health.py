"""Liveness endpoint."""

from __future__ import annotations

from fastapi import FastAPI

from ..schemas import HealthResponse


def register_health_routes(app: FastAPI) -> None:
    """Register the health check endpoint."""

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Simple health check endpoint."""
        return HealthResponse(status="ok")
