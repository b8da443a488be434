from fastapi import FastAPI

from . import assignments, auth, health, trainings


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(trainings.router)
    app.include_router(assignments.router)
