"""FastAPI application exposing the store over HTTP."""
from __future__ import annotations

from fastapi import FastAPI

from localstore.core.config import configure_logging
from localstore.routers import values as values_router
from localstore.services.events import ChangeNotifier


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    configure_logging()
    app = FastAPI(title="Local Data Store")
    app.state.notifier = ChangeNotifier()
    app.include_router(values_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
