"""
FastAPI app entry point for the task tracker.
Run with `uvicorn taskapi.api:app` or `python tracker.py serve`.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import APP_NAME, __version__
from .db import get_db_path
from .services.task_svc import TaskService
from .routes import base as base_routes
from .routes import tasks as task_routes
from .routes import logs as logs_routes

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    sources = {err.get("loc", ("",))[0] for err in exc.errors()}
    if "path" in sources:
        return "Invalid task ID"
    if "body" in sources:
        return "Invalid JSON payload"
    return "Invalid request parameters"


def create_app(db_path: str | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        path = db_path or get_db_path()
        svc = TaskService(path)
        # a failure here aborts startup
        svc.ensure_schema()
        app.state.task_service = svc
        logger.info("%s %s using %s", APP_NAME, __version__, path)
        yield

    app = FastAPI(title=APP_NAME, version=__version__, lifespan=lifespan)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    app.include_router(base_routes.router)
    app.include_router(task_routes.router)
    app.include_router(logs_routes.router)
    return app


app = create_app()
