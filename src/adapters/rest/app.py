"""
FastAPI application - REST adapter for the Academic Tutor Agent.

Usage:
    python run_api.py

Or directly:
    uvicorn adapters.rest.app:app --host 0.0.0.0 --port 8000 --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from infrastructure.config import Settings
from factory import ServiceFactory
from domain.exceptions import (
    AuthenticationError,
    DomainError,
    ModelCallError,
    NotFoundError,
    RateLimitExceededError,
    ServiceUnavailableError,
)
from adapters.rest.dependencies import set_factory
from adapters.rest.routers import tutor

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ServiceUnavailableError, 503),
    (RateLimitExceededError, 429),
    (NotFoundError, 404),
    (ModelCallError, 502),
    (AuthenticationError, 401),
]


def create_app(factory: Optional[ServiceFactory] = None) -> FastAPI:
    """Build the FastAPI app.

    When *factory* is given it must already be initialized; otherwise one
    is built from the environment at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if factory is None:
            config = Settings.from_env()
            logging.basicConfig(level=config.log_level)
            built = ServiceFactory(config)
            await built.initialize()
            set_factory(built)
        yield
        # No teardown needed: aiosqlite connections are per-operation

    if factory is not None:
        set_factory(factory)

    app = FastAPI(
        title="Academic Tutor Agent",
        version=VERSION,
        description="Conversational tutor that answers questions and acts on the platform.",
        lifespan=lifespan,
    )

    # CORS: permissive for development; tighten allowed_origins in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code = 500
        for error_type, code in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                status_code = code
                break
        if status_code == 500:
            logger.error("Unhandled domain error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    app.include_router(tutor.router)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "version": VERSION}

    return app


app = create_app()
