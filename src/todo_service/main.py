from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .db import connect_or_exit
from .exceptions import InvalidPayloadError
from .logging_config import configure_logging
from .repositories import Repository
from .routers import todos as todos_router
from .settings import DATABASE_NAME, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Create, list, fetch, edit and delete Todo items.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Open the MongoDB repository once for the process and close it on shutdown.

    Logging is configured here as well, so serving `todo_service.main:app`
    straight from uvicorn still reports to standard output. A repository
    injected through create_app() is used as-is and left open.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    if app.state.repository is not None:
        yield
        return

    repository = await connect_or_exit(settings)
    app.state.repository = repository
    try:
        yield
    finally:
        await repository.close()
        app.state.repository = None
        logger.info("Closed connection to `%s`", DATABASE_NAME)


async def invalid_payload_handler(request: Request, exc: InvalidPayloadError) -> JSONResponse:
    """Return ``{"error": message}`` with status 400 for rejected input."""
    return JSONResponse(status_code=400, content={"error": exc.message})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request bodies FastAPI could not parse.

    Response format:
        {
            "error": "Request validation failed",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    return JSONResponse(
        status_code=400,
        content={
            "error": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


# PUBLIC_INTERFACE
def create_app(repository: Optional[Repository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        repository: Store to serve requests from. When omitted, the lifespan
            connects to MongoDB using DB_CONNECTION_URL and exits the process
            if that fails.

    Returns:
        The configured FastAPI app.
    """
    settings = get_settings()

    app = FastAPI(
        title="Todo Service",
        description="CRUD API for todo items stored in MongoDB.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.repository = repository

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidPayloadError, invalid_payload_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    async def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "database": DATABASE_NAME}

    app.include_router(todos_router.router)
    return app


app = create_app()
