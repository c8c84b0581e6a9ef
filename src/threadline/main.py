# src/threadline/main.py
"""Main entry point for the Threadline application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from threadline.api.v1 import (
    auth_router,
    communities_router,
    navigation_router,
    revalidation_router,
    threads_router,
    users_router,
)
from threadline.core.errors import ActionError, ErrorKind
from threadline.core.logging import configure_logging
from threadline.core.settings import settings
from threadline.db.session import database

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UPSTREAM: 503,
}

# Initialize FastAPI app
app = FastAPI(
    title="Threadline API",
    description="Communities, threads and the people who write them",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(communities_router, prefix="/api/v1")
app.include_router(threads_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(navigation_router, prefix="/api/v1")
app.include_router(revalidation_router, prefix="/api/v1")


@app.exception_handler(ActionError)
async def action_error_handler(_request: Request, exc: ActionError) -> JSONResponse:
    """Translate action failures into HTTP responses."""
    return JSONResponse(
        status_code=ERROR_STATUS[exc.kind],
        content={"detail": str(exc), "kind": exc.kind.value},
    )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    database.connect()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    database.dispose()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Threadline API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("threadline.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
