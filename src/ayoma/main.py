# src/ayoma/main.py
"""Main entry point for the Ayoma application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from ayoma.api.v1 import auth_router, posts_router, users_router
from ayoma.core.errors import AyomaError, Unauthenticated, ValidationError
from ayoma.core.settings import settings
from ayoma.db.session import get_store
from ayoma.services.seed import seed_demo_data

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Ayoma API",
    description="Small social network backed by a JSON-file datastore",
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
app.include_router(users_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")

# Uploaded media is served from its storage directory
settings.upload_dir.mkdir(parents=True, exist_ok=True)
app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=settings.upload_dir),
    name="uploads",
)


@app.exception_handler(AyomaError)
async def domain_error_handler(request: Request, exc: AyomaError) -> JSONResponse:
    """Map domain errors to their HTTP status with a readable message."""
    if not isinstance(exc, Unauthenticated):
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report missing or malformed request fields as a 400."""
    fields = sorted({str(error["loc"][-1]) for error in exc.errors() if error.get("loc")})
    message = ValidationError.default_message
    if fields:
        message = f"Missing or invalid fields: {', '.join(fields)}"
    logger.info("%s %s rejected: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Hide unexpected failures behind a generic 500."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.on_event("startup")
def on_startup() -> None:
    if settings.seed_demo_data:
        seed_demo_data(get_store())


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run("ayoma.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    run()
