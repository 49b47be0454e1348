"""Main FastAPI application module.

This module initializes the FastAPI application and registers all route handlers.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from roomshare.core.logging_config import setup_logging
from roomshare.config import (
    CORS_ALLOWED_ORIGINS,
    API_HOST,
    API_PORT,
    UPLOAD_DIR,
    UPLOAD_URL_PREFIX,
)
from roomshare.api.routes import content, rooms, users

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="Room Share API",
    description="Backend API service for sharing posts and announcements in class rooms.",
    version="1.0.0",
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register route handlers
app.include_router(users.router)
app.include_router(rooms.router)
app.include_router(content.router)

# Serve stored attachments when they live on local disk
if UPLOAD_URL_PREFIX.startswith("/"):
    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=UPLOAD_DIR), name="uploads")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report missing or empty request fields as 400 instead of 422."""
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    logger.info("Rejected %s %s: invalid fields %s", request.method, request.url.path, fields)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "All fields are required", "fields": fields},
    )


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root, returns API information and documentation links.

    Returns:
        Dictionary with API information and documentation links.
    """
    return {
        "name": "Room Share API",
        "version": "1.0.0",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": "/health",
    }


@app.get("/health", response_class=PlainTextResponse, summary="Health check", tags=["Health"])
def health() -> str:
    return "healthy"


def main() -> None:
    import uvicorn

    server_url = f"http://{API_HOST}:{API_PORT}"
    logger.info("Starting Room Share API on %s (docs at %s/docs)", server_url, server_url)
    uvicorn.run("roomshare.app:app", host=API_HOST, port=API_PORT)


# --- Startup code for direct execution ---
if __name__ == "__main__":
    main()
