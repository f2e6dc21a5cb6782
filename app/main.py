"""
app/main.py

FastAPI application entry point.

Responsibilities:
  - Create the FastAPI app with metadata from config
  - Create the upload and template directories on startup
  - Register the index and upload routers
  - Answer framework HTTP errors (404, 405) and stray application
    errors with plain-text bodies
  - Expose a /health endpoint for liveness probes
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.index_controller import router as index_router
from app.api.upload_controller import router as upload_router
from app.core.bootstrap import ensure_directories
from app.core.config import settings
from app.core.exceptions import AppBaseException
from app.core.logger import get_logger

logger = get_logger(__name__)

# ── Lifespan ───────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_directories(settings)
    logger.info(
        "%s %s ready — uploads in '%s'.",
        settings.app_name, settings.app_version, settings.upload_dir,
    )
    yield
    logger.info("%s shutting down.", settings.app_name)


# ── App instance ───────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "Accepts exactly three PDF or JPEG uploads and returns them "
        "bundled into a single ZIP archive."
    ),
    lifespan=lifespan,
)

# ── Routers ────────────────────────────────────────────────────────────────────

app.include_router(index_router)
app.include_router(upload_router)

# ── Exception handlers ─────────────────────────────────────────────────────────

_HTTP_MESSAGES = {405: "Method not allowed"}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Router-level errors (unknown path, wrong method) as plain text."""
    message = _HTTP_MESSAGES.get(exc.status_code, str(exc.detail))
    return PlainTextResponse(message, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(AppBaseException)
async def app_exception_handler(request: Request, exc: AppBaseException) -> PlainTextResponse:
    """
    Safety-net for any AppBaseException that escapes controller-level handling.
    The client only ever sees a generic message.
    """
    logger.exception("Unhandled application error on %s: %s", request.url.path, exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


# ── Health endpoint ────────────────────────────────────────────────────────────

@app.get("/health", tags=["Health"], summary="Liveness probe")
async def health() -> dict:
    """Returns 200 OK when the service is running."""
    return {"status": "ok", "version": settings.app_version}


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    logger.info("Starting %s on %s:%d", settings.app_name, settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
