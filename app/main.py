"""
app/main.py

FastAPI application entry point.

Responsibilities:
  - Create the FastAPI app with metadata from config
  - Install permissive CORS and register the verification router
  - Turn 405 responses into the verification envelope
  - Add a global exception handler for uncaught AppBaseException
  - Expose a /health endpoint for liveness checks
"""

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.middleware.cors import CORS_HEADERS, setup_cors
from app.api.verify_controller import router as verify_router
from app.core.config import settings
from app.core.constants import INTERNAL_ERROR_MESSAGE, METHOD_NOT_ALLOWED_MESSAGE
from app.core.exceptions import AppBaseException
from app.core.logger import get_logger

logger = get_logger(__name__)

# ── App instance ───────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "Verifies applicant documents (resumes, cover letters) before they "
        "are accepted into storage: extension/MIME consistency, magic-byte "
        "signatures, size caps, suspicious-content scan and destination policy."
    ),
)

setup_cors(app)

# ── Routers ────────────────────────────────────────────────────────────────────

app.include_router(verify_router)

# ── Exception handlers ─────────────────────────────────────────────────────────

@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Wrong methods get the verification envelope; everything else the default."""
    if exc.status_code == 405:
        logger.warning("%s %s rejected — method not allowed.", request.method, request.url.path)
        return JSONResponse(
            status_code=405,
            content={"valid": False, "error": METHOD_NOT_ALLOWED_MESSAGE},
            headers={**CORS_HEADERS, **(exc.headers or {})},
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(AppBaseException)
async def app_exception_handler(request: Request, exc: AppBaseException) -> JSONResponse:
    """
    Safety-net for any AppBaseException that escapes controller-level handling.
    The caller only ever sees the generic envelope.
    """
    logger.exception("Unhandled application error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"valid": False, "error": INTERNAL_ERROR_MESSAGE})


# ── Health endpoint ────────────────────────────────────────────────────────────

@app.get("/health", tags=["Health"], summary="Liveness check")
async def health() -> dict:
    """Returns 200 OK when the service is running."""
    return {"status": "ok", "version": settings.app_version}
