# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
FastAPI application factory.

Responsibilities
----------------
* Instantiate the FastAPI app.
* Register CORS and request-logging middleware.
* Translate service errors (``core.errors.AppError``) and body-validation
  failures into JSON responses.
* Mount the auth (/api/auth) and admin user (/api/users) routers.
* Expose a /health endpoint for container liveness checks.

Production note
---------------
CORS allow_origins is set to the local dashboard only.  In a production
deployment this must be changed to the exact frontend origin.
"""

import time

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from auth.router import router as auth_router
from admin.router import router as admin_router
from core.errors import AppError
from core.logger import logger

app = FastAPI(title="Storefront Identity", version="1.0.0")

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Only the URL and metadata are recorded.  Bodies (passwords) and the reset
# secret path segment are never echoed.


def _loggable_path(path: str) -> str:
    if path.startswith("/api/auth/resetpassword/"):
        return "/api/auth/resetpassword/<secret>"
    return path


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            _loggable_path(request.url.path),
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(_RequestLogMiddleware)

# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------


@app.exception_handler(AppError)
async def _app_error_handler(request: Request, exc: AppError):
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are the caller's fault: 400, not FastAPI's 422."""
    logger.info("Rejected %s %s: invalid body", request.method, _loggable_path(request.url.path))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid user data", "errors": jsonable_encoder(exc.errors())},
    )


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(admin_router)

# ---------------------------------------------------------------------------
# Lifecycle / health
# ---------------------------------------------------------------------------


@app.on_event("startup")
async def _on_startup():
    logger.info("Storefront identity service starting up")


@app.on_event("shutdown")
async def _on_shutdown():
    logger.info("Storefront identity service shutting down")


@app.get("/health")
def health():
    return {"status": "ok"}
