"""
Employee API
FastAPI application proxying the upstream employee service.
"""

import logging
import os
from typing import List

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.exceptions import RateLimitExceededError, UpstreamServiceError
from app.routers import employees
from app.services.employees import get_all_employees
from app.upstream import EMPLOYEE_SERVICE_BASE_URL, employee_http_client

# Configure logging to output to console
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

app = FastAPI(
    title="Employee API",
    description="REST façade over the upstream employee service with salary aggregates",
    version=API_VERSION,
)


def get_cors_origins() -> List[str]:
    """
    Build the list of allowed CORS origins.

    Always includes http://localhost:3000 (local frontend dev server).

    Additional origins are read from the CORS_ORIGINS environment variable
    as a comma-separated list, e.g.:
        CORS_ORIGINS=https://hr.example.com,https://admin.example.com

    Duplicates are removed while preserving order.
    """
    always_included = ["http://localhost:3000"]

    extra_origins: List[str] = []
    cors_env = os.getenv("CORS_ORIGINS", "").strip()
    if cors_env:
        extra_origins = [o.strip() for o in cors_env.split(",") if o.strip()]

    seen: set = set()
    origins: List[str] = []
    for origin in always_included + extra_origins:
        if origin not in seen:
            seen.add(origin)
            origins.append(origin)

    return origins


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(employees.router, prefix="/employees", tags=["employees"])


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

@app.exception_handler(RateLimitExceededError)
async def handle_rate_limit(request: Request, exc: RateLimitExceededError) -> JSONResponse:
    logger.error("Handling RateLimitExceededError: %s", exc)
    return JSONResponse(status_code=429, content={"detail": str(exc)})


@app.exception_handler(UpstreamServiceError)
async def handle_upstream_error(request: Request, exc: UpstreamServiceError) -> JSONResponse:
    logger.error("Upstream failure in %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject invalid request bodies with 400 before anything reaches the upstream."""
    logger.info("Rejected invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception in %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

@app.on_event("startup")
async def log_startup_urls() -> None:
    """
    Log where the API listens and which upstream it proxies.

    The port shown is taken from ``HOST_PORT`` so Docker-mapped ports are
    reported correctly. Defaults to 8000 for local dev.
    """
    host_port = os.getenv("HOST_PORT", "8000")
    logger.info(
        "Employee API running at:\n"
        "  Local:    http://localhost:%s\n"
        "  Upstream: %s",
        host_port,
        EMPLOYEE_SERVICE_BASE_URL,
    )


@app.on_event("shutdown")
async def close_upstream_client() -> None:
    await employee_http_client.aclose()


# ---------------------------------------------------------------------------
# Service endpoints
# ---------------------------------------------------------------------------

@app.get("/")
async def root():
    return {"message": "Employee API", "version": API_VERSION}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/health/upstream")
async def health_upstream():
    """
    Test the connection to the upstream employee service.

    Lists employees through the regular service path. Returns 503 if the
    upstream is unreachable, failing, or rate limiting us.
    """
    try:
        await get_all_employees()
    except (RateLimitExceededError, UpstreamServiceError) as exc:
        logger.error("Upstream health check failed: %s", exc)
        raise HTTPException(
            status_code=503,
            detail=f"Upstream check failed: {str(exc)}",
        )

    return {"status": "ok", "upstream": "reachable"}
