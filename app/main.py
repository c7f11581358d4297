import logging
from urllib.parse import urlparse

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.api import (
    auth,
    calendar,
    dashboard,
    finance,
    memories,
    movies,
    partnerships,
    profile,
    shopping,
    tasks,
    wishlist,
)
from app.config import settings
from app.services.errors import DomainError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Our Home", version="0.1.0")


# =============================================================================
# CSRF Origin Validation Middleware
# =============================================================================


class CSRFOriginMiddleware(BaseHTTPMiddleware):
    """
    Validate Origin/Referer headers on state-changing requests to prevent CSRF.

    - POST, PUT, PATCH, DELETE must include a matching Origin or Referer header
    - GET, HEAD, OPTIONS are always allowed (safe methods)
    - Health check endpoints are exempt
    """

    SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}
    EXEMPT_PATHS = {"/health"}

    async def dispatch(self, request: Request, call_next):
        if request.method in self.SAFE_METHODS:
            return await call_next(request)

        if request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        expected_host = request.headers.get("host", "")

        # Origin wins over Referer when both are present
        source = request.headers.get("origin") or request.headers.get("referer")
        if not source:
            logger.warning(
                "CSRF missing origin/referer: method=%s, path=%s",
                request.method,
                request.url.path,
            )
            return JSONResponse(status_code=403, content={"detail": "Origin validation failed"})

        if urlparse(source).netloc != expected_host:
            logger.warning(
                "CSRF origin mismatch: source=%s, expected=%s, path=%s",
                source,
                expected_host,
                request.url.path,
            )
            return JSONResponse(status_code=403, content={"detail": "Origin validation failed"})

        return await call_next(request)


app.add_middleware(CSRFOriginMiddleware)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Turn service-layer errors into JSON responses with their status code."""
    if exc.status_code >= 409:
        logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(partnerships.router)
app.include_router(dashboard.router)
app.include_router(tasks.router)
app.include_router(shopping.router)
app.include_router(movies.router)
app.include_router(finance.router)
app.include_router(calendar.router)
app.include_router(wishlist.router)
app.include_router(memories.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
