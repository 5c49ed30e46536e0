"""
api/main.py -- FastAPI application entry point for the Bookstore API.

Run with:      python main.py serve
               uvicorn api.main:app --reload

Middleware stack (outermost to innermost):
  1. TrustedHostMiddleware -- rejects requests with unexpected Host headers
  2. CORSMiddleware        -- adds CORS headers for allowed browser origins
  3. SlowAPIMiddleware     -- enforces per-route rate limits from api.limiter

Lifespan opens the stores, wires the resource handlers onto app.state and
seeds the baseline users on startup; shutdown disposes the engines.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.handlers import ResourceHandler
from api.limiter import limiter
from api.mapper import AuthorMapper, BookMapper
from api.models import HealthResponse
from api.responses import GENERIC_FAILURE, error_response, format_errors
from api.routes.authors import router as authors_router
from api.routes.books import router as books_router
from api.routes.home import router as home_router
from api.routes.users import router as users_router
from auth.seed import seed_identity
from auth.store import UserStore
from catalog.store import CatalogStore
from core.config import get_settings

__version__ = "1.0.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("bookstore.api")

_settings = get_settings()

# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def attach_stores(app: FastAPI, catalog: CatalogStore, user_store: UserStore) -> None:
    """Put the stores and the handlers built on them onto app.state.

    Handlers get their repository and mapper passed in explicitly; routes
    only ever read app.state.author_handler / app.state.book_handler.
    """
    app.state.catalog = catalog
    app.state.user_store = user_store
    app.state.author_handler = ResourceHandler("Author", catalog.authors, AuthorMapper())
    app.state.book_handler = ResourceHandler("Book", catalog.books, BookMapper())


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open stores on startup, dispose them on shutdown.

    Seeding runs after the stores exist and before the first request.
    """
    logger.info("Bookstore API starting up")
    catalog = CatalogStore(_settings.database_url)
    user_store = UserStore(_settings.database_url)
    attach_stores(app, catalog, user_store)
    logger.info("Stores initialized")

    if _settings.seed_on_startup:
        report = seed_identity(user_store, _settings.seed_password)
        logger.info("Seed complete (roles_created=%d, users_created=%d)", report.roles_created, report.users_created)

    yield

    catalog.close()
    user_store.close()
    logger.info("Bookstore API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Bookstore API",
    description="Books and authors catalog with JWT authentication.",
    version=__version__,
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware stack
# ---------------------------------------------------------------------------

app.add_middleware(TrustedHostMiddleware, allowed_hosts=_settings.allowed_hosts)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)

app.add_middleware(SlowAPIMiddleware)

# SlowAPI looks for app.state.limiter by convention.
app.state.limiter = limiter


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(books_router, prefix="/api", tags=["Books"])
app.include_router(authors_router, prefix="/api", tags=["Authors"])
app.include_router(users_router, prefix="/api", tags=["Users"])
app.include_router(home_router, prefix="/api", tags=["Home"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same ErrorResponse envelope as api/responses.py so
# clients parse every error the same way.
# ---------------------------------------------------------------------------


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with a Retry-After header when a rate limit is exceeded."""
    retry_after = int(getattr(exc, "retry_after", 60))
    response = error_response(429, "rate_limited", "Too many requests.", str(exc.detail))
    response.headers["Retry-After"] = str(retry_after)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and non-integer path ids are client errors: 400."""
    detail = "; ".join(format_errors(exc.errors()))
    return error_response(400, "validation_error", "Request validation failed.", detail)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return a structured error for all HTTP exceptions.

    Dependencies raise HTTPException with a dict detail already shaped like
    ErrorDetail; use it directly rather than stringifying it.
    """
    if isinstance(exc.detail, dict):
        response = JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
    else:
        response = error_response(exc.status_code, f"http_{exc.status_code}", str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for anything that escapes a route. Detail goes to the log only."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return error_response(500, "internal_error", GENERIC_FAILURE)


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------


@app.get("/api/health", tags=["Health"])
async def health() -> HealthResponse:
    """Return API liveness and current version."""
    return HealthResponse(version=__version__)
