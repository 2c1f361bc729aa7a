from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from transitionpath.core.config import settings
from transitionpath.core.errors import global_exception_handler, http_exception_handler
from transitionpath.core.sentry import init_sentry
from transitionpath.middleware.security import (
    RequestBodySizeLimitMiddleware,
    SecurityHeadersMiddleware,
)
from transitionpath.modules.assessment.router import router as assessment_router
from transitionpath.modules.matching.router import router as matching_router
from transitionpath.modules.reference.router import router as reference_router

# ── Sentry: must be initialised BEFORE the FastAPI app is created ─────────────
init_sentry(settings.SENTRY_DSN, settings.SENTRY_ENVIRONMENT, settings.APP_VERSION)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    logger.info(
        "Starting TransitionPath API",
        env=settings.APP_ENV,
        reference_year=settings.ASSESSMENT_REFERENCE_YEAR,
        kpi_gateway=bool(settings.KPI_GATEWAY_URL),
    )
    yield
    logger.info("Shutting down TransitionPath API")


_is_prod = settings.APP_ENV == "production"

app = FastAPI(
    title="TransitionPath API",
    description="Transition-finance eligibility assessment for African projects.",
    version="0.1.0",
    docs_url=None if _is_prod else "/docs",
    redoc_url=None if _is_prod else "/redoc",
    openapi_url=None if _is_prod else "/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", "X-Request-ID"],
)
# Security middleware (added last = outermost = first to see requests, last to touch responses)
app.add_middleware(
    RequestBodySizeLimitMiddleware,  # type: ignore[arg-type]
    max_bytes=settings.MAX_REQUEST_BODY_BYTES,
)
app.add_middleware(
    SecurityHeadersMiddleware,  # type: ignore[arg-type]
    is_production=_is_prod,
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, global_exception_handler)


# ── X-API-Version response header ────────────────────────────────────────────


@app.middleware("http")
async def add_version_header(request: Request, call_next) -> Response:
    response = await call_next(request)
    response.headers["X-API-Version"] = "v1"
    return response


# ── Health check (root-level, not under /v1) ─────────────────────────────────


@app.get("/health")
async def health_check() -> dict:
    """Liveness probe. The service is stateless, so there is nothing downstream to ping."""
    return {
        "status": "healthy",
        "service": "transitionpath-api",
        "version": settings.APP_VERSION or "dev",
    }


# ── API v1 ───────────────────────────────────────────────────────────────────

api_v1 = APIRouter(prefix="/v1")
api_v1.include_router(assessment_router)
api_v1.include_router(reference_router)
api_v1.include_router(matching_router)

app.include_router(api_v1)
