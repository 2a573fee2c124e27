"""
Maturity Assessment Service - Main Application
==============================================

FastAPI application for security maturity scoring and gap analysis.

Version: 0.1.0
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.maturity_assessment import __version__
from services.maturity_assessment.catalog import CatalogCache, CatalogLookupError
from services.maturity_assessment.dependencies import get_answer_store, get_catalog_cache
from services.maturity_assessment.routes import answers, reports, scores
from services.maturity_assessment.services.answers import AnswerStore
from shared.config import settings
from shared.logging import get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse

# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="maturity-assessment",
    version=__version__,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "maturity_assessment_starting",
        environment=settings.environment.value,
        port=settings.ports.maturity_assessment,
    )

    # Startup
    try:
        catalog = get_catalog_cache().get()
        logger.info(
            "catalog_ready",
            domains=len(catalog.domains),
            questions=len(catalog.questions),
        )
    except Exception as e:
        logger.error("startup_failed", error=str(e))
        raise

    yield

    # Shutdown
    logger.info("maturity_assessment_shutting_down")


# Create FastAPI application
app = FastAPI(
    title="Bastion Maturity Assessment Service",
    description="Security maturity scoring, critical gaps and remediation roadmap",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(
    cache: CatalogCache = Depends(get_catalog_cache),
    store: AnswerStore = Depends(get_answer_store),
) -> HealthResponse:
    """
    Service health check.

    Reports whether the reference catalog can be resolved and how many
    answers are stored.
    """
    components: dict[str, dict[str, Any]] = {}

    try:
        catalog = cache.get()
        components["catalog"] = {
            "status": "healthy",
            "questions": len(catalog.questions),
        }
    except Exception as e:
        components["catalog"] = {"status": "unhealthy", "error": str(e)}

    components["answers"] = {
        "status": "healthy",
        "count": len(store),
    }

    all_healthy = all(c.get("status") == "healthy" for c in components.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        service="maturity-assessment",
        version=__version__,
        components=components,
    )


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "Bastion Maturity Assessment Service",
        "version": __version__,
        "docs": "/docs",
    }


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(
    answers.router,
    prefix="/api/v1/answers",
    tags=["Answers"],
)

app.include_router(
    scores.router,
    prefix="/api/v1/scores",
    tags=["Maturity Scores"],
)

app.include_router(
    reports.router,
    prefix="/api/v1/reports",
    tags=["Reports"],
)


# ============================================================================
# Error Handlers
# ============================================================================


def _error_response(status_code: int, error: str, error_code: str | None = None) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        error_code=error_code,
        details={"status_code": status_code},
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(CatalogLookupError)
async def catalog_lookup_handler(request: Request, exc: CatalogLookupError) -> JSONResponse:
    """Unknown domain, subcategory or question ids."""
    logger.info(
        "catalog_lookup_failed",
        kind=exc.kind,
        key=exc.key,
        path=request.url.path,
    )
    return _error_response(status.HTTP_404_NOT_FOUND, str(exc), error_code="not_found")


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.maturity_assessment.main:app",
        host="0.0.0.0",
        port=settings.ports.maturity_assessment,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
