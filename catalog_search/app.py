"""
Main FastAPI application.

This file wires together all layers:
- Domain: Catalog entities and error types
- Repositories: Catalog store adapters
- Search: String matching and relevance scoring
- Services: Search and suggestion orchestration
- Routers: HTTP endpoints
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, settings
from .database import get_session_factory, init_db
from .dependencies import set_engines
from .logging_config import bind_request_id, clear_request_context, setup_logging
from .metrics import metrics_endpoint, track_request_metrics
from .repositories.catalog_store import ICatalogStore
from .repositories.memory_catalog_store import InMemoryCatalogStore
from .repositories.sql_catalog_store import SqlCatalogStore
from .routers import health_router, search_router
from .search.relevance_scorer import RelevanceScorer
from .search.string_matcher import StringMatcher
from .services.search_engine import SearchEngine
from .services.suggestion_engine import SuggestionEngine

setup_logging(settings.LOG_LEVEL, use_json=settings.LOG_JSON)

logger = structlog.get_logger(__name__)


def create_store(config: Settings) -> ICatalogStore:
    """
    Create the catalog store adapter selected by configuration.

    Args:
        config: Application settings

    Returns:
        Catalog store instance
    """
    if config.STORE_BACKEND == "memory":
        logger.warning("Using empty in-memory catalog store")
        return InMemoryCatalogStore()

    init_db()
    return SqlCatalogStore(
        get_session_factory(),
        statement_timeout_ms=int(config.SEARCH_DEADLINE_SECONDS * 1000),
    )


def create_engines(
    store: ICatalogStore, config: Settings
) -> tuple[SearchEngine, SuggestionEngine]:
    """
    Create and configure the search and suggestion engines.

    Args:
        store: Catalog store shared by both engines
        config: Application settings

    Returns:
        Tuple of (search engine, suggestion engine)
    """
    search_engine = SearchEngine(
        store=store,
        matcher=StringMatcher(threshold=config.FUZZY_THRESHOLD),
        scorer=RelevanceScorer(),
        precise_limit=config.PRECISE_CANDIDATE_LIMIT,
        fallback_min_candidates=config.FALLBACK_MIN_CANDIDATES,
        fallback_scan_limit=config.FALLBACK_SCAN_LIMIT,
        deadline_seconds=config.SEARCH_DEADLINE_SECONDS,
    )
    return search_engine, SuggestionEngine(store=store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting catalog search service", version=__version__)

    try:
        store = create_store(settings)
        set_engines(*create_engines(store, settings))
    except Exception as e:
        logger.error("Failed to initialize catalog store", error=str(e))
        raise

    logger.info("Catalog search service started", store=type(store).__name__)

    yield

    logger.info("Catalog search service shut down")


# Create FastAPI app
app = FastAPI(
    title="Catalog Search Service",
    description="Typo-tolerant catalog search with relevance ranking and autocomplete",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID for distributed tracing."""
    request_id = request.headers.get("X-Request-ID") or f"req-{uuid.uuid4().hex[:12]}"

    bind_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        clear_request_context()

    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def track_metrics(request: Request, call_next):
    """Track Prometheus metrics."""
    start_time = time.time()

    response = await call_next(request)

    track_request_metrics(
        request.method, request.url.path, response.status_code, time.time() - start_time
    )
    return response


# Include routers
app.include_router(search_router.router)
app.include_router(health_router.router)

app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "status": "operational",
        "docs": "/api/docs",
        "health": "/api/v1/health",
        "ready": "/api/v1/ready",
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )

    request_id: Optional[str] = request.headers.get("X-Request-ID")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
            },
            "request_id": request_id,
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("catalog_search.app:app", host="0.0.0.0", port=8000, log_level="info")
