"""
Main Application Entry Point

FastAPI application factory and search router registration.
"""

import logging
from collections.abc import Iterable

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from record_search.api.errors import search_error_handler
from record_search.api.metrics import MetricsMiddleware, router as metrics_router
from record_search.api.middleware.request_logging import RequestLoggingMiddleware
from record_search.api.routers import health
from record_search.api.routers.search import build_search_router
from record_search.core.config import settings
from record_search.core.exceptions import SearchError
from record_search.endpoint import SearchEndpoint

logger = logging.getLogger(__name__)


def create_app(endpoints: Iterable[SearchEndpoint] = ()) -> FastAPI:
    """
    FastAPI application factory

    Registers one search route per endpoint under /api/v1.
    """
    app = FastAPI(
        title="Record Search API",
        version="0.1.0",
        description="In-memory relevance search with weighted fields and highlighting.",
        openapi_tags=[
            {"name": "search", "description": "Relevance search endpoints"},
            {"name": "system", "description": "Health checks"},
            {"name": "metrics", "description": "Prometheus metrics"},
        ],
    )

    app.add_exception_handler(SearchError, search_error_handler)

    # Middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)
    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    app.include_router(health.router, tags=["system"])
    app.include_router(metrics_router, prefix="/api/v1", tags=["metrics"])
    for endpoint in endpoints:
        app.include_router(build_search_router(endpoint), prefix="/api/v1", tags=["search"])
        logger.info(
            f"Registered search for '{endpoint.resource}' over fields: "
            f"{', '.join(endpoint.fields) or '(none)'}"
        )

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    uvicorn.run(
        "record_search.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
