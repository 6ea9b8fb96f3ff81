# Prometheus Metrics for the Search API
# Provides /metrics endpoint for scraping

import time

from fastapi import APIRouter, Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware

router = APIRouter()

# --- Metrics Definitions ---

# Request counter (by method, path, status)
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "path", "status"]
)

# Request latency histogram
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Active requests gauge
ACTIVE_REQUESTS = Gauge("http_requests_active", "Number of active HTTP requests")

# Search-specific metrics
SEARCH_COUNT = Counter(
    "search_requests_total",
    "Total search requests",
    ["resource", "mode"],
)

SEARCH_LATENCY = Histogram(
    "search_duration_seconds",
    "Search request latency",
    ["resource", "mode"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0],
)

SEARCH_MATCHES = Histogram(
    "search_matched_records",
    "Records matched per search, before pagination",
    ["resource"],
    buckets=[0, 1, 5, 10, 50, 100, 500, 1000],
)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect request metrics."""

    async def dispatch(self, request: Request, call_next):
        # Skip metrics endpoint itself
        if request.url.path.endswith("/metrics"):
            return await call_next(request)

        ACTIVE_REQUESTS.inc()
        start_time = time.time()

        try:
            response = await call_next(request)

            duration = time.time() - start_time
            path = self._normalize_path(request)

            REQUEST_COUNT.labels(
                method=request.method, path=path, status=response.status_code
            ).inc()
            REQUEST_LATENCY.labels(method=request.method, path=path).observe(duration)

            return response
        finally:
            ACTIVE_REQUESTS.dec()

    def _normalize_path(self, request: Request) -> str:
        """Route template when one matched, to bound label cardinality."""
        route = request.scope.get("route")
        if route is not None and getattr(route, "path", None):
            return route.path
        return "unmatched"


@router.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def observe_search(resource: str, mode: str, duration: float, matched: int):
    """Record search-specific metrics."""
    SEARCH_COUNT.labels(resource=resource, mode=mode).inc()
    SEARCH_LATENCY.labels(resource=resource, mode=mode).observe(duration)
    SEARCH_MATCHES.labels(resource=resource).observe(matched)
