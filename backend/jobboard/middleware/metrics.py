"""
Prometheus Metrics Middleware

Provides request/response metrics for monitoring:
- HTTP request latency (p50, p95, p99)
- Request count by endpoint and status
- Active request gauge
- Taxonomy cache hit/miss rates
- Job views, apply clicks and recorded applications
- Database connectivity failures per repository

Usage:
    from jobboard.middleware.metrics import PrometheusMiddleware, setup_metrics

    # In main.py
    app = FastAPI()
    setup_metrics(app)

Metrics Endpoint:
    GET /metrics - Prometheus-format metrics
"""

import time
import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CONTENT_TYPE_LATEST,
    generate_latest,
    REGISTRY,
)
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# ==================== Prometheus Metrics ====================

# Request latency histogram with custom buckets for sub-second monitoring
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Request counter
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

# In-flight requests; the route is only known once routing has run
ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
    ["method"]
)

# Cache metrics
CACHE_HITS = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["layer"]  # tax=taxonomy lists, pop=popular lists
)

CACHE_MISSES = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["layer"]
)

# Job board activity
JOB_EVENTS = Counter(
    "jobboard_job_events_total",
    "Job listing interactions",
    ["event"]  # view, click, application
)

STORAGE_FAILURES = Counter(
    "jobboard_storage_errors_total",
    "Database calls that failed with a connectivity error",
    ["repository"]
)


def route_template(request: Request) -> str:
    """
    Route pattern (e.g. /jobs/{job_id}) the router matched for this request.

    Falls back to the raw path for unrouted requests (404s, mounted apps).
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Records latency and count per method, route pattern and status, plus an
    in-flight gauge per method. /metrics scrapes are not recorded.
    """

    def __init__(self, app: FastAPI, app_name: str = "jobboard"):
        super().__init__(app)
        self.app_name = app_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        ACTIVE_REQUESTS.labels(method=method).inc()
        start_time = time.perf_counter()
        status = "500"

        try:
            response = await call_next(request)
            status = str(response.status_code)
        except Exception as e:
            logger.error(f"Request error on {method} {request.url.path}: {e}")
            raise
        finally:
            duration = time.perf_counter() - start_time
            endpoint = route_template(request)

            REQUEST_LATENCY.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).observe(duration)

            REQUEST_COUNT.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).inc()

            ACTIVE_REQUESTS.labels(method=method).dec()

        return response


def metrics_endpoint(request: Request) -> Response:
    """
    Endpoint handler for Prometheus metrics scraping.

    Returns metrics in Prometheus text format.
    """
    return PlainTextResponse(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST
    )


def setup_metrics(app: FastAPI) -> None:
    """
    Configure Prometheus metrics for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    # Add middleware
    app.add_middleware(PrometheusMiddleware, app_name="jobboard")

    # Add metrics endpoint
    app.add_route("/metrics", metrics_endpoint, methods=["GET"])

    logger.info("Prometheus metrics configured")


# ==================== Helper Functions ====================

def record_cache_hit(layer: str) -> None:
    """Record a cache hit for the specified layer."""
    CACHE_HITS.labels(layer=layer).inc()


def record_cache_miss(layer: str) -> None:
    """Record a cache miss for the specified layer."""
    CACHE_MISSES.labels(layer=layer).inc()


def record_job_event(event: str) -> None:
    """Record a view, apply click or application for a job listing."""
    JOB_EVENTS.labels(event=event).inc()


def record_storage_failure(repository: str) -> None:
    """Record a database connectivity failure."""
    STORAGE_FAILURES.labels(repository=repository).inc()
