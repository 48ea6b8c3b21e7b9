"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Job board activity and cache counters
"""

from jobboard.middleware.metrics import (
    PrometheusMiddleware,
    route_template,
    setup_metrics,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    CACHE_HITS,
    CACHE_MISSES,
    JOB_EVENTS,
    STORAGE_FAILURES,
)

__all__ = [
    "PrometheusMiddleware",
    "route_template",
    "setup_metrics",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "CACHE_HITS",
    "CACHE_MISSES",
    "JOB_EVENTS",
    "STORAGE_FAILURES",
]
