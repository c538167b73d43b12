from __future__ import annotations

import time
from typing import Callable, Optional

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, Info, generate_latest

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_ERRORS = Counter(
    "http_request_errors_total",
    "Total HTTP requests resulting in server errors",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "In-progress HTTP requests",
    ["method", "path"],
)
ADDRESS_WRITES = Counter(
    "address_writes_total",
    "Address mutations by operation",
    ["op"],
)
DEFAULT_CONFLICTS = Counter(
    "address_default_conflicts_total",
    "Default-address transactions cancelled by a concurrent change",
)
ORDERS_CREATED = Counter(
    "orders_created_total",
    "Total orders recorded",
)
FEELINGS_ATTACHED = Counter(
    "feelings_attached_total",
    "Feelings attached to posts by type",
    ["feeling_type"],
)
UPTIME_SECONDS = Gauge(
    "app_uptime_seconds",
    "Application uptime in seconds",
)
APP_INFO = Info(
    "app",
    "Application metadata",
)

_START_TIME = time.monotonic()


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    if route and getattr(route, "path", None):
        return route.path
    return request.url.path


def record_address_write(op: str) -> None:
    ADDRESS_WRITES.labels(op=op).inc()


def record_default_conflict() -> None:
    DEFAULT_CONFLICTS.inc()


def record_order_created() -> None:
    ORDERS_CREATED.inc()


def record_feeling_attached(feeling_type: str) -> None:
    FEELINGS_ATTACHED.labels(feeling_type=feeling_type).inc()


async def metrics_middleware(request: Request, call_next: Callable[[Request], Response]) -> Response:
    method = request.method
    start = time.perf_counter()
    status_code = 500
    in_progress_path: Optional[str] = request.url.path
    IN_PROGRESS.labels(method=method, path=in_progress_path).inc()
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        IN_PROGRESS.labels(method=method, path=in_progress_path).dec()
        # the matched route is only known once routing has run
        path = _route_path(request)
        elapsed = time.perf_counter() - start
        REQUEST_LATENCY.labels(method=method, path=path).observe(elapsed)
        REQUEST_COUNT.labels(method=method, path=path, status=str(status_code)).inc()
        if status_code >= 500:
            REQUEST_ERRORS.labels(method=method, path=path, status=str(status_code)).inc()


def set_app_info(name: str, version: str) -> None:
    APP_INFO.info({"name": name, "version": version})


def metrics_endpoint() -> Response:
    UPTIME_SECONDS.set(time.monotonic() - _START_TIME)
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
