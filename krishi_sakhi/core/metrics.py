"""Prometheus metrics for the advisor service."""

import time

from prometheus_client import Counter, Histogram, Info, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# --- Metrics ---

APP_INFO = Info("app", "Krishi Sakhi advisor application info")
APP_INFO.info({"version": "1.0.0", "name": "krishi_sakhi"})

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
)

ADVICE_OUTCOMES = Counter(
    "advice_outcomes_total",
    "Advice calls by final outcome",
    ["outcome"],
)

MODEL_ATTEMPTS = Counter(
    "completion_model_attempts_total",
    "Completion calls per model identifier and classified result",
    ["model", "result"],
)

COMPLETION_DURATION = Histogram(
    "completion_duration_seconds",
    "Round-trip time of a single completion call",
    ["model"],
    buckets=[0.25, 0.5, 1, 2.5, 5, 10, 30, 60],
)


# --- Middleware ---


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Collect HTTP request metrics for Prometheus."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        path = request.url.path

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        REQUEST_COUNT.labels(method=method, path=path, status=response.status_code).inc()
        REQUEST_DURATION.labels(method=method, path=path).observe(duration)

        return response


def metrics_response() -> Response:
    """Generate Prometheus /metrics response."""
    return Response(
        content=generate_latest(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
