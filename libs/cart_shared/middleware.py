# libs/cart_shared/middleware.py
"""
ASGI middleware components for the FastAPI application.

Correlation ID propagation and request metrics.
"""

import time
import uuid
from typing import Callable, List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .logging import get_logger
from .metrics import Metrics


UNMATCHED_ROUTE = "unmatched"


def route_label(request: Request) -> str:
    """
    Path template of the route that handled the request.

    The router records the matched route on the shared scope, so this is
    only meaningful once the request has been dispatched. Requests that
    matched no route share a single label.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to generate and propagate correlation IDs.

    The ID is stored on ``request.state.correlation_id`` so handlers can put
    it on their request context.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Correlation-ID"):
        super().__init__(app)
        self.header_name = header_name
        self.logger = get_logger("libs.cart_shared.correlation")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(self.header_name)

        if not correlation_id:
            correlation_id = str(uuid.uuid4())
            self.logger.debug(f"Generated new correlation ID: {correlation_id}")

        request.state.correlation_id = correlation_id
        response = await call_next(request)
        response.headers[self.header_name] = correlation_id

        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect and emit request metrics.
    Tracks request counts, durations, and status codes, labelled by route
    template so the number of series stays bounded.
    """

    def __init__(self, app: ASGIApp, exclude_paths: Optional[List[str]] = None):
        """
        Initialize the middleware.

        Args:
            app: The ASGI application
            exclude_paths: Optional list of path prefixes to exclude from metrics
        """
        super().__init__(app)
        self.exclude_paths = exclude_paths or []
        self.logger = get_logger("libs.cart_shared.metrics")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        start_time = time.time()
        method = request.method
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            self.logger.exception(
                f"Exception in request: {method} {request.url.path}: {e}"
            )
            raise
        finally:
            duration_ms = (time.time() - start_time) * 1000
            path = route_label(request)
            Metrics.counter(
                "http_requests_total",
                {"method": method, "path": path, "status": str(status_code)},
            )
            Metrics.histogram(
                "http_request_duration_ms",
                duration_ms,
                {"method": method, "path": path},
            )

        return response
