"""
Shared utilities for the active order service.

Configuration, logging, metrics, error helpers, middleware and models
used by the service and its API layer.
"""

# Configuration
from .config import BaseServiceConfig

# Error helpers
from .errors import InternalServerError, not_found_error, service_error

# Logging
from .logging import configure_logging, get_logger

# Metrics
from .metrics import Metrics

# Middleware
from .middleware import CorrelationIdMiddleware, MetricsMiddleware

# Models
from .models import ErrorResponse, HealthResponse, HealthStatus

__all__ = [
    # Configuration
    "BaseServiceConfig",
    # Errors
    "InternalServerError",
    "not_found_error",
    "service_error",
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "Metrics",
    # Middleware
    "CorrelationIdMiddleware",
    "MetricsMiddleware",
    # Models
    "ErrorResponse",
    "HealthResponse",
    "HealthStatus",
]
