# libs/cart_shared/models.py
"""
Shared Pydantic models used across the service.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model used by every endpoint.

    Provides a consistent error format, with a machine-readable error code
    and human-readable detail message.

    Example:
        {
            "error": "Not Found",
            "detail": "Active order for session 'a1b2' not found"
        }
    """

    error: str = Field(..., description="Error code or type")
    detail: Optional[str] = Field(None, description="Human-readable error details")


class HealthStatus(str, Enum):
    """
    Health status enum for health check responses.
    """

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


class HealthResponse(BaseModel):
    """
    Standard health check response model for /health endpoints.

    Example:
        {
            "status": "ok",
            "version": "0.1.0",
            "details": {
                "session_count": 12,
                "order_count": 7
            }
        }
    """

    status: HealthStatus = Field(..., description="Overall health status")
    version: str = Field(..., description="Service version identifier")
    details: Dict[str, Any] = Field(
        default_factory=dict, description="Service-specific health details"
    )
