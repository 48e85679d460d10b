"""
Error types and HTTP exception helpers.

``InternalServerError`` marks integration mistakes (a component used on the
wrong kind of request). The helpers build FastAPI exceptions with the shared
``ErrorResponse`` body so every endpoint reports errors the same way.
"""

from typing import Union

from fastapi import HTTPException, status

from .models import ErrorResponse


class InternalServerError(Exception):
    """
    Unrecoverable error raised when a component is misused by its caller.

    Never a user-facing condition: API layers should answer with a 500.
    """

    def __init__(self, error_code: str, message: str = None):
        self.error_code = error_code
        self.message = message or error_code
        super().__init__(self.message)

    def __str__(self):
        return f"Internal server error ({self.error_code}): {self.message}"


def not_found_error(
    entity_type: str, entity_id: Union[str, int], detail: str = None
) -> HTTPException:
    """
    Create a 404 Not Found exception with consistent error structure.

    Args:
        entity_type: Type of entity not found (e.g., "active order")
        entity_id: Identifier the lookup was keyed on
        detail: Optional additional details about the error

    Returns:
        HTTPException with 404 status code and structured error content
    """
    error_msg = f"{entity_type[:1].upper()}{entity_type[1:]} for '{entity_id}' not found"
    if detail:
        error_msg += f". {detail}"

    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=ErrorResponse(error="Not Found", detail=error_msg).model_dump(),
    )


def service_error(
    message: str = "Internal service error",
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
) -> HTTPException:
    """
    Create a service error exception with consistent structure.

    Args:
        message: Error message explaining the service error
        status_code: HTTP status code to use

    Returns:
        HTTPException with provided status code and structured error content
    """
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error="Service Error", detail=message).model_dump(),
    )
