import logging

from fastapi import HTTPException, status

from application.rest.schemas.output.common_output import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_RESPONSE = {
    "model": ErrorResponse,
    "description": "Internal server error - database operation failed.",
    "content": {"application/json": {"example": {"detail": "Internal server error"}}},
}


def not_found_response(record_kind: str) -> dict:
    """OpenAPI response entry for a missing record of ``record_kind``."""
    return {
        "model": ErrorResponse,
        "description": f"{record_kind} not found.",
        "content": {
            "application/json": {
                "example": {"detail": f"{record_kind} with ID 42 not found"}
            }
        },
    }


def internal_error(action: str, e: Exception) -> HTTPException:
    """Log an unexpected failure and build the generic 500 response.

    The underlying error is logged but never returned to the client.

    Args:
        action (str): What was being attempted, e.g. ``create member``.
        e (Exception): The original failure.

    Returns:
        HTTPException: 500 with detail ``Internal server error``.
    """
    logger.error(f"Failed to {action}: {str(e)}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
