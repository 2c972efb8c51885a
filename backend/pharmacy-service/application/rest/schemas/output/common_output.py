"""Common output schemas for API responses.

This module contains shared Pydantic models for error messages,
existence checks and health status.
"""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Schema for error responses across all endpoints.

    Attributes:
        detail (str): Detailed error message.
        error_code (str, optional): Specific error code for categorization.

    Example:
        >>> error_response = ErrorResponse(
        ...     detail="Member with ID 7 not found",
        ...     error_code="NOT_FOUND"
        ... )
    """

    detail: str
    error_code: Optional[str] = None


class ExistsResponse(BaseModel):
    """Schema for business-key existence checks.

    Example:
        >>> ExistsResponse(exists=True)
    """

    exists: bool


class HealthResponse(BaseModel):
    """Schema for health check responses.

    Attributes:
        status (str): Service health status.
        service (str): Service name identifier.
        database (str): Database connectivity status.

    Example:
        >>> health_response = HealthResponse(
        ...     status="healthy",
        ...     service="pharmacy-service",
        ...     database="ok"
        ... )
    """

    status: str
    service: str
    database: str
