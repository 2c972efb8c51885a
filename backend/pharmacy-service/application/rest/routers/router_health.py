import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.orm import Session

from application.rest.schemas.output.common_output import ErrorResponse, HealthResponse
from utils.config import SERVICE_NAME
from utils.dependencies import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    path="/health",
    description="Health check endpoint for service monitoring and availability.",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": HealthResponse,
            "description": "Service is healthy and the database is reachable.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - service unavailable.",
            "content": {
                "application/json": {
                    "example": {"detail": "Service temporarily unavailable."}
                }
            },
        },
    },
)
async def health_check(db: Session = Depends(get_db)) -> HealthResponse:
    """Health check endpoint for service monitoring.

    Returns:
        HealthResponse: Service status, service name and database status.

    Raises:
        HTTPException: 500 if the database cannot be reached.

    Example:
        >>> response = await health_check(db)
        >>> print(response)
        HealthResponse(status="healthy", service="pharmacy-service", database="ok")
    """
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check database probe failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service temporarily unavailable.",
        ) from e
    return HealthResponse(status="healthy", service=SERVICE_NAME, database="ok")
