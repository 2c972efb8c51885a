import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from application.rest.routers import (
    router_health,
    router_members,
    router_providers,
)
from infrastructure.models.base import Base
from infrastructure.models.member_orm import MemberORM  # noqa: F401
from infrastructure.models.provider_orm import ProviderORM  # noqa: F401
from utils.dependencies import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the member and provider tables on startup."""
    Base.metadata.create_all(bind=engine)
    logger.info("Pharmacy service started")
    yield
    logger.info("Pharmacy service stopped")


app = FastAPI(
    title="Pharmacy Service",
    description="Member and provider management with advanced search for the pharmacy platform",
    version="1.0.0",
    lifespan=lifespan,
)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report invalid request bodies and parameters as 400 Bad Request."""
    messages = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    logger.warning(f"Rejected request to {request.url.path}: {messages}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages), "error_code": "VALIDATION_ERROR"},
    )


app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(router_health.router, tags=["health"])
app.include_router(router_members.router, tags=["members"])
app.include_router(router_providers.router, tags=["providers"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8002)
