"""Database, cache and service dependencies for the Pharmacy Service.

This module provides dependency injection functions for FastAPI,
including database session management and domain service factories.

Functions:
    - get_db: Database session factory with automatic cleanup
    - get_record_cache: Shared record cache (Redis, or a no-op when disabled)
    - get_member_service: Member domain service factory
    - get_provider_service: Provider domain service factory
"""

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from domain.repositories.cache_repository import RecordCache
from domain.services.member_service import MemberService
from domain.services.provider_service import ProviderService
from infrastructure.cache.redis_cache import create_record_cache
from infrastructure.repositories.sqlalchemy_member_repository import (
    SQLAlchemyMemberRepository,
)
from infrastructure.repositories.sqlalchemy_provider_repository import (
    SQLAlchemyProviderRepository,
)

from .config import DATABASE_URL, LOG_LEVEL, REDIS_URL

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

# Database setup
engine = create_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Redis setup
record_cache = create_record_cache(REDIS_URL)


def get_db() -> Generator[Session, None, None]:
    """Get database session with automatic cleanup.

    Yields:
        Session: SQLAlchemy database session that automatically closes after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_record_cache() -> RecordCache:
    return record_cache


def get_member_service() -> MemberService:
    """Create and configure the member service with its dependencies.

    The session is injected per-request in each endpoint method.

    Returns:
        MemberService: Configured domain service ready for use.
    """
    # Infrastructure layer: SQLAlchemy repository (no session stored)
    member_repository = SQLAlchemyMemberRepository()

    # Domain layer: Domain service with business logic
    return MemberService(member_repository, get_record_cache())


def get_provider_service() -> ProviderService:
    """Create and configure the provider service with its dependencies.

    Returns:
        ProviderService: Configured domain service ready for use.
    """
    provider_repository = SQLAlchemyProviderRepository()
    return ProviderService(provider_repository, get_record_cache())
