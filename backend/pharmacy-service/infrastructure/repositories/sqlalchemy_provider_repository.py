"""SQLAlchemy implementation of the provider repository.

This module contains the concrete implementation of ProviderRepository
using SQLAlchemy for database operations and entity mapping.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from domain.entities.provider import Provider
from domain.entities.search import PROVIDER_SEARCH_FIELDS, ProviderSearchCriteria
from domain.repositories.provider_repository import ProviderRepository
from infrastructure.models.provider_orm import ProviderORM
from infrastructure.repositories.sqlalchemy_search_repository import (
    SQLAlchemySearchRepository,
)

logger = logging.getLogger(__name__)


class SQLAlchemyProviderRepository(ProviderRepository):
    """SQLAlchemy implementation of the provider repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.

    Example:
        >>> repository = SQLAlchemyProviderRepository()
        >>> providers = await repository.get_by_specialty(db, "cardiology")
    """

    def __init__(self):
        self._search_engine = SQLAlchemySearchRepository(
            ProviderORM, PROVIDER_SEARCH_FIELDS, self._model_to_entity
        )

    async def get_all(self, db_session: Session) -> List[Provider]:
        provider_models = db_session.query(ProviderORM).order_by(ProviderORM.id).all()
        return [self._model_to_entity(model) for model in provider_models]

    async def get_by_id(
        self, db_session: Session, provider_id: int
    ) -> Optional[Provider]:
        provider_model = (
            db_session.query(ProviderORM).filter(ProviderORM.id == provider_id).first()
        )
        return self._model_to_entity(provider_model) if provider_model else None

    async def get_by_provider_number(
        self, db_session: Session, provider_number: str
    ) -> Optional[Provider]:
        provider_model = (
            db_session.query(ProviderORM)
            .filter(ProviderORM.provider_number == provider_number)
            .first()
        )
        return self._model_to_entity(provider_model) if provider_model else None

    async def get_by_npi(self, db_session: Session, npi: str) -> Optional[Provider]:
        provider_model = (
            db_session.query(ProviderORM).filter(ProviderORM.npi == npi).first()
        )
        return self._model_to_entity(provider_model) if provider_model else None

    async def get_by_specialty(
        self, db_session: Session, specialty: str
    ) -> List[Provider]:
        provider_models = (
            db_session.query(ProviderORM)
            .filter(func.lower(ProviderORM.specialty) == specialty.strip().lower())
            .order_by(ProviderORM.id)
            .all()
        )
        return [self._model_to_entity(model) for model in provider_models]

    async def search(self, db_session: Session, search_term: str) -> List[Provider]:
        """Free-text search over name, provider number, NPI, email and specialty.

        Args:
            db_session (Session): SQLAlchemy database session for this operation.
            search_term (str): Case-insensitive substring to look for.

        Returns:
            List[Provider]: Matching providers ordered by identifier.
        """
        term = search_term.strip()
        provider_models = (
            db_session.query(ProviderORM)
            .filter(
                or_(
                    ProviderORM.name.icontains(term, autoescape=True),
                    ProviderORM.provider_number.icontains(term, autoescape=True),
                    ProviderORM.npi.icontains(term, autoescape=True),
                    ProviderORM.email.icontains(term, autoescape=True),
                    ProviderORM.specialty.icontains(term, autoescape=True),
                )
            )
            .order_by(ProviderORM.id)
            .all()
        )
        logger.info(
            f"Provider search for '{term}' found {len(provider_models)} providers"
        )
        return [self._model_to_entity(model) for model in provider_models]

    async def advanced_search(
        self, db_session: Session, criteria: ProviderSearchCriteria
    ) -> Tuple[List[Provider], int]:
        return await self._search_engine.search(db_session, criteria)

    async def add(self, db_session: Session, provider: Provider) -> Provider:
        """Save a new provider to the database.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.
            provider (Provider): The provider entity to save.

        Returns:
            Provider: The saved provider entity with populated ID.
        """
        try:
            provider_model = ProviderORM(
                provider_number=provider.provider_number,
                name=provider.name,
                npi=provider.npi,
                address=provider.address,
                phone=provider.phone,
                email=provider.email,
                specialty=provider.specialty,
            )
            db_session.add(provider_model)
            db_session.commit()
            db_session.refresh(provider_model)
            return self._model_to_entity(provider_model)
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create provider: {str(e)}")
            raise

    async def update(
        self, db_session: Session, provider: Provider
    ) -> Optional[Provider]:
        try:
            provider_model = (
                db_session.query(ProviderORM)
                .filter(ProviderORM.id == provider.id)
                .first()
            )
            if not provider_model:
                return None

            provider_model.name = provider.name
            provider_model.npi = provider.npi
            provider_model.address = provider.address
            provider_model.phone = provider.phone
            provider_model.email = provider.email
            provider_model.specialty = provider.specialty

            db_session.commit()
            db_session.refresh(provider_model)
            return self._model_to_entity(provider_model)
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update provider {provider.id}: {str(e)}")
            raise

    async def delete(self, db_session: Session, provider_id: int) -> bool:
        """Delete a provider from the database.

        Returns:
            bool: True if the provider was deleted, False if not found.
        """
        try:
            provider_model = (
                db_session.query(ProviderORM)
                .filter(ProviderORM.id == provider_id)
                .first()
            )
            if not provider_model:
                return False

            db_session.delete(provider_model)
            db_session.commit()
            return True
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete provider {provider_id}: {str(e)}")
            raise

    async def provider_number_exists(
        self, db_session: Session, provider_number: str
    ) -> bool:
        return (
            db_session.query(ProviderORM.id)
            .filter(ProviderORM.provider_number == provider_number)
            .first()
            is not None
        )

    async def npi_exists(self, db_session: Session, npi: str) -> bool:
        return (
            db_session.query(ProviderORM.id).filter(ProviderORM.npi == npi).first()
            is not None
        )

    @staticmethod
    def _model_to_entity(provider_model: ProviderORM) -> Provider:
        """Convert SQLAlchemy model to domain entity."""
        return Provider(
            id=provider_model.id,
            provider_number=provider_model.provider_number,
            name=provider_model.name,
            npi=provider_model.npi,
            address=provider_model.address,
            phone=provider_model.phone,
            email=provider_model.email,
            specialty=provider_model.specialty,
        )
