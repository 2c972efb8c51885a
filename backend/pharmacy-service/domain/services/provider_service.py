"""Provider domain service.

This module contains the ProviderService that implements business logic
for provider operations, including the uniqueness rules on provider
number and NPI.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from domain.entities.provider import Provider
from domain.entities.search import ProviderSearchCriteria, SearchResult
from domain.repositories.cache_repository import RecordCache
from domain.repositories.provider_repository import ProviderRepository
from domain.services.base_service import RecordService

logger = logging.getLogger(__name__)


class ProviderService(RecordService):
    """Domain service for provider business operations.

    Attributes:
        _provider_repository (ProviderRepository): Repository for provider data access.
    """

    cache_prefix = "provider"

    def __init__(
        self,
        provider_repository: ProviderRepository,
        cache: Optional[RecordCache] = None,
    ) -> None:
        super().__init__(cache)
        self._provider_repository = provider_repository

    async def get_all_providers(self, db_session: Session) -> List[Provider]:
        return await self._provider_repository.get_all(db_session)

    async def get_provider_by_id(
        self, db_session: Session, provider_id: int
    ) -> Provider:
        """Retrieve a provider by identifier, reading through the cache.

        Raises:
            ProviderNotFoundError: If no provider has this identifier.
        """
        cached = await self._read_cached(provider_id, Provider.from_dict)
        if cached is not None:
            return cached

        provider = await self._provider_repository.get_by_id(db_session, provider_id)
        if not provider:
            raise ProviderNotFoundError(f"Provider with ID {provider_id} not found")

        await self._write_cached(provider_id, provider.to_dict())
        return provider

    async def get_provider_by_provider_number(
        self, db_session: Session, provider_number: str
    ) -> Provider:
        provider = await self._provider_repository.get_by_provider_number(
            db_session, provider_number
        )
        if not provider:
            raise ProviderNotFoundError(
                f"Provider with number '{provider_number}' not found"
            )
        return provider

    async def get_provider_by_npi(self, db_session: Session, npi: str) -> Provider:
        provider = await self._provider_repository.get_by_npi(db_session, npi)
        if not provider:
            raise ProviderNotFoundError(f"Provider with NPI '{npi}' not found")
        return provider

    async def get_providers_by_specialty(
        self, db_session: Session, specialty: str
    ) -> List[Provider]:
        return await self._provider_repository.get_by_specialty(db_session, specialty)

    async def search_providers(
        self, db_session: Session, search_term: str
    ) -> List[Provider]:
        if not search_term or not search_term.strip():
            raise ValueError("Search term cannot be empty")
        return await self._provider_repository.search(db_session, search_term)

    async def advanced_search(
        self, db_session: Session, criteria: ProviderSearchCriteria
    ) -> SearchResult[Provider]:
        """Run a filtered, sorted and paginated provider search.

        Args:
            db_session (Session): Fresh database session for this operation.
            criteria (ProviderSearchCriteria): Filters, sort and page request.

        Returns:
            SearchResult[Provider]: One page of providers with pagination metadata.
        """
        providers, total_count = await self._provider_repository.advanced_search(
            db_session, criteria
        )
        return self._build_search_result(providers, total_count, criteria)

    async def create_provider(self, db_session: Session, provider: Provider) -> Provider:
        """Create a new provider.

        Args:
            db_session (Session): Fresh database session for this operation.
            provider (Provider): New provider entity without an identifier.

        Returns:
            Provider: The created provider with assigned ID.

        Raises:
            ProviderAlreadyExistsError: If the provider number or NPI is already taken.
        """
        if await self._provider_repository.provider_number_exists(
            db_session, provider.provider_number
        ):
            raise ProviderAlreadyExistsError(
                f"Provider with number '{provider.provider_number}' already exists"
            )
        if await self._provider_repository.npi_exists(db_session, provider.npi):
            raise ProviderAlreadyExistsError(
                f"Provider with NPI '{provider.npi}' already exists"
            )

        created = await self._provider_repository.add(db_session, provider)
        logger.info(f"Created provider {created.id} ({created.provider_number})")
        return created

    async def update_provider(
        self,
        db_session: Session,
        provider_id: int,
        name: str,
        npi: str,
        address: str = "",
        phone: str = "",
        email: str = "",
        specialty: str = "",
    ) -> Provider:
        """Replace the mutable details of an existing provider.

        Raises:
            ProviderNotFoundError: If no provider has this identifier.
            ProviderAlreadyExistsError: If the NPI changes to one already in use.
        """
        provider = await self._provider_repository.get_by_id(db_session, provider_id)
        if not provider:
            raise ProviderNotFoundError(f"Provider with ID {provider_id} not found")

        if provider.npi != npi and await self._provider_repository.npi_exists(
            db_session, npi
        ):
            raise ProviderAlreadyExistsError(f"Provider with NPI '{npi}' already exists")

        provider.update_details(
            name=name,
            npi=npi,
            address=address,
            phone=phone,
            email=email,
            specialty=specialty,
        )

        updated = await self._provider_repository.update(db_session, provider)
        if not updated:
            raise ProviderNotFoundError(f"Provider with ID {provider_id} not found")

        await self._write_cached(provider_id, updated.to_dict())
        return updated

    async def delete_provider(self, db_session: Session, provider_id: int) -> None:
        deleted = await self._provider_repository.delete(db_session, provider_id)
        if not deleted:
            raise ProviderNotFoundError(f"Provider with ID {provider_id} not found")

        await self._drop_cached(provider_id)
        logger.info(f"Deleted provider {provider_id}")

    async def provider_number_exists(
        self, db_session: Session, provider_number: str
    ) -> bool:
        return await self._provider_repository.provider_number_exists(
            db_session, provider_number
        )

    async def npi_exists(self, db_session: Session, npi: str) -> bool:
        return await self._provider_repository.npi_exists(db_session, npi)


class ProviderError(Exception):
    """Base exception for provider business errors."""

    pass


class ProviderNotFoundError(ProviderError):
    """Exception raised when a requested provider is not found."""

    pass


class ProviderAlreadyExistsError(ProviderError):
    """Exception raised when a provider number or NPI is already taken."""

    pass
