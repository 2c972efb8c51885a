"""Provider repository interface.

This module defines the abstract interface for provider data access
operations, following the Repository pattern from DDD.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from domain.entities.provider import Provider
from domain.entities.search import ProviderSearchCriteria


class ProviderRepository(ABC):
    """Abstract interface for provider repository operations.

    NOTE: All methods receive a fresh database session to ensure
    proper transaction management and avoid session leaks.
    """

    @abstractmethod
    async def get_all(self, db_session: Session) -> List[Provider]:
        pass

    @abstractmethod
    async def get_by_id(
        self, db_session: Session, provider_id: int
    ) -> Optional[Provider]:
        pass

    @abstractmethod
    async def get_by_provider_number(
        self, db_session: Session, provider_number: str
    ) -> Optional[Provider]:
        pass

    @abstractmethod
    async def get_by_npi(self, db_session: Session, npi: str) -> Optional[Provider]:
        pass

    @abstractmethod
    async def get_by_specialty(
        self, db_session: Session, specialty: str
    ) -> List[Provider]:
        """Retrieve all providers of a specialty (case-insensitive)."""
        pass

    @abstractmethod
    async def search(self, db_session: Session, search_term: str) -> List[Provider]:
        """Free-text search over name, provider number, NPI, email and specialty."""
        pass

    @abstractmethod
    async def advanced_search(
        self, db_session: Session, criteria: ProviderSearchCriteria
    ) -> Tuple[List[Provider], int]:
        """Filtered, sorted and paginated provider search."""
        pass

    @abstractmethod
    async def add(self, db_session: Session, provider: Provider) -> Provider:
        pass

    @abstractmethod
    async def update(
        self, db_session: Session, provider: Provider
    ) -> Optional[Provider]:
        pass

    @abstractmethod
    async def delete(self, db_session: Session, provider_id: int) -> bool:
        pass

    @abstractmethod
    async def provider_number_exists(
        self, db_session: Session, provider_number: str
    ) -> bool:
        pass

    @abstractmethod
    async def npi_exists(self, db_session: Session, npi: str) -> bool:
        pass
