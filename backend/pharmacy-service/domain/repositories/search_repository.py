"""Search repository interface for the pharmacy service.

This module defines the repository interface for advanced search operations
following Domain-Driven Design principles.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, List, Tuple, TypeVar

from domain.entities.search import SearchCriteria

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

T = TypeVar("T")


class SearchRepository(ABC, Generic[T]):
    """Abstract repository interface for advanced search operations.

    This interface defines the contract for search repositories,
    allowing different implementations (e.g., SQLAlchemy, MongoDB, etc.)
    while keeping the domain layer independent of infrastructure concerns.
    """

    @abstractmethod
    async def search(
        self, db_session: "Session", criteria: SearchCriteria
    ) -> Tuple[List[T], int]:
        """Search for records based on the provided criteria.

        Args:
            db_session: SQLAlchemy database session for this operation
            criteria: The search criteria containing filters, sort and page

        Returns:
            Tuple[List[T], int]: A tuple containing:
                - The requested page of records in sort order
                - Total count of records matching the filters (ignores paging)

        Raises:
            SQLAlchemyError: If the search fails at the data layer
        """
        pass
