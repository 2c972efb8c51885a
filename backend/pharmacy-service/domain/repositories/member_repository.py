"""Member repository interface for the pharmacy service.

This module defines the repository interface for member operations
following Domain-Driven Design principles.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from domain.entities.member import Member
from domain.entities.search import MemberSearchCriteria


class MemberRepository(ABC):
    """Abstract repository interface for member operations.

    NOTE: All methods receive a fresh database session to ensure
    proper transaction management and avoid session leaks.
    """

    @abstractmethod
    async def get_all(self, db_session: Session) -> List[Member]:
        """Retrieve all members ordered by identifier."""
        pass

    @abstractmethod
    async def get_by_id(self, db_session: Session, member_id: int) -> Optional[Member]:
        """Retrieve a member by its identifier.

        Args:
            db_session (Session): Fresh database session for this operation.
            member_id (int): Store-assigned member identifier.

        Returns:
            Optional[Member]: The member if found, None otherwise.
        """
        pass

    @abstractmethod
    async def get_by_member_number(
        self, db_session: Session, member_number: str
    ) -> Optional[Member]:
        """Retrieve a member by its exact member number."""
        pass

    @abstractmethod
    async def get_by_gender(self, db_session: Session, gender: str) -> List[Member]:
        """Retrieve all members of a gender (case-insensitive)."""
        pass

    @abstractmethod
    async def search(self, db_session: Session, search_term: str) -> List[Member]:
        """Free-text search over names, member number and email.

        Args:
            db_session (Session): Fresh database session for this operation.
            search_term (str): Case-insensitive substring to look for.

        Returns:
            List[Member]: Members where any searched field contains the term.
        """
        pass

    @abstractmethod
    async def advanced_search(
        self, db_session: Session, criteria: MemberSearchCriteria
    ) -> Tuple[List[Member], int]:
        """Filtered, sorted and paginated member search.

        Returns:
            Tuple[List[Member], int]: The requested page and the total match count.
        """
        pass

    @abstractmethod
    async def add(self, db_session: Session, member: Member) -> Member:
        """Persist a new member and return it with its assigned identifier."""
        pass

    @abstractmethod
    async def update(self, db_session: Session, member: Member) -> Optional[Member]:
        """Persist changes to an existing member.

        Returns:
            Optional[Member]: The updated member, or None if it does not exist.
        """
        pass

    @abstractmethod
    async def delete(self, db_session: Session, member_id: int) -> bool:
        """Delete a member.

        Returns:
            bool: True if the member was deleted, False if not found.
        """
        pass

    @abstractmethod
    async def member_number_exists(self, db_session: Session, member_number: str) -> bool:
        """Check whether a member number is already taken."""
        pass
