"""Member domain service.

This module contains the MemberService that implements business logic
for member operations, orchestrating between entities, the member
repository and the record cache.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from domain.entities.member import Member
from domain.entities.search import MemberSearchCriteria, SearchResult
from domain.repositories.cache_repository import RecordCache
from domain.repositories.member_repository import MemberRepository
from domain.services.base_service import RecordService

logger = logging.getLogger(__name__)


class MemberService(RecordService):
    """Domain service for member business operations.

    Attributes:
        _member_repository (MemberRepository): Repository for member data access.

    Example:
        >>> service = MemberService(member_repository, cache)
        >>> with get_db_session() as db:
        ...     member = await service.get_member_by_id(db, 1)
        ...     print(member.member_number)
        "M001"
    """

    cache_prefix = "member"

    def __init__(
        self, member_repository: MemberRepository, cache: Optional[RecordCache] = None
    ) -> None:
        """Initialize the member service with required dependencies.

        Args:
            member_repository (MemberRepository): Repository implementation for member data access.
            cache (Optional[RecordCache]): Cache for lookups by identifier.
        """
        super().__init__(cache)
        self._member_repository = member_repository

    async def get_all_members(self, db_session: Session) -> List[Member]:
        return await self._member_repository.get_all(db_session)

    async def get_member_by_id(self, db_session: Session, member_id: int) -> Member:
        """Retrieve a member by identifier, reading through the cache.

        Args:
            db_session (Session): Fresh database session for this operation.
            member_id (int): The identifier of the member to retrieve.

        Returns:
            Member: The requested member.

        Raises:
            MemberNotFoundError: If no member has this identifier.
        """
        cached = await self._read_cached(member_id, Member.from_dict)
        if cached is not None:
            return cached

        member = await self._member_repository.get_by_id(db_session, member_id)
        if not member:
            raise MemberNotFoundError(f"Member with ID {member_id} not found")

        await self._write_cached(member_id, member.to_dict())
        return member

    async def get_member_by_member_number(
        self, db_session: Session, member_number: str
    ) -> Member:
        member = await self._member_repository.get_by_member_number(
            db_session, member_number
        )
        if not member:
            raise MemberNotFoundError(
                f"Member with number '{member_number}' not found"
            )
        return member

    async def get_members_by_gender(
        self, db_session: Session, gender: str
    ) -> List[Member]:
        return await self._member_repository.get_by_gender(db_session, gender)

    async def search_members(
        self, db_session: Session, search_term: str
    ) -> List[Member]:
        """Free-text search across member names, number and email.

        Raises:
            ValueError: If the search term is empty.
        """
        if not search_term or not search_term.strip():
            raise ValueError("Search term cannot be empty")
        return await self._member_repository.search(db_session, search_term)

    async def advanced_search(
        self, db_session: Session, criteria: MemberSearchCriteria
    ) -> SearchResult[Member]:
        """Run a filtered, sorted and paginated member search.

        Args:
            db_session (Session): Fresh database session for this operation.
            criteria (MemberSearchCriteria): Filters, sort and page request.

        Returns:
            SearchResult[Member]: One page of members with pagination metadata.
        """
        members, total_count = await self._member_repository.advanced_search(
            db_session, criteria
        )
        return self._build_search_result(members, total_count, criteria)

    async def create_member(self, db_session: Session, member: Member) -> Member:
        """Create a new member.

        Args:
            db_session (Session): Fresh database session for this operation.
            member (Member): New member entity without an identifier.

        Returns:
            Member: The created member with assigned ID.

        Raises:
            MemberAlreadyExistsError: If the member number is already taken.
        """
        # Business rule: member numbers are unique
        if await self._member_repository.member_number_exists(
            db_session, member.member_number
        ):
            raise MemberAlreadyExistsError(
                f"Member with number '{member.member_number}' already exists"
            )

        created = await self._member_repository.add(db_session, member)
        logger.info(f"Created member {created.id} ({created.member_number})")
        return created

    async def update_member(
        self,
        db_session: Session,
        member_id: int,
        first_name: str,
        last_name: str,
        dob: date,
        gender: str,
        address: str = "",
        phone: str = "",
        email: str = "",
    ) -> Member:
        """Replace the mutable details of an existing member.

        Raises:
            MemberNotFoundError: If no member has this identifier.
            ValueError: If the new names are empty.
        """
        member = await self._member_repository.get_by_id(db_session, member_id)
        if not member:
            raise MemberNotFoundError(f"Member with ID {member_id} not found")

        member.update_details(
            first_name=first_name,
            last_name=last_name,
            dob=dob,
            gender=gender,
            address=address,
            phone=phone,
            email=email,
        )

        updated = await self._member_repository.update(db_session, member)
        if not updated:
            raise MemberNotFoundError(f"Member with ID {member_id} not found")

        await self._write_cached(member_id, updated.to_dict())
        return updated

    async def delete_member(self, db_session: Session, member_id: int) -> None:
        """Delete a member and drop its cache entry.

        Raises:
            MemberNotFoundError: If no member has this identifier.
        """
        deleted = await self._member_repository.delete(db_session, member_id)
        if not deleted:
            raise MemberNotFoundError(f"Member with ID {member_id} not found")

        await self._drop_cached(member_id)
        logger.info(f"Deleted member {member_id}")

    async def member_number_exists(
        self, db_session: Session, member_number: str
    ) -> bool:
        return await self._member_repository.member_number_exists(
            db_session, member_number
        )


class MemberError(Exception):
    """Base exception for member business errors."""

    pass


class MemberNotFoundError(MemberError):
    """Exception raised when a requested member is not found."""

    pass


class MemberAlreadyExistsError(MemberError):
    """Exception raised when a member number is already taken."""

    pass
