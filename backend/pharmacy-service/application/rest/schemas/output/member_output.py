"""Member output schemas for API responses.

This module contains Pydantic models for member-related API responses,
including single members and the paginated advanced search envelope.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, List

from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.member import Member
    from domain.entities.search import SearchResult


class MemberResponse(BaseModel):
    """Schema for member data in API responses.

    Example:
        >>> member_response = MemberResponse(
        ...     id=1,
        ...     member_number="M001",
        ...     first_name="Ravi",
        ...     last_name="Kumar",
        ...     dob=date(1980, 5, 1),
        ...     gender="Male",
        ...     address="12 Park Lane",
        ...     phone="555-0100",
        ...     email="ravi@example.com",
        ... )
    """

    id: int
    member_number: str
    first_name: str
    last_name: str
    dob: date
    gender: str
    address: str
    phone: str
    email: str

    @classmethod
    def from_entity(cls, member: Member) -> MemberResponse:
        """Create MemberResponse from a Member domain entity.

        Raises:
            ValueError: If the member has not been persisted.
        """
        if member.is_new():
            raise ValueError("Cannot convert new member entity to response (no ID)")

        return cls(
            id=member.id,
            member_number=member.member_number,
            first_name=member.first_name,
            last_name=member.last_name,
            dob=member.dob,
            gender=member.gender,
            address=member.address,
            phone=member.phone,
            email=member.email,
        )


class MemberSearchResponse(BaseModel):
    """Schema for one page of advanced member search results.

    Attributes:
        members (List[MemberResponse]): Members on the requested page.
        total_count (int): Number of members matching the filters across all pages.
        page_number (int): Requested page (1-based).
        page_size (int): Requested page size.
        total_pages (int): ceil(total_count / page_size); 0 when nothing matches.
        has_previous_page (bool): Whether page_number > 1.
        has_next_page (bool): Whether page_number < total_pages.
    """

    members: List[MemberResponse]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def from_entity(cls, search_result: SearchResult) -> MemberSearchResponse:
        pagination = search_result.pagination
        return cls(
            members=[MemberResponse.from_entity(member) for member in search_result.items],
            total_count=pagination.total_count,
            page_number=pagination.page_number,
            page_size=pagination.page_size,
            total_pages=pagination.total_pages,
            has_previous_page=pagination.has_previous_page,
            has_next_page=pagination.has_next_page,
        )
