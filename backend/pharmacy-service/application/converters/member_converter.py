"""Member converters for transforming between Pydantic schemas and domain entities.

This module contains converter functions for transforming member objects
between the API layer (Pydantic) and the domain layer (entities).
"""

from typing import List

from application.rest.schemas.input.member_input import MemberCreate
from application.rest.schemas.output.member_output import (
    MemberResponse,
    MemberSearchResponse,
)
from domain.entities.member import Member
from domain.entities.search import SearchResult


class MemberConverter:
    """Converter class for member transformations between layers.

    Example:
        >>> member = MemberConverter.create_input_to_entity(member_create)
        >>> response = MemberConverter.entity_to_response(saved_member)
    """

    @staticmethod
    def create_input_to_entity(member_create: MemberCreate) -> Member:
        """Convert MemberCreate Pydantic schema to a new Member domain object.

        Args:
            member_create (MemberCreate): Pydantic schema containing member creation data.

        Returns:
            Member: Domain entity representing a new member (id=None).
        """
        return Member(
            id=None,  # New member, no ID yet
            member_number=member_create.member_number,
            first_name=member_create.first_name,
            last_name=member_create.last_name,
            dob=member_create.dob,
            gender=member_create.gender,
            address=member_create.address,
            phone=member_create.phone,
            email=member_create.email,
        )

    @staticmethod
    def entity_to_response(member: Member) -> MemberResponse:
        return MemberResponse.from_entity(member)

    @staticmethod
    def entities_to_responses(members: List[Member]) -> List[MemberResponse]:
        return [MemberConverter.entity_to_response(member) for member in members]

    @staticmethod
    def search_result_to_response(search_result: SearchResult) -> MemberSearchResponse:
        """Flatten a domain SearchResult into the member search envelope."""
        return MemberSearchResponse.from_entity(search_result)
