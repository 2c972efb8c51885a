from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from application.converters.member_converter import MemberConverter
from application.rest.schemas.input.member_input import (
    MemberCreate,
    MemberSearchRequest,
    MemberUpdate,
)
from application.rest.schemas.output.common_output import ErrorResponse, ExistsResponse
from application.rest.schemas.output.member_output import (
    MemberResponse,
    MemberSearchResponse,
)
from application.utils import (
    INTERNAL_ERROR_RESPONSE,
    internal_error,
    not_found_response,
)
from domain.services.member_service import (
    MemberAlreadyExistsError,
    MemberNotFoundError,
    MemberService,
)
from utils.dependencies import get_db, get_member_service

router = APIRouter()

NOT_FOUND_RESPONSE = not_found_response("Member")


@router.get(
    path="/api/members",
    description="Retrieve all members ordered by identifier.",
    response_model=List[MemberResponse],
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE},
)
async def get_members(
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> List[MemberResponse]:
    try:
        members = await member_service.get_all_members(db)
        return MemberConverter.entities_to_responses(members)
    except Exception as e:
        raise internal_error("retrieve members", e) from e


@router.get(
    path="/api/members/search",
    description="Free-text search across member names, member number and email.",
    response_model=List[MemberResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Search term is empty.",
            "content": {
                "application/json": {"example": {"detail": "Search term cannot be empty"}}
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def search_members(
    search_term: str = Query(default="", description="Case-insensitive substring"),
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> List[MemberResponse]:
    try:
        members = await member_service.search_members(db, search_term)
        return MemberConverter.entities_to_responses(members)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except Exception as e:
        raise internal_error("search members", e) from e


@router.post(
    path="/api/members/advanced-search",
    description="Filtered, sorted and paginated member search.",
    response_model=MemberSearchResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": MemberSearchResponse,
            "description": "One page of matching members with pagination metadata.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid search criteria.",
            "content": {
                "application/json": {
                    "example": {"detail": "Age to must be greater than or equal to age from"}
                }
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def advanced_search_members(
    search_request: MemberSearchRequest,
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> MemberSearchResponse:
    """Run an advanced member search.

    Every supplied filter narrows the result set; the total count covers
    all matching members, not only the returned page. A page number past
    the last page returns an empty page with the correct total.

    Args:
        search_request (MemberSearchRequest): Filters, sort and page request.
        db (Session): Fresh database session for this request.
        member_service (MemberService): Domain service with injected repository.

    Returns:
        MemberSearchResponse: One page of members and pagination metadata.

    Raises:
        HTTPException: 400 if the criteria are invalid.
        HTTPException: 500 if the search fails in the data layer.
    """
    try:
        criteria = search_request.to_criteria()
        search_result = await member_service.advanced_search(db, criteria)
        return MemberConverter.search_result_to_response(search_result)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except Exception as e:
        raise internal_error("run advanced member search", e) from e


@router.get(
    path="/api/members/by-number/{member_number}",
    description="Retrieve a member by business member number.",
    response_model=MemberResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def get_member_by_member_number(
    member_number: str,
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    try:
        member = await member_service.get_member_by_member_number(db, member_number)
        return MemberConverter.entity_to_response(member)
    except MemberNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        raise internal_error(f"retrieve member {member_number}", e) from e


@router.get(
    path="/api/members/by-gender/{gender}",
    description="Retrieve all members of a gender (case-insensitive).",
    response_model=List[MemberResponse],
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE},
)
async def get_members_by_gender(
    gender: str,
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> List[MemberResponse]:
    try:
        members = await member_service.get_members_by_gender(db, gender)
        return MemberConverter.entities_to_responses(members)
    except Exception as e:
        raise internal_error(f"retrieve members by gender {gender}", e) from e


@router.get(
    path="/api/members/exists/{member_number}",
    description="Check whether a member number is already taken.",
    response_model=ExistsResponse,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE},
)
async def member_number_exists(
    member_number: str,
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> ExistsResponse:
    try:
        exists = await member_service.member_number_exists(db, member_number)
        return ExistsResponse(exists=exists)
    except Exception as e:
        raise internal_error(f"check member number {member_number}", e) from e


@router.get(
    path="/api/members/{member_id}",
    description="Retrieve a specific member by identifier.",
    response_model=MemberResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": MemberResponse,
            "description": "Member retrieved successfully.",
        },
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def get_member_by_id(
    member_id: int,
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    """Get a specific member by identifier, served from the cache when present.

    Raises:
        HTTPException: 404 if member not found.
        HTTPException: 500 if internal server errors occur.
    """
    try:
        member = await member_service.get_member_by_id(db, member_id)
        return MemberConverter.entity_to_response(member)
    except MemberNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        raise internal_error(f"retrieve member {member_id}", e) from e


@router.post(
    path="/api/members",
    description="Create a new member with a unique member number.",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": MemberResponse,
            "description": "Member created successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid member data or member number already exists.",
            "content": {
                "application/json": {
                    "example": {"detail": "Member with number 'M001' already exists"}
                }
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def create_member(
    member_create: MemberCreate,
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    """Create a new member.

    Args:
        member_create (MemberCreate): Pydantic schema containing member creation data.
        db (Session): Fresh database session for this request.
        member_service (MemberService): Domain service with injected repository.

    Returns:
        MemberResponse: Created member response schema.

    Raises:
        HTTPException: 400 if the member number already exists or data is invalid.
        HTTPException: 500 if internal server errors occur.
    """
    try:
        member = MemberConverter.create_input_to_entity(member_create)
        created_member = await member_service.create_member(db, member)
        return MemberConverter.entity_to_response(created_member)
    except (MemberAlreadyExistsError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except Exception as e:
        raise internal_error("create member", e) from e


@router.put(
    path="/api/members/{member_id}",
    description="Replace the details of an existing member.",
    response_model=MemberResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid member data.",
        },
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def update_member(
    member_id: int,
    member_update: MemberUpdate,
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    try:
        updated_member = await member_service.update_member(
            db,
            member_id,
            first_name=member_update.first_name,
            last_name=member_update.last_name,
            dob=member_update.dob,
            gender=member_update.gender,
            address=member_update.address,
            phone=member_update.phone,
            email=member_update.email,
        )
        return MemberConverter.entity_to_response(updated_member)
    except MemberNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except Exception as e:
        raise internal_error(f"update member {member_id}", e) from e


@router.delete(
    path="/api/members/{member_id}",
    description="Delete a member by identifier.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_204_NO_CONTENT: {"description": "Member deleted successfully."},
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def delete_member(
    member_id: int,
    db: Session = Depends(get_db),
    member_service: MemberService = Depends(get_member_service),
) -> None:
    try:
        await member_service.delete_member(db, member_id)
    except MemberNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        raise internal_error(f"delete member {member_id}", e) from e
