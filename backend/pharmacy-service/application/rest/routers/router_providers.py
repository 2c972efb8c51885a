from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from application.converters.provider_converter import ProviderConverter
from application.rest.schemas.input.provider_input import (
    ProviderCreate,
    ProviderSearchRequest,
    ProviderUpdate,
)
from application.rest.schemas.output.common_output import ErrorResponse, ExistsResponse
from application.rest.schemas.output.provider_output import (
    ProviderResponse,
    ProviderSearchResponse,
)
from application.utils import (
    INTERNAL_ERROR_RESPONSE,
    internal_error,
    not_found_response,
)
from domain.services.provider_service import (
    ProviderAlreadyExistsError,
    ProviderNotFoundError,
    ProviderService,
)
from utils.dependencies import get_db, get_provider_service

router = APIRouter()

NOT_FOUND_RESPONSE = not_found_response("Provider")

DUPLICATE_RESPONSE = {
    "model": ErrorResponse,
    "description": "Invalid provider data, or provider number or NPI already exists.",
    "content": {
        "application/json": {
            "example": {"detail": "Provider with NPI '1234567890' already exists"}
        }
    },
}


@router.get(
    path="/api/providers",
    description="Retrieve all providers ordered by identifier.",
    response_model=List[ProviderResponse],
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE},
)
async def get_providers(
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> List[ProviderResponse]:
    try:
        providers = await provider_service.get_all_providers(db)
        return ProviderConverter.entities_to_responses(providers)
    except Exception as e:
        raise internal_error("retrieve providers", e) from e


@router.get(
    path="/api/providers/search",
    description="Free-text search across provider name, number, NPI, email and specialty.",
    response_model=List[ProviderResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Search term is empty.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def search_providers(
    search_term: str = Query(default="", description="Case-insensitive substring"),
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> List[ProviderResponse]:
    try:
        providers = await provider_service.search_providers(db, search_term)
        return ProviderConverter.entities_to_responses(providers)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except Exception as e:
        raise internal_error("search providers", e) from e


@router.post(
    path="/api/providers/advanced-search",
    description="Filtered, sorted and paginated provider search.",
    response_model=ProviderSearchResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": ProviderSearchResponse,
            "description": "One page of matching providers with pagination metadata.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid search criteria.",
            "content": {
                "application/json": {
                    "example": {"detail": "NPI must contain only numeric characters"}
                }
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def advanced_search_providers(
    search_request: ProviderSearchRequest,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> ProviderSearchResponse:
    """Run an advanced provider search.

    Args:
        search_request (ProviderSearchRequest): Filters, sort and page request.
        db (Session): Fresh database session for this request.
        provider_service (ProviderService): Domain service with injected repository.

    Returns:
        ProviderSearchResponse: One page of providers and pagination metadata.

    Example:
        >>> request = ProviderSearchRequest(specialty="cardiology", sort_by="name")
        >>> page = await advanced_search_providers(request, db, provider_service)
        >>> print(page.total_count, page.total_pages)
        5 1
    """
    try:
        criteria = search_request.to_criteria()
        search_result = await provider_service.advanced_search(db, criteria)
        return ProviderConverter.search_result_to_response(search_result)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except Exception as e:
        raise internal_error("run advanced provider search", e) from e


@router.get(
    path="/api/providers/by-number/{provider_number}",
    description="Retrieve a provider by business provider number.",
    response_model=ProviderResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def get_provider_by_provider_number(
    provider_number: str,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> ProviderResponse:
    try:
        provider = await provider_service.get_provider_by_provider_number(
            db, provider_number
        )
        return ProviderConverter.entity_to_response(provider)
    except ProviderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        raise internal_error(f"retrieve provider {provider_number}", e) from e


@router.get(
    path="/api/providers/by-npi/{npi}",
    description="Retrieve a provider by National Provider Identifier.",
    response_model=ProviderResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def get_provider_by_npi(
    npi: str,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> ProviderResponse:
    try:
        provider = await provider_service.get_provider_by_npi(db, npi)
        return ProviderConverter.entity_to_response(provider)
    except ProviderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        raise internal_error(f"retrieve provider by NPI {npi}", e) from e


@router.get(
    path="/api/providers/by-specialty/{specialty}",
    description="Retrieve all providers of a specialty (case-insensitive).",
    response_model=List[ProviderResponse],
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE},
)
async def get_providers_by_specialty(
    specialty: str,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> List[ProviderResponse]:
    try:
        providers = await provider_service.get_providers_by_specialty(db, specialty)
        return ProviderConverter.entities_to_responses(providers)
    except Exception as e:
        raise internal_error(f"retrieve providers by specialty {specialty}", e) from e


@router.get(
    path="/api/providers/exists/provider-number/{provider_number}",
    description="Check whether a provider number is already taken.",
    response_model=ExistsResponse,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE},
)
async def provider_number_exists(
    provider_number: str,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> ExistsResponse:
    try:
        exists = await provider_service.provider_number_exists(db, provider_number)
        return ExistsResponse(exists=exists)
    except Exception as e:
        raise internal_error(f"check provider number {provider_number}", e) from e


@router.get(
    path="/api/providers/exists/npi/{npi}",
    description="Check whether an NPI is already registered.",
    response_model=ExistsResponse,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE},
)
async def npi_exists(
    npi: str,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> ExistsResponse:
    try:
        exists = await provider_service.npi_exists(db, npi)
        return ExistsResponse(exists=exists)
    except Exception as e:
        raise internal_error(f"check NPI {npi}", e) from e


@router.get(
    path="/api/providers/{provider_id}",
    description="Retrieve a specific provider by identifier.",
    response_model=ProviderResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": ProviderResponse,
            "description": "Provider retrieved successfully.",
        },
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def get_provider_by_id(
    provider_id: int,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> ProviderResponse:
    try:
        provider = await provider_service.get_provider_by_id(db, provider_id)
        return ProviderConverter.entity_to_response(provider)
    except ProviderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        raise internal_error(f"retrieve provider {provider_id}", e) from e


@router.post(
    path="/api/providers",
    description="Create a new provider with a unique provider number and NPI.",
    response_model=ProviderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": ProviderResponse,
            "description": "Provider created successfully.",
        },
        status.HTTP_400_BAD_REQUEST: DUPLICATE_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def create_provider(
    provider_create: ProviderCreate,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> ProviderResponse:
    """Create a new provider.

    Raises:
        HTTPException: 400 if the provider number or NPI already exists.
        HTTPException: 500 if internal server errors occur.
    """
    try:
        provider = ProviderConverter.create_input_to_entity(provider_create)
        created_provider = await provider_service.create_provider(db, provider)
        return ProviderConverter.entity_to_response(created_provider)
    except (ProviderAlreadyExistsError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except Exception as e:
        raise internal_error("create provider", e) from e


@router.put(
    path="/api/providers/{provider_id}",
    description="Replace the details of an existing provider.",
    response_model=ProviderResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: DUPLICATE_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def update_provider(
    provider_id: int,
    provider_update: ProviderUpdate,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> ProviderResponse:
    try:
        updated_provider = await provider_service.update_provider(
            db,
            provider_id,
            name=provider_update.name,
            npi=provider_update.npi,
            address=provider_update.address,
            phone=provider_update.phone,
            email=provider_update.email,
            specialty=provider_update.specialty,
        )
        return ProviderConverter.entity_to_response(updated_provider)
    except ProviderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except (ProviderAlreadyExistsError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except Exception as e:
        raise internal_error(f"update provider {provider_id}", e) from e


@router.delete(
    path="/api/providers/{provider_id}",
    description="Delete a provider by identifier.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_204_NO_CONTENT: {"description": "Provider deleted successfully."},
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR_RESPONSE,
    },
)
async def delete_provider(
    provider_id: int,
    db: Session = Depends(get_db),
    provider_service: ProviderService = Depends(get_provider_service),
) -> None:
    try:
        await provider_service.delete_provider(db, provider_id)
    except ProviderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        raise internal_error(f"delete provider {provider_id}", e) from e
