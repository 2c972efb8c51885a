"""Provider output schemas for API responses."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.provider import Provider
    from domain.entities.search import SearchResult


class ProviderResponse(BaseModel):
    """Schema for provider data in API responses."""

    id: int
    provider_number: str
    name: str
    npi: str
    address: str
    phone: str
    email: str
    specialty: str

    @classmethod
    def from_entity(cls, provider: Provider) -> ProviderResponse:
        if provider.is_new():
            raise ValueError("Cannot convert new provider entity to response (no ID)")

        return cls(
            id=provider.id,
            provider_number=provider.provider_number,
            name=provider.name,
            npi=provider.npi,
            address=provider.address,
            phone=provider.phone,
            email=provider.email,
            specialty=provider.specialty,
        )


class ProviderSearchResponse(BaseModel):
    """Schema for one page of advanced provider search results.

    Example:
        >>> response = ProviderSearchResponse(
        ...     providers=[],
        ...     total_count=0,
        ...     page_number=1,
        ...     page_size=10,
        ...     total_pages=0,
        ...     has_previous_page=False,
        ...     has_next_page=False,
        ... )
    """

    providers: List[ProviderResponse]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def from_entity(cls, search_result: SearchResult) -> ProviderSearchResponse:
        """Convert a domain SearchResult of providers to the API envelope.

        Args:
            search_result: Domain search result holding Provider items.

        Returns:
            ProviderSearchResponse: Flattened page and pagination fields.
        """
        pagination = search_result.pagination
        return cls(
            providers=[
                ProviderResponse.from_entity(provider)
                for provider in search_result.items
            ],
            total_count=pagination.total_count,
            page_number=pagination.page_number,
            page_size=pagination.page_size,
            total_pages=pagination.total_pages,
            has_previous_page=pagination.has_previous_page,
            has_next_page=pagination.has_next_page,
        )
