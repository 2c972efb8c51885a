"""Provider converters for transforming between Pydantic schemas and domain entities."""

from typing import List

from application.rest.schemas.input.provider_input import ProviderCreate
from application.rest.schemas.output.provider_output import (
    ProviderResponse,
    ProviderSearchResponse,
)
from domain.entities.provider import Provider
from domain.entities.search import SearchResult


class ProviderConverter:
    """Converter class for provider transformations between layers."""

    @staticmethod
    def create_input_to_entity(provider_create: ProviderCreate) -> Provider:
        return Provider(
            id=None,
            provider_number=provider_create.provider_number,
            name=provider_create.name,
            npi=provider_create.npi,
            address=provider_create.address,
            phone=provider_create.phone,
            email=provider_create.email,
            specialty=provider_create.specialty,
        )

    @staticmethod
    def entity_to_response(provider: Provider) -> ProviderResponse:
        """Convert a Provider domain object to its API response schema.

        Raises:
            ValueError: If the provider has no ID (not persisted).
        """
        return ProviderResponse.from_entity(provider)

    @staticmethod
    def entities_to_responses(providers: List[Provider]) -> List[ProviderResponse]:
        return [ProviderConverter.entity_to_response(provider) for provider in providers]

    @staticmethod
    def search_result_to_response(
        search_result: SearchResult,
    ) -> ProviderSearchResponse:
        return ProviderSearchResponse.from_entity(search_result)
