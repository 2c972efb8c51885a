"""Provider input schemas for API requests."""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from application.rest.schemas.input.member_input import EMAIL_PATTERN, PHONE_PATTERN
from domain.entities.search import ProviderSearchCriteria
from utils.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

PROVIDER_NUMBER_PATTERN = r"^[A-Za-z0-9-]*$"
PROVIDER_TEXT_PATTERN = r"^[A-Za-z\s.,'-]*$"
NPI_PATTERN = r"^[0-9]{10}$"


class ProviderDetails(BaseModel):
    """Fields shared by provider creation and update requests.

    Attributes:
        name (str): Display name, letters, spaces and ``.,'-`` only.
        npi (str): National Provider Identifier, exactly 10 digits.
        address (str): Practice address.
        phone (str): Contact phone number.
        email (str): Contact email address.
        specialty (str): Clinical specialty.
    """

    name: str = Field(..., min_length=1, max_length=200, pattern=PROVIDER_TEXT_PATTERN)
    npi: str = Field(..., pattern=NPI_PATTERN, description="10-digit NPI")
    address: str = Field(..., min_length=1, max_length=500)
    phone: str = Field(..., min_length=1, max_length=20, pattern=PHONE_PATTERN)
    email: str = Field(..., min_length=1, max_length=100)
    specialty: str = Field(
        ..., min_length=1, max_length=100, pattern=PROVIDER_TEXT_PATTERN
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v


class ProviderCreate(ProviderDetails):
    """Schema for creating a new provider.

    Example:
        >>> provider = ProviderCreate(
        ...     provider_number="P001", name="Dr. Ana Ortiz", npi="1234567890",
        ...     address="1 Main St", phone="555-0100",
        ...     email="ana@example.com", specialty="Cardiology",
        ... )
    """

    provider_number: str = Field(
        ..., min_length=1, max_length=50, pattern=PROVIDER_NUMBER_PATTERN
    )


class ProviderUpdate(ProviderDetails):
    """Schema for updating an existing provider. The provider number is immutable."""

    pass


class ProviderSearchRequest(BaseModel):
    """Advanced provider search request.

    Text filters match case-insensitive substrings and are combined with AND.
    """

    provider_number: Optional[str] = Field(
        default=None, max_length=50, pattern=PROVIDER_NUMBER_PATTERN
    )
    name: Optional[str] = Field(
        default=None, max_length=200, pattern=PROVIDER_TEXT_PATTERN
    )
    npi: Optional[str] = Field(default=None, max_length=10, pattern=r"^[0-9]*$")
    email: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20, pattern=PHONE_PATTERN)
    specialty: Optional[str] = Field(
        default=None, max_length=100, pattern=PROVIDER_TEXT_PATTERN
    )
    address: Optional[str] = Field(default=None, max_length=500)

    page_number: int = Field(default=1, ge=1, description="Page number (1-based)")
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Number of results per page",
    )
    sort_by: Optional[str] = Field(default="Id", description="Field to sort by")
    sort_descending: bool = False

    def to_criteria(self) -> ProviderSearchCriteria:
        """Build the domain search criteria from this request."""
        return ProviderSearchCriteria(**self.model_dump())
