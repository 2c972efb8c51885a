"""Member input schemas for API requests.

This module contains Pydantic models for member-related API requests,
including creation, update and advanced search.
"""

import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.entities.search import MemberSearchCriteria
from utils.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

MEMBER_NUMBER_PATTERN = r"^[A-Za-z0-9-]*$"
PERSON_NAME_PATTERN = r"^[A-Za-z\s]*$"
REQUIRED_NAME_PATTERN = r"^[A-Za-z\s]+$"
PHONE_PATTERN = r"^[+]?[0-9\s\-()]*$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

VALID_GENDERS = ("Male", "Female", "Other")


def normalize_gender(value: Optional[str]) -> Optional[str]:
    """Return the canonical spelling of a gender, matched case-insensitively.

    Raises:
        ValueError: If the value is not one of Male, Female or Other.
    """
    if value is None or value == "":
        return value
    for gender in VALID_GENDERS:
        if gender.lower() == value.strip().lower():
            return gender
    raise ValueError("Gender must be either 'Male', 'Female', or 'Other'")


def age_on(dob: date, today: date) -> int:
    """Whole years elapsed between ``dob`` and ``today``."""
    return today.year - dob.year - ((today.month, today.day) < (dob.month, dob.day))


class MemberDetails(BaseModel):
    """Fields shared by member creation and update requests."""

    first_name: str = Field(
        ..., min_length=1, max_length=100, pattern=REQUIRED_NAME_PATTERN
    )
    last_name: str = Field(
        ..., min_length=1, max_length=100, pattern=REQUIRED_NAME_PATTERN
    )
    dob: date = Field(..., description="Date of birth")
    gender: str = Field(..., min_length=1, description="Male, Female or Other")
    address: str = Field(default="", max_length=500)
    phone: str = Field(default="", max_length=20, pattern=PHONE_PATTERN)
    email: str = Field(default="", max_length=100)

    @field_validator("gender")
    @classmethod
    def validate_gender(cls, v):
        return normalize_gender(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        """Validate the email format when one is provided."""
        if v and not re.match(EMAIL_PATTERN, v):
            raise ValueError("Email address format is invalid")
        return v

    @field_validator("dob")
    @classmethod
    def validate_dob(cls, v):
        age = age_on(v, date.today())
        if age < 1 or age > 120:
            raise ValueError("Date of birth must be between 1 and 120 years ago")
        return v


class MemberCreate(MemberDetails):
    """Schema for creating a new member.

    Example:
        >>> member = MemberCreate(
        ...     member_number="M001", first_name="Ravi", last_name="Kumar",
        ...     dob=date(1980, 5, 1), gender="male",
        ... )
        >>> print(member.gender)
        "Male"
    """

    member_number: str = Field(
        ..., min_length=1, max_length=50, pattern=MEMBER_NUMBER_PATTERN
    )


class MemberUpdate(MemberDetails):
    """Schema for updating an existing member. The member number is immutable."""

    pass


class MemberSearchRequest(BaseModel):
    """Advanced member search request.

    Every filter is optional; supplied filters are combined with AND.
    Text filters match case-insensitive substrings, except gender which
    matches exactly. Ages are whole years relative to today.

    Attributes:
        page_number: 1-based page to return.
        page_size: Records per page (1..100).
        sort_by: Field name to sort by; unknown names sort by identifier.
        sort_descending: Reverse the sort order.
    """

    member_number: Optional[str] = Field(
        default=None, max_length=50, pattern=MEMBER_NUMBER_PATTERN
    )
    first_name: Optional[str] = Field(
        default=None, max_length=100, pattern=PERSON_NAME_PATTERN
    )
    last_name: Optional[str] = Field(
        default=None, max_length=100, pattern=PERSON_NAME_PATTERN
    )
    email: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20, pattern=PHONE_PATTERN)
    gender: Optional[str] = None
    address: Optional[str] = Field(default=None, max_length=500)
    date_of_birth_from: Optional[date] = None
    date_of_birth_to: Optional[date] = None
    age_from: Optional[int] = Field(default=None, ge=0, le=150)
    age_to: Optional[int] = Field(default=None, ge=0, le=150)

    page_number: int = Field(default=1, ge=1, description="Page number (1-based)")
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Number of results per page",
    )
    sort_by: Optional[str] = Field(default="Id", description="Field to sort by")
    sort_descending: bool = False

    @field_validator("gender")
    @classmethod
    def validate_gender(cls, v):
        return normalize_gender(v)

    @field_validator("date_of_birth_from", "date_of_birth_to")
    @classmethod
    def validate_not_future(cls, v):
        if v is not None and v > date.today():
            raise ValueError("Date of birth bounds cannot be in the future")
        return v

    @model_validator(mode="after")
    def validate_ranges(self):
        """Check that range upper bounds are not below their lower bounds."""
        if (
            self.date_of_birth_from is not None
            and self.date_of_birth_to is not None
            and self.date_of_birth_to < self.date_of_birth_from
        ):
            raise ValueError(
                "Date of birth to must be greater than or equal to date of birth from"
            )
        if (
            self.age_from is not None
            and self.age_to is not None
            and self.age_to < self.age_from
        ):
            raise ValueError("Age to must be greater than or equal to age from")
        return self

    def to_criteria(self) -> MemberSearchCriteria:
        """Build the domain search criteria from this request."""
        return MemberSearchCriteria(**self.model_dump())
