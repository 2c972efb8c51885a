"""Search domain entities for the pharmacy service.

This module contains the domain entities for the advanced search feature
shared by members and providers: the declarative field descriptors that
parameterize the search engine per entity kind, the search criteria, and
the pagination envelope returned to callers.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import (
    ClassVar,
    Dict,
    Generic,
    Iterator,
    Optional,
    Tuple,
    TypeVar,
)

from utils.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


class MatchKind(Enum):
    """How a criteria value is compared against a record field."""

    CONTAINS = "contains"  # case-insensitive substring
    EXACT = "exact"  # case-insensitive equality
    MIN = "min"  # field >= value
    MAX = "max"  # field <= value
    AGE_MIN = "age_min"  # age in whole years >= value
    AGE_MAX = "age_max"  # age in whole years <= value


@dataclass(frozen=True)
class FilterField:
    """Descriptor binding one criteria attribute to one record attribute.

    Attributes:
        criteria_attr: Name of the attribute on the search criteria.
        record_attr: Name of the record field the filter applies to.
        kind: Matching policy for this filter.
    """

    criteria_attr: str
    record_attr: str
    kind: MatchKind


@dataclass(frozen=True)
class SearchFieldSet:
    """Declarative description of what can be filtered and sorted for one entity kind.

    Attributes:
        filters: Filter descriptors, applied as a conjunction.
        sort_keys: Lower-cased sort names mapped to record attributes.
        default_sort: Record attribute used when the sort name is unknown or blank.
    """

    filters: Tuple[FilterField, ...]
    sort_keys: Dict[str, str]
    default_sort: str = "id"

    def resolve_sort_attr(self, sort_by: Optional[str]) -> str:
        """Map a requested sort name (case-insensitive) to a record attribute.

        Example:
            >>> MEMBER_SEARCH_FIELDS.resolve_sort_attr("LastName")
            'last_name'
            >>> MEMBER_SEARCH_FIELDS.resolve_sort_attr("shoe_size")
            'id'
        """
        if not sort_by or not sort_by.strip():
            return self.default_sort
        return self.sort_keys.get(sort_by.strip().lower(), self.default_sort)


def subtract_years(day: date, years: int) -> date:
    """Return the same calendar day ``years`` years earlier.

    February 29 maps to February 28 when the target year is not a leap year.
    """
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


MEMBER_SEARCH_FIELDS = SearchFieldSet(
    filters=(
        FilterField("member_number", "member_number", MatchKind.CONTAINS),
        FilterField("first_name", "first_name", MatchKind.CONTAINS),
        FilterField("last_name", "last_name", MatchKind.CONTAINS),
        FilterField("email", "email", MatchKind.CONTAINS),
        FilterField("phone", "phone", MatchKind.CONTAINS),
        FilterField("gender", "gender", MatchKind.EXACT),
        FilterField("address", "address", MatchKind.CONTAINS),
        FilterField("date_of_birth_from", "dob", MatchKind.MIN),
        FilterField("date_of_birth_to", "dob", MatchKind.MAX),
        FilterField("age_from", "dob", MatchKind.AGE_MIN),
        FilterField("age_to", "dob", MatchKind.AGE_MAX),
    ),
    sort_keys={
        "id": "id",
        "membernumber": "member_number",
        "firstname": "first_name",
        "lastname": "last_name",
        "dob": "dob",
        "gender": "gender",
        "email": "email",
        "phone": "phone",
        "address": "address",
    },
)

PROVIDER_SEARCH_FIELDS = SearchFieldSet(
    filters=(
        FilterField("provider_number", "provider_number", MatchKind.CONTAINS),
        FilterField("name", "name", MatchKind.CONTAINS),
        FilterField("npi", "npi", MatchKind.CONTAINS),
        FilterField("email", "email", MatchKind.CONTAINS),
        FilterField("phone", "phone", MatchKind.CONTAINS),
        FilterField("specialty", "specialty", MatchKind.CONTAINS),
        FilterField("address", "address", MatchKind.CONTAINS),
    ),
    sort_keys={
        "id": "id",
        "providernumber": "provider_number",
        "name": "name",
        "npi": "npi",
        "email": "email",
        "phone": "phone",
        "specialty": "specialty",
        "address": "address",
    },
)


@dataclass
class SearchCriteria:
    """Pagination and sort directives shared by every advanced search.

    Attributes:
        page_number: Page number for pagination (1-based).
        page_size: Number of records per page (1..MAX_PAGE_SIZE).
        sort_by: Sort field name, matched case-insensitively.
        sort_descending: Whether to reverse the resolved ordering.
    """

    field_set: ClassVar[SearchFieldSet]

    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: Optional[str] = "Id"
    sort_descending: bool = False

    def __post_init__(self):
        """Validate pagination preconditions after initialization."""
        if self.page_number < 1:
            raise ValueError("Page number must be at least 1")
        if self.page_size < 1 or self.page_size > MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        """Calculate the offset for database pagination."""
        return (self.page_number - 1) * self.page_size

    def active_filters(self) -> Iterator[Tuple[FilterField, object]]:
        """Yield each filter descriptor together with its effective value.

        Absent values and blank strings impose no constraint and are skipped.
        String values are stripped of surrounding whitespace.
        """
        for filter_field in self.field_set.filters:
            value = getattr(self, filter_field.criteria_attr)
            if value is None:
                continue
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            yield filter_field, value

    def has_filters(self) -> bool:
        """Check if any filter constrains the search."""
        return any(True for _ in self.active_filters())


@dataclass
class MemberSearchCriteria(SearchCriteria):
    """Advanced search criteria for members.

    Every filter is optional; ``None`` means no constraint on that field.
    """

    field_set: ClassVar[SearchFieldSet] = MEMBER_SEARCH_FIELDS

    member_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    date_of_birth_from: Optional[date] = None
    date_of_birth_to: Optional[date] = None
    age_from: Optional[int] = None
    age_to: Optional[int] = None


@dataclass
class ProviderSearchCriteria(SearchCriteria):
    """Advanced search criteria for providers."""

    field_set: ClassVar[SearchFieldSet] = PROVIDER_SEARCH_FIELDS

    provider_number: Optional[str] = None
    name: Optional[str] = None
    npi: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class PaginationMetadata:
    """Domain entity representing pagination information for search results.

    Attributes:
        page_number: Current page number.
        page_size: Number of records per page.
        total_count: Total number of records matching the filters.
        total_pages: Total number of pages.
        has_previous_page: Whether there is a previous page.
        has_next_page: Whether there is a next page.
    """

    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def calculate(
        cls, page_number: int, page_size: int, total_count: int
    ) -> "PaginationMetadata":
        """Calculate pagination metadata from basic parameters.

        An empty result has zero pages, so neither flag is set on page 1.

        Args:
            page_number: The current page number (1-based)
            page_size: Number of records per page
            total_count: Total number of matching records

        Returns:
            PaginationMetadata: Calculated pagination information

        Example:
            >>> PaginationMetadata.calculate(1, 2, 3).total_pages
            2
            >>> PaginationMetadata.calculate(1, 10, 0).total_pages
            0
        """
        total_pages = math.ceil(total_count / page_size)

        return cls(
            page_number=page_number,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_previous_page=page_number > 1,
            has_next_page=page_number < total_pages,
        )


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """Domain entity representing one page of an advanced search.

    Attributes:
        items: Records on the requested page, in sort order.
        pagination: Pagination metadata for the search results.
        criteria: The search criteria that produced these results.
        search_timestamp: When the search was performed.
    """

    items: Tuple[T, ...]
    pagination: PaginationMetadata
    criteria: SearchCriteria
    search_timestamp: datetime = field(compare=False)

    def __post_init__(self):
        """Validate search result after initialization."""
        if len(self.items) > self.pagination.page_size:
            raise ValueError("Number of records exceeds page size")

    @property
    def items_count(self) -> int:
        """Get the number of records in this result page."""
        return len(self.items)

    def is_empty(self) -> bool:
        """Check if the search result page is empty."""
        return len(self.items) == 0
