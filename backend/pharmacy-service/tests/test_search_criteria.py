"""
Tests for the search criteria and field descriptors.

Tests cover:
- Pagination preconditions
- Filter activation (absent, blank and stripped values)
- Sort name resolution
- Calendar arithmetic for age filters
"""

from datetime import date

import pytest

from domain.entities.search import (
    MEMBER_SEARCH_FIELDS,
    PROVIDER_SEARCH_FIELDS,
    MatchKind,
    MemberSearchCriteria,
    ProviderSearchCriteria,
    subtract_years,
)


class TestPaginationPreconditions:
    """Page number and size are validated when criteria are built."""

    def test_defaults(self):
        criteria = MemberSearchCriteria()

        assert criteria.page_number == 1
        assert criteria.page_size == 10
        assert criteria.sort_by == "Id"
        assert criteria.sort_descending is False
        assert criteria.offset == 0

    def test_offset_skips_previous_pages(self):
        criteria = ProviderSearchCriteria(page_number=3, page_size=20)

        assert criteria.offset == 40

    @pytest.mark.parametrize("page_number", [0, -1])
    def test_page_number_below_one_rejected(self, page_number):
        with pytest.raises(ValueError, match="Page number"):
            MemberSearchCriteria(page_number=page_number)

    @pytest.mark.parametrize("page_size", [0, -5, 101])
    def test_page_size_out_of_range_rejected(self, page_size):
        with pytest.raises(ValueError, match="Page size"):
            ProviderSearchCriteria(page_size=page_size)

    def test_page_size_upper_bound_accepted(self):
        assert MemberSearchCriteria(page_size=100).page_size == 100


class TestActiveFilters:
    """Only present, non-blank values become filters."""

    def test_no_filters_by_default(self):
        assert not MemberSearchCriteria().has_filters()
        assert not ProviderSearchCriteria().has_filters()

    def test_blank_strings_are_ignored(self):
        criteria = MemberSearchCriteria(first_name="", last_name="   ")

        assert list(criteria.active_filters()) == []

    def test_string_values_are_stripped(self):
        criteria = ProviderSearchCriteria(specialty="  Cardiology ")

        [(filter_field, value)] = list(criteria.active_filters())
        assert filter_field.record_attr == "specialty"
        assert filter_field.kind is MatchKind.CONTAINS
        assert value == "Cardiology"

    def test_zero_age_is_an_active_filter(self):
        criteria = MemberSearchCriteria(age_from=0)

        [(filter_field, value)] = list(criteria.active_filters())
        assert filter_field.kind is MatchKind.AGE_MIN
        assert value == 0

    def test_gender_matches_exactly(self):
        criteria = MemberSearchCriteria(gender="male")

        [(filter_field, _)] = list(criteria.active_filters())
        assert filter_field.kind is MatchKind.EXACT

    def test_date_bounds_map_to_dob(self):
        criteria = MemberSearchCriteria(
            date_of_birth_from=date(1980, 1, 1), date_of_birth_to=date(1990, 1, 1)
        )

        kinds = {f.kind: f.record_attr for f, _ in criteria.active_filters()}
        assert kinds == {MatchKind.MIN: "dob", MatchKind.MAX: "dob"}


class TestSortResolution:
    """Sort names are matched case-insensitively with an identifier fallback."""

    @pytest.mark.parametrize(
        "sort_by,expected",
        [
            ("LastName", "last_name"),
            ("lastname", "last_name"),
            ("DOB", "dob"),
            ("MemberNumber", "member_number"),
            ("unknown", "id"),
            ("", "id"),
            (None, "id"),
        ],
    )
    def test_member_sort_names(self, sort_by, expected):
        assert MEMBER_SEARCH_FIELDS.resolve_sort_attr(sort_by) == expected

    @pytest.mark.parametrize(
        "sort_by,expected",
        [("name", "name"), ("NPI", "npi"), ("Specialty", "specialty"), ("dob", "id")],
    )
    def test_provider_sort_names(self, sort_by, expected):
        assert PROVIDER_SEARCH_FIELDS.resolve_sort_attr(sort_by) == expected


class TestSubtractYears:
    """Calendar subtraction used by age filters."""

    def test_regular_day(self):
        assert subtract_years(date(2024, 6, 15), 30) == date(1994, 6, 15)

    def test_leap_day_to_leap_year(self):
        assert subtract_years(date(2024, 2, 29), 4) == date(2020, 2, 29)

    def test_leap_day_to_common_year(self):
        assert subtract_years(date(2024, 2, 29), 1) == date(2023, 2, 28)
