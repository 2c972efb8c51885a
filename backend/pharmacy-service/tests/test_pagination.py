"""
Tests for the pagination envelope.

Tests cover:
- Derived page counts and navigation flags
- Property-based consistency of the derived fields
- SearchResult construction rules
"""

import math
from datetime import datetime, timezone

import pytest
from hypothesis import given, settings, strategies as st

from domain.entities.search import (
    MemberSearchCriteria,
    PaginationMetadata,
    SearchResult,
)


class TestPaginationMetadata:
    """Tests for PaginationMetadata.calculate()"""

    def test_empty_result_has_no_pages(self):
        pagination = PaginationMetadata.calculate(1, 10, 0)

        assert pagination.total_pages == 0
        assert pagination.has_previous_page is False
        assert pagination.has_next_page is False

    def test_partial_last_page_counts(self):
        pagination = PaginationMetadata.calculate(1, 2, 3)

        assert pagination.total_pages == 2
        assert pagination.has_next_page is True
        assert pagination.has_previous_page is False

    def test_last_page(self):
        pagination = PaginationMetadata.calculate(2, 2, 3)

        assert pagination.has_next_page is False
        assert pagination.has_previous_page is True

    def test_page_beyond_last(self):
        pagination = PaginationMetadata.calculate(9, 10, 25)

        assert pagination.total_pages == 3
        assert pagination.has_next_page is False
        assert pagination.has_previous_page is True

    @given(
        total_count=st.integers(min_value=0, max_value=1_000_000),
        page_number=st.integers(min_value=1, max_value=10_000),
        page_size=st.integers(min_value=1, max_value=100),
    )
    @settings(max_examples=200)
    def test_derived_fields_are_consistent(self, total_count, page_number, page_size):
        """Property: derived fields always agree with count, page and size."""
        pagination = PaginationMetadata.calculate(page_number, page_size, total_count)

        assert pagination.total_pages == math.ceil(total_count / page_size)
        assert pagination.has_previous_page == (page_number > 1)
        assert pagination.has_next_page == (page_number < pagination.total_pages)
        assert (pagination.total_pages - 1) * page_size < total_count or total_count == 0
        assert pagination.total_pages * page_size >= total_count


class TestSearchResult:
    """Tests for the SearchResult envelope."""

    def test_rejects_more_items_than_page_size(self):
        criteria = MemberSearchCriteria(page_size=1)
        pagination = PaginationMetadata.calculate(1, 1, 2)

        with pytest.raises(ValueError):
            SearchResult(
                items=("a", "b"),
                pagination=pagination,
                criteria=criteria,
                search_timestamp=datetime.now(timezone.utc),
            )

    def test_empty_page(self):
        criteria = MemberSearchCriteria()
        result = SearchResult(
            items=(),
            pagination=PaginationMetadata.calculate(1, 10, 0),
            criteria=criteria,
            search_timestamp=datetime.now(timezone.utc),
        )

        assert result.is_empty()
        assert result.items_count == 0
