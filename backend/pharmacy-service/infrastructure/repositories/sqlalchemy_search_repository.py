"""SQLAlchemy implementation of the search repository.

This module contains the generic advanced search engine shared by members
and providers. One instance is configured per entity kind with the ORM model,
the declarative field set, and the ORM-to-entity mapper; the filter, sort
and pagination logic itself is written once.
"""

import logging
from datetime import date
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from sqlalchemy import and_, asc, desc, func
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from domain.entities.search import (
    MatchKind,
    SearchCriteria,
    SearchFieldSet,
    subtract_years,
)
from domain.repositories.search_repository import SearchRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLAlchemySearchRepository(SearchRepository[T]):
    """SQLAlchemy implementation of the search repository.

    The engine reads records only. Total count and page are fetched with two
    statements on the same session, so under concurrent writes they may
    describe slightly different instants unless the caller wraps the session
    in a snapshot-isolated transaction.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.

    Example:
        >>> engine = SQLAlchemySearchRepository(
        ...     MemberORM, MEMBER_SEARCH_FIELDS, to_member_entity
        ... )
        >>> members, total = await engine.search(db, MemberSearchCriteria(last_name="kumar"))
    """

    def __init__(
        self,
        orm_model: Any,
        field_set: SearchFieldSet,
        to_entity: Callable[[Any], T],
        today: Callable[[], date] = date.today,
    ):
        """Initialize the search engine for one entity kind.

        Args:
            orm_model: SQLAlchemy mapped class holding the records.
            field_set: Filter and sort descriptors for this entity kind.
            to_entity: Maps one ORM row to its domain entity.
            today: Clock used to translate age filters into birth-date bounds.
        """
        self._orm_model = orm_model
        self._field_set = field_set
        self._to_entity = to_entity
        self._today = today

    async def search(
        self, db_session: Session, criteria: SearchCriteria
    ) -> Tuple[List[T], int]:
        """Search for records based on the provided criteria.

        The steps are: apply filters, count the filtered set, apply ordering,
        skip ``(page_number - 1) * page_size`` rows and take ``page_size``.

        Args:
            db_session (Session): SQLAlchemy database session for this operation.
            criteria (SearchCriteria): Filters, sort and page to apply.

        Returns:
            Tuple[List[T], int]: The requested page of entities and the total
            number of records matching the filters.

        Raises:
            Exception: If search operation fails at the database level.
        """
        try:
            base_query = db_session.query(self._orm_model)

            filters = self.build_filters(criteria)
            if filters:
                base_query = base_query.filter(and_(*filters))

            # Count the filtered set before ordering and paging
            total_count = base_query.count()

            rows = (
                base_query.order_by(
                    *self.resolve_sort(criteria.sort_by, criteria.sort_descending)
                )
                .offset(criteria.offset)
                .limit(criteria.page_size)
                .all()
            )

            records = [self._to_entity(row) for row in rows]

            logger.info(
                f"Search on {self._orm_model.__tablename__} completed: "
                f"{len(records)} records on page {criteria.page_number} "
                f"out of {total_count} total"
            )

            return records, total_count

        except Exception as e:
            logger.error(
                f"Search on {self._orm_model.__tablename__} failed: {str(e)}"
            )
            raise

    def build_filters(self, criteria: SearchCriteria) -> List[ColumnElement]:
        """Translate every active criteria value into a column predicate.

        Args:
            criteria: Search criteria whose non-blank values become predicates.

        Returns:
            List of SQLAlchemy boolean clauses meant to be combined with AND.
        """
        today = self._today()
        return [
            self._build_predicate(
                getattr(self._orm_model, filter_field.record_attr),
                filter_field.kind,
                value,
                today,
            )
            for filter_field, value in criteria.active_filters()
        ]

    def resolve_sort(
        self, sort_by: Optional[str], descending: bool
    ) -> List[ColumnElement]:
        """Resolve the requested sort name into ORDER BY clauses.

        Unknown or blank names order by the identifier. Any other column is
        followed by the identifier in the same direction, so rows with equal
        sort keys keep a deterministic order across pages.
        """
        direction = desc if descending else asc
        sort_attr = self._field_set.resolve_sort_attr(sort_by)

        order = [direction(getattr(self._orm_model, sort_attr))]
        if sort_attr != self._field_set.default_sort:
            order.append(
                direction(getattr(self._orm_model, self._field_set.default_sort))
            )
        return order

    @staticmethod
    def _build_predicate(column, kind: MatchKind, value, today: date) -> ColumnElement:
        """Build a single field-level predicate."""
        if kind is MatchKind.CONTAINS:
            # autoescape makes % and _ in user input match literally
            return column.icontains(value, autoescape=True)
        if kind is MatchKind.EXACT:
            return func.lower(column) == value.lower()
        if kind is MatchKind.MIN:
            return column >= value
        if kind is MatchKind.MAX:
            return column <= value
        if kind is MatchKind.AGE_MIN:
            # At least `value` years old: born on or before today minus value years
            return column <= subtract_years(today, value)
        if kind is MatchKind.AGE_MAX:
            # At most `value` years old: born after today minus (value + 1) years
            return column > subtract_years(today, value + 1)
        raise ValueError(f"Unsupported match kind: {kind}")
