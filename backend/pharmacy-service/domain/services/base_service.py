"""Shared plumbing for the pharmacy domain services.

This module contains the read-through cache helpers used by the member and
provider services on their lookup-by-identifier path, and the assembly of the
advanced search result envelope.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

from domain.entities.search import PaginationMetadata, SearchCriteria, SearchResult
from domain.repositories.cache_repository import NullRecordCache, RecordCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordService:
    """Base class for services that cache single records by identifier.

    Attributes:
        cache_prefix (str): Key prefix, e.g. ``member`` yields ``member:42``.
    """

    cache_prefix = "record"

    def __init__(self, cache: Optional[RecordCache] = None):
        """Initialize the service.

        Args:
            cache (Optional[RecordCache]): Record cache. None disables caching.
        """
        self._cache = cache or NullRecordCache()

    def cache_key(self, record_id: int) -> str:
        return f"{self.cache_prefix}:{record_id}"

    async def _read_cached(
        self, record_id: int, from_dict: Callable[[Dict[str, Any]], T]
    ) -> Optional[T]:
        """Return the cached record, or None on a miss or an unreadable entry."""
        cached = await self._cache.get_string(self.cache_key(record_id))
        if cached is None:
            return None
        try:
            return from_dict(json.loads(cached))
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(
                f"Ignoring unreadable cache entry {self.cache_key(record_id)}: {e}"
            )
            return None

    async def _write_cached(self, record_id: int, record_dict: Dict[str, Any]) -> None:
        await self._cache.set_string(self.cache_key(record_id), json.dumps(record_dict))

    async def _drop_cached(self, record_id: int) -> None:
        await self._cache.delete(self.cache_key(record_id))

    @staticmethod
    def _build_search_result(
        records: List[T], total_count: int, criteria: SearchCriteria
    ) -> SearchResult[T]:
        """Wrap one page of records in the pagination envelope."""
        pagination = PaginationMetadata.calculate(
            page_number=criteria.page_number,
            page_size=criteria.page_size,
            total_count=total_count,
        )
        return SearchResult(
            items=tuple(records),
            pagination=pagination,
            criteria=criteria,
            search_timestamp=datetime.now(timezone.utc),
        )
