"""Redis implementation of the record cache.

This module provides the Redis-backed RecordCache used by the domain
services on the lookup-by-identifier path, and the factory that falls back
to a NullRecordCache when Redis is not configured.

A cache outage never fails a request: Redis errors are logged and the
lookup falls through to the database.
"""

import logging
from typing import Optional

import redis

from domain.repositories.cache_repository import NullRecordCache, RecordCache

logger = logging.getLogger(__name__)


class RedisRecordCache(RecordCache):
    """Record cache backed by a Redis client.

    Example:
        >>> cache = RedisRecordCache(redis.from_url("redis://localhost:6379", decode_responses=True))
        >>> await cache.set_string("member:1", '{"id": 1}')
        >>> await cache.get_string("member:1")
        '{"id": 1}'
    """

    def __init__(self, client: "redis.Redis"):
        """Initialize the cache with a Redis client.

        Args:
            client: Redis client created with ``decode_responses=True``.
        """
        self._client = client

    async def get_string(self, key: str) -> Optional[str]:
        try:
            return self._client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Cache read failed for key {key}: {e}")
            return None

    async def set_string(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except redis.RedisError as e:
            logger.warning(f"Cache write failed for key {key}: {e}")

    async def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except redis.RedisError as e:
            logger.warning(f"Cache delete failed for key {key}: {e}")


def create_record_cache(redis_url: str) -> RecordCache:
    """Build the record cache for the configured Redis URL.

    Args:
        redis_url (str): Redis connection URL. Empty disables caching.

    Returns:
        RecordCache: A Redis-backed cache, or a NullRecordCache.
    """
    if not redis_url:
        logger.info("REDIS_URL not set, record cache disabled")
        return NullRecordCache()

    client = redis.from_url(redis_url, decode_responses=True)
    return RedisRecordCache(client)
