"""Record cache interface.

This module defines the narrow key-value contract the domain services use
to accelerate single-record lookups. The cache has no expiry logic of its
own; services decide what to write and when to drop an entry.
"""

from abc import ABC, abstractmethod
from typing import Optional


class RecordCache(ABC):
    """Abstract string-by-key cache used on the lookup-by-identifier path."""

    @abstractmethod
    async def get_string(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None on a miss."""
        pass

    @abstractmethod
    async def set_string(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``. A missing key is not an error."""
        pass


class NullRecordCache(RecordCache):
    """Cache that stores nothing; every lookup is a miss."""

    async def get_string(self, key: str) -> Optional[str]:
        return None

    async def set_string(self, key: str, value: str) -> None:
        return None

    async def delete(self, key: str) -> None:
        return None
