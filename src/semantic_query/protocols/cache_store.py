"""Cache storage protocol.

Defines the interface for any backend that can hold cache records keyed
by prompt URI. Implementations:
- Blazegraph (SPARQL 1.1 protocol, default)
- Redis hashes
"""

from typing import Protocol, runtime_checkable

from semantic_query.entities import CacheRecord


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed. Every method is a single remote round
    trip; implementations raise CacheUnavailableError on I/O failure and
    never retry.

    Example:
        ```python
        from semantic_query.protocols import CacheStore

        repo: CacheStore = BlazegraphCacheRepository.create()
        repo: CacheStore = RedisCacheRepository.create()
        ```
    """

    def fetch(self, key: str) -> CacheRecord | None:
        """Read the record stored under a key.

        Args:
            key: The prompt URI

        Returns:
            The record, or None if absent
        """
        ...

    def save(self, record: CacheRecord) -> None:
        """Write a record, replacing whatever is stored under its key.

        Args:
            record: The record to store
        """
        ...

    def remove(self, key: str) -> None:
        """Delete the record stored under a key.

        Deleting an absent key is not an error.

        Args:
            key: The prompt URI
        """
        ...

    def health_check(self) -> bool:
        """Check if the backend is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...

    def get_stats(self) -> dict:
        """Get backend statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
