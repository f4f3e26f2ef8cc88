"""Cache service for prompt-keyed query caching.

This service owns the cache policy: key derivation from the literal prompt
text, the fixed time-to-live and lazy expiry on read. Storage is delegated
to a CacheStore repository.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from urllib.parse import quote_plus

from semantic_query.config import settings
from semantic_query.entities import CacheRecord
from semantic_query.protocols import CacheStore

logger = logging.getLogger(__name__)

PROMPT_URI_PREFIX = "urn:prompt:"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SemanticCache:
    """TTL-bounded cache of compiled queries keyed by prompt text.

    This service depends on the CacheStore PROTOCOL, not a concrete
    backend, so Blazegraph and Redis are interchangeable.

    Keys are case and whitespace sensitive: two prompts share a record only
    if their percent-encodings are identical. There is no background sweep;
    an expired record is deleted by the read that finds it.

    Concurrent misses for the same prompt are not coalesced. Both callers
    compile and write, and the last write wins.

    Every method is one or two remote round trips and propagates
    CacheUnavailableError from the repository unchanged.

    Example:
        ```python
        from semantic_query.repositories import BlazegraphCacheRepository
        from semantic_query.services import SemanticCache

        cache = SemanticCache.create(repository=BlazegraphCacheRepository.create())
        cache.put("top repos of octocat", query_text, intent_json)
        record = cache.get("top repos of octocat")
        ```
    """

    def __init__(
        self,
        repository: CacheStore,
        ttl: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            repository: Cache storage backend (required).
            ttl: Time-to-live in seconds. Defaults to settings (600).
            clock: Returns the current aware UTC time. Defaults to datetime.now(timezone.utc).
        """
        self._repository = repository
        self._ttl = timedelta(seconds=ttl or settings.cache_ttl_seconds)
        self._clock = clock or utc_now

    @classmethod
    def create(
        cls,
        repository: CacheStore,
        ttl: int | None = None,
    ) -> "SemanticCache":
        """Factory method to create SemanticCache with sensible defaults.

        Args:
            repository: Cache storage backend (required).
            ttl: Time-to-live in seconds. If None, uses settings.

        Returns:
            Configured SemanticCache instance
        """
        return cls(repository=repository, ttl=ttl)

    @staticmethod
    def prompt_key(prompt: str) -> str:
        """Derive the record URI for a prompt.

        Args:
            prompt: The exact prompt text

        Returns:
            ``urn:prompt:`` followed by the form-encoded prompt
        """
        return PROMPT_URI_PREFIX + quote_plus(prompt, encoding="utf-8")

    def get(self, prompt: str) -> CacheRecord | None:
        """Look up a live record for a prompt.

        Business logic:
        1. Derive the key and fetch the record
        2. If it is older than the TTL, delete it and report a miss
        3. Otherwise return it

        Args:
            prompt: The exact prompt text

        Returns:
            The record on a hit, None on a miss (absent or expired)
        """
        key = self.prompt_key(prompt)
        record = self._repository.fetch(key)
        if record is None:
            logger.debug("Cache miss for %s", key)
            return None

        if record.is_expired(self._ttl, self._clock()):
            logger.info("Cache record %s expired (created %s), deleting", key, record.created_at)
            self._repository.remove(key)
            return None

        logger.info("Cache hit for %s", key)
        return record

    def put(
        self,
        prompt: str,
        compiled_query: str,
        intent_raw: str,
        result: str | None = None,
    ) -> CacheRecord:
        """Store a record for a prompt, replacing any existing one.

        Args:
            prompt: The exact prompt text
            compiled_query: The GraphQL query text
            intent_raw: The intent JSON the query was compiled from
            result: Raw upstream response to cache, if any

        Returns:
            The stored record
        """
        record = CacheRecord(
            prompt_key=self.prompt_key(prompt),
            prompt=prompt,
            intent_raw=intent_raw,
            compiled_query=compiled_query,
            result=result,
            created_at=self._clock(),
        )
        self._repository.save(record)
        return record

    def delete(self, prompt: str) -> None:
        """Remove the record for a prompt. Absent records are not an error.

        Args:
            prompt: The exact prompt text
        """
        self._repository.remove(self.prompt_key(prompt))

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        stats = self._repository.get_stats()
        stats["ttl"] = int(self._ttl.total_seconds())
        return stats

    def is_healthy(self) -> bool:
        """Check if the cache backend is reachable."""
        return self._repository.health_check()

    @property
    def ttl(self) -> timedelta:
        """Get the record time-to-live."""
        return self._ttl

    @property
    def repository(self) -> CacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository
