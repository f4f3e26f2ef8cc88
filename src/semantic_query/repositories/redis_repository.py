"""Redis implementation of CacheStore.

Stores each cache record as a Redis hash named after its prompt URI.
Expiry is left to the cache service (lazy, on read), so no server-side
EXPIRE is set.
"""

import redis

from semantic_query.config import get_redis_client, settings
from semantic_query.entities import CacheRecord
from semantic_query.errors import CacheUnavailableError

from .blazegraph_repository import parse_timestamp


class RedisCacheRepository:
    """Redis implementation using one hash per record.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance (decode_responses=True). If None, creates default.
            key_prefix: Prefix for all record keys. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            key_prefix: Record key prefix. If None, uses settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(key_prefix=key_prefix)

    def _redis_key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def fetch(self, key: str) -> CacheRecord | None:
        """Read the record stored under a prompt URI.

        Args:
            key: The prompt URI

        Returns:
            The record, or None if absent
        """
        try:
            data = self._client.hgetall(self._redis_key(key))
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis unavailable: {e}") from e

        if not data:
            return None

        try:
            return CacheRecord(
                prompt_key=key,
                prompt=data["prompt"],
                intent_raw=data["intent"],
                compiled_query=data["query"],
                result=data.get("result"),
                created_at=parse_timestamp(data["created_at"]),
            )
        except (KeyError, ValueError) as e:
            raise CacheUnavailableError(f"Malformed cache record {key}: {e}") from e

    def save(self, record: CacheRecord) -> None:
        """Replace the record under its prompt URI.

        Args:
            record: The record to store
        """
        mapping = {
            "prompt": record.prompt,
            "intent": record.intent_raw,
            "query": record.compiled_query,
            "created_at": record.created_at.isoformat(),
        }
        if record.result is not None:
            mapping["result"] = record.result

        redis_key = self._redis_key(record.prompt_key)
        try:
            # No field of the previous record survives an overwrite
            pipe = self._client.pipeline()
            pipe.delete(redis_key)
            pipe.hset(redis_key, mapping=mapping)
            pipe.execute()
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis unavailable: {e}") from e

    def remove(self, key: str) -> None:
        """Delete the record stored under a prompt URI.

        Args:
            key: The prompt URI
        """
        try:
            self._client.delete(self._redis_key(key))
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis unavailable: {e}") from e

    def count_all(self) -> int:
        """Count cached records.

        Returns:
            Total number of cached records

        Raises:
            CacheUnavailableError: If Redis cannot be reached
        """
        count = 0
        try:
            for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
                count += 1
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Redis unavailable: {e}") from e
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "redis",
            "key_prefix": self._prefix,
            "total_entries": self.count_all(),
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
