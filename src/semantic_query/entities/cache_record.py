"""Cache record domain entity."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class CacheRecord:
    """A cached compilation for one literal prompt text.

    Attributes:
        prompt_key: URI derived from the percent-encoded prompt
        prompt: The original prompt text
        intent_raw: The intent JSON the query was compiled from
        compiled_query: The GraphQL query text
        result: Raw upstream response, if it was cached
        created_at: Creation time (timezone-aware, UTC)
    """

    prompt_key: str
    prompt: str
    intent_raw: str
    compiled_query: str
    created_at: datetime
    result: str | None = None

    def age(self, now: datetime) -> timedelta:
        """Time elapsed since the record was written."""
        return now - self.created_at

    def is_expired(self, ttl: timedelta, now: datetime) -> bool:
        """Check the record against a time-to-live."""
        return self.age(now) >= ttl
