"""Query outcome domain entity."""

from dataclasses import dataclass

from .intent import Intent


@dataclass(frozen=True)
class QueryOutcome:
    """Result of running one prompt through the pipeline.

    Attributes:
        prompt: The original prompt
        intent: The intent extracted for this request
        query: The compiled (or cached) GraphQL query
        cache_hit: Whether the query came from the cache
        result: Raw upstream response, None when the query was not dispatched
    """

    prompt: str
    intent: Intent
    query: str
    cache_hit: bool
    result: str | None = None

    @property
    def api(self) -> str:
        return self.intent.api
