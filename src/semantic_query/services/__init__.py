"""Service layer for business logic.

This layer contains the cache policy and the request orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from semantic_query.services import QueryService, SemanticCache

    cache = SemanticCache.create(repository=repo)
    service = QueryService(extractor, cache, resolver, compiler, dispatcher)
    ```
"""

from .cache_service import SemanticCache
from .query_service import QueryService

__all__ = [
    "QueryService",
    "SemanticCache",
]
