"""Repository layer for data access and external collaborators.

This layer abstracts external dependencies (graph store, Redis, upstream
GraphQL APIs, NLU) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Blazegraph → Redis, stub → real NLU)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from semantic_query.protocols import CacheStore, IntentExtractor, QueryDispatcher

from .blazegraph_repository import BlazegraphCacheRepository
from .graphql_dispatcher import GraphQLDispatcher
from .redis_repository import RedisCacheRepository
from .stub_intent_extractor import StubIntentExtractor

__all__ = [
    "CacheStore",
    "IntentExtractor",
    "QueryDispatcher",
    "BlazegraphCacheRepository",
    "RedisCacheRepository",
    "GraphQLDispatcher",
    "StubIntentExtractor",
]
