"""Semantic Query - ontology-driven GraphQL query compilation with prompt caching.

This package provides a layered architecture for turning structured intents
into upstream GraphQL queries:

Layers:
    - ontology: Per-variant mapping stores (Turtle) and label resolution
    - compiler: GraphQL builder and the simple/paginated query templates
    - protocols: Interface contracts (CacheStore, IntentExtractor, QueryDispatcher)
    - repositories: Data access and collaborator implementations
    - services: Cache policy and request orchestration
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts, intent wire format)
    - entities: Domain models (internal)

Usage:
    ```python
    from semantic_query.services import QueryService, SemanticCache

    cache = SemanticCache.create(repository=BlazegraphCacheRepository.create())
    ```

For HTTP API:
    ```python
    from semantic_query.api.app import app
    ```
"""

from semantic_query.compiler import QueryCompiler
from semantic_query.config import get_redis_client, settings
from semantic_query.dto import QueryRequest, parse_intent
from semantic_query.entities import CacheRecord, Intent, SubEntityMapping, TargetMapping
from semantic_query.errors import (
    CacheUnavailableError,
    MalformedIntentError,
    MappingLoadError,
    SemanticQueryError,
    UnsupportedApiError,
    UpstreamError,
)
from semantic_query.handlers import QueryHandler
from semantic_query.ontology import MappingStoreRegistry, OntologyResolver
from semantic_query.protocols import CacheStore, IntentExtractor, QueryDispatcher
from semantic_query.repositories import (
    BlazegraphCacheRepository,
    GraphQLDispatcher,
    RedisCacheRepository,
    StubIntentExtractor,
)
from semantic_query.services import QueryService, SemanticCache
from semantic_query.variants import ApiVariant, VariantRegistry

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    "ApiVariant",
    "VariantRegistry",
    # Errors
    "SemanticQueryError",
    "MalformedIntentError",
    "UnsupportedApiError",
    "MappingLoadError",
    "CacheUnavailableError",
    "UpstreamError",
    # Core
    "MappingStoreRegistry",
    "OntologyResolver",
    "QueryCompiler",
    # Protocols (interfaces)
    "CacheStore",
    "IntentExtractor",
    "QueryDispatcher",
    # Services (business logic)
    "SemanticCache",
    "QueryService",
    # Handlers (HTTP)
    "QueryHandler",
    # Repositories (data access)
    "BlazegraphCacheRepository",
    "RedisCacheRepository",
    "GraphQLDispatcher",
    "StubIntentExtractor",
    # Entities (domain models)
    "CacheRecord",
    "Intent",
    "TargetMapping",
    "SubEntityMapping",
    # DTOs (API contracts)
    "QueryRequest",
    "parse_intent",
]
