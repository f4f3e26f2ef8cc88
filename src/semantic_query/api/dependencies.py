"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from semantic_query.compiler import QueryCompiler
from semantic_query.config import configure_logging, settings
from semantic_query.handlers import QueryHandler
from semantic_query.ontology import MappingStoreRegistry, OntologyResolver
from semantic_query.protocols import CacheStore
from semantic_query.repositories import (
    BlazegraphCacheRepository,
    GraphQLDispatcher,
    RedisCacheRepository,
    StubIntentExtractor,
)
from semantic_query.services import QueryService, SemanticCache
from semantic_query.variants import VariantRegistry

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> QueryHandler:
    """Dependency injection for QueryHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The QueryHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "query_handler", None)
    if handler is None:
        raise RuntimeError("QueryHandler not initialized. Check lifespan setup.")
    return handler


def create_repository() -> CacheStore:
    """Create the cache backend selected by CACHE_BACKEND."""
    if settings.cache_backend == "redis":
        return RedisCacheRepository.create()
    return BlazegraphCacheRepository.create()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Variant registry and mapping stores (loaded once, up front)
    2. Repositories (cache backend, upstream dispatcher, NLU stub)
    3. Services (cache policy, orchestration)
    4. Handler (HTTP endpoints)

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    configure_logging()

    variants = VariantRegistry.create()
    stores = MappingStoreRegistry.create(variants)
    stores.preload()

    repository = create_repository()
    dispatcher = GraphQLDispatcher.create(variants)

    query_service = QueryService(
        extractor=StubIntentExtractor(),
        cache=SemanticCache.create(repository=repository),
        resolver=OntologyResolver(stores),
        compiler=QueryCompiler(variants),
        dispatcher=dispatcher,
    )
    query_handler = QueryHandler(query_service=query_service, variants=variants)

    # Store in app.state (FastAPI pattern)
    app.state.query_service = query_service
    app.state.query_handler = query_handler
    app.state.repository = repository
    app.state.dispatcher = dispatcher

    logger.info("Query service initialized (variants: %s)", ", ".join(variants.names()))
    logger.info("Cache backend: %s, TTL: %ss", settings.cache_backend, settings.cache_ttl_seconds)
    logger.info("Cache healthy: %s", query_service.cache.is_healthy())

    yield

    dispatcher.close()
    if isinstance(repository, BlazegraphCacheRepository):
        repository.close()

    # Cleanup - remove from app.state
    del app.state.query_handler
    del app.state.query_service
    del app.state.repository
    del app.state.dispatcher
    logger.info("Query service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[QueryHandler, Depends(get_handler)]
