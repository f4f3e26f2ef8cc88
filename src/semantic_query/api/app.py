from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from semantic_query.config import settings
from semantic_query.dto import (
    CacheDeleteRequest,
    CacheDeleteResponse,
    CacheLookupRequest,
    CacheLookupResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    QueryRequest,
    QueryResponse,
    VariantItem,
)

from .dependencies import HandlerDep, lifespan

app = FastAPI(
    title="Semantic Query API",
    description="Ontology-driven GraphQL query compilation with prompt caching",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Sync routes: FastAPI runs them in its threadpool.


@app.get("/")
def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Semantic Query API",
        "version": "0.1.0",
        "description": "Ontology-driven GraphQL query compilation with prompt caching",
        "endpoints": {
            "query": "/query",
            "compile": "/query/compile",
            "cache": "/cache",
            "stats": "/cache/stats",
            "variants": "/variants",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return handler.health_check()


@app.post("/query", response_model=QueryResponse)
def run_query(request: QueryRequest, handler: HandlerDep) -> QueryResponse:
    """
    Compile a prompt's intent (or reuse the cached query) and run it upstream.

    Args:
        request: Prompt and API variant.

    Returns:
        The query text, whether it was cached, and the raw upstream response.
    """
    return handler.run_query(request)


@app.post("/query/compile", response_model=QueryResponse)
def compile_query(request: QueryRequest, handler: HandlerDep) -> QueryResponse:
    """Compile a prompt's intent without contacting the upstream API."""
    return handler.compile_query(request)


@app.post("/cache/lookup", response_model=CacheLookupResponse)
def lookup_cache(request: CacheLookupRequest, handler: HandlerDep) -> CacheLookupResponse:
    """Read the live cache record for a prompt."""
    return handler.lookup_cache(request)


@app.delete("/cache", response_model=CacheDeleteResponse)
def delete_cache(request: CacheDeleteRequest, handler: HandlerDep) -> CacheDeleteResponse:
    """Delete the cache record for a prompt."""
    return handler.delete_cache(request)


@app.get("/cache/stats", response_model=CacheStatsResponse)
def cache_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get cache statistics."""
    return handler.get_stats()


@app.get("/variants", response_model=list[VariantItem])
def list_variants(handler: HandlerDep) -> list[VariantItem]:
    """List the registered upstream API variants."""
    return handler.list_variants()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "semantic_query.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
