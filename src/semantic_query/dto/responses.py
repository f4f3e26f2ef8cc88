"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class QueryResponse(BaseModel):
    """Response DTO for a query run."""

    prompt: str = Field(..., description="The original prompt")
    api: str = Field(..., description="API variant the query targets")
    cache_hit: bool = Field(..., description="Whether the compiled query came from the cache")
    query: str = Field(..., description="The compiled GraphQL query")
    result: str | None = Field(
        None,
        description="Raw upstream response text (null when only compiling)",
    )


class CacheRecordItem(BaseModel):
    """A cache record as exposed over HTTP."""

    prompt_key: str = Field(..., description="URI derived from the prompt text")
    prompt: str = Field(..., description="The original prompt")
    intent: str = Field(..., description="Raw intent JSON the query was compiled from")
    compiled_query: str = Field(..., description="The cached GraphQL query")
    result: str | None = Field(None, description="Cached upstream response, if any")
    created_at: datetime = Field(..., description="Creation time (UTC)")


class CacheLookupResponse(BaseModel):
    """Response DTO for a cache lookup."""

    prompt: str = Field(..., description="The looked-up prompt")
    is_hit: bool = Field(..., description="Whether a live record exists")
    record: CacheRecordItem | None = Field(None, description="The record on a hit")


class CacheDeleteResponse(BaseModel):
    """Response DTO for cache deletion."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")


class VariantItem(BaseModel):
    """A registered API variant."""

    name: str = Field(..., description="Variant tag")
    template: str = Field(..., description="Query template: 'simple' or 'paginated'")
    endpoint: str = Field(..., description="Upstream GraphQL endpoint")
    authenticated: bool = Field(..., description="Whether a bearer token is sent")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    backend: str = Field(..., description="Cache backend: 'blazegraph' or 'redis'")
    total_entries: int = Field(..., description="Number of stored records, expired ones included")
    ttl: int = Field(..., description="Record time-to-live in seconds")
