"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request DTO for running (or only compiling) a prompt."""

    prompt: str = Field(..., description="The natural-language prompt", min_length=1)
    api: str = Field(..., description="API variant to query (e.g. 'github', 'countries')")


class CacheLookupRequest(BaseModel):
    """Request DTO for reading a cache record."""

    prompt: str = Field(..., description="Exact prompt text of the record", min_length=1)


class CacheDeleteRequest(BaseModel):
    """Request DTO for deleting a cache record."""

    prompt: str = Field(..., description="Exact prompt text of the record to delete", min_length=1)
