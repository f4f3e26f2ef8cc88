"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract (HTTP requests and
responses, and the intent JSON handed over by the NLU step).

Internal domain logic should use entities from the entities package.
"""

from .intent import IntentPayload, parse_intent
from .requests import CacheDeleteRequest, CacheLookupRequest, QueryRequest
from .responses import (
    CacheDeleteResponse,
    CacheLookupResponse,
    CacheRecordItem,
    CacheStatsResponse,
    HealthCheckResponse,
    QueryResponse,
    VariantItem,
)

__all__ = [
    "IntentPayload",
    "parse_intent",
    "QueryRequest",
    "CacheLookupRequest",
    "CacheDeleteRequest",
    "QueryResponse",
    "CacheRecordItem",
    "CacheLookupResponse",
    "CacheDeleteResponse",
    "CacheStatsResponse",
    "VariantItem",
    "HealthCheckResponse",
]
