"""HTTP handlers for query and cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from fastapi import HTTPException, status

from semantic_query.dto import (
    CacheDeleteRequest,
    CacheDeleteResponse,
    CacheLookupRequest,
    CacheLookupResponse,
    CacheRecordItem,
    CacheStatsResponse,
    HealthCheckResponse,
    QueryRequest,
    QueryResponse,
    VariantItem,
)
from semantic_query.entities import QueryOutcome
from semantic_query.errors import (
    CacheUnavailableError,
    MalformedIntentError,
    MappingLoadError,
    SemanticQueryError,
    UnsupportedApiError,
    UpstreamError,
)
from semantic_query.services import QueryService
from semantic_query.variants import VariantRegistry

ERROR_STATUS: dict[type[SemanticQueryError], int] = {
    MalformedIntentError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    UnsupportedApiError: status.HTTP_400_BAD_REQUEST,
    MappingLoadError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    CacheUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    UpstreamError: status.HTTP_502_BAD_GATEWAY,
}


def to_http_exception(error: Exception, action: str) -> HTTPException:
    """Map a pipeline error onto an HTTPException.

    Args:
        error: The raised exception
        action: What was being attempted, for the detail message

    Returns:
        HTTPException with the matching status code (500 for anything unknown)
    """
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, error_code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            code = error_code
            break
    return HTTPException(status_code=code, detail=f"Failed to {action}: {error}")


class QueryHandler:
    """HTTP handlers for the query pipeline.

    This handler delegates business logic to QueryService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Mapping pipeline errors to status codes

    Example:
        ```python
        handler = QueryHandler(query_service=service, variants=VariantRegistry.create())

        @app.post("/query", response_model=QueryResponse)
        def run_query(request: QueryRequest):
            return handler.run_query(request)
        ```
    """

    def __init__(self, query_service: QueryService, variants: VariantRegistry) -> None:
        """Initialize the query handler.

        Args:
            query_service: The query service for business logic (required).
            variants: Registered API variants (for listing).
        """
        self._service = query_service
        self._variants = variants

    def run_query(self, request: QueryRequest) -> QueryResponse:
        """Handle POST /query requests.

        Raises:
            HTTPException: With the status matching the pipeline error
        """
        try:
            outcome = self._service.execute(prompt=request.prompt, api=request.api)
        except Exception as e:
            raise to_http_exception(e, "run query") from e
        return self._to_response(outcome)

    def compile_query(self, request: QueryRequest) -> QueryResponse:
        """Handle POST /query/compile requests.

        Raises:
            HTTPException: With the status matching the pipeline error
        """
        try:
            outcome = self._service.compile_only(prompt=request.prompt, api=request.api)
        except Exception as e:
            raise to_http_exception(e, "compile query") from e
        return self._to_response(outcome)

    def lookup_cache(self, request: CacheLookupRequest) -> CacheLookupResponse:
        """Handle POST /cache/lookup requests.

        Raises:
            HTTPException: 503 if the cache backend is unavailable
        """
        try:
            record = self._service.lookup(request.prompt)
        except Exception as e:
            raise to_http_exception(e, "look up cache") from e

        if record is None:
            return CacheLookupResponse(prompt=request.prompt, is_hit=False)

        return CacheLookupResponse(
            prompt=request.prompt,
            is_hit=True,
            record=CacheRecordItem(
                prompt_key=record.prompt_key,
                prompt=record.prompt,
                intent=record.intent_raw,
                compiled_query=record.compiled_query,
                result=record.result,
                created_at=record.created_at,
            ),
        )

    def delete_cache(self, request: CacheDeleteRequest) -> CacheDeleteResponse:
        """Handle DELETE /cache requests.

        Raises:
            HTTPException: 503 if the cache backend is unavailable
        """
        try:
            self._service.invalidate(request.prompt)
        except Exception as e:
            raise to_http_exception(e, "delete cache entry") from e

        return CacheDeleteResponse(success=True, message="Cache entry deleted")

    def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests.

        Raises:
            HTTPException: 503 if the cache backend is unavailable
        """
        try:
            stats = self._service.cache.get_stats()
        except Exception as e:
            raise to_http_exception(e, "get cache stats") from e

        return CacheStatsResponse(
            backend=stats.get("backend", ""),
            total_entries=stats.get("total_entries", 0),
            ttl=stats.get("ttl", 0),
        )

    def list_variants(self) -> list[VariantItem]:
        """Handle GET /variants requests."""
        return [
            VariantItem(
                name=variant.name,
                template=variant.template,
                endpoint=variant.endpoint,
                authenticated=bool(variant.token),
            )
            for variant in self._variants
        ]

    def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = self._service.cache.is_healthy()
        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
        )

    @staticmethod
    def _to_response(outcome: QueryOutcome) -> QueryResponse:
        return QueryResponse(
            prompt=outcome.prompt,
            api=outcome.api,
            cache_hit=outcome.cache_hit,
            query=outcome.query,
            result=outcome.result,
        )
