"""Upstream GraphQL dispatcher.

Posts compiled queries to the endpoint of the intent's API variant and
passes the raw response body through unparsed.
"""

import logging

import httpx

from semantic_query.config import settings
from semantic_query.errors import UpstreamError
from semantic_query.variants import VariantRegistry

logger = logging.getLogger(__name__)


class GraphQLDispatcher:
    """httpx-based implementation of the QueryDispatcher protocol.

    Endpoint and headers come only from the variant registry. Failures are
    reported as UpstreamError and never retried.

    Example:
        ```python
        dispatcher = GraphQLDispatcher.create()
        body = dispatcher.dispatch(query_text, "countries")
        ```
    """

    def __init__(
        self,
        variants: VariantRegistry,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            variants: Registry providing endpoints and auth per variant.
            client: HTTP client instance. If None, creates default.
            timeout: Request timeout in seconds. Defaults to settings.
        """
        self._variants = variants
        self._client = client or httpx.Client(timeout=timeout or settings.upstream_timeout)

    @classmethod
    def create(cls, variants: VariantRegistry | None = None) -> "GraphQLDispatcher":
        """Factory method to create GraphQLDispatcher with defaults."""
        return cls(variants=variants or VariantRegistry.create())

    def dispatch(self, query: str, api: str) -> str:
        """Send a query to the variant's endpoint.

        Args:
            query: Compiled GraphQL query text
            api: API variant tag

        Returns:
            Raw response body

        Raises:
            UnsupportedApiError: If the variant is not registered
            UpstreamError: On non-2xx responses or transport failures
        """
        variant = self._variants.get(api)

        try:
            response = self._client.post(
                variant.endpoint,
                json={"query": query},
                headers=variant.headers(),
            )
        except httpx.HTTPError as e:
            logger.error("Request to %s (%s) failed: %s", variant.name, variant.endpoint, e)
            raise UpstreamError(variant.name, None, str(e)) from e

        if not response.is_success:
            logger.error(
                "Error querying GraphQL API (%s): HTTP %s", variant.name, response.status_code
            )
            raise UpstreamError(variant.name, response.status_code, response.text)

        logger.info("GraphQL API %s answered HTTP %s", variant.name, response.status_code)
        return response.text

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()
