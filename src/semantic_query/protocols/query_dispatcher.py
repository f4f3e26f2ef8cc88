"""Upstream dispatch protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class QueryDispatcher(Protocol):
    """Protocol for sending compiled queries to an upstream GraphQL API."""

    def dispatch(self, query: str, api: str) -> str:
        """Send a query upstream.

        Args:
            query: Compiled GraphQL query text
            api: API variant tag selecting endpoint and headers

        Returns:
            Raw response body

        Raises:
            UpstreamError: On non-2xx responses or transport failures
        """
        ...
