"""Error taxonomy for the query pipeline.

Every failure that can abort a request has its own type so that callers
(and the HTTP handlers) can decide how to degrade or which status to return.
None of these are retried anywhere in the package.
"""


class SemanticQueryError(Exception):
    """Base class for all pipeline errors."""


class MalformedIntentError(SemanticQueryError):
    """Raised when the intent text is missing required fields or is not parseable."""


class UnsupportedApiError(SemanticQueryError):
    """Raised when an intent names an API variant that is not registered."""

    def __init__(self, api: str) -> None:
        self.api = api
        super().__init__(f"Unsupported API variant: {api!r}")


class MappingLoadError(SemanticQueryError):
    """Raised when an API variant's mapping store cannot be read or parsed."""

    def __init__(self, api: str, source: str, reason: str) -> None:
        self.api = api
        self.source = source
        super().__init__(f"Failed to load mapping store for {api!r} from {source}: {reason}")


class CacheUnavailableError(SemanticQueryError):
    """Raised when the cache backend cannot be reached or answers with an error."""


class UpstreamError(SemanticQueryError):
    """Raised when the upstream GraphQL API answers with a non-2xx status.

    ``status_code`` is None when the request never got a response
    (connection refused, timeout).
    """

    def __init__(self, api: str, status_code: int | None, body: str = "") -> None:
        self.api = api
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Upstream API {api!r} unreachable: {body}"
        else:
            message = f"Upstream API {api!r} returned HTTP {status_code}"
        super().__init__(message)
