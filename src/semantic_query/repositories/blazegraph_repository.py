"""Blazegraph implementation of CacheStore.

Cache records are stored as RDF resources in a Blazegraph namespace and
accessed over the SPARQL 1.1 protocol (query and update via HTTP POST).
It's the default implementation and satisfies the CacheStore protocol.
"""

import logging
from datetime import datetime, timezone

import httpx

from semantic_query.config import settings
from semantic_query.entities import CacheRecord
from semantic_query.errors import CacheUnavailableError

logger = logging.getLogger(__name__)

CACHE_NS = "http://example.org/cache#"
XSD_DATETIME = "http://www.w3.org/2001/XMLSchema#dateTime"

PREFIXES = f"PREFIX cache: <{CACHE_NS}>\nPREFIX xsd: <http://www.w3.org/2001/XMLSchema#>\n"

_SPARQL_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def sparql_literal(value: str) -> str:
    """Quote a string as a SPARQL literal."""
    return '"' + "".join(_SPARQL_ESCAPES.get(char, char) for char in value) + '"'


def parse_timestamp(value: str) -> datetime:
    """Parse an xsd:dateTime lexical value into an aware UTC datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class BlazegraphCacheRepository:
    """Blazegraph implementation using a SPARQL endpoint.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Each record is one resource named by its prompt URI:

        <urn:prompt:...> a cache:CachedEntry ;
            cache:originalPrompt "..." ;
            cache:hasNLPResponse "..." ;
            cache:hasGraphQLQuery "..." ;
            cache:hasResult "..." ;          # optional
            cache:createdAt "..."^^xsd:dateTime .
    """

    def __init__(
        self,
        endpoint: str | None = None,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the Blazegraph cache repository.

        Args:
            endpoint: SPARQL endpoint URL. Defaults to settings.
            client: HTTP client instance. If None, creates default.
            timeout: Request timeout in seconds. Defaults to settings.
        """
        self._endpoint = endpoint or settings.blazegraph_endpoint
        self._client = client or httpx.Client(timeout=timeout or settings.blazegraph_timeout)

    @classmethod
    def create(cls, endpoint: str | None = None) -> "BlazegraphCacheRepository":
        """Factory method to create BlazegraphCacheRepository with defaults.

        Args:
            endpoint: SPARQL endpoint URL. If None, uses settings.

        Returns:
            Configured BlazegraphCacheRepository
        """
        return cls(endpoint=endpoint)

    def fetch(self, key: str) -> CacheRecord | None:
        """Read the record stored under a prompt URI.

        Args:
            key: The prompt URI

        Returns:
            The record, or None if absent
        """
        query = PREFIXES + (
            "SELECT ?prompt ?intent ?query ?result ?createdAt WHERE {\n"
            f"  <{key}> a cache:CachedEntry ;\n"
            "    cache:originalPrompt ?prompt ;\n"
            "    cache:hasNLPResponse ?intent ;\n"
            "    cache:hasGraphQLQuery ?query ;\n"
            "    cache:createdAt ?createdAt .\n"
            f"  OPTIONAL {{ <{key}> cache:hasResult ?result }}\n"
            "}\nLIMIT 1"
        )
        bindings = self._select(query)
        if not bindings:
            return None

        row = bindings[0]
        try:
            return CacheRecord(
                prompt_key=key,
                prompt=row["prompt"]["value"],
                intent_raw=row["intent"]["value"],
                compiled_query=row["query"]["value"],
                result=row["result"]["value"] if "result" in row else None,
                created_at=parse_timestamp(row["createdAt"]["value"]),
            )
        except (KeyError, ValueError) as e:
            raise CacheUnavailableError(f"Malformed cache record {key}: {e}") from e

    def save(self, record: CacheRecord) -> None:
        """Replace the record under its prompt URI.

        The delete and the insert are sent as one update request.

        Args:
            record: The record to store
        """
        key = record.prompt_key
        statements = [
            f"  <{key}> a cache:CachedEntry ;",
            f"    cache:originalPrompt {sparql_literal(record.prompt)} ;",
            f"    cache:hasNLPResponse {sparql_literal(record.intent_raw)} ;",
            f"    cache:hasGraphQLQuery {sparql_literal(record.compiled_query)} ;",
        ]
        if record.result is not None:
            statements.append(f"    cache:hasResult {sparql_literal(record.result)} ;")
        created_at = record.created_at.astimezone(timezone.utc).isoformat()
        statements.append(f"    cache:createdAt {sparql_literal(created_at)}^^xsd:dateTime .")

        update = (
            PREFIXES
            + f"DELETE WHERE {{ <{key}> ?p ?o }} ;\n"
            + "INSERT DATA {\n"
            + "\n".join(statements)
            + "\n}"
        )
        self._update(update)

    def remove(self, key: str) -> None:
        """Delete the record stored under a prompt URI.

        Args:
            key: The prompt URI
        """
        self._update(f"DELETE WHERE {{ <{key}> ?p ?o }}")

    def count_all(self) -> int:
        """Count cached records.

        Returns:
            Total number of cached records
        """
        bindings = self._select(
            PREFIXES + "SELECT (COUNT(?entry) AS ?total) WHERE { ?entry a cache:CachedEntry }"
        )
        if not bindings:
            return 0
        return int(bindings[0]["total"]["value"])

    def health_check(self) -> bool:
        """Check if Blazegraph is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            self._post({"query": "ASK {}"}, accept="application/sparql-results+json")
            return True
        except CacheUnavailableError:
            return False

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "blazegraph",
            "endpoint": self._endpoint,
            "total_entries": self.count_all(),
        }

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def _select(self, query: str) -> list[dict]:
        response = self._post({"query": query}, accept="application/sparql-results+json")
        try:
            return response.json()["results"]["bindings"]
        except (ValueError, KeyError) as e:
            raise CacheUnavailableError(f"Unexpected SPARQL response: {e}") from e

    def _update(self, update: str) -> None:
        self._post({"update": update})

    def _post(self, data: dict[str, str], accept: str | None = None) -> httpx.Response:
        headers = {"Accept": accept} if accept else None
        try:
            response = self._client.post(self._endpoint, data=data, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Blazegraph request to %s failed: %s", self._endpoint, e)
            raise CacheUnavailableError(f"Blazegraph unavailable: {e}") from e
        return response

    @property
    def endpoint(self) -> str:
        """Get the SPARQL endpoint URL."""
        return self._endpoint
