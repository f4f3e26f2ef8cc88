"""Query service: the prompt-to-upstream pipeline.

Coordinates intent extraction, the prompt cache, ontology resolution,
query compilation and upstream dispatch.
"""

import logging

from semantic_query.compiler import QueryCompiler
from semantic_query.config import settings
from semantic_query.dto import parse_intent
from semantic_query.entities import CacheRecord, Intent, QueryOutcome
from semantic_query.errors import CacheUnavailableError
from semantic_query.ontology import OntologyResolver
from semantic_query.protocols import IntentExtractor, QueryDispatcher

from .cache_service import SemanticCache

logger = logging.getLogger(__name__)


class QueryService:
    """Core orchestration service.

    Request flow:
    1. Extract the intent for the prompt and validate it
    2. Check the cache by literal prompt text
    3. On a hit, reuse the cached query (and cached result, if enabled)
    4. On a miss, resolve mappings, compile, and store the new record
    5. Dispatch the query upstream

    A failure at any step aborts the request; nothing is dispatched when
    resolution or compilation failed.

    Cache outages follow the configured policy: with ``bypass_cache_on_failure``
    the request proceeds uncached, otherwise CacheUnavailableError propagates.

    Example:
        ```python
        service = QueryService(
            extractor=StubIntentExtractor(),
            cache=SemanticCache.create(repository=BlazegraphCacheRepository.create()),
            resolver=OntologyResolver(MappingStoreRegistry.create()),
            compiler=QueryCompiler(VariantRegistry.create()),
            dispatcher=GraphQLDispatcher.create(),
        )
        outcome = service.execute("Show octocat's most starred repos", "github")
        ```
    """

    def __init__(
        self,
        extractor: IntentExtractor,
        cache: SemanticCache,
        resolver: OntologyResolver,
        compiler: QueryCompiler,
        dispatcher: QueryDispatcher,
        bypass_cache_on_failure: bool | None = None,
        store_results: bool | None = None,
    ) -> None:
        """Initialize the query service.

        Args:
            extractor: NLU collaborator producing intent JSON.
            cache: Prompt cache.
            resolver: Ontology resolver.
            compiler: Query compiler.
            dispatcher: Upstream dispatcher.
            bypass_cache_on_failure: Proceed uncached on cache outages. Defaults to settings.
            store_results: Cache upstream responses alongside queries. Defaults to settings.
        """
        self._extractor = extractor
        self._cache = cache
        self._resolver = resolver
        self._compiler = compiler
        self._dispatcher = dispatcher
        self._bypass = (
            settings.bypass_cache_on_failure
            if bypass_cache_on_failure is None
            else bypass_cache_on_failure
        )
        self._store_results = (
            settings.cache_store_results if store_results is None else store_results
        )

    def execute(self, prompt: str, api: str) -> QueryOutcome:
        """Run a prompt end to end and return the upstream response.

        Args:
            prompt: The natural-language prompt
            api: API variant requested

        Returns:
            QueryOutcome with the query text and the raw upstream result

        Raises:
            MalformedIntentError: If the extracted intent is invalid
            UnsupportedApiError: If the intent names an unknown API
            MappingLoadError: If the mapping store cannot be loaded
            CacheUnavailableError: On cache outage with the "fail" policy
            UpstreamError: If the upstream API answers with an error
        """
        intent, intent_raw = self._extract(prompt, api)

        record = self._cache_get(prompt)
        if record is not None:
            if self._store_results and record.result is not None:
                logger.info("Serving cached result for %s", record.prompt_key)
                return QueryOutcome(prompt, intent, record.compiled_query, True, record.result)

            result = self._dispatcher.dispatch(record.compiled_query, intent.api)
            return QueryOutcome(prompt, intent, record.compiled_query, True, result)

        query = self._compile(intent)
        self._cache_put(prompt, query, intent_raw)

        result = self._dispatcher.dispatch(query, intent.api)
        if self._store_results:
            self._cache_put(prompt, query, intent_raw, result)
        return QueryOutcome(prompt, intent, query, False, result)

    def compile_only(self, prompt: str, api: str) -> QueryOutcome:
        """Compile (or fetch from cache) without contacting the upstream API.

        A freshly compiled query is still written to the cache.

        Args:
            prompt: The natural-language prompt
            api: API variant requested

        Returns:
            QueryOutcome with result=None
        """
        intent, intent_raw = self._extract(prompt, api)

        record = self._cache_get(prompt)
        if record is not None:
            return QueryOutcome(prompt, intent, record.compiled_query, True)

        query = self._compile(intent)
        self._cache_put(prompt, query, intent_raw)
        return QueryOutcome(prompt, intent, query, False)

    def lookup(self, prompt: str) -> CacheRecord | None:
        """Read the live cache record for a prompt (no degradation policy)."""
        return self._cache.get(prompt)

    def invalidate(self, prompt: str) -> None:
        """Delete the cache record for a prompt (no degradation policy)."""
        self._cache.delete(prompt)

    def _extract(self, prompt: str, api: str) -> tuple[Intent, str]:
        intent_raw = self._extractor.extract(prompt, api)
        logger.debug("Received NLP response: %s", intent_raw)
        return parse_intent(intent_raw), intent_raw

    def _compile(self, intent: Intent) -> str:
        target = self._resolver.resolve_target(intent.target, intent.api)
        sub_entity = self._resolver.resolve_sub_entity(
            intent.sub_entity, intent.constraint, intent.api
        )
        return self._compiler.compile(intent, target, sub_entity)

    def _cache_get(self, prompt: str) -> CacheRecord | None:
        try:
            return self._cache.get(prompt)
        except CacheUnavailableError as e:
            if not self._bypass:
                raise
            logger.warning("Cache unavailable on read, proceeding uncached: %s", e)
            return None

    def _cache_put(
        self,
        prompt: str,
        query: str,
        intent_raw: str,
        result: str | None = None,
    ) -> None:
        try:
            self._cache.put(prompt, query, intent_raw, result)
        except CacheUnavailableError as e:
            if not self._bypass:
                raise
            logger.warning("Cache unavailable on write, skipping: %s", e)

    @property
    def cache(self) -> SemanticCache:
        """Get the underlying cache (for testing)."""
        return self._cache
