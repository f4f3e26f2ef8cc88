"""Shared fixtures and fakes for the test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from semantic_query.compiler import QueryCompiler
from semantic_query.entities import CacheRecord, Intent
from semantic_query.errors import CacheUnavailableError, UpstreamError
from semantic_query.ontology import MappingStoreRegistry, OntologyResolver
from semantic_query.repositories import StubIntentExtractor
from semantic_query.services import QueryService, SemanticCache
from semantic_query.variants import (
    PAGINATED_TEMPLATE,
    SIMPLE_TEMPLATE,
    ApiVariant,
    VariantRegistry,
)

START = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable replacement for datetime.now(timezone.utc)."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class InMemoryCacheStore:
    """CacheStore fake backed by a dict."""

    def __init__(self) -> None:
        self.records: dict[str, CacheRecord] = {}
        self.available = True
        self.saves = 0

    def _check(self) -> None:
        if not self.available:
            raise CacheUnavailableError("store is down")

    def fetch(self, key: str) -> CacheRecord | None:
        self._check()
        return self.records.get(key)

    def save(self, record: CacheRecord) -> None:
        self._check()
        self.saves += 1
        self.records[record.prompt_key] = record

    def remove(self, key: str) -> None:
        self._check()
        self.records.pop(key, None)

    def health_check(self) -> bool:
        return self.available

    def get_stats(self) -> dict:
        self._check()
        return {"backend": "memory", "total_entries": len(self.records)}


class FakeDispatcher:
    """QueryDispatcher fake recording every call."""

    def __init__(self, response: str = '{"data": {}}', status_code: int | None = None) -> None:
        self.response = response
        self.status_code = status_code
        self.calls: list[tuple[str, str]] = []

    def dispatch(self, query: str, api: str) -> str:
        self.calls.append((query, api))
        if self.status_code is not None:
            raise UpstreamError(api, self.status_code, "boom")
        return self.response


class FixedIntentExtractor:
    """IntentExtractor returning the same JSON for every prompt."""

    def __init__(self, raw: str) -> None:
        self.raw = raw

    def extract(self, prompt: str, api: str) -> str:
        return self.raw


@pytest.fixture
def variants() -> VariantRegistry:
    return VariantRegistry(
        [
            ApiVariant(
                name="github",
                template=PAGINATED_TEMPLATE,
                ontology_file="graphql_github.ttl",
                endpoint="https://api.github.test/graphql",
                token="test-token",
            ),
            ApiVariant(
                name="countries",
                template=SIMPLE_TEMPLATE,
                ontology_file="graphql_countries.ttl",
                endpoint="https://countries.test/",
            ),
        ]
    )


@pytest.fixture
def stores(variants) -> MappingStoreRegistry:
    return MappingStoreRegistry(variants)


@pytest.fixture
def resolver(stores) -> OntologyResolver:
    return OntologyResolver(stores)


@pytest.fixture
def compiler(variants) -> QueryCompiler:
    return QueryCompiler(variants)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture
def cache(store, clock) -> SemanticCache:
    return SemanticCache(repository=store, ttl=600, clock=clock)


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def query_service(cache, resolver, compiler, dispatcher) -> QueryService:
    return QueryService(
        extractor=StubIntentExtractor(),
        cache=cache,
        resolver=resolver,
        compiler=compiler,
        dispatcher=dispatcher,
        bypass_cache_on_failure=True,
        store_results=False,
    )


@pytest.fixture
def github_intent() -> Intent:
    return Intent(
        target="user",
        identifier="octocat",
        sub_entity="repositories",
        limit=5,
        constraints=("most starred",),
        fields=("name", "description", "stargazerCount"),
        api="github",
    )


@pytest.fixture
def countries_intent() -> Intent:
    return Intent(
        target="country",
        identifier="BR",
        sub_entity="continent",
        limit=1,
        fields=("name", "code"),
        api="countries",
    )
