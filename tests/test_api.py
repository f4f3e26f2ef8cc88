"""
Tests for the semantic query HTTP API.
"""

import json

import pytest
from conftest import FakeDispatcher, FixedIntentExtractor
from fastapi.testclient import TestClient

from semantic_query.api.app import app
from semantic_query.handlers import QueryHandler
from semantic_query.repositories.stub_intent_extractor import GITHUB_INTENT
from semantic_query.services import QueryService


def install(service: QueryService, variants) -> None:
    app.state.query_service = service
    app.state.query_handler = QueryHandler(query_service=service, variants=variants)


@pytest.fixture
def client(query_service, variants):
    """Create a test client with fake backends (lifespan is not run)."""
    install(query_service, variants)
    yield TestClient(app)
    del app.state.query_handler
    del app.state.query_service


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Semantic Query API"


def test_health(client, store):
    """Test health check endpoint."""
    assert client.get("/health").json() == {"status": "healthy", "cache_healthy": True}

    store.available = False
    assert client.get("/health").json()["status"] == "unhealthy"


def test_query(client, dispatcher):
    """Test query endpoint: miss, then hit."""
    response = client.post("/query", json={"prompt": "top repos", "api": "github"})
    assert response.status_code == 200
    data = response.json()
    assert data["cache_hit"] is False
    assert data["api"] == "github"
    assert "repositories(first: 5" in data["query"]
    assert data["result"] == dispatcher.response

    again = client.post("/query", json={"prompt": "top repos", "api": "github"}).json()
    assert again["cache_hit"] is True
    assert again["query"] == data["query"]


def test_compile(client, dispatcher):
    """Test compile endpoint: nothing is sent upstream."""
    response = client.post("/query/compile", json={"prompt": "Brazil", "api": "countries"})
    assert response.status_code == 200
    data = response.json()
    assert data["result"] is None
    assert data["query"].startswith('query {\n  country(code: "BR") {\n')
    assert dispatcher.calls == []


def test_cache_lookup_and_delete(client):
    """Test cache lookup and delete endpoints."""
    assert client.post("/cache/lookup", json={"prompt": "Brazil"}).json()["is_hit"] is False

    client.post("/query/compile", json={"prompt": "Brazil", "api": "countries"})
    data = client.post("/cache/lookup", json={"prompt": "Brazil"}).json()
    assert data["is_hit"] is True
    assert data["record"]["prompt_key"] == "urn:prompt:Brazil"
    assert json.loads(data["record"]["intent"])["api"] == "countries"

    response = client.request("DELETE", "/cache", json={"prompt": "Brazil"})
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert client.post("/cache/lookup", json={"prompt": "Brazil"}).json()["is_hit"] is False


def test_cache_stats(client, store):
    """Test cache statistics endpoint."""
    assert client.get("/cache/stats").json() == {"backend": "memory", "total_entries": 0, "ttl": 600}

    client.post("/query/compile", json={"prompt": "Brazil", "api": "countries"})
    assert client.get("/cache/stats").json()["total_entries"] == 1

    store.available = False
    assert client.get("/cache/stats").status_code == 503


def test_variants(client):
    """Test variants listing."""
    data = {item["name"]: item for item in client.get("/variants").json()}
    assert data["github"]["template"] == "paginated"
    assert data["github"]["authenticated"] is True
    assert data["countries"]["template"] == "simple"


def test_request_validation(client):
    """Empty prompts are rejected by the DTO."""
    response = client.post("/query", json={"prompt": "", "api": "github"})
    assert response.status_code == 422


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('{"target": "user"}', 422),
        (json.dumps({**GITHUB_INTENT, "api": "gitlab"}), 400),
    ],
)
def test_pipeline_errors(cache, resolver, compiler, dispatcher, variants, raw, expected):
    """Pipeline errors map onto HTTP status codes."""
    service = QueryService(
        extractor=FixedIntentExtractor(raw),
        cache=cache,
        resolver=resolver,
        compiler=compiler,
        dispatcher=dispatcher,
    )
    install(service, variants)
    try:
        response = TestClient(app).post("/query", json={"prompt": "P", "api": "github"})
    finally:
        del app.state.query_handler
        del app.state.query_service

    assert response.status_code == expected
    assert dispatcher.calls == []


def test_upstream_error_is_bad_gateway(cache, resolver, compiler, variants):
    service = QueryService(
        extractor=FixedIntentExtractor(json.dumps(GITHUB_INTENT)),
        cache=cache,
        resolver=resolver,
        compiler=compiler,
        dispatcher=FakeDispatcher(status_code=500),
    )
    install(service, variants)
    try:
        response = TestClient(app).post("/query", json={"prompt": "P", "api": "github"})
    finally:
        del app.state.query_handler
        del app.state.query_service

    assert response.status_code == 502


def test_cache_outage_with_fail_policy(cache, store, resolver, compiler, dispatcher, variants):
    service = QueryService(
        extractor=FixedIntentExtractor(json.dumps(GITHUB_INTENT)),
        cache=cache,
        resolver=resolver,
        compiler=compiler,
        dispatcher=dispatcher,
        bypass_cache_on_failure=False,
    )
    install(service, variants)
    store.available = False
    try:
        client = TestClient(app)
        query = client.post("/query", json={"prompt": "P", "api": "github"})
        lookup = client.post("/cache/lookup", json={"prompt": "P"})
    finally:
        del app.state.query_handler
        del app.state.query_service

    assert query.status_code == 503
    assert lookup.status_code == 503
