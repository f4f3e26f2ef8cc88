"""
Tests for the Blazegraph (SPARQL) cache repository.
"""

from datetime import datetime, timezone
from urllib.parse import parse_qs

import httpx
import pytest

from semantic_query.entities import CacheRecord
from semantic_query.errors import CacheUnavailableError
from semantic_query.repositories import BlazegraphCacheRepository
from semantic_query.repositories.blazegraph_repository import parse_timestamp, sparql_literal

ENDPOINT = "http://blazegraph.test/sparql"
KEY = "urn:prompt:top+repos"


def make_repo(handler) -> tuple[BlazegraphCacheRepository, list[dict]]:
    """Repository whose HTTP calls go to ``handler``; returns the decoded form bodies."""
    sent: list[dict] = []

    def recorder(request: httpx.Request) -> httpx.Response:
        form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
        form["_accept"] = request.headers.get("accept", "")
        sent.append(form)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(recorder))
    return BlazegraphCacheRepository(endpoint=ENDPOINT, client=client), sent


def bindings(*rows) -> dict:
    return {
        "head": {"vars": []},
        "results": {
            "bindings": [
                {name: {"type": "literal", "value": value} for name, value in row.items()}
                for row in rows
            ]
        },
    }


def test_fetch_record():
    repo, sent = make_repo(
        lambda request: httpx.Response(
            200,
            json=bindings(
                {
                    "prompt": "top repos",
                    "intent": '{"api": "github"}',
                    "query": "query {\n}\n",
                    "createdAt": "2026-01-01T12:00:00Z",
                }
            ),
        )
    )

    record = repo.fetch(KEY)

    assert record == CacheRecord(
        prompt_key=KEY,
        prompt="top repos",
        intent_raw='{"api": "github"}',
        compiled_query="query {\n}\n",
        created_at=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
    )
    assert f"<{KEY}> a cache:CachedEntry" in sent[0]["query"]
    assert sent[0]["_accept"] == "application/sparql-results+json"


def test_fetch_with_result():
    repo, _ = make_repo(
        lambda request: httpx.Response(
            200,
            json=bindings(
                {
                    "prompt": "p",
                    "intent": "{}",
                    "query": "q",
                    "result": '{"data": {}}',
                    "createdAt": "2026-01-01T12:00:00.250+00:00",
                }
            ),
        )
    )
    assert repo.fetch(KEY).result == '{"data": {}}'


def test_fetch_absent():
    repo, _ = make_repo(lambda request: httpx.Response(200, json=bindings()))
    assert repo.fetch(KEY) is None


def test_save_replaces_record():
    """Save is one update: delete the old triples, insert the new ones."""
    repo, sent = make_repo(lambda request: httpx.Response(200, text="ok"))
    record = CacheRecord(
        prompt_key=KEY,
        prompt='say "hi"\nplease',
        intent_raw='{"api": "github"}',
        compiled_query='query {\n  user(login: "octocat") {\n  }\n}\n',
        created_at=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
    )

    repo.save(record)

    update = sent[0]["update"]
    assert update.index(f"DELETE WHERE {{ <{KEY}> ?p ?o }}") < update.index("INSERT DATA")
    assert 'cache:originalPrompt "say \\"hi\\"\\nplease"' in update
    assert 'cache:hasGraphQLQuery "query {\\n  user(login: \\"octocat\\") {\\n  }\\n}\\n"' in update
    assert 'cache:createdAt "2026-01-01T12:00:00+00:00"^^xsd:dateTime' in update
    assert "cache:hasResult" not in update


def test_save_with_result():
    repo, sent = make_repo(lambda request: httpx.Response(200, text="ok"))
    record = CacheRecord(
        prompt_key=KEY,
        prompt="p",
        intent_raw="{}",
        compiled_query="q",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        result='{"data": 1}',
    )
    repo.save(record)
    assert 'cache:hasResult "{\\"data\\": 1}"' in sent[0]["update"]


def test_remove():
    repo, sent = make_repo(lambda request: httpx.Response(200, text="ok"))
    repo.remove(KEY)
    assert sent[0]["update"] == f"DELETE WHERE {{ <{KEY}> ?p ?o }}"


def test_http_error_is_cache_unavailable():
    repo, _ = make_repo(lambda request: httpx.Response(500, text="oops"))
    with pytest.raises(CacheUnavailableError):
        repo.fetch(KEY)


def test_connection_error_is_cache_unavailable():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    repo, _ = make_repo(refuse)
    with pytest.raises(CacheUnavailableError):
        repo.remove(KEY)
    assert repo.health_check() is False


def test_non_json_response_is_cache_unavailable():
    repo, _ = make_repo(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(CacheUnavailableError):
        repo.fetch(KEY)


def test_health_and_stats():
    repo, _ = make_repo(
        lambda request: httpx.Response(200, json={"head": {}, "boolean": True})
        if "ASK" in request.content.decode()
        else httpx.Response(200, json=bindings({"total": "3"}))
    )
    assert repo.health_check() is True
    assert repo.get_stats() == {"backend": "blazegraph", "endpoint": ENDPOINT, "total_entries": 3}


def test_sparql_literal():
    assert sparql_literal('a "b"') == '"a \\"b\\""'
    assert sparql_literal("back\\slash") == '"back\\\\slash"'
    assert sparql_literal("l1\r\nl2\t") == '"l1\\r\\nl2\\t"'


def test_parse_timestamp():
    assert parse_timestamp("2026-01-01T12:00:00Z") == datetime(2026, 1, 1, 12, tzinfo=timezone.utc)
    assert parse_timestamp("2026-01-01T12:00:00") == datetime(2026, 1, 1, 12, tzinfo=timezone.utc)
    assert parse_timestamp("2026-01-01T14:00:00+02:00") == datetime(
        2026, 1, 1, 12, tzinfo=timezone.utc
    )
