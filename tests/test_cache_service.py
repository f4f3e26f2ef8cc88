"""
Tests for the prompt cache policy (keys, TTL, lazy expiry).
"""

import pytest

from semantic_query.errors import CacheUnavailableError
from semantic_query.services import SemanticCache

QUERY = 'query {\n  country(code: "BR") {\n    continent {\n      name\n    }\n  }\n}\n'
INTENT = '{"target": "country"}'


def test_put_then_get(cache):
    """A fresh record is returned with the stored query."""
    cache.put("P", QUERY, INTENT)
    record = cache.get("P")

    assert record is not None
    assert record.compiled_query == QUERY
    assert record.intent_raw == INTENT
    assert record.prompt == "P"
    assert record.result is None


def test_get_miss(cache):
    assert cache.get("never stored") is None


def test_prompt_key_is_percent_encoded():
    assert SemanticCache.prompt_key("top repos of octocat?") == "urn:prompt:top+repos+of+octocat%3F"
    assert SemanticCache.prompt_key("a+b") == "urn:prompt:a%2Bb"
    assert SemanticCache.prompt_key("café") == "urn:prompt:caf%C3%A9"


def test_keys_are_case_and_whitespace_sensitive(cache):
    """No normalization beyond encoding: near-identical prompts are cold misses."""
    cache.put("Show repos", QUERY, INTENT)

    assert cache.get("show repos") is None
    assert cache.get("Show repos ") is None
    assert cache.get("Show  repos") is None
    assert cache.get("Show repos") is not None


def test_record_within_ttl_is_a_hit(cache, clock):
    cache.put("P", QUERY, INTENT)
    clock.advance(minutes=9, seconds=59)
    assert cache.get("P") is not None


def test_expired_record_is_deleted_on_read(cache, store, clock):
    """An expired record reads as a miss and is removed by that read."""
    cache.put("P", QUERY, INTENT)
    clock.advance(minutes=10)

    assert cache.get("P") is None
    assert SemanticCache.prompt_key("P") not in store.records
    assert cache.get("P") is None


def test_put_overwrites(cache, clock):
    """Last writer wins and the creation time is reset."""
    cache.put("P", "query { a }\n", INTENT, result="old")
    clock.advance(minutes=8)
    cache.put("P", QUERY, INTENT)
    clock.advance(minutes=5)

    record = cache.get("P")
    assert record is not None
    assert record.compiled_query == QUERY
    assert record.result is None


def test_put_with_result(cache):
    cache.put("P", QUERY, INTENT, result='{"data": {}}')
    assert cache.get("P").result == '{"data": {}}'


def test_delete(cache):
    cache.put("P", QUERY, INTENT)
    cache.delete("P")
    assert cache.get("P") is None


def test_delete_absent_is_not_an_error(cache):
    cache.delete("nothing here")


def test_store_failure_surfaces(cache, store):
    """Repository outages propagate as CacheUnavailableError."""
    store.available = False
    with pytest.raises(CacheUnavailableError):
        cache.get("P")
    with pytest.raises(CacheUnavailableError):
        cache.put("P", QUERY, INTENT)
    with pytest.raises(CacheUnavailableError):
        cache.delete("P")


def test_stats_include_ttl(cache):
    stats = cache.get_stats()
    assert stats["ttl"] == 600
    assert stats["backend"] == "memory"


def test_default_ttl_is_ten_minutes(store):
    assert SemanticCache.create(repository=store).ttl.total_seconds() == 600
