"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Blazegraph → Redis, stub NLU → real NLU)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from semantic_query.protocols import CacheStore

    repo: CacheStore = BlazegraphCacheRepository.create()  # works
    repo: CacheStore = RedisCacheRepository.create()       # also works
    ```
"""

from .cache_store import CacheStore
from .intent_extractor import IntentExtractor
from .query_dispatcher import QueryDispatcher

__all__ = [
    "CacheStore",
    "IntentExtractor",
    "QueryDispatcher",
]
