"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON validation logic (see dto.intent for parsing)
- No Pydantic models
- No external dependencies
"""

from .cache_record import CacheRecord
from .intent import Intent
from .mapping import SubEntityMapping, TargetMapping
from .outcome import QueryOutcome

__all__ = ["CacheRecord", "Intent", "QueryOutcome", "SubEntityMapping", "TargetMapping"]
