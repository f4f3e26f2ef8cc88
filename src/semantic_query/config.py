import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "blazegraph")
    cache_ttl_seconds: int = int(os.getenv("CACHE_TTL_SECONDS", "600"))  # 10 minutes
    cache_failure_policy: str = os.getenv("CACHE_FAILURE_POLICY", "bypass")
    cache_store_results: bool = os.getenv("CACHE_STORE_RESULTS", "false").lower() == "true"

    # Blazegraph
    blazegraph_endpoint: str = os.getenv(
        "BLAZEGRAPH_ENDPOINT",
        "http://localhost:9999/blazegraph/namespace/kb/sparql",
    )
    blazegraph_timeout: float = float(os.getenv("BLAZEGRAPH_TIMEOUT", "10"))

    # Redis (alternative cache backend)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "semantic_query")

    # Upstream GraphQL APIs
    github_graphql_url: str = os.getenv("GITHUB_GRAPHQL_URL", "https://api.github.com/graphql")
    github_token: str | None = os.getenv("GITHUB_TOKEN")
    countries_graphql_url: str = os.getenv(
        "COUNTRIES_GRAPHQL_URL", "https://countries.trevorblades.com/"
    )
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "30"))

    # Ontology documents (defaults to the packaged Turtle files)
    ontology_dir: str | None = os.getenv("ONTOLOGY_DIR")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def bypass_cache_on_failure(self) -> bool:
        """Whether a cache outage should degrade to an uncached request.

        Returns:
            True for the "bypass" policy, False for "fail"
        """
        return self.cache_failure_policy == "bypass"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl_seconds <= 0:
            raise ValueError("CACHE_TTL_SECONDS must be a positive number of seconds")

        if self.cache_backend not in ("blazegraph", "redis"):
            raise ValueError(
                f"CACHE_BACKEND must be one of ['blazegraph', 'redis'], got {self.cache_backend}"
            )

        if self.cache_failure_policy not in ("bypass", "fail"):
            raise ValueError(
                f"CACHE_FAILURE_POLICY must be one of ['bypass', 'fail'], "
                f"got {self.cache_failure_policy}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the service.

    Args:
        level: Log level name. Defaults to settings.log_level.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
