"""API variant registry.

Each upstream GraphQL API is described once here: which ontology document
maps its concepts, which query template it uses, where it lives and how to
authenticate. Adding an API means registering a new ApiVariant; no shared
logic branches on the variant name.
"""

from dataclasses import dataclass

from semantic_query.config import Settings, settings
from semantic_query.errors import UnsupportedApiError

SIMPLE_TEMPLATE = "simple"
PAGINATED_TEMPLATE = "paginated"


@dataclass(frozen=True)
class ApiVariant:
    """Static configuration of one upstream API.

    Attributes:
        name: Variant tag used in intents (lowercase)
        template: Query template name ("simple" or "paginated")
        ontology_file: Turtle document holding the concept mappings
        endpoint: GraphQL endpoint URL
        token: Bearer token sent as Authorization header, if any
    """

    name: str
    template: str
    ontology_file: str
    endpoint: str
    token: str | None = None

    def headers(self) -> dict[str, str]:
        """HTTP headers for requests to this API."""
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


class VariantRegistry:
    """Lookup table from variant tag to ApiVariant.

    Tags are matched case-insensitively ("GitHub" and "github" are the
    same variant).
    """

    def __init__(self, variants: list[ApiVariant] | None = None) -> None:
        self._variants: dict[str, ApiVariant] = {}
        for variant in variants or []:
            self.register(variant)

    @classmethod
    def create(cls, config: Settings | None = None) -> "VariantRegistry":
        """Factory method with the built-in GitHub and Countries variants.

        Args:
            config: Settings to read endpoints and tokens from. Defaults to settings.

        Returns:
            Configured VariantRegistry
        """
        config = config or settings
        return cls(
            [
                ApiVariant(
                    name="github",
                    template=PAGINATED_TEMPLATE,
                    ontology_file="graphql_github.ttl",
                    endpoint=config.github_graphql_url,
                    token=config.github_token,
                ),
                ApiVariant(
                    name="countries",
                    template=SIMPLE_TEMPLATE,
                    ontology_file="graphql_countries.ttl",
                    endpoint=config.countries_graphql_url,
                ),
            ]
        )

    def register(self, variant: ApiVariant) -> None:
        """Add or replace a variant."""
        if variant.template not in (SIMPLE_TEMPLATE, PAGINATED_TEMPLATE):
            raise ValueError(f"Unknown query template {variant.template!r} for {variant.name!r}")
        self._variants[variant.name.lower()] = variant

    def get(self, name: str) -> ApiVariant:
        """Look up a variant.

        Raises:
            UnsupportedApiError: If no variant is registered under this tag
        """
        variant = self._variants.get((name or "").lower())
        if variant is None:
            raise UnsupportedApiError(name)
        return variant

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._variants

    def __iter__(self):
        return iter(self._variants.values())

    def names(self) -> list[str]:
        """Registered variant tags."""
        return list(self._variants)
