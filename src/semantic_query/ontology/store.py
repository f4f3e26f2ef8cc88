"""Mapping store loading.

Each API variant has a Turtle document describing how human-readable
concept labels map onto its GraphQL schema. The documents are static
configuration: they are parsed once per process and the resulting graphs
are never mutated afterwards.
"""

import logging
import threading
from pathlib import Path

from rdflib import Graph

from semantic_query.config import settings
from semantic_query.errors import MappingLoadError
from semantic_query.variants import VariantRegistry

logger = logging.getLogger(__name__)

DEFAULT_ONTOLOGY_DIR = Path(__file__).parent / "data"


class MappingStoreRegistry:
    """Process-wide holder of parsed mapping stores, one per API variant.

    The first request for a variant parses its document under a lock, so
    concurrent first uses load it exactly once. Failed loads are not
    remembered; the next request tries again.

    Example:
        ```python
        registry = MappingStoreRegistry.create()
        registry.preload()  # at startup, optional
        graph = registry.get("github")
        ```
    """

    def __init__(
        self,
        variants: VariantRegistry,
        ontology_dir: Path | str | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            variants: Variant registry naming each variant's document.
            ontology_dir: Directory holding the Turtle files. Defaults to the packaged data.
        """
        self._variants = variants
        self._ontology_dir = Path(ontology_dir) if ontology_dir else DEFAULT_ONTOLOGY_DIR
        self._graphs: dict[str, Graph] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls, variants: VariantRegistry | None = None) -> "MappingStoreRegistry":
        """Factory method using settings for the ontology directory."""
        return cls(
            variants=variants or VariantRegistry.create(),
            ontology_dir=settings.ontology_dir,
        )

    def get(self, api: str) -> Graph:
        """Return the mapping graph for a variant, loading it on first use.

        Raises:
            UnsupportedApiError: If the variant is not registered
            MappingLoadError: If the document is missing or unparseable
        """
        variant = self._variants.get(api)

        graph = self._graphs.get(variant.name)
        if graph is not None:
            return graph

        with self._lock:
            graph = self._graphs.get(variant.name)
            if graph is None:
                graph = self._load(variant.name, self._ontology_dir / variant.ontology_file)
                self._graphs[variant.name] = graph
        return graph

    def preload(self) -> None:
        """Load every registered variant's mapping store up front."""
        for variant in self._variants:
            self.get(variant.name)

    def is_loaded(self, api: str) -> bool:
        """Whether a variant's store has been parsed already."""
        return api.lower() in self._graphs

    @staticmethod
    def _load(api: str, path: Path) -> Graph:
        graph = Graph()
        try:
            graph.parse(source=str(path), format="turtle")
        except (OSError, SyntaxError, ValueError) as e:
            raise MappingLoadError(api, str(path), str(e)) from e

        logger.info("Loaded mapping store for %s from %s (%d triples)", api, path, len(graph))
        return graph
