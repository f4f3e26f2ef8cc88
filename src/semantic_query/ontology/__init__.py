"""Ontology layer: per-variant mapping stores and label resolution."""

from .resolver import OntologyResolver
from .store import DEFAULT_ONTOLOGY_DIR, MappingStoreRegistry

__all__ = ["DEFAULT_ONTOLOGY_DIR", "MappingStoreRegistry", "OntologyResolver"]
