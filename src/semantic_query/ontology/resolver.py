"""Ontology resolver.

Looks up concept labels in a variant's mapping store and returns the
GraphQL field and argument names they map to. Lookups are exact
``rdfs:label`` matches; there is no inference.
"""

from rdflib import Graph, Literal

from semantic_query.entities import SubEntityMapping, TargetMapping

from .store import MappingStoreRegistry

PREFIXES = """
PREFIX ex: <http://example.org/ontology#>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
"""

TARGET_QUERY = PREFIXES + """
SELECT ?mappedField ?identifierArgument WHERE {
    ?concept rdfs:label ?label ;
             ex:mapsToField ?mappedField ;
             ex:identifierArgument ?identifierArgument .
}
"""

SUB_ENTITY_QUERY = PREFIXES + """
SELECT ?mappedField ?graphqlType WHERE {
    ?concept rdfs:label ?label ;
             ex:mapsToGraphQLType ?graphqlType ;
             ex:mapsToField ?mappedField .
}
"""

CONSTRAINT_QUERY = PREFIXES + """
SELECT ?argumentField ?orderingField ?defaultDirection WHERE {
    ?concept rdfs:label ?label ;
             ex:mapsToArgumentField ?argumentField ;
             ex:mapsToOrderingField ?orderingField ;
             ex:defaultDirection ?defaultDirection .
}
"""


class OntologyResolver:
    """Resolves intent labels against per-variant mapping stores.

    Unknown labels are not errors: they resolve to mappings whose
    attributes are empty strings, and the compiler renders a reduced query.

    Example:
        ```python
        resolver = OntologyResolver(MappingStoreRegistry.create())
        target = resolver.resolve_target("user", "github")
        # TargetMapping(field="user", identifier_argument="login")
        ```
    """

    def __init__(self, stores: MappingStoreRegistry) -> None:
        """Initialize the resolver.

        Args:
            stores: Registry providing the parsed mapping graphs.
        """
        self._stores = stores

    def resolve_target(self, label: str, api: str) -> TargetMapping:
        """Resolve a target concept.

        Args:
            label: Target label from the intent (e.g. "user")
            api: API variant tag

        Returns:
            TargetMapping, empty if the label is unknown

        Raises:
            MappingLoadError: If the variant's mapping store cannot be loaded
        """
        row = self._first_row(self._stores.get(api), TARGET_QUERY, label)
        if row is None:
            return TargetMapping()
        return TargetMapping(
            field=str(row["mappedField"]),
            identifier_argument=str(row["identifierArgument"]),
        )

    def resolve_sub_entity(
        self,
        label: str,
        constraint: str | None,
        api: str,
    ) -> SubEntityMapping:
        """Resolve a sub-entity concept joined with an optional constraint.

        The sub-entity match is required for any attribute to be filled in.
        The constraint is an optional join: when it is None or unknown the
        three ordering attributes stay empty.

        Args:
            label: Sub-entity label (e.g. "repositories")
            constraint: Constraint label (e.g. "most starred") or None
            api: API variant tag

        Returns:
            SubEntityMapping, empty if the sub-entity label is unknown

        Raises:
            MappingLoadError: If the variant's mapping store cannot be loaded
        """
        graph = self._stores.get(api)

        row = self._first_row(graph, SUB_ENTITY_QUERY, label)
        if row is None:
            return SubEntityMapping()

        argument_field = ordering_field = default_direction = ""
        if constraint is not None:
            constraint_row = self._first_row(graph, CONSTRAINT_QUERY, constraint)
            if constraint_row is not None:
                argument_field = str(constraint_row["argumentField"])
                ordering_field = str(constraint_row["orderingField"])
                default_direction = str(constraint_row["defaultDirection"])

        return SubEntityMapping(
            field=str(row["mappedField"]),
            graphql_type=str(row["graphqlType"]),
            argument_field=argument_field,
            ordering_field=ordering_field,
            default_direction=default_direction,
        )

    @staticmethod
    def _first_row(graph: Graph, query: str, label: str):
        # Labels are bound as literals, never spliced into the query text.
        for row in graph.query(query, initBindings={"label": Literal(label)}):
            return row
        return None
