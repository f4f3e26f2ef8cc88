"""Resolved ontology mappings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TargetMapping:
    """Mapping of a target concept onto the GraphQL schema.

    Attributes:
        field: Root query field (e.g. "user")
        identifier_argument: Argument the identifier is passed as (e.g. "login")
    """

    field: str = ""
    identifier_argument: str = ""


@dataclass(frozen=True)
class SubEntityMapping:
    """Mapping of a sub-entity concept, joined with its optional constraint.

    The three ordering attributes are empty strings when no constraint
    was requested or the constraint label is unknown.
    """

    field: str = ""
    graphql_type: str = ""
    argument_field: str = ""
    ordering_field: str = ""
    default_direction: str = ""

    @property
    def has_ordering(self) -> bool:
        """True only when every ordering attribute is present."""
        return bool(self.argument_field and self.ordering_field and self.default_direction)
