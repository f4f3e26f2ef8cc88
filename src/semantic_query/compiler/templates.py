"""Query templates.

Two shapes are supported:

simple
    ``target(arg: "id") { subEntity { fields } }`` with no pagination or
    ordering. Constraint attributes are ignored even when resolved.

paginated
    ``target(arg: "id") { subEntity(first: N[, orderBy-like]) { nodes { fields } } }``
    The ordering argument is emitted only when all of its parts resolved.
"""

from typing import Protocol

from semantic_query.entities import Intent, SubEntityMapping, TargetMapping
from semantic_query.variants import PAGINATED_TEMPLATE, SIMPLE_TEMPLATE

from .builder import Argument, EnumValue, IntValue, ObjectValue, Query, Selection, StringValue


class QueryTemplate(Protocol):
    def __call__(
        self,
        intent: Intent,
        target: TargetMapping,
        sub_entity: SubEntityMapping,
    ) -> Query: ...


def _leaves(intent: Intent) -> tuple[Selection, ...]:
    return tuple(Selection(name) for name in intent.fields)


def _target(intent: Intent, target: TargetMapping, child: Selection) -> Selection:
    arguments: tuple[Argument, ...] = ()
    if target.identifier_argument:
        arguments = (Argument(target.identifier_argument, StringValue(intent.identifier)),)
    return Selection(target.field, arguments, (child,))


def simple_nested(intent: Intent, target: TargetMapping, sub_entity: SubEntityMapping) -> Query:
    nested = Selection(sub_entity.field, children=_leaves(intent))
    return Query((_target(intent, target, nested),))


def paginated_connection(
    intent: Intent,
    target: TargetMapping,
    sub_entity: SubEntityMapping,
) -> Query:
    arguments = [Argument("first", IntValue(intent.limit))]
    if sub_entity.has_ordering:
        ordering = ObjectValue(
            (
                ("field", EnumValue(sub_entity.ordering_field)),
                ("direction", EnumValue(sub_entity.default_direction)),
            )
        )
        arguments.append(Argument(sub_entity.argument_field, ordering))

    nodes = Selection("nodes", children=_leaves(intent))
    connection = Selection(sub_entity.field, tuple(arguments), (nodes,))
    return Query((_target(intent, target, connection),))


TEMPLATES: dict[str, QueryTemplate] = {
    SIMPLE_TEMPLATE: simple_nested,
    PAGINATED_TEMPLATE: paginated_connection,
}
