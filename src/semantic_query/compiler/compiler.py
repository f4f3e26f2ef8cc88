"""Query compiler: intent plus resolved mappings to GraphQL text."""

import logging

from semantic_query.entities import Intent, SubEntityMapping, TargetMapping
from semantic_query.variants import VariantRegistry

from .templates import TEMPLATES

logger = logging.getLogger(__name__)


class QueryCompiler:
    """Builds GraphQL query text for an intent.

    The template is picked from the intent's API variant. Compilation is
    pure: the same inputs always render byte-identical text.

    Example:
        ```python
        compiler = QueryCompiler(VariantRegistry.create())
        text = compiler.compile(intent, target_mapping, sub_entity_mapping)
        ```
    """

    def __init__(self, variants: VariantRegistry) -> None:
        self._variants = variants

    def compile(
        self,
        intent: Intent,
        target: TargetMapping,
        sub_entity: SubEntityMapping,
    ) -> str:
        """Compile an intent into query text.

        Args:
            intent: The parsed intent
            target: Resolved target mapping
            sub_entity: Resolved sub-entity (and constraint) mapping

        Returns:
            The GraphQL query text

        Raises:
            UnsupportedApiError: If intent.api is not a registered variant
        """
        variant = self._variants.get(intent.api)
        template = TEMPLATES[variant.template]

        text = template(intent, target, sub_entity).render()
        logger.debug("Compiled %s query for %s:\n%s", variant.template, variant.name, text)
        return text
