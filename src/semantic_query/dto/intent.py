"""Intent wire format.

The NLU collaborator hands over plain JSON. This module validates it and
converts it into the immutable Intent entity.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from semantic_query.entities import Intent
from semantic_query.errors import MalformedIntentError

GRAPHQL_NAME = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")


class IntentPayload(BaseModel):
    """Request DTO for an intent as produced by the NLU step."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    action: str = Field("QUERY", description="Request kind")
    target: str = Field(..., description="Target entity label", min_length=1)
    identifier: str = Field(..., description="Value the target is filtered by")
    sub_entity: str = Field(..., alias="subEntity", description="Nested entity label", min_length=1)
    limit: int = Field(..., description="Pagination size", gt=0)
    constraints: list[str] | None = Field(None, description="Constraint labels")
    fields: list[str] = Field(..., description="Leaf fields to project", min_length=1)
    api: str = Field(..., description="API variant tag", min_length=1)

    @field_validator("fields")
    @classmethod
    def fields_are_names(cls, value: list[str]) -> list[str]:
        """Projected fields must be plain GraphQL names."""
        for name in value:
            if not GRAPHQL_NAME.fullmatch(name):
                raise ValueError(f"not a GraphQL field name: {name!r}")
        return value

    def to_entity(self) -> Intent:
        """Convert to the internal Intent entity."""
        return Intent(
            action=self.action,
            target=self.target,
            identifier=self.identifier,
            sub_entity=self.sub_entity,
            limit=self.limit,
            constraints=tuple(self.constraints or ()),
            fields=tuple(self.fields),
            api=self.api,
        )


def parse_intent(raw: str) -> Intent:
    """Parse raw intent JSON into an Intent.

    Args:
        raw: JSON text from the NLU step

    Returns:
        The validated Intent

    Raises:
        MalformedIntentError: If the text is not JSON, misses required fields
            or projects a field that is not a GraphQL name
    """
    try:
        payload = IntentPayload.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedIntentError(f"Invalid intent: {e}") from e
    return payload.to_entity()
