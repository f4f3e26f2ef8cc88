"""Intent domain entity."""

import json
from dataclasses import dataclass


@dataclass(frozen=True)
class Intent:
    """Structured request produced by the NLU step.

    Attributes:
        target: Entity label to start from (e.g. "user")
        identifier: Value the target is filtered by (e.g. "octocat")
        sub_entity: Label of the nested collection (e.g. "repositories")
        limit: Page size for paginated APIs
        constraints: Constraint labels; only the first one is consulted
        fields: Leaf fields to project, in order
        api: API variant tag (selects mapping store, template and endpoint)
        action: Request kind, always "QUERY" today
    """

    target: str
    identifier: str
    sub_entity: str
    limit: int
    fields: tuple[str, ...]
    api: str
    constraints: tuple[str, ...] = ()
    action: str = "QUERY"

    @property
    def constraint(self) -> str | None:
        """The constraint label used for ordering, if any."""
        return self.constraints[0] if self.constraints else None

    def to_json(self) -> str:
        """Serialize back to the NLU wire format (camelCase keys)."""
        return json.dumps(
            {
                "action": self.action,
                "target": self.target,
                "identifier": self.identifier,
                "subEntity": self.sub_entity,
                "limit": self.limit,
                "constraints": list(self.constraints),
                "fields": list(self.fields),
                "api": self.api,
            }
        )
