"""Canned stand-in for the NLU service.

Returns a fixed intent per API variant regardless of the prompt text.
Swap in a real IntentExtractor implementation to parse prompts.
"""

import json

COUNTRIES_INTENT = {
    "action": "QUERY",
    "target": "country",
    "identifier": "BR",
    "subEntity": "continent",
    "limit": 1,
    "constraints": [],
    "fields": ["name", "code"],
    "api": "countries",
}

GITHUB_INTENT = {
    "action": "QUERY",
    "target": "user",
    "identifier": "octocat",
    "subEntity": "repositories",
    "limit": 5,
    "constraints": ["most starred"],
    "fields": ["name", "description", "stargazerCount"],
    "api": "github",
}


class StubIntentExtractor:
    """IntentExtractor returning canned intents.

    "countries" gets the country/continent example; anything else gets
    the GitHub repositories example.
    """

    def extract(self, prompt: str, api: str) -> str:
        """Return the canned intent JSON for a variant.

        Args:
            prompt: Ignored
            api: API variant tag

        Returns:
            Intent JSON text
        """
        if (api or "").lower() == "countries":
            return json.dumps(COUNTRIES_INTENT)
        return json.dumps(GITHUB_INTENT)
